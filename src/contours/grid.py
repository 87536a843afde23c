"""Регулярная сетка скалярных значений (ScalarGrid)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from contours.errors import InvalidGrid

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

GRID_POINT_NDIM = 2


@dataclass(frozen=True)
class ScalarGrid:
    """
    Regular 2D grid of sample weights.

    Weights are stored flat and row-major: the value at column ``x``, row ``y``
    is ``cell_weights[y * width + x]``. ``grid_origin`` and ``cell_size`` place
    the grid in world coordinates.
    """

    width: int
    height: int
    cell_weights: tuple[float, ...]
    grid_origin: tuple[float, float] = (0.0, 0.0)
    cell_size: tuple[float, float] = (1.0, 1.0)

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int):
            msg = f'width must be an integer, got {self.width!r}'
            raise InvalidGrid(msg)
        if isinstance(self.height, bool) or not isinstance(self.height, int):
            msg = f'height must be an integer, got {self.height!r}'
            raise InvalidGrid(msg)
        if self.width < 1 or self.height < 1:
            msg = f'Grid size must be at least 1x1, got {self.width}x{self.height}'
            raise InvalidGrid(msg)

        weights = _as_float_tuple(self.cell_weights, 'cell_weights')
        expected = self.width * self.height
        if len(weights) != expected:
            msg = (
                f'cell_weights has {len(weights)} values, '
                f'expected width*height = {expected}'
            )
            raise InvalidGrid(msg)
        finite = np.isfinite(np.asarray(weights, dtype=np.float64))
        if not finite.all():
            bad = int(np.flatnonzero(~finite)[0])
            msg = f'cell_weights[{bad}] is not finite: {weights[bad]!r}'
            raise InvalidGrid(msg)

        origin = _as_point(self.grid_origin, 'grid_origin')
        size = _as_point(self.cell_size, 'cell_size')
        if size[0] <= 0 or size[1] <= 0:
            msg = f'cell_size must be positive on both axes, got {size}'
            raise InvalidGrid(msg)

        # frozen dataclass: нормализованные значения пишем через object.__setattr__
        object.__setattr__(self, 'cell_weights', weights)
        object.__setattr__(self, 'grid_origin', origin)
        object.__setattr__(self, 'cell_size', size)

    @classmethod
    def from_array(
        cls,
        weights: np.ndarray | Sequence[Sequence[float]],
        grid_origin: Sequence[float] = (0.0, 0.0),
        cell_size: Sequence[float] = (1.0, 1.0),
    ) -> ScalarGrid:
        """Build a grid from a 2D array indexed ``weights[y][x]``."""
        try:
            arr = np.asarray(weights, dtype=np.float64)
        except (TypeError, ValueError) as e:
            msg = f'Weights are not a rectangular numeric array: {e}'
            raise InvalidGrid(msg) from e
        if arr.ndim != GRID_POINT_NDIM:
            msg = f'Expected a 2D array of weights, got shape {arr.shape}'
            raise InvalidGrid(msg)
        height, width = arr.shape
        return cls(
            width=int(width),
            height=int(height),
            cell_weights=tuple(float(v) for v in arr.ravel()),
            grid_origin=tuple(grid_origin),
            cell_size=tuple(cell_size),
        )

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """True if ``(x, y)`` addresses a stored sample."""
        return 0 <= x < self.width and 0 <= y < self.height

    def weight_at(self, x: int, y: int) -> float:
        if not self.contains(x, y):
            msg = f'Grid point ({x}, {y}) is outside {self.width}x{self.height}'
            raise IndexError(msg)
        return self.cell_weights[y * self.width + x]


def _as_float_tuple(values: Iterable[float], name: str) -> tuple[float, ...]:
    try:
        return tuple(float(v) for v in values)
    except (TypeError, ValueError) as e:
        msg = f'{name} must be a sequence of numbers: {e}'
        raise InvalidGrid(msg) from e


def _as_point(values: Iterable[float], name: str) -> tuple[float, float]:
    point = _as_float_tuple(values, name)
    if len(point) != GRID_POINT_NDIM:
        msg = f'{name} must have 2 components, got {len(point)}'
        raise InvalidGrid(msg)
    if not all(math.isfinite(v) for v in point):
        msg = f'{name} must be finite, got {point}'
        raise InvalidGrid(msg)
    return point[0], point[1]
