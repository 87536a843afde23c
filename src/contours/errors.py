"""Исключения модуля построения изолиний и изополос."""

from __future__ import annotations


class ContourError(Exception):
    """Base class for all contour generation errors."""


class InvalidGrid(ContourError, ValueError):
    """Grid shape, weights or cell geometry are not usable."""


class GridTooLarge(InvalidGrid):
    """Grid cell count exceeds the configured work budget."""

    def __init__(self, cells: int, max_cells: int) -> None:
        self.cells = cells
        self.max_cells = max_cells
        msg = f'Grid has {cells} cells, limit is {max_cells}'
        super().__init__(msg)


class InvalidThreshold(ContourError, ValueError):
    """Threshold is neither a finite number nor an ascending [lo, hi] pair."""

    def __init__(self, threshold: object, index: int | None = None) -> None:
        self.threshold = threshold
        self.index = index
        where = '' if index is None else f' at index {index}'
        msg = (
            f'Invalid threshold{where}: {threshold!r} '
            '(expected a finite number or an ascending pair [lo, hi])'
        )
        super().__init__(msg)


class UnsupportedCode(ContourError, LookupError):
    """
    Geometry table has no entry for a reachable code.

    This is an internal invariant violation, never a "no contour" result.
    Generator re-raises it with the cell and threshold index attached.
    """

    def __init__(
        self,
        code: int,
        mean_code: int,
        kind: str,
        *,
        cell: tuple[int, int] | None = None,
        threshold_index: int | None = None,
    ) -> None:
        self.code = code
        self.mean_code = mean_code
        self.kind = kind
        self.cell = cell
        self.threshold_index = threshold_index
        msg = f'No {kind} geometry for code={code} mean_code={mean_code}'
        if cell is not None:
            msg += f' at cell {cell}'
        if threshold_index is not None:
            msg += f' (threshold #{threshold_index})'
        super().__init__(msg)


class GridIndexOutOfRange(ContourError, IndexError):
    """Marching cell lies outside [-1, width-1] x [-1, height-1]."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        msg = (
            f'Cell ({x}, {y}) is outside the marching range '
            f'[-1, {width - 1}] x [-1, {height - 1}]'
        )
        super().__init__(msg)
