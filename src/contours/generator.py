"""
Построение изолиний и изополос по регулярной сетке (ContourGenerator).

Порядок обхода: пороги в порядке запроса, затем x от -1 до width-1 (внешний
цикл), затем y от -1 до height-1 (внутренний). Пороги независимы и могут
обрабатываться параллельно; результат склеивается в порядке порогов, поэтому
совпадает с последовательным.
"""

from __future__ import annotations

import contextlib
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contours.classifier import (
    Threshold,
    is_band_threshold,
    normalize_thresholds,
)
from contours.codes import compute_normalized_cell_code
from contours.errors import (
    ContourError,
    GridTooLarge,
    InvalidThreshold,
    UnsupportedCode,
)
from contours.sampler import check_cell_index
from contours.tables import ContourKind, Point, get_geometry
from shared.constants import (
    CONTOUR_LOG_MEMORY,
    CONTOUR_LOG_MEMORY_MIN_WORK,
    CONTOUR_PARALLEL_MIN_THRESHOLDS,
    CONTOUR_PARALLEL_WORKERS,
    MAX_GRID_CELLS,
    MEMORY_MIN_FREE_MB,
    MEMORY_SAFETY_RATIO,
)
from shared.diagnostics import ResourceMonitor
from shared.memory_estimation import (
    check_memory_budget,
    estimate_contour_memory_mb,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contours.grid import ScalarGrid
    from domain.settings import ContourSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContourSegment:
    """One isoline segment in world coordinates."""

    start: Point
    end: Point
    threshold: float


@dataclass(frozen=True)
class ContourPolygon:
    """One closed counter-clockwise isoband polygon in world coordinates."""

    vertices: tuple[Point, ...]
    threshold: tuple[float, float]


@dataclass
class ContourResult:
    segments: list[ContourSegment] = field(default_factory=list)
    polygons: list[ContourPolygon] = field(default_factory=list)

    def extend(self, other: ContourResult) -> None:
        self.segments.extend(other.segments)
        self.polygons.extend(other.polygons)

    @property
    def is_empty(self) -> bool:
        return not self.segments and not self.polygons


class ContourGenerator:
    """
    Marching-squares driver for one grid.

    Args:
        grid: Validated scalar grid.
        settings: Optional limits and execution options; defaults come from
            ``shared.constants``.

    """

    def __init__(
        self,
        grid: ScalarGrid,
        settings: ContourSettings | None = None,
    ) -> None:
        self.grid = grid
        if settings is None:
            self.max_grid_cells = MAX_GRID_CELLS
            self.parallel_workers = CONTOUR_PARALLEL_WORKERS
            self.log_memory = CONTOUR_LOG_MEMORY
            self.memory_safety_ratio = MEMORY_SAFETY_RATIO
            self.memory_min_free_mb = MEMORY_MIN_FREE_MB
        else:
            self.max_grid_cells = settings.max_grid_cells
            self.parallel_workers = settings.parallel_workers
            self.log_memory = settings.log_memory_usage
            self.memory_safety_ratio = settings.memory_safety_ratio
            self.memory_min_free_mb = settings.memory_min_free_mb

    # ------------------------------------------------------------------
    def check_limits(self, thresholds: list[Threshold]) -> dict:
        """Enforce the cell cap and report the worst-case output memory."""
        cells = self.grid.cell_count
        if cells > self.max_grid_cells:
            logger.error(
                'Grid %dx%d rejected: %d cells > limit %d',
                self.grid.width, self.grid.height, cells, self.max_grid_cells,
            )
            raise GridTooLarge(cells, self.max_grid_cells)

        bands = sum(1 for t in thresholds if is_band_threshold(t))
        estimate = estimate_contour_memory_mb(
            self.grid.width,
            self.grid.height,
            isoline_count=len(thresholds) - bands,
            isoband_count=bands,
        )
        info = check_memory_budget(
            estimate,
            safety_ratio=self.memory_safety_ratio,
            min_free_mb=self.memory_min_free_mb,
        )
        logger.debug(
            'Worst-case output ~%.1f MB for %d marching cells x %d thresholds',
            info['peak_mb'], info['marching_cells'], len(thresholds),
        )
        return info

    def place(self, x: int, y: int, offset: Point) -> Point:
        """Map a cell-local offset of marching cell (x, y) to world space."""
        ox, oy = self.grid.grid_origin
        sx, sy = self.grid.cell_size
        return (
            ox + (x + 1) * sx + offset[0] * sx,
            oy + (y + 1) * sy + offset[1] * sy,
        )

    def cell_result(
        self,
        x: int,
        y: int,
        threshold: Threshold,
        threshold_index: int | None = None,
    ) -> ContourResult:
        """World-space geometry of a single marching cell for a normalized threshold."""
        check_cell_index(self.grid, x, y)
        band = is_band_threshold(threshold)
        kind = ContourKind.ISOBAND if band else ContourKind.ISOLINE
        code, mean_code = compute_normalized_cell_code(self.grid, x, y, threshold)
        try:
            geometry = get_geometry(code, mean_code, kind)
        except UnsupportedCode as e:
            logger.error(
                'Geometry lookup failed at cell (%d, %d), threshold #%s: %s',
                x, y, threshold_index, e,
            )
            raise UnsupportedCode(
                code,
                mean_code,
                kind.value,
                cell=(x, y),
                threshold_index=threshold_index,
            ) from e

        result = ContourResult()
        if not geometry:
            return result

        if band:
            for polygon in geometry:
                vertices = tuple(self.place(x, y, p) for p in polygon)
                result.polygons.append(ContourPolygon(vertices, threshold))  # type: ignore[arg-type]
            return result

        points = [self.place(x, y, p) for segment in geometry for p in segment]
        if len(points) % 2:
            msg = (
                f'Odd isoline point count {len(points)} for code={code} '
                f'at cell ({x}, {y})'
            )
            raise ContourError(msg)
        for start, end in zip(points[::2], points[1::2]):
            result.segments.append(ContourSegment(start, end, threshold))  # type: ignore[arg-type]
        return result

    def trace_threshold(self, index: int, threshold: Threshold) -> ContourResult:
        """All geometry for one normalized threshold, in (x, y) cell order."""
        result = ContourResult()
        for x in range(-1, self.grid.width):
            for y in range(-1, self.grid.height):
                result.extend(self.cell_result(x, y, threshold, index))
        logger.debug(
            'Threshold #%d %r: %d segments, %d polygons',
            index, threshold, len(result.segments), len(result.polygons),
        )
        return result

    # ------------------------------------------------------------------
    def generate(self, thresholds: Iterable[object]) -> ContourResult:
        """
        Build isolines and isobands for all thresholds.

        Every threshold is validated before any cell is visited: one malformed
        threshold aborts the whole request with :class:`InvalidThreshold`.
        """
        try:
            normalized = normalize_thresholds(thresholds)
        except InvalidThreshold as e:
            logger.error('Threshold validation failed: %s', e)
            raise

        self.check_limits(normalized)

        work = self.grid.cell_count * len(normalized)
        monitor = (
            ResourceMonitor('contour generation')
            if self.log_memory or work >= CONTOUR_LOG_MEMORY_MIN_WORK
            else contextlib.nullcontext()
        )

        num_workers = min(
            self.parallel_workers, max(1, os.cpu_count() or 1), len(normalized)
        )

        with monitor:
            if num_workers > 1 and len(normalized) >= CONTOUR_PARALLEL_MIN_THRESHOLDS:
                # Параллельная обработка порогов; executor.map сохраняет порядок
                with ThreadPoolExecutor(max_workers=num_workers) as executor:
                    parts = list(
                        executor.map(
                            self.trace_threshold,
                            range(len(normalized)),
                            normalized,
                        )
                    )
            else:
                parts = [
                    self.trace_threshold(i, t) for i, t in enumerate(normalized)
                ]

        result = ContourResult()
        for part in parts:
            result.extend(part)

        logger.info(
            'Contours built: grid %dx%d, %d thresholds, %d segments, %d polygons',
            self.grid.width,
            self.grid.height,
            len(normalized),
            len(result.segments),
            len(result.polygons),
        )
        return result


def generate_contours(
    grid: ScalarGrid,
    thresholds: Iterable[object],
    *,
    settings: ContourSettings | None = None,
) -> ContourResult:
    """Shortcut for ``ContourGenerator(grid, settings).generate(thresholds)``."""
    return ContourGenerator(grid, settings).generate(thresholds)
