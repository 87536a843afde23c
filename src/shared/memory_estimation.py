"""Memory estimation for contour generation (OOM prevention)."""

import logging

import psutil

from shared.constants import (
    MAX_SEGMENTS_PER_CELL,
    MAX_VERTICES_PER_CELL,
    MEMORY_MIN_FREE_MB,
    MEMORY_SAFETY_RATIO,
)

logger = logging.getLogger(__name__)

_MB = 1024 * 1024

# Оценка размера Python-объектов результата (CPython, 64 бит)
# tuple из двух float: заголовок кортежа + два объекта float
_BYTES_PER_POINT = 56 + 2 * 24
# Экземпляр dataclass с __dict__ (ContourSegment/ContourPolygon)
_BYTES_PER_OBJECT = 48 + 104
# Кортеж вершин многоугольника: заголовок + ссылка на вершину
_BYTES_PER_VERTEX_REF = 8
_BYTES_PER_TUPLE = 40


def estimate_contour_memory_mb(
    width: int,
    height: int,
    isoline_count: int,
    isoband_count: int,
) -> dict:
    """
    Estimate worst-case memory of the generated geometry.

    Учитывает:
    - все marching-ячейки, включая кольцо граничных ((w+1)*(h+1))
    - для изолиний: седло, 2 отрезка на ячейку
    - для изополос: восьмиугольник, 8 вершин на ячейку

    Returns dict with component breakdown and peak estimate in MB.
    """
    marching_cells = (width + 1) * (height + 1)

    segments = marching_cells * MAX_SEGMENTS_PER_CELL * isoline_count
    segments_mb = (
        segments * (_BYTES_PER_OBJECT + 2 * _BYTES_PER_POINT) / _MB
    )

    # Худший случай для изополос - один восьмиугольник в каждой ячейке
    polygons = marching_cells * isoband_count
    polygons_mb = polygons * (
        _BYTES_PER_OBJECT
        + _BYTES_PER_TUPLE
        + MAX_VERTICES_PER_CELL * (_BYTES_PER_POINT + _BYTES_PER_VERTEX_REF)
    ) / _MB

    base_mb = segments_mb + polygons_mb
    # Overhead: list growth, temporary per-threshold results
    overhead_mb = base_mb * 0.2
    peak_mb = base_mb + overhead_mb

    return {
        'marching_cells': marching_cells,
        'segments_mb': round(segments_mb, 1),
        'polygons_mb': round(polygons_mb, 1),
        'overhead_mb': round(overhead_mb, 1),
        'peak_mb': round(peak_mb, 1),
    }


def get_available_memory_mb() -> float:
    """Return available system memory in MB. Returns 0 if it cannot be read."""
    try:
        return psutil.virtual_memory().available / _MB
    except (psutil.Error, OSError) as e:
        logger.debug('Failed to read available memory: %s', e)
        return 0.0


def check_memory_budget(
    estimate: dict,
    safety_ratio: float = MEMORY_SAFETY_RATIO,
    min_free_mb: float = MEMORY_MIN_FREE_MB,
) -> dict:
    """
    Compare a worst-case estimate with the RAM budget.

    Never raises: worst case is rarely reached, so an over-budget run is
    only reported. Returns info dict with ``fits`` flag.
    """
    available_mb = get_available_memory_mb()
    budget_mb = available_mb * safety_ratio - min_free_mb

    # Если память прочитать не удалось (available_mb == 0), проверку пропускаем
    fits = available_mb <= 0 or estimate['peak_mb'] <= budget_mb
    if not fits:
        logger.warning(
            'Worst-case contour output ~%.0f MB > budget ~%.0f MB '
            '(available ~%.0f MB)',
            estimate['peak_mb'], budget_mb, available_mb,
        )

    return {
        **estimate,
        'available_mb': round(available_mb, 0),
        'budget_mb': round(budget_mb, 0),
        'fits': fits,
    }
