"""
Код marching-ячейки (CellCodeComputer).

Изолинии: 1 бит на угол, code = top*8 + topRight*4 + right*2 + current (0..15).
Изополосы: 2 бита на угол, code = top*64 + topRight*16 + right*4 + current
(81 допустимое значение в диапазоне 0..170).
"""

from __future__ import annotations

from itertools import product
from typing import TYPE_CHECKING, NamedTuple

from contours.classifier import (
    BELOW,
    Threshold,
    classify_normalized,
    is_band_threshold,
    normalize_threshold,
)
from contours.sampler import sample_cell

if TYPE_CHECKING:
    from contours.grid import ScalarGrid

ISOLINE_DIGITS = 2
ISOBAND_DIGITS = 3
ISOLINE_BITS = 1
ISOBAND_BITS = 2
CORNERS_PER_CELL = 4


class CellCode(NamedTuple):
    code: int
    mean_code: int


def pack_isoline_code(top: int, top_right: int, right: int, current: int) -> int:
    return (top << 3) | (top_right << 2) | (right << 1) | current


def pack_isoband_code(top: int, top_right: int, right: int, current: int) -> int:
    return (top << 6) | (top_right << 4) | (right << 2) | current


def unpack_code(code: int, *, band: bool) -> tuple[int, int, int, int]:
    """Split a code back into (top, top_right, right, current) digits."""
    bits = ISOBAND_BITS if band else ISOLINE_BITS
    mask = (1 << bits) - 1
    return (
        (code >> (3 * bits)) & mask,
        (code >> (2 * bits)) & mask,
        (code >> bits) & mask,
        code & mask,
    )


def code_digits_label(code: int, *, band: bool) -> str:
    """Human readable digits in top/topRight/right/current order, e.g. '2221'."""
    return ''.join(str(d) for d in unpack_code(code, band=band))


# Полное перечисление пространства кодов (вместо глобального «текущего случая»)
ISOLINE_CODES: tuple[int, ...] = tuple(
    pack_isoline_code(*digits)
    for digits in product(range(ISOLINE_DIGITS), repeat=CORNERS_PER_CELL)
)
ISOBAND_CODES: tuple[int, ...] = tuple(
    pack_isoband_code(*digits)
    for digits in product(range(ISOBAND_DIGITS), repeat=CORNERS_PER_CELL)
)


def compute_cell_code(
    grid: ScalarGrid,
    x: int,
    y: int,
    threshold: object,
) -> CellCode:
    """
    Classify the four corners of cell (x, y) and pack them into a code.

    Off-grid corners get digit 0. ``mean_code`` classifies the mean of the
    four weights for interior cells and is 0 for boundary cells; boundary
    cells always have two adjacent corners at 0, so they never reach the
    ambiguous codes that consult it.
    """
    return compute_normalized_cell_code(grid, x, y, normalize_threshold(threshold))


def compute_normalized_cell_code(
    grid: ScalarGrid,
    x: int,
    y: int,
    threshold: Threshold,
) -> CellCode:
    corners = sample_cell(grid, x, y)
    top, top_right, right, current = (
        BELOW if w is None else classify_normalized(w, threshold)
        for w in corners.values()
    )
    if is_band_threshold(threshold):
        code = pack_isoband_code(top, top_right, right, current)
    else:
        code = pack_isoline_code(top, top_right, right, current)

    if corners.is_boundary:
        return CellCode(code, 0)

    mean = (
        corners.top + corners.top_right + corners.right + corners.current
    ) / CORNERS_PER_CELL
    return CellCode(code, classify_normalized(mean, threshold))
