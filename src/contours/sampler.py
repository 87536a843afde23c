"""
Выборка четырёх угловых значений marching-ячейки (CellWeightSampler).

Marching-ячейка (x, y) охватывает узлы (x, y) .. (x+1, y+1), поэтому диапазон
ячеек на единицу шире сетки: x in [-1, width-1], y in [-1, height-1].
Узлы за пределами сетки не читаются и считаются «ниже самого нижнего уровня».
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from contours.errors import GridIndexOutOfRange

if TYPE_CHECKING:
    from contours.grid import ScalarGrid


class CellCorners(NamedTuple):
    """Corner weights of a marching cell; ``None`` marks an off-grid corner."""

    top: float | None
    top_right: float | None
    right: float | None
    current: float | None

    @property
    def is_boundary(self) -> bool:
        return None in self

    def values(self) -> tuple[float | None, float | None, float | None, float | None]:
        return self.top, self.top_right, self.right, self.current


def check_cell_index(grid: ScalarGrid, x: int, y: int) -> None:
    """Raise :class:`GridIndexOutOfRange` unless (x, y) is a valid marching cell."""
    if not (-1 <= x <= grid.width - 1 and -1 <= y <= grid.height - 1):
        raise GridIndexOutOfRange(x, y, grid.width, grid.height)


def _read(grid: ScalarGrid, gx: int, gy: int) -> float | None:
    if gx < 0 or gx >= grid.width or gy < 0 or gy >= grid.height:
        return None
    return grid.cell_weights[gy * grid.width + gx]


def sample_cell(grid: ScalarGrid, x: int, y: int) -> CellCorners:
    """
    Fetch the four corner weights of marching cell (x, y).

    Corners: top=(x, y+1), top_right=(x+1, y+1), right=(x+1, y), current=(x, y).
    Off-grid corners are reported as ``None`` and the weight array is never
    indexed for them.
    """
    check_cell_index(grid, x, y)
    return CellCorners(
        top=_read(grid, x, y + 1),
        top_right=_read(grid, x + 1, y + 1),
        right=_read(grid, x + 1, y),
        current=_read(grid, x, y),
    )
