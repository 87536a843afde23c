"""Tests for contours.sampler module."""

import pytest

from contours.errors import GridIndexOutOfRange
from contours.grid import ScalarGrid
from contours.sampler import CellCorners, check_cell_index, sample_cell


class _RecordingWeights(tuple):
    """Tuple that remembers every index read from it."""

    def __new__(cls, values):
        obj = super().__new__(cls, values)
        obj.reads = []
        return obj

    def __getitem__(self, index):
        self.reads.append(index)
        return super().__getitem__(index)


def _grid_3x2():
    # y=0: 1 2 3
    # y=1: 4 5 6
    return ScalarGrid(3, 2, (1, 2, 3, 4, 5, 6))


class TestSampleCell:
    """Tests for corner sampling."""

    def test_interior_cell(self):
        """Corners: top=(x,y+1), topRight=(x+1,y+1), right=(x+1,y), current=(x,y)."""
        corners = sample_cell(_grid_3x2(), 0, 0)
        assert corners == CellCorners(top=4.0, top_right=5.0, right=2.0, current=1.0)
        assert not corners.is_boundary

    def test_values_order(self):
        corners = sample_cell(_grid_3x2(), 1, 0)
        assert corners.values() == (5.0, 6.0, 3.0, 2.0)

    def test_lower_left_corner_cell(self):
        """Cell (-1, -1) sees only grid point (0, 0) as its topRight."""
        corners = sample_cell(_grid_3x2(), -1, -1)
        assert corners == CellCorners(None, 1.0, None, None)
        assert corners.is_boundary

    def test_right_column(self):
        """x = width-1: right-hand corners are off-grid."""
        corners = sample_cell(_grid_3x2(), 2, 0)
        assert corners == CellCorners(top=6.0, top_right=None, right=None, current=3.0)

    def test_top_row(self):
        """y = height-1: upper corners are off-grid."""
        corners = sample_cell(_grid_3x2(), 0, 1)
        assert corners == CellCorners(top=None, top_right=None, right=5.0, current=4.0)

    def test_bottom_row_right_column(self):
        """Both axes are checked for every corner."""
        corners = sample_cell(_grid_3x2(), 2, -1)
        assert corners == CellCorners(top=3.0, top_right=None, right=None, current=None)

    def test_never_reads_off_grid(self):
        """Sampling every marching cell only ever touches valid flat indices."""
        grid = ScalarGrid(3, 2, (1, 2, 3, 4, 5, 6))
        weights = _RecordingWeights(grid.cell_weights)
        object.__setattr__(grid, 'cell_weights', weights)

        for x in range(-1, grid.width):
            for y in range(-1, grid.height):
                sample_cell(grid, x, y)

        assert weights.reads
        assert all(0 <= i < len(weights) for i in weights.reads)
        # Каждый узел - угол ровно четырёх marching-ячеек
        assert sorted(weights.reads) == sorted(list(range(6)) * 4)


class TestCheckCellIndex:
    """Tests for marching cell range checks."""

    @pytest.mark.parametrize(('x', 'y'), [(-1, -1), (2, 1), (0, 0)])
    def test_valid(self, x, y):
        check_cell_index(_grid_3x2(), x, y)

    @pytest.mark.parametrize(('x', 'y'), [(-2, 0), (3, 0), (0, -2), (0, 2)])
    def test_out_of_range(self, x, y):
        with pytest.raises(GridIndexOutOfRange) as exc_info:
            sample_cell(_grid_3x2(), x, y)
        err = exc_info.value
        assert (err.x, err.y, err.width, err.height) == (x, y, 3, 2)

    def test_is_index_error(self):
        with pytest.raises(IndexError):
            sample_cell(_grid_3x2(), 5, 5)
