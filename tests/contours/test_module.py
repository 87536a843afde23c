"""Tests for contours package re-exports."""

import contours


class TestContoursModule:
    """Tests for contours module."""

    def test_has_path(self):
        """Module should have __path__ attribute."""
        assert hasattr(contours, '__path__')

    def test_path_contains_contours(self):
        """__path__ should contain 'contours' directory."""
        assert len(contours.__path__) > 0
        assert 'contours' in contours.__path__[0]

    def test_public_api(self):
        """Package root re-exports the generator API."""
        for name in (
            'ScalarGrid',
            'ContourGenerator',
            'ContourResult',
            'ContourSegment',
            'ContourPolygon',
            'ContourKind',
            'generate_contours',
            'compute_cell_code',
            'classify_weight',
            'get_geometry',
            'ContourError',
            'InvalidGrid',
            'GridTooLarge',
            'InvalidThreshold',
            'UnsupportedCode',
            'GridIndexOutOfRange',
        ):
            assert hasattr(contours, name), name

    def test_end_to_end(self):
        """Package-level shortcut builds contours from a grid."""
        grid = contours.ScalarGrid.from_array([[0, 0], [0, 1]])
        result = contours.generate_contours(grid, [0.5, (0.5, 2)])
        assert len(result.segments) == 4
        assert result.polygons
