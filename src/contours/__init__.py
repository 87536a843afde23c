from __future__ import annotations

from .classifier import classify_weight as classify_weight
from .codes import CellCode as CellCode
from .codes import compute_cell_code as compute_cell_code
from .errors import ContourError as ContourError
from .errors import GridIndexOutOfRange as GridIndexOutOfRange
from .errors import GridTooLarge as GridTooLarge
from .errors import InvalidGrid as InvalidGrid
from .errors import InvalidThreshold as InvalidThreshold
from .errors import UnsupportedCode as UnsupportedCode
from .generator import ContourGenerator as ContourGenerator
from .generator import ContourPolygon as ContourPolygon
from .generator import ContourResult as ContourResult
from .generator import ContourSegment as ContourSegment
from .generator import generate_contours as generate_contours
from .grid import ScalarGrid as ScalarGrid
from .tables import ContourKind as ContourKind
from .tables import get_geometry as get_geometry

"""
Package initializer for contours.
Re-exports the public API: grid, classification, cell codes, geometry tables
and the generator.
"""
