"""Domain layer - request/response models and settings."""
from domain.models import (
    ContourRequest,
    ContourResponse,
    PolygonModel,
    SegmentModel,
    generate_contour_response,
)
from domain.settings import ContourSettings, load_settings, save_settings

__all__ = [
    'ContourRequest',
    'ContourResponse',
    'ContourSettings',
    'PolygonModel',
    'SegmentModel',
    'generate_contour_response',
    'load_settings',
    'save_settings',
]
