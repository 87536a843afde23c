from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, field_validator

from contours.classifier import Threshold, normalize_thresholds
from contours.generator import generate_contours
from contours.grid import ScalarGrid

if TYPE_CHECKING:
    from contours.generator import ContourResult
    from domain.settings import ContourSettings

WirePoint = tuple[float, float]


class ContourRequest(BaseModel):
    """
    Входной запрос на построение контуров.

    Имена полей на проводе - camelCase (cellWeights, gridOrigin, cellSize);
    python-имена тоже принимаются.
    """

    model_config = {
        'populate_by_name': True,
        'extra': 'ignore',
    }

    width: int
    height: int
    # Значения узлов построчно: (x, y) -> cell_weights[y * width + x]
    cell_weights: list[float] = Field(alias='cellWeights')
    grid_origin: WirePoint = Field(default=(0.0, 0.0), alias='gridOrigin')
    cell_size: WirePoint = Field(default=(1.0, 1.0), alias='cellSize')
    # Число (изолиния) или пара [lo, hi] (изополоса); проверяется при
    # построении, чтобы ошибка указывала индекс порога
    thresholds: list[Any] = Field(default_factory=list)

    @field_validator('width', 'height')
    @classmethod
    def validate_dimension(cls, v: int) -> int:
        if v < 1:
            msg = 'Размер сетки должен быть не меньше 1'
            raise ValueError(msg)
        return v

    def to_grid(self) -> ScalarGrid:
        return ScalarGrid(
            width=self.width,
            height=self.height,
            cell_weights=tuple(self.cell_weights),
            grid_origin=self.grid_origin,
            cell_size=self.cell_size,
        )

    def to_thresholds(self) -> list[Threshold]:
        return normalize_thresholds(self.thresholds)


class SegmentModel(BaseModel):
    start: WirePoint
    end: WirePoint
    threshold: float


class PolygonModel(BaseModel):
    vertices: list[WirePoint]
    threshold: WirePoint


class ContourResponse(BaseModel):
    """Результат: отрезки изолиний и многоугольники изополос в мировых координатах."""

    segments: list[SegmentModel] = Field(default_factory=list)
    polygons: list[PolygonModel] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ContourResult) -> ContourResponse:
        return cls(
            segments=[
                SegmentModel(start=s.start, end=s.end, threshold=s.threshold)
                for s in result.segments
            ],
            polygons=[
                PolygonModel(vertices=list(p.vertices), threshold=p.threshold)
                for p in result.polygons
            ],
        )


def generate_contour_response(
    request: ContourRequest | dict[str, Any],
    settings: ContourSettings | None = None,
) -> ContourResponse:
    """Validate a wire request, build contours and wrap them for the wire."""
    if not isinstance(request, ContourRequest):
        request = ContourRequest.model_validate(request)
    result = generate_contours(
        request.to_grid(), request.thresholds, settings=settings
    )
    return ContourResponse.from_result(result)
