"""Pydantic models for pipeline options and the HTTP API."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .config import settings
from .geometry import Document, Shape


class SimplifyOptions(BaseModel):
    """Knobs of the simplification pipeline."""

    epsilon: float = Field(
        default_factory=lambda: settings.default_epsilon,
        gt=0,
        description="Simplification tolerance; larger values keep fewer points",
    )
    min_distance: float = Field(
        default_factory=lambda: settings.default_min_distance,
        ge=0,
        description="Minimum spacing between consecutive points; 0 disables",
    )
    should_resize: bool = Field(
        default_factory=lambda: settings.default_should_resize,
        description="Fit the drawing into the target canvas",
    )


class ProcessRequest(BaseModel):
    svg: str = Field(..., description="Raw SVG markup")
    options: SimplifyOptions = Field(default_factory=SimplifyOptions)


class ProcessResponse(BaseModel):
    text: str
    stats: dict = Field(default_factory=dict)


class ShapeModel(BaseModel):
    points: list[tuple[float, float]]
    closed: bool = False

    @classmethod
    def from_shape(cls, shape: Shape) -> ShapeModel:
        return cls(points=list(shape.points), closed=shape.closed)


class CoordinatesRequest(BaseModel):
    text: str = Field("", description="Coordinate text, possibly hand edited")


class EditOp(BaseModel):
    """A single structural edit of a coordinate document."""

    action: Literal["add", "move", "delete"]
    shape_index: Optional[int] = None  # required for move/delete
    point_index: Optional[int] = None  # required for move/delete
    x: Optional[float] = Field(None, allow_inf_nan=False)  # required for add/move
    y: Optional[float] = Field(None, allow_inf_nan=False)  # required for add/move

    @model_validator(mode="after")
    def _check_fields(self) -> EditOp:
        if self.action in ("move", "delete"):
            if self.shape_index is None or self.point_index is None:
                raise ValueError(f"{self.action} needs shape_index and point_index")
        if self.action in ("add", "move"):
            if self.x is None or self.y is None:
                raise ValueError(f"{self.action} needs x and y")
        return self

    def apply(self, document: Document) -> Document:
        if self.action == "add":
            return document.add_point((self.x, self.y))
        if self.action == "move":
            return document.move_point(self.shape_index, self.point_index, (self.x, self.y))
        return document.delete_point(self.shape_index, self.point_index)


class EditRequest(BaseModel):
    text: str = Field("", description="Current coordinate text")
    operation: EditOp


class DocumentResponse(BaseModel):
    text: str
    shapes: list[ShapeModel] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: Document, text: str) -> DocumentResponse:
        return cls(text=text, shapes=[ShapeModel.from_shape(s) for s in document.shapes])


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "dot-simplifier"
