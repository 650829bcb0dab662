"""Shared pydantic models for annotation payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from annotator.engine.elements import Category
from annotator.utils.geometry import Bounds, ProblemBounds


class BoundsModel(BaseModel):
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    @classmethod
    def from_bounds(cls, box: Bounds) -> BoundsModel:
        return cls(x=box.x, y=box.y, width=box.width, height=box.height)


class SemanticElementIn(BaseModel):
    id: str = Field(..., min_length=1, description="Element id, e.g. number_5 or operator__")
    bounds: BoundsModel


class CanvasModel(BaseModel):
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class AnnotationTarget(BaseModel):
    target: str = Field(..., description="Natural-language phrase naming what to annotate")
    type: Literal["highlight", "circle"] = "highlight"
    preferred_type: Category | None = Field(
        default=None,
        description="Restrict symbolic lookups to one element category",
    )


class ProblemBoundsModel(BaseModel):
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_problem_bounds(cls, pb: ProblemBounds) -> ProblemBoundsModel:
        return cls(min_x=pb.min_x, max_x=pb.max_x, min_y=pb.min_y, max_y=pb.max_y)
