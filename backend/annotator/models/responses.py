"""API response models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from annotator.models.annotation import BoundsModel, ProblemBoundsModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    strategies_registered: int = 0


class ResolvedAnnotation(BaseModel):
    target: str
    type: Literal["highlight", "circle"]
    bounds: BoundsModel
    tier: int
    strategy: str


class AnnotateResponse(BaseModel):
    annotations: list[ResolvedAnnotation] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)
    problem_bounds: ProblemBoundsModel | None = None
