"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from annotator.models.annotation import AnnotationTarget, CanvasModel, SemanticElementIn


class AnnotateRequest(BaseModel):
    elements: list[SemanticElementIn] = Field(
        default_factory=list,
        description="Rendered elements of the current problem",
    )
    canvas: CanvasModel = Field(default_factory=lambda: CanvasModel(width=800, height=600))
    canvas_snapshot: str | None = Field(
        default=None,
        description="Base64 PNG (or data URL) of the canvas; enables vision fallback",
    )
    targets: list[AnnotationTarget] = Field(..., description="Annotation targets to resolve")
