"""Prompt templates for the vision localisation call."""

from __future__ import annotations

LOCALIZATION_SYSTEM = """You locate elements on a math tutoring canvas. You receive an image of the canvas and a short description of one element or region on it.

Answer with ONLY a JSON object, no prose:
{{"x": <left>, "y": <top>, "width": <width>, "height": <height>}}

Coordinates are in canvas pixels with the origin at the top-left corner. The canvas is {canvas_width} x {canvas_height} pixels; the image may be scaled, so convert to canvas pixels before answering.

If the element is not visible on the canvas, answer exactly: null"""

LOCALIZATION_USER = """Find: "{phrase}"
Canvas size: {canvas_width} x {canvas_height}
Return the tightest box around it."""


def build_localization_prompts(phrase: str, canvas_width: float, canvas_height: float) -> tuple[str, str]:
    """(system, user) prompt pair for one localisation request."""
    dims = {"canvas_width": f"{canvas_width:g}", "canvas_height": f"{canvas_height:g}"}
    return LOCALIZATION_SYSTEM.format(**dims), LOCALIZATION_USER.format(phrase=phrase, **dims)
