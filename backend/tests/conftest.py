"""Shared test fixtures."""

from __future__ import annotations

import pytest

from annotator.engine.resolver.oracle import clear_oracle_cache
from annotator.engine.semantic_registry import SemanticRegistry


# 2x + 5 = 13 as the renderer lays it out on an 800x600 canvas

EQUATION_ELEMENTS = [
    ("number_2", {"x": 10, "y": 50, "width": 15, "height": 20}),
    ("variable_x", {"x": 27, "y": 50, "width": 15, "height": 20}),
    ("operator_+", {"x": 47, "y": 50, "width": 12, "height": 20}),
    ("number_5", {"x": 65, "y": 50, "width": 15, "height": 20}),
    ("operator__", {"x": 100, "y": 52, "width": 15, "height": 16}),
    ("number_13", {"x": 130, "y": 50, "width": 25, "height": 20}),
]

# Word problem: "Sam has 3 apples and buys 4 more"
WORD_PROBLEM_ELEMENTS = [
    ("name_sam", {"x": 20, "y": 20, "width": 40, "height": 18}),
    ("number_3", {"x": 70, "y": 20, "width": 10, "height": 18}),
    ("object_apples", {"x": 85, "y": 20, "width": 50, "height": 18}),
    ("number_4", {"x": 200, "y": 20, "width": 10, "height": 18}),
    ("object_apples_2", {"x": 215, "y": 20, "width": 50, "height": 18}),
    ("question_how_many", {"x": 20, "y": 60, "width": 120, "height": 18}),
]

# 1x1 transparent PNG
PNG_SNAPSHOT = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def box(x: float, y: float, width: float, height: float) -> dict[str, float]:
    return {"x": x, "y": y, "width": width, "height": height}


@pytest.fixture(autouse=True)
def _fresh_oracle_cache():
    clear_oracle_cache()
    yield
    clear_oracle_cache()


@pytest.fixture
def equation_registry() -> SemanticRegistry:
    reg = SemanticRegistry()
    reg.register_many(EQUATION_ELEMENTS)
    return reg


@pytest.fixture
def word_problem_registry() -> SemanticRegistry:
    reg = SemanticRegistry()
    reg.register_many(WORD_PROBLEM_ELEMENTS)
    return reg
