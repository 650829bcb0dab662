"""Tests for the semantic element registry."""

import math

import pytest

from annotator.engine.errors import InvalidBoundsError
from annotator.engine.semantic_registry import SemanticRegistry, coerce_bounds
from annotator.utils.geometry import Bounds, ProblemBounds
from tests.conftest import EQUATION_ELEMENTS, box


def test_register_and_get():
    reg = SemanticRegistry()
    el = reg.register("number_5", box(10, 10, 20, 20))
    assert el.bounds == Bounds(10, 10, 20, 20)
    assert reg.get("number_5") is el
    assert "number_5" in reg
    assert len(reg) == 1


def test_last_write_wins():
    reg = SemanticRegistry()
    reg.register("number_5", box(10, 10, 20, 20))
    reg.register("number_5", box(50, 10, 20, 20))
    assert len(reg) == 1
    assert reg.get("number_5").bounds.x == 50


def test_insertion_order(equation_registry):
    assert [el.id for el in equation_registry] == [i for i, _ in EQUATION_ELEMENTS]


def test_problem_bounds(equation_registry):
    assert equation_registry.problem_bounds == ProblemBounds(min_x=10, max_x=155, min_y=50, max_y=70)


def test_problem_bounds_tracks_updates(equation_registry):
    equation_registry.register("number_7", box(300, 200, 10, 10))
    pb = equation_registry.problem_bounds
    assert pb.max_x == 310
    assert pb.max_y == 210


def test_empty_problem_bounds():
    assert SemanticRegistry().problem_bounds is None
    assert SemanticRegistry().compute_union_bounds() is None


def test_clear(equation_registry):
    equation_registry.clear()
    assert len(equation_registry) == 0
    assert equation_registry.get("number_5") is None
    assert equation_registry.problem_bounds is None


def test_register_many_accepts_mixed_items():
    reg = SemanticRegistry()
    count = reg.register_many([
        ("number_2", box(0, 0, 10, 10)),
        {"id": "variable_x", "bounds": box(12, 0, 10, 10)},
        ("number_3", Bounds(30, 0, 10, 10)),
    ])
    assert count == 3
    assert [el.id for el in reg] == ["number_2", "variable_x", "number_3"]


def test_register_many_is_all_or_nothing():
    reg = SemanticRegistry()
    with pytest.raises(InvalidBoundsError):
        reg.register_many([
            ("number_2", box(0, 0, 10, 10)),
            ("number_3", box(0, 0, -1, 10)),
        ])
    assert len(reg) == 0


@pytest.mark.parametrize("raw", [
    box(0, 0, -1, 10),
    box(0, 0, 10, -0.5),
    {"x": 0, "y": 0, "width": 10},
    {"x": "0", "y": 0, "width": 10, "height": 10},
    {"x": True, "y": 0, "width": 10, "height": 10},
    box(math.nan, 0, 10, 10),
    box(0, 0, math.inf, 10),
    [0, 0, 10, 10],
])
def test_invalid_bounds_rejected(raw):
    with pytest.raises(InvalidBoundsError):
        coerce_bounds(raw)


def test_invalid_bounds_is_value_error():
    reg = SemanticRegistry()
    with pytest.raises(ValueError):
        reg.register("number_5", box(0, 0, -5, 5))
    assert len(reg) == 0


def test_empty_id_rejected():
    with pytest.raises(InvalidBoundsError):
        SemanticRegistry().register("", box(0, 0, 1, 1))


def test_zero_size_allowed():
    reg = SemanticRegistry()
    reg.register("operator__", box(5, 5, 0, 0))
    assert reg.problem_bounds == ProblemBounds(5, 5, 5, 5)
