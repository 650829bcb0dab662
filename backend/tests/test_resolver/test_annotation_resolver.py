"""Tests for the AnnotationResolver facade."""

from __future__ import annotations

import asyncio

import pytest

from annotator.engine import AnnotationResolver, Category, SemanticRegistry, Tier
from annotator.engine.resolver.oracle import OracleCache, OracleFallback
from annotator.utils.geometry import Bounds
from tests.conftest import PNG_SNAPSHOT, box


class CountingOracle:
    def __init__(self, answer: str | None) -> None:
        self.answer = answer
        self.calls = 0

    async def __call__(self, snapshot, phrase, canvas_width, canvas_height):
        self.calls += 1
        return self.answer


def _resolver(registry: SemanticRegistry | None = None, answer: str | None = None, **kwargs):
    oracle = CountingOracle(answer)
    resolver = AnnotationResolver(registry, oracle=OracleFallback(oracle, OracleCache()), **kwargs)
    return resolver, oracle


def test_simple_lookup():
    reg = SemanticRegistry()
    reg.register("number_5", box(10, 10, 20, 20))
    resolver, _ = _resolver(reg)
    assert asyncio.run(resolver.resolve("5")) == Bounds(10, 10, 20, 20)


def test_idempotent(equation_registry):
    resolver, _ = _resolver(equation_registry)
    first = asyncio.run(resolver.resolve("left side"))
    second = asyncio.run(resolver.resolve("left side"))
    assert first == second == Bounds(10, 50, 70, 20)


@pytest.mark.parametrize("phrase", ["equals", "equals sign", "equal sign", "="])
def test_equals_sign(equation_registry, phrase):
    resolver, _ = _resolver(equation_registry)
    assert asyncio.run(resolver.resolve(phrase)) == Bounds(100, 52, 15, 16)


def test_compound_all_or_nothing():
    reg = SemanticRegistry()
    reg.register("number_2", box(10, 50, 15, 20))
    resolver, oracle = _resolver(reg)
    assert asyncio.run(resolver.resolve("2x")) is None
    assert oracle.calls == 0


def test_compound(equation_registry):
    resolver, _ = _resolver(equation_registry)
    result = resolver.resolve_local("2x")
    assert result.bounds == Bounds(10, 50, 32, 20)
    assert result.tier is Tier.SYMBOLIC
    assert result.strategy == "S1.02"


def test_sides(equation_registry):
    resolver, _ = _resolver(equation_registry)
    assert asyncio.run(resolver.resolve("left side")) == Bounds(10, 50, 70, 20)
    assert asyncio.run(resolver.resolve("right side")) == Bounds(130, 50, 25, 20)


def test_empty_registry_left_side():
    resolver, _ = _resolver(canvas_width=800, canvas_height=600)
    assert asyncio.run(resolver.resolve("left side")) == Bounds(0, 0, 400, 600)


def test_full_miss_without_snapshot_skips_oracle():
    resolver, oracle = _resolver(answer='{"x": 1, "y": 1, "width": 1, "height": 1}')
    assert asyncio.run(resolver.resolve("banana")) is None
    assert oracle.calls == 0


def test_cleared_registry():
    reg = SemanticRegistry()
    reg.register("number_5", box(10, 10, 20, 20))
    resolver, _ = _resolver(reg)
    reg.clear()
    assert asyncio.run(resolver.resolve("number_5")) is None


def test_blank_phrase():
    resolver, oracle = _resolver(answer='{"x": 1, "y": 1, "width": 1, "height": 1}')
    resolver.set_canvas_snapshot(PNG_SNAPSHOT)
    assert asyncio.run(resolver.resolve("   ")) is None
    assert oracle.calls == 0


def test_oracle_fallback_with_stored_snapshot(equation_registry):
    resolver, oracle = _resolver(equation_registry, answer='{"x": -5, "y": 0, "width": 850, "height": 10}')
    resolver.set_canvas_snapshot(PNG_SNAPSHOT)
    result = asyncio.run(resolver.resolve_detailed("the little apple"))
    assert result.tier is Tier.ORACLE
    assert result.strategy == "oracle"
    assert result.bounds == Bounds(0, 0, 800, 10)
    assert oracle.calls == 1


def test_explicit_snapshot_argument(equation_registry):
    resolver, oracle = _resolver(equation_registry, answer='{"x": 5, "y": 5, "width": 5, "height": 5}')
    assert asyncio.run(resolver.resolve("the little apple", canvas_snapshot=PNG_SNAPSHOT)) == Bounds(5, 5, 5, 5)
    assert oracle.calls == 1


def test_local_tiers_short_circuit_oracle(equation_registry):
    resolver, oracle = _resolver(equation_registry, answer='{"x": 5, "y": 5, "width": 5, "height": 5}')
    resolver.set_canvas_snapshot(PNG_SNAPSHOT)
    assert asyncio.run(resolver.resolve("13")) == Bounds(130, 50, 25, 20)
    assert oracle.calls == 0


def test_oracle_uses_current_canvas_size():
    resolver, _ = _resolver(answer='{"x": 0, "y": 0, "width": 2000, "height": 2000}')
    resolver.update_canvas_dimensions(1024, 768)
    result = asyncio.run(resolver.resolve("a tree", canvas_snapshot=PNG_SNAPSHOT))
    assert result == Bounds(0, 0, 1024, 768)


def test_canvas_resize_moves_canvas_regions():
    resolver, _ = _resolver()
    resolver.update_canvas_dimensions(1000, 400)
    assert asyncio.run(resolver.resolve("top half")) == Bounds(0, 0, 1000, 200)


@pytest.mark.parametrize("width,height", [(0, 600), (800, -1)])
def test_invalid_canvas_dimensions(width, height):
    resolver, _ = _resolver()
    with pytest.raises(ValueError):
        resolver.update_canvas_dimensions(width, height)


def test_preferred_type(equation_registry):
    resolver, _ = _resolver(equation_registry)
    assert asyncio.run(resolver.resolve("x", preferred_type=Category.VARIABLE)) == Bounds(27, 50, 15, 20)
    assert resolver.resolve_local("5", preferred_type=Category.OPERATOR) is None


def test_resolve_many(equation_registry):
    resolver, _ = _resolver(equation_registry)
    results = asyncio.run(resolver.resolve_many(["5", "banana", "right side"]))
    assert results == [Bounds(65, 50, 15, 20), None, Bounds(130, 50, 25, 20)]


def test_registry_updates_are_seen(equation_registry):
    resolver, _ = _resolver(equation_registry)
    equation_registry.register("number_7", box(300, 50, 15, 20))
    assert asyncio.run(resolver.resolve("7")) == Bounds(300, 50, 15, 20)


def test_article_before_compound(equation_registry):
    resolver, _ = _resolver(equation_registry)
    assert asyncio.run(resolver.resolve("the 2x")) == Bounds(10, 50, 32, 20)
    assert asyncio.run(resolver.resolve("the x")) == Bounds(27, 50, 15, 20)


def test_article_before_half_compound():
    reg = SemanticRegistry()
    reg.register("number_2", box(10, 50, 15, 20))
    resolver, _ = _resolver(reg)
    assert asyncio.run(resolver.resolve("the 2x")) is None


def test_right_side_with_equals_at_left_edge():
    reg = SemanticRegistry()
    reg.register_many([("operator__", box(0, 0, 10, 10)), ("number_5", box(30, 0, 10, 10))])
    resolver, _ = _resolver(reg)
    assert asyncio.run(resolver.resolve("right side")) == Bounds(30, 0, 10, 10)
