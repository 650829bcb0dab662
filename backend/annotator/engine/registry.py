"""Strategy registry — every matcher is a standalone function registered via decorator.

Usage:
    @strategy(id="S1.03", tier=Tier.SYMBOLIC, description="Content match")
    def content_match(ctx: ResolutionContext) -> Bounds | None:
        ...

Strategies in a tier run in id order; the first one returning a box wins.
Adding a matcher = one decorated function. Nothing else changes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from annotator.engine.context import ResolutionContext
    from annotator.utils.geometry import Bounds

logger = logging.getLogger(__name__)

StrategyFn = Callable[["ResolutionContext"], Optional["Bounds"]]


class Tier(enum.IntEnum):
    SYMBOLIC = 1
    STRUCTURAL = 2
    ORACLE = 3


@dataclass
class StrategySpec:
    id: str
    tier: Tier
    fn: StrategyFn
    description: str = ""


class StrategyRegistry:
    """Ordered collection of matcher strategies."""

    def __init__(self) -> None:
        self._strategies: dict[str, StrategySpec] = {}

    def register(self, spec: StrategySpec) -> None:
        if spec.id in self._strategies:
            raise ValueError(f"Duplicate strategy ID: {spec.id}")
        self._strategies[spec.id] = spec
        logger.debug("Registered strategy %s (%s)", spec.id, spec.tier.name)

    def get_tier(self, tier: Tier) -> list[StrategySpec]:
        specs = [s for s in self._strategies.values() if s.tier == tier]
        return sorted(specs, key=lambda s: s.id)

    @property
    def count(self) -> int:
        return len(self._strategies)


# Module-level singleton
_registry = StrategyRegistry()


def get_registry() -> StrategyRegistry:
    return _registry


def strategy(*, id: str, tier: Tier, description: str = ""):
    """Decorator to register a matcher function."""

    def decorator(fn: StrategyFn):
        _registry.register(StrategySpec(id=id, tier=tier, fn=fn, description=description))
        return fn

    return decorator
