"""AnnotationResolver — phrase -> bounding box through three tiers.

Tier 1 (symbolic) and tier 2 (structural) run synchronously over a snapshot
of the semantic registry; tier 3 (oracle) is the only await point. The first
tier to produce a box wins. A miss is ``None``, never an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

# Import the matcher modules so their @strategy decorators fire
import annotator.engine.resolver.structural  # noqa: F401
import annotator.engine.resolver.symbolic  # noqa: F401
from annotator.engine.config import ResolverConfig
from annotator.engine.context import ResolutionContext
from annotator.engine.elements import Category
from annotator.engine.phrases import normalize_phrase
from annotator.engine.registry import StrategyRegistry, Tier, get_registry
from annotator.engine.resolver.oracle import OracleFallback, OracleFn
from annotator.engine.semantic_registry import SemanticRegistry
from annotator.utils.geometry import Bounds

logger = logging.getLogger(__name__)

_LOCAL_TIERS = (Tier.SYMBOLIC, Tier.STRUCTURAL)


@dataclass(frozen=True)
class Resolution:
    bounds: Bounds
    tier: Tier
    # Strategy id for tiers 1-2, "oracle" for tier 3
    strategy: str


class AnnotationResolver:
    """Resolves tutor annotation targets against one session's registry."""

    def __init__(
        self,
        registry: SemanticRegistry | None = None,
        canvas_width: float | None = None,
        canvas_height: float | None = None,
        oracle: OracleFn | OracleFallback | None = None,
        config: ResolverConfig | None = None,
        strategies: StrategyRegistry | None = None,
    ) -> None:
        self.config = config or ResolverConfig()
        self.registry = registry if registry is not None else SemanticRegistry()
        self.strategies = strategies or get_registry()
        self.oracle = oracle if isinstance(oracle, OracleFallback) else OracleFallback(oracle)
        self.canvas_width = self.config.default_canvas_width
        self.canvas_height = self.config.default_canvas_height
        self.update_canvas_dimensions(
            canvas_width if canvas_width is not None else self.canvas_width,
            canvas_height if canvas_height is not None else self.canvas_height,
        )
        self._snapshot: str | None = None

    def update_canvas_dimensions(self, width: float, height: float) -> None:
        """Called when the canvas is resized."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.canvas_width = float(width)
        self.canvas_height = float(height)

    def set_canvas_snapshot(self, snapshot: str | None) -> None:
        """Base64 image (or data URL) of the canvas; enables the oracle tier."""
        self._snapshot = snapshot or None

    @property
    def canvas_snapshot(self) -> str | None:
        return self._snapshot

    def _context(self, phrase: str, normalized: str, preferred_type: Category | None) -> ResolutionContext:
        return ResolutionContext(
            phrase=normalized,
            raw_phrase=phrase,
            elements=self.registry.elements(),
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
            problem_bounds=self.registry.problem_bounds,
            preferred_type=preferred_type,
            config=self.config,
        )

    def resolve_local(self, phrase: str, preferred_type: Category | None = None) -> Resolution | None:
        """Tiers 1 and 2 only. Synchronous."""
        normalized = normalize_phrase(phrase)
        if not normalized:
            return None

        ctx = self._context(phrase, normalized, preferred_type)
        for tier in _LOCAL_TIERS:
            for spec in self.strategies.get_tier(tier):
                bounds = spec.fn(ctx)
                if bounds is not None:
                    logger.info("Tier %d success: %r -> %s (%s)", int(tier), phrase, spec.id, spec.description)
                    return Resolution(bounds=bounds, tier=tier, strategy=spec.id)
        return None

    async def resolve_detailed(
        self,
        phrase: str,
        canvas_snapshot: str | None = None,
        preferred_type: Category | None = None,
    ) -> Resolution | None:
        local = self.resolve_local(phrase, preferred_type)
        if local is not None:
            return local
        if not normalize_phrase(phrase):
            return None

        snapshot = canvas_snapshot if canvas_snapshot is not None else self._snapshot
        if not snapshot:
            logger.info("No match for %r and no canvas snapshot, skipping oracle", phrase)
            return None

        bounds = await self.oracle.locate(snapshot, phrase, self.canvas_width, self.canvas_height)
        if bounds is None:
            logger.info("Tier 3: no match for %r", phrase)
            return None
        logger.info("Tier 3 success: %r -> oracle", phrase)
        return Resolution(bounds=bounds, tier=Tier.ORACLE, strategy="oracle")

    async def resolve(
        self,
        phrase: str,
        canvas_snapshot: str | None = None,
        preferred_type: Category | None = None,
    ) -> Bounds | None:
        """Resolve a natural-language target to canvas coordinates, or None."""
        result = await self.resolve_detailed(phrase, canvas_snapshot, preferred_type)
        return result.bounds if result is not None else None

    async def resolve_many(
        self,
        phrases: Iterable[str],
        canvas_snapshot: str | None = None,
    ) -> list[Bounds | None]:
        """Resolve several targets one after another, preserving order."""
        return [await self.resolve(p, canvas_snapshot) for p in phrases]
