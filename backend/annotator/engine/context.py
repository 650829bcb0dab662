"""The read-only snapshot every strategy receives.

Built once per resolve() call from the registry, so strategies never see the
registry change underneath them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from annotator.engine.config import ResolverConfig
from annotator.engine.elements import Category, SemanticElement
from annotator.utils.geometry import Bounds, ProblemBounds


@dataclass
class ResolutionContext:
    # Lowercased, trimmed, whitespace-collapsed phrase
    phrase: str
    # Phrase as the caller wrote it (sent to the oracle)
    raw_phrase: str
    # Registry snapshot in insertion order
    elements: list[SemanticElement] = field(default_factory=list)
    canvas_width: float = 800.0
    canvas_height: float = 600.0
    problem_bounds: ProblemBounds | None = None
    # Restrict symbolic lookups to one element category
    preferred_type: Category | None = None
    config: ResolverConfig = field(default_factory=ResolverConfig)

    _by_id: dict[str, SemanticElement] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for el in self.elements:
            self._by_id.setdefault(el.id.lower(), el)

    @property
    def canvas_bounds(self) -> Bounds:
        return Bounds(0.0, 0.0, self.canvas_width, self.canvas_height)

    @property
    def basis(self) -> Bounds:
        """Region basis: the problem's extent, or the whole canvas when nothing is registered."""
        if self.problem_bounds is not None:
            return self.problem_bounds.to_bounds()
        return self.canvas_bounds

    def get(self, element_id: str) -> SemanticElement | None:
        return self._by_id.get(element_id.lower())

    def candidates(self) -> list[SemanticElement]:
        """Elements eligible for symbolic lookup under preferred_type."""
        if self.preferred_type is None:
            return list(self.elements)
        return [el for el in self.elements if el.category is self.preferred_type]

    def of_category(self, category: Category) -> list[SemanticElement]:
        return [el for el in self.elements if el.category is category]
