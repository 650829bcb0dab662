"""Semantic element registry — element id → bounding box for one rendered problem.

Populated by the renderer (or synchronised from the client in one batch),
read by the resolver. One instance per tutoring session: the registry has no
session key of its own, so sharing one across sessions mixes geometry.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from numbers import Real
from typing import Any

from annotator.engine.elements import SemanticElement
from annotator.engine.errors import InvalidBoundsError
from annotator.utils.geometry import Bounds, ProblemBounds, extent

logger = logging.getLogger(__name__)

_BOX_FIELDS = ("x", "y", "width", "height")


def coerce_bounds(raw: Bounds | Mapping[str, Any]) -> Bounds:
    """Validate a box and return it as Bounds. Raises InvalidBoundsError."""
    if isinstance(raw, Bounds):
        box = raw
    elif isinstance(raw, Mapping):
        missing = [f for f in _BOX_FIELDS if f not in raw]
        if missing:
            raise InvalidBoundsError(f"Bounds missing field(s): {', '.join(missing)}")
        for f in _BOX_FIELDS:
            value = raw[f]
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidBoundsError(f"Bounds field {f!r} is not numeric: {value!r}")
        box = Bounds(*(float(raw[f]) for f in _BOX_FIELDS))
    else:
        raise InvalidBoundsError(f"Unsupported bounds type: {type(raw).__name__}")

    if not all(math.isfinite(v) for v in (box.x, box.y, box.width, box.height)):
        raise InvalidBoundsError(f"Bounds must be finite: {box}")
    if box.width < 0 or box.height < 0:
        raise InvalidBoundsError(f"Bounds must have non-negative size: {box}")
    return box


class SemanticRegistry:
    """Insertion-ordered map of semantic elements with a cached union box."""

    def __init__(self) -> None:
        self._elements: dict[str, SemanticElement] = {}
        self._problem_bounds: ProblemBounds | None = None
        self._stale = False

    def register(self, element_id: str, bounds: Bounds | Mapping[str, Any]) -> SemanticElement:
        """Insert or overwrite one element (last write wins)."""
        if not element_id:
            raise InvalidBoundsError("Element id must be a non-empty string")
        element = SemanticElement.create(element_id, coerce_bounds(bounds))
        self._elements[element_id] = element
        self._stale = True
        logger.debug("Registered element %s at %s", element_id, element.bounds)
        return element

    def register_many(
        self,
        elements: Iterable[SemanticElement | tuple[str, Any] | Mapping[str, Any]],
    ) -> int:
        """Register a batch. The whole batch is validated before anything is stored."""
        staged: list[SemanticElement] = []
        for item in elements:
            if isinstance(item, SemanticElement):
                element_id, raw = item.id, item.bounds
            elif isinstance(item, Mapping):
                element_id, raw = item.get("id"), item.get("bounds")
            else:
                element_id, raw = item
            if not isinstance(element_id, str) or not element_id:
                raise InvalidBoundsError(f"Element id must be a non-empty string: {element_id!r}")
            if raw is None:
                raise InvalidBoundsError(f"Element {element_id} has no bounds")
            staged.append(SemanticElement.create(element_id, coerce_bounds(raw)))

        for element in staged:
            self._elements[element.id] = element
        if staged:
            self._stale = True
        logger.debug("Registered %d elements (%d total)", len(staged), len(self._elements))
        return len(staged)

    def clear(self) -> None:
        self._elements.clear()
        self._problem_bounds = None
        self._stale = False

    def get(self, element_id: str) -> SemanticElement | None:
        return self._elements.get(element_id)

    def elements(self) -> list[SemanticElement]:
        """Snapshot in insertion order."""
        return list(self._elements.values())

    def compute_union_bounds(self) -> ProblemBounds | None:
        """Recompute the tightest box around every element. None when empty."""
        bounds = extent([e.bounds for e in self._elements.values()])
        self._problem_bounds = bounds
        self._stale = False
        return bounds

    @property
    def problem_bounds(self) -> ProblemBounds | None:
        if self._stale:
            return self.compute_union_bounds()
        return self._problem_bounds

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[SemanticElement]:
        return iter(list(self._elements.values()))
