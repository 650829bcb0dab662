"""Tier 2 — equation-structure regions.

Resolves phrases that describe structure rather than a symbol: sides of an
equation, fraction parts, ordinal terms and canvas halves.

Sides are found by locating the equals sign and partitioning elements by
position. Fraction parts and terms are fixed fractions of the problem's
extent; they are approximations for simple expressions, not parses. The
separator repair heuristics are tuned for single-line linear equations
(``2x + 5 = 13``); exponents, stacked fractions or chained equalities only get
best-effort answers.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from annotator.engine.context import ResolutionContext
from annotator.engine.elements import SemanticElement
from annotator.engine.phrases import strip_article
from annotator.engine.registry import Tier, strategy
from annotator.utils.geometry import (
    Bounds,
    fractional_region,
    largest_gap,
    lies_left_of,
    lies_right_of,
    split_horizontal,
    union_bounds,
)

logger = logging.getLogger(__name__)


class Region(str, enum.Enum):
    LEFT_SIDE = "left side"
    RIGHT_SIDE = "right side"
    TOP_HALF = "top half"
    BOTTOM_HALF = "bottom half"
    NUMERATOR = "numerator"
    DENOMINATOR = "denominator"
    FIRST_TERM = "first term"
    SECOND_TERM = "second term"
    THIRD_TERM = "third term"


REGION_ALIASES: dict[str, Region] = {
    "left side": Region.LEFT_SIDE,
    "left": Region.LEFT_SIDE,
    "left hand side": Region.LEFT_SIDE,
    "left-hand side": Region.LEFT_SIDE,
    "lhs": Region.LEFT_SIDE,
    "right side": Region.RIGHT_SIDE,
    "right": Region.RIGHT_SIDE,
    "right hand side": Region.RIGHT_SIDE,
    "right-hand side": Region.RIGHT_SIDE,
    "rhs": Region.RIGHT_SIDE,
    "top half": Region.TOP_HALF,
    "top": Region.TOP_HALF,
    "upper half": Region.TOP_HALF,
    "bottom half": Region.BOTTOM_HALF,
    "bottom": Region.BOTTOM_HALF,
    "lower half": Region.BOTTOM_HALF,
    "numerator": Region.NUMERATOR,
    "denominator": Region.DENOMINATOR,
    "first term": Region.FIRST_TERM,
    "second term": Region.SECOND_TERM,
    "third term": Region.THIRD_TERM,
}

# (fx, fy, fw, fh) of the problem extent
_FRACTION_REGIONS: dict[Region, tuple[float, float, float, float]] = {
    Region.NUMERATOR: (1 / 3, 0.0, 1 / 3, 0.5),
    Region.DENOMINATOR: (1 / 3, 0.5, 1 / 3, 0.5),
    Region.FIRST_TERM: (0.0, 0.0, 1 / 3, 1.0),
    Region.SECOND_TERM: (1 / 3, 0.0, 1 / 3, 1.0),
    Region.THIRD_TERM: (2 / 3, 0.0, 1 / 3, 1.0),
}

# (fx, fy, fw, fh) of the full canvas
_CANVAS_REGIONS: dict[Region, tuple[float, float, float, float]] = {
    Region.TOP_HALF: (0.0, 0.0, 1.0, 0.5),
    Region.BOTTOM_HALF: (0.0, 0.5, 1.0, 0.5),
}


def match_region(phrase: str) -> Region | None:
    return REGION_ALIASES.get(strip_article(phrase))


@dataclass
class EquationSplit:
    """Where the left-hand side ends and the right-hand side begins."""

    split_x: float
    # "separator", "gap" or "midpoint"
    source: str
    separator: SemanticElement | None = None
    left: list[SemanticElement] = field(default_factory=list)
    right: list[SemanticElement] = field(default_factory=list)


def _partition(
    elements: list[SemanticElement],
    separator: SemanticElement,
    tolerance: float,
) -> tuple[list[SemanticElement], list[SemanticElement]]:
    others = [el for el in elements if el is not separator]
    right = [el for el in others if lies_right_of(el.bounds, separator.bounds.right, tolerance)]
    # An element already claimed by the right side never joins the left union
    right_ids = {el.id for el in right}
    left = [
        el
        for el in others
        if lies_left_of(el.bounds, separator.bounds.x, tolerance) and el.id not in right_ids
    ]
    return left, right


def find_separator(elements: list[SemanticElement], tolerance: float = 0.0) -> SemanticElement | None:
    """The equals sign with the most elements to its left; ties go to the rightmost."""
    candidates = [el for el in elements if el.is_equals_sign()]
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.debug("Found %d equals signs: %s", len(candidates), [c.id for c in candidates])

    def score(sep: SemanticElement) -> tuple[int, float]:
        left_count = sum(
            1 for el in elements if el is not sep and lies_left_of(el.bounds, sep.bounds.x, tolerance)
        )
        return left_count, sep.bounds.x

    return max(candidates, key=score)


def locate_split(ctx: ResolutionContext) -> EquationSplit:
    """Split point for the registered elements (assumes at least one element)."""
    elements = ctx.elements
    tolerance = ctx.config.side_tolerance

    separator = find_separator(elements, tolerance)
    left: list[SemanticElement] = []
    right: list[SemanticElement] = []
    if separator is not None:
        left, right = _partition(elements, separator, tolerance)
        if left and right:
            return EquationSplit(separator.bounds.x, "separator", separator, left, right)
        logger.debug(
            "Separator %s sits at an edge (left=%d, right=%d), searching for a gap",
            separator.id,
            len(left),
            len(right),
        )

    others = [el for el in elements if not el.is_equals_sign()]
    gap = largest_gap([el.bounds for el in others], ctx.config.min_split_gap)
    if gap is not None:
        start, end = gap
        split_x = (start + end) / 2
        gap_left = [el for el in others if lies_left_of(el.bounds, start)]
        gap_right = [el for el in others if lies_right_of(el.bounds, end)]
        logger.debug("Gap split at x=%.1f (%.1f px wide)", split_x, end - start)
        return EquationSplit(split_x, "gap", separator, gap_left, gap_right)

    # Whatever side the separator did populate keeps its members
    return EquationSplit(ctx.basis.center_x, "midpoint", separator, left, right)


def side_bounds(ctx: ResolutionContext, region: Region) -> Bounds:
    """Union of one side's elements, or the basis cut at the split point."""
    if not ctx.elements:
        left, right = split_horizontal(ctx.canvas_bounds, ctx.canvas_width / 2)
        return left if region is Region.LEFT_SIDE else right

    split = locate_split(ctx)
    members = split.left if region is Region.LEFT_SIDE else split.right
    box = union_bounds([el.bounds for el in members])
    if box is not None:
        return box

    left, right = split_horizontal(ctx.basis, split.split_x)
    return left if region is Region.LEFT_SIDE else right


@strategy(id="S2.01", tier=Tier.STRUCTURAL, description="Equation side")
def equation_side(ctx: ResolutionContext) -> Bounds | None:
    region = match_region(ctx.phrase)
    if region not in (Region.LEFT_SIDE, Region.RIGHT_SIDE):
        return None
    return side_bounds(ctx, region)


@strategy(id="S2.02", tier=Tier.STRUCTURAL, description="Fraction part or ordinal term")
def fraction_or_term(ctx: ResolutionContext) -> Bounds | None:
    region = match_region(ctx.phrase)
    fractions = _FRACTION_REGIONS.get(region) if region is not None else None
    if fractions is None:
        return None
    return fractional_region(ctx.basis, *fractions)


@strategy(id="S2.03", tier=Tier.STRUCTURAL, description="Canvas half")
def canvas_half(ctx: ResolutionContext) -> Bounds | None:
    region = match_region(ctx.phrase)
    fractions = _CANVAS_REGIONS.get(region) if region is not None else None
    if fractions is None:
        return None
    return fractional_region(ctx.canvas_bounds, *fractions)
