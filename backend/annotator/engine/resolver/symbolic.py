"""Tier 1 — symbolic matching against registered semantic elements.

Resolves phrases that name one rendered element ("5", "number 5", "equals
sign") or a coefficient + variable pair ("2x"). No reasoning about equation
structure happens here; see structural.py for that.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from annotator.engine.context import ResolutionContext
from annotator.engine.elements import EQUALS, Category, ElementId, SemanticElement, content_segment
from annotator.engine.phrases import COMPOUND_RE, extract_number, loose, strip_article
from annotator.engine.registry import Tier, strategy
from annotator.utils.geometry import Bounds, compound_bounds

logger = logging.getLogger(__name__)

# phrase -> (category, allowed contents); None allows any content in the category
_DESCRIPTIONS: dict[str, tuple[Category, frozenset[str] | None]] = {}


def _describe(category: Category, contents: Iterable[str] | None, *phrases: str) -> None:
    allowed = frozenset(contents) if contents is not None else None
    for p in phrases:
        _DESCRIPTIONS[p] = (category, allowed)


_describe(Category.OPERATOR, [EQUALS], "equals sign", "equal sign", "equals", "equal", "=", "equals symbol")
_describe(Category.OPERATOR, ["+"], "plus sign", "plus", "addition sign", "+")
_describe(Category.OPERATOR, ["-", "−"], "minus sign", "minus", "subtraction sign", "-")
_describe(Category.OPERATOR, ["×", "*", "·"], "times sign", "multiplication sign", "times")
_describe(Category.OPERATOR, ["÷", "/"], "division sign", "divided by sign", "divide sign")
_describe(Category.VARIABLE, None, "variable", "unknown")
_describe(Category.NUMBER, None, "number")
_describe(Category.PERCENTAGE, None, "percentage", "percent")
_describe(Category.QUESTION, None, "question", "question mark")
_describe(Category.NAME, None, "name")


def _allowed(ctx: ResolutionContext, element: SemanticElement) -> bool:
    return ctx.preferred_type is None or element.category is ctx.preferred_type


def content_matches(element: SemanticElement, content: str) -> bool:
    """Compare against the id's content segment and its decoded content."""
    forms = [content_segment(element.id)]
    if element.content is not None:
        forms.append(element.content)
    target = loose(content)
    for form in forms:
        if form is None:
            continue
        form = form.lower()
        if form == content or (target and loose(form) == target):
            return True
    return False


def find_by_content(
    elements: Iterable[SemanticElement],
    content: str,
    category: Category | None = None,
) -> SemanticElement | None:
    """First element (insertion order) whose content matches.

    With a category the scan never widens past it: a lookup for a number
    must not land on an operator that happens to share the digits.
    """
    for el in elements:
        if category is not None and el.category is not category:
            continue
        if content_matches(el, content):
            return el
    return None


@strategy(id="S1.01", tier=Tier.SYMBOLIC, description="Exact element id")
def exact_id(ctx: ResolutionContext) -> Bounds | None:
    for key in (ctx.phrase, ctx.phrase.replace(" ", "_")):
        el = ctx.get(key)
        if el is not None and _allowed(ctx, el):
            return el.bounds
    return None


def _compound_part(ctx: ResolutionContext, category: Category, content: str) -> SemanticElement | None:
    el = ctx.get(ElementId(category, content).encode())
    if el is not None:
        return el
    return find_by_content(ctx.elements, content, category)


@strategy(id="S1.02", tier=Tier.SYMBOLIC, description="Coefficient + variable compound")
def compound_term(ctx: ResolutionContext) -> Bounds | None:
    m = COMPOUND_RE.match(strip_article(ctx.phrase))
    if not m:
        return None
    digits, letter = m.groups()
    number = _compound_part(ctx, Category.NUMBER, digits)
    variable = _compound_part(ctx, Category.VARIABLE, letter)
    if number is None or variable is None:
        logger.debug(
            "Compound %r incomplete (number=%s, variable=%s)",
            ctx.phrase,
            number.id if number else None,
            variable.id if variable else None,
        )
        return None
    return compound_bounds(number.bounds, variable.bounds)


@strategy(id="S1.03", tier=Tier.SYMBOLIC, description="Element content")
def content_match(ctx: ResolutionContext) -> Bounds | None:
    bare = strip_article(ctx.phrase)
    wanted = [ctx.phrase]
    if bare != ctx.phrase:
        wanted.append(bare)
    # Digit extraction would turn "2x" into "2" and break the compound rule
    if not COMPOUND_RE.match(bare):
        number = extract_number(bare)
        if number is not None and number not in wanted:
            wanted.append(number)

    for content in wanted:
        el = find_by_content(ctx.elements, content, ctx.preferred_type)
        if el is not None:
            return el.bounds
    return None


@strategy(id="S1.04", tier=Tier.SYMBOLIC, description="Category description")
def type_description(ctx: ResolutionContext) -> Bounds | None:
    entry = _DESCRIPTIONS.get(strip_article(ctx.phrase))
    if entry is None:
        return None
    category, contents = entry
    if ctx.preferred_type is not None and category is not ctx.preferred_type:
        return None
    for el in ctx.of_category(category):
        if contents is None or el.content in contents:
            return el.bounds
    return None


@strategy(id="S1.05", tier=Tier.SYMBOLIC, description="Fuzzy id containment")
def fuzzy_containment(ctx: ResolutionContext) -> Bounds | None:
    phrase = ctx.phrase
    matches: list[SemanticElement] = []
    for el in ctx.candidates():
        key = el.id.lower()
        spaced = loose(key)
        if phrase in key or key in phrase or phrase in spaced or (spaced and spaced in phrase):
            matches.append(el)
    if not matches:
        return None
    # Shortest id is the most specific match; min() keeps insertion order on ties
    best = min(matches, key=lambda el: (len(el.id), el.bounds.x))
    if len(matches) > 1:
        logger.debug("Fuzzy %r matched %d ids, picked %s", phrase, len(matches), best.id)
    return best.bounds
