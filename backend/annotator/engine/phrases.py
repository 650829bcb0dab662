"""Phrase normalisation shared by the tier matchers."""

from __future__ import annotations

import re

_WS_RE = re.compile(r"\s+")
_ARTICLE_RE = re.compile(r"^(?:the|a|an)\s+")
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")

# "2x", "12 y": coefficient followed by a single-letter variable
COMPOUND_RE = re.compile(r"^(\d+)\s*([a-z])$")


def normalize_phrase(phrase: str) -> str:
    """Lowercase, trim, collapse inner whitespace."""
    return _WS_RE.sub(" ", phrase.lower().strip())


def loose(text: str) -> str:
    """Underscores read as spaces, whitespace collapsed."""
    return _WS_RE.sub(" ", text.replace("_", " ")).strip()


def strip_article(phrase: str) -> str:
    """'the left side' -> 'left side'."""
    return _ARTICLE_RE.sub("", phrase, count=1)


def extract_number(phrase: str) -> str | None:
    """Largest number embedded in the phrase, as written ('the 5' -> '5')."""
    found = _NUMBER_RE.findall(phrase)
    if not found:
        return None
    return max(found, key=float)
