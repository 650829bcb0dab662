"""Semantic element ids: ``<category>_<content>`` as an explicit tagged value.

The renderer tags each token it draws with an id such as ``number_5``,
``variable_x`` or ``operator__`` (``=`` is written as ``_``). Repeated content
gets an instance suffix: the second ``apples`` becomes ``name_apples_2``.

Decoding splits on the first underscore only, so content that itself encodes
to ``_`` survives the round trip.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from annotator.utils.geometry import Bounds

EQUALS = "="
_EQUALS_TOKEN = "_"
_INSTANCE_RE = re.compile(r"^(.+)_(\d+)$")


class Category(str, enum.Enum):
    NUMBER = "number"
    VARIABLE = "variable"
    OPERATOR = "operator"
    NAME = "name"
    PERCENTAGE = "percentage"
    QUESTION = "question"
    OBJECT = "object"
    TEXT = "text"


_CATEGORIES = {c.value: c for c in Category}


@dataclass(frozen=True)
class ElementId:
    category: Category
    content: str
    instance: int = 1

    @property
    def token(self) -> str:
        return _EQUALS_TOKEN if self.content == EQUALS else self.content

    def encode(self) -> str:
        base = f"{self.category.value}_{self.token}"
        return base if self.instance <= 1 else f"{base}_{self.instance}"

    @classmethod
    def parse(cls, element_id: str) -> ElementId | None:
        """Decode a registry id. Unknown categories decode to None."""
        prefix, sep, token = element_id.partition("_")
        category = _CATEGORIES.get(prefix.lower())
        if not sep or category is None or not token:
            return None

        instance = 1
        m = _INSTANCE_RE.match(token)
        if m:
            token, instance = m.group(1), int(m.group(2))

        content = EQUALS if token in (_EQUALS_TOKEN, EQUALS) else token
        return cls(category=category, content=content, instance=instance)

    def __str__(self) -> str:
        return self.encode()


def content_segment(element_id: str) -> str | None:
    """Raw text after the first underscore, or None for ids without one."""
    _, sep, token = element_id.partition("_")
    return token if sep else None


@dataclass(frozen=True)
class SemanticElement:
    """A rendered piece of the expression and where it sits on the canvas."""

    id: str
    bounds: Bounds
    element_id: ElementId | None = None

    @classmethod
    def create(cls, element_id: str, bounds: Bounds) -> SemanticElement:
        return cls(id=element_id, bounds=bounds, element_id=ElementId.parse(element_id))

    @property
    def category(self) -> Category | None:
        return self.element_id.category if self.element_id else None

    @property
    def content(self) -> str | None:
        return self.element_id.content if self.element_id else None

    def is_equals_sign(self) -> bool:
        return self.category is Category.OPERATOR and self.content == EQUALS
