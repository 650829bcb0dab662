"""Parse the oracle's text answer into a raw bounding box."""

from __future__ import annotations

import json
import math
import re
from numbers import Real
from typing import Any

from annotator.engine.errors import OracleMalformedResponse
from annotator.utils.geometry import Bounds

_CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?```", re.DOTALL)
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_NOT_FOUND_RE = re.compile(r"^\s*(?:null|none|not found)\s*\.?\s*$", re.IGNORECASE)

_FIELDS = ("x", "y", "width", "height")


def _box_from(data: Any) -> Bounds | None:
    if not isinstance(data, dict):
        return None
    if data.get("found") is False:
        return None
    values = []
    for f in _FIELDS:
        v = data.get(f)
        if isinstance(v, bool) or not isinstance(v, Real) or not math.isfinite(v):
            return None
        values.append(float(v))
    return Bounds(*values)


def parse_oracle_response(text: str | None) -> Bounds | None:
    """Extract {x, y, width, height} from the oracle's answer.

    Supports:
    1. Direct JSON output
    2. JSON embedded in a markdown code block or surrounded by prose
    3. An explicit not-found answer (``null``, ``{"found": false}``)

    Returns None for not-found or incomplete boxes; raises
    OracleMalformedResponse when the text holds no JSON at all.
    """
    if text is None:
        return None
    text = text.strip()

    block = _CODE_BLOCK_RE.search(text)
    if block:
        text = block.group(1).strip()

    if not text or _NOT_FOUND_RE.match(text):
        return None

    try:
        return _box_from(json.loads(text))
    except json.JSONDecodeError:
        pass

    obj = _OBJECT_RE.search(text)
    if obj is None:
        raise OracleMalformedResponse(f"No JSON object in oracle answer: {text[:120]!r}")
    try:
        return _box_from(json.loads(obj.group(0)))
    except json.JSONDecodeError as e:
        raise OracleMalformedResponse(f"Unparseable oracle answer: {e}") from e
