"""Tier 3 — ask an image-understanding oracle to localise the phrase.

Only runs when tiers 1-2 missed and a canvas snapshot is available. Every
failure (no API key, network error, junk answer, "not found") becomes a miss;
annotation is a visual aid and must never break the tutoring turn.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Awaitable, Callable, Optional

from annotator.engine.config import ResolverConfig
from annotator.engine.errors import OracleError
from annotator.engine.phrases import normalize_phrase
from annotator.engine.resolver.response_parser import parse_oracle_response
from annotator.utils.geometry import Bounds, clamp_to_canvas

logger = logging.getLogger(__name__)

# (snapshot, phrase, canvas_width, canvas_height) -> raw oracle text
OracleFn = Callable[[str, str, float, float], Awaitable[Optional[str]]]

CacheKey = tuple[str, str]


class OracleCache:
    """LRU of oracle answers keyed by (phrase, "<w>x<h>").

    Entries are immutable once written; a race between two requests only costs
    a redundant oracle call.
    """

    def __init__(self, max_entries: int = 512) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[CacheKey, Bounds] = OrderedDict()

    @staticmethod
    def key(phrase: str, canvas_width: float, canvas_height: float) -> CacheKey:
        return normalize_phrase(phrase), f"{canvas_width:g}x{canvas_height:g}"

    def get(self, key: CacheKey) -> Bounds | None:
        box = self._entries.get(key)
        if box is not None:
            self._entries.move_to_end(key)
        return box

    def put(self, key: CacheKey, box: Bounds) -> None:
        self._entries[key] = box
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Oracle cache evicted %s", evicted)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# Module-level cache shared by every resolver in the process
_cache = OracleCache(ResolverConfig().oracle_cache_size)


def get_oracle_cache() -> OracleCache:
    return _cache


def clear_oracle_cache() -> None:
    _cache.clear()


async def _default_oracle(snapshot: str, phrase: str, canvas_width: float, canvas_height: float) -> str | None:
    from annotator.llm.client import request_localization

    return await request_localization(snapshot, phrase, canvas_width, canvas_height)


class OracleFallback:
    """Cached, clamped, failure-proof wrapper around an oracle callable."""

    def __init__(self, oracle: OracleFn | None = None, cache: OracleCache | None = None) -> None:
        self.oracle = oracle or _default_oracle
        self.cache = cache if cache is not None else get_oracle_cache()

    async def locate(
        self,
        snapshot: str | None,
        phrase: str,
        canvas_width: float,
        canvas_height: float,
    ) -> Bounds | None:
        if not snapshot:
            return None

        key = OracleCache.key(phrase, canvas_width, canvas_height)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Oracle cache hit for %r", phrase)
            return cached

        try:
            answer = await self.oracle(snapshot, phrase, canvas_width, canvas_height)
            raw = parse_oracle_response(answer)
        except OracleError as e:
            logger.warning("Oracle could not localise %r: %s", phrase, e)
            return None
        except Exception as e:
            logger.warning("Oracle request for %r failed: %s", phrase, e)
            return None

        if raw is None:
            logger.info("Oracle reports %r not found", phrase)
            return None

        box = clamp_to_canvas(raw, canvas_width, canvas_height)
        if box.width <= 0 or box.height <= 0:
            logger.info("Oracle box for %r lies outside the canvas: %s", phrase, raw)
            return None
        if box != raw:
            logger.debug("Clamped oracle box %s -> %s", raw, box)

        self.cache.put(key, box)
        return box
