"""FastAPI dependency injection."""

from __future__ import annotations

from annotator.engine.resolver.oracle import OracleFallback, get_oracle_cache


def get_oracle() -> OracleFallback:
    """Default vision oracle over the process-wide cache; overridden in tests."""
    return OracleFallback(cache=get_oracle_cache())
