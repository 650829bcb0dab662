"""Thresholds for the structural heuristics and oracle cache."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ResolverConfig:
    """Tunables shared by all tiers."""

    # Canvas used until the caller reports its real size
    default_canvas_width: float = 800.0
    default_canvas_height: float = 600.0

    # Minimum horizontal gap (px) that may stand in for a misdetected equals sign
    min_split_gap: float = 10.0

    # Slack (px) when deciding whether a box lies left/right of the separator
    side_tolerance: float = 2.0

    # Oracle results kept per process before least-recently-used eviction
    oracle_cache_size: int = 512
