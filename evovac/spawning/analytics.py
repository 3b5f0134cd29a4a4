"""Spawn analytics.

Summarizes what the distribution engine actually placed: per-tier counts
and shares, a per-band rarity histogram over hub distance, and distance
extremes. Used to tune rarity curves against real spawns.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List

from evovac.state import State
from evovac.types import Rarity
from evovac.utils.math import Vec3, horizontal_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnStatistics:
    """Snapshot of the spawned set.

    Attributes:
        total: Number of live spawned collectibles.
        rarity_counts: Count per tier (every tier present, possibly 0).
        rarity_percentages: Share per tier in percent (0 when nothing spawned).
        band_counts: Per distance band, count per tier.
        band_size: Width of one distance band.
        average_distance: Mean horizontal distance from the hub.
        min_distance: Closest spawn.
        max_distance: Farthest spawn.
    """

    total: int
    rarity_counts: Dict[Rarity, int]
    rarity_percentages: Dict[Rarity, float]
    band_counts: List[Dict[Rarity, int]] = field(default_factory=list)
    band_size: float = 0.0
    average_distance: float = 0.0
    min_distance: float = 0.0
    max_distance: float = 0.0


def distance_band(distance: float, max_spawn_distance: float, bands: int) -> int:
    """Band index of ``distance``, clamped to ``[0, bands - 1]``."""
    if bands <= 1 or max_spawn_distance <= 0.0:
        return 0
    band = math.floor(distance / (max_spawn_distance / bands))
    return max(0, min(bands - 1, band))


def analyze_spawned(state: State, hub: Vec3, max_spawn_distance: float, bands: int = 5) -> SpawnStatistics:
    bands = max(1, bands)
    counts: Dict[Rarity, int] = {rarity: 0 for rarity in Rarity}
    band_counts: List[Dict[Rarity, int]] = [{rarity: 0 for rarity in Rarity} for _ in range(bands)]
    distances: List[float] = []

    for eid in sorted(state.spawned):
        transform = state.transform.get(eid)
        collectible = state.collectible.get(eid)
        if transform is None or collectible is None:
            continue
        distance = horizontal_distance(transform.position, hub)
        rarity = collectible.archetype.rarity
        distances.append(distance)
        counts[rarity] += 1
        band_counts[distance_band(distance, max_spawn_distance, bands)][rarity] += 1

    total = len(distances)
    percentages = {rarity: (count / total * 100.0 if total else 0.0) for rarity, count in counts.items()}
    return SpawnStatistics(
        total=total,
        rarity_counts=counts,
        rarity_percentages=percentages,
        band_counts=band_counts,
        band_size=max_spawn_distance / bands,
        average_distance=sum(distances) / total if total else 0.0,
        min_distance=min(distances) if distances else 0.0,
        max_distance=max(distances) if distances else 0.0,
    )


def format_statistics(stats: SpawnStatistics) -> List[str]:
    """Human readable report lines."""
    lines = [
        "=== SPAWN STATISTICS ===",
        f"Total spawned: {stats.total}",
        f"Average distance from hub: {stats.average_distance:.2f}m",
        f"Distance range: {stats.min_distance:.2f}m - {stats.max_distance:.2f}m",
        "--- Rarity distribution ---",
    ]
    for rarity, count in stats.rarity_counts.items():
        lines.append(f"{rarity}: {count} ({stats.rarity_percentages[rarity]:.1f}%)")
    lines.append("--- Distance bands ---")
    for index, band in enumerate(stats.band_counts):
        start = index * stats.band_size
        band_total = sum(band.values())
        lines.append(f"Band {index + 1}: {start:.0f}m - {start + stats.band_size:.0f}m ({band_total})")
        for rarity, count in band.items():
            if count > 0:
                lines.append(f"  {rarity}: {count} ({count / band_total * 100.0:.1f}%)")
    return lines


def log_statistics(stats: SpawnStatistics) -> None:
    for line in format_statistics(stats):
        logger.info(line)
