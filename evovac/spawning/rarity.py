"""Weighted rarity selection.

A tier's weight at a point is its base spawn chance times its distance
multiplier. Tiers are walked in registration order, so equal cumulative
boundaries resolve to the earlier tier.
"""

import random
from typing import Iterable, List, Tuple

from evovac.archetypes import SpawnTable
from evovac.spawning.curves import RarityDistributionCurve, curve_index
from evovac.types import Rarity
from evovac.utils.math import Vec3, horizontal_distance


class RaritySelector:
    def __init__(
        self,
        table: SpawnTable,
        curves: Iterable[RarityDistributionCurve],
        hub: Vec3,
        rng: random.Random,
    ) -> None:
        self.table = table
        self.curves = curve_index(curves)
        self.hub = hub
        self.rng = rng

    def multiplier(self, rarity: Rarity, distance: float) -> float:
        curve = self.curves.get(rarity)
        if curve is None:
            return 1.0
        return curve.multiplier(distance)

    def weights(self, point: Vec3) -> List[Tuple[Rarity, float]]:
        """Per-tier weights at ``point`` in registration order."""
        distance = horizontal_distance(point, self.hub)
        return [
            (tier, max(0.0, self.table.base_chance(tier) * self.multiplier(tier, distance)))
            for tier in self.table.tiers()
        ]

    def select_rarity(self, point: Vec3) -> Rarity:
        """Draw a tier by weighted roulette; ``COMMON`` when nothing has weight."""
        return self.select_from_weights(self.weights(point))

    def select_from_weights(self, weights: List[Tuple[Rarity, float]]) -> Rarity:
        total = sum(weight for _, weight in weights)
        if total <= 0.0:
            return Rarity.COMMON
        draw = self.rng.random() * total
        cumulative = 0.0
        last_positive = Rarity.COMMON
        for tier, weight in weights:
            if weight <= 0.0:
                continue
            cumulative += weight
            last_positive = tier
            if draw <= cumulative:
                return tier
        return last_positive
