"""Rarity distribution curves.

Each curve maps horizontal distance from the hub to a multiplier on its
tier's base spawn chance, which is how common trash thins out and rare
items grow more likely toward the edge of the map.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from evovac.types import Rarity
from evovac.utils.curves import Curve, ease_in_out


@dataclass(frozen=True)
class RarityDistributionCurve:
    rarity: Rarity
    curve: Curve

    def multiplier(self, distance: float) -> float:
        return self.curve.evaluate(distance)


_DEFAULT_ANCHORS: Dict[Rarity, Tuple[float, float]] = {
    Rarity.COMMON: (1.0, 0.2),
    Rarity.UNCOMMON: (0.3, 0.8),
    Rarity.RARE: (0.1, 1.0),
    Rarity.EPIC: (0.05, 1.2),
    Rarity.LEGENDARY: (0.0, 0.5),
}


def default_rarity_curves(max_distance: float) -> List[RarityDistributionCurve]:
    """Eased hub-to-edge curves for every tier over ``[0, max_distance]``."""
    return [
        RarityDistributionCurve(rarity, ease_in_out(0.0, near, max_distance, far))
        for rarity, (near, far) in _DEFAULT_ANCHORS.items()
    ]


def curve_index(curves: Iterable[RarityDistributionCurve]) -> Dict[Rarity, RarityDistributionCurve]:
    """Index curves by tier; a later curve for the same tier replaces an earlier one."""
    return {c.rarity: c for c in curves}
