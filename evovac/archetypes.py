"""Collectible archetypes and the spawn table.

An :class:`Archetype` is the authoring-time template a spawned collectible is
instantiated from (physical, storage and value properties). The
:class:`SpawnTable` is the ordered registry the distribution engine draws
from: tiers keep the order in which their first archetype was registered,
which is also the walk order of the weighted rarity roulette.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from evovac.config import CaptureThresholds
from evovac.types import Rarity


@dataclass(frozen=True)
class Archetype:
    """Template for a capturable item.

    Attributes:
        name: Unique display / stacking name.
        rarity: Rarity tier.
        weight: Mass used by suction physics and the pool's weight ceiling.
        footprint: Capacity units occupied in the resource pool.
        sell_value: Value reported to the inventory / economy collaborator.
        base_spawn_chance: Tier base weight for the rarity roulette.
        category: Detection category (the capture tool filters on this).
        radius: Collider radius at scale 1.0, used for raycasts.
        thresholds: Optional per-archetype capture thresholds.
    """

    name: str
    rarity: Rarity
    weight: float = 1.0
    footprint: int = 1
    sell_value: int = 0
    base_spawn_chance: float = 0.25
    category: str = "trash"
    radius: float = 0.5
    thresholds: Optional[CaptureThresholds] = None


class SpawnTable:
    """Ordered archetype registry grouped by rarity tier.

    The base spawn chance of a tier is taken from the most recently
    registered archetype of that tier.
    """

    def __init__(self, archetypes: Iterable[Archetype] = ()) -> None:
        self._by_rarity: Dict[Rarity, List[Archetype]] = {}
        self._base_chance: Dict[Rarity, float] = {}
        self.register_many(archetypes)

    def register(self, archetype: Archetype) -> None:
        self._by_rarity.setdefault(archetype.rarity, []).append(archetype)
        self._base_chance[archetype.rarity] = archetype.base_spawn_chance

    def register_many(self, archetypes: Iterable[Archetype]) -> None:
        for archetype in archetypes:
            self.register(archetype)

    def tiers(self) -> List[Rarity]:
        """Rarities with at least one archetype, in registration order."""
        return list(self._by_rarity.keys())

    def archetypes_for(self, rarity: Rarity) -> List[Archetype]:
        return list(self._by_rarity.get(rarity, ()))

    def base_chance(self, rarity: Rarity) -> float:
        return self._base_chance.get(rarity, 0.0)

    def __len__(self) -> int:
        return sum(len(group) for group in self._by_rarity.values())

    def __iter__(self) -> Iterator[Archetype]:
        for group in self._by_rarity.values():
            yield from group


DEFAULT_ARCHETYPES: List[Archetype] = [
    Archetype("Crumpled Can", Rarity.COMMON, weight=0.3, footprint=1, sell_value=2, base_spawn_chance=0.6, radius=0.2),
    Archetype("Plastic Bottle", Rarity.COMMON, weight=0.2, footprint=1, sell_value=1, base_spawn_chance=0.6, radius=0.25),
    Archetype("Cardboard Box", Rarity.UNCOMMON, weight=1.5, footprint=3, sell_value=6, base_spawn_chance=0.3, radius=0.5),
    Archetype("Old Tire", Rarity.RARE, weight=8.0, footprint=8, sell_value=25, base_spawn_chance=0.15, radius=0.7),
    Archetype("Broken Radio", Rarity.EPIC, weight=3.0, footprint=4, sell_value=60, base_spawn_chance=0.08, radius=0.4),
    Archetype("Lost Satellite Part", Rarity.LEGENDARY, weight=12.0, footprint=10, sell_value=250, base_spawn_chance=0.02, radius=0.9),
]


def default_spawn_table() -> SpawnTable:
    """Stock trash catalogue spanning every rarity tier."""
    return SpawnTable(DEFAULT_ARCHETYPES)
