from dataclasses import dataclass, field

from pyrsistent import pmap
from pyrsistent.typing import PMap

from evovac.archetypes import Archetype


@dataclass(frozen=True)
class InventoryEntry:
    archetype: Archetype
    quantity: int = 1


@dataclass(frozen=True)
class Inventory:
    """Collected items stacked by archetype name.

    Attributes:
        entries:
            Persistent map of archetype name to its stack. Collecting another
            item of a known archetype only bumps the quantity.
    """

    entries: PMap[str, InventoryEntry] = field(default_factory=pmap)
