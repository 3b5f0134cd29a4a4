"""Collectible component.

Marks an entity as a capturable world item and links it to the archetype it
was instantiated from. Storage footprint, weight and value are read from the
archetype when the item is admitted into the resource pool.
"""

from dataclasses import dataclass

from evovac.archetypes import Archetype


@dataclass(frozen=True)
class Collectible:
    archetype: Archetype
