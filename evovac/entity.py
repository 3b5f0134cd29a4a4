"""Entity primitives & ID allocation.

Every world object is an ``EntityID`` plus zero or more component dataclasses
stored in persistent maps on :class:`evovac.state.State`. ``Entity`` carries
only a debug label; everything else lives in components.

IDs come from a process-local monotonic counter and are never recycled, so a
stale id held by an event subscriber can never alias a newer object.
"""

import itertools
from dataclasses import dataclass
from evovac.types import EntityID

_id_counter = itertools.count()


@dataclass(frozen=True)
class Entity:
    """Registry entry for a live entity.

    Attributes:
        label: Free-form name for logs (e.g. the archetype name).
    """

    label: str = ""


def new_entity_id() -> EntityID:
    """Return a newly allocated unique entity ID."""
    return next(_id_counter)