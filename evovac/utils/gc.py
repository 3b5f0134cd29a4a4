"""Garbage collection utilities.

Removes component entries whose entity is no longer registered. An entity
is *alive* while it is a key of ``State.entity``; bulk removal (such as
clearing every spawned item) only drops registry entries and then lets the
collector prune every per-entity map and id set in one pass.
"""

from dataclasses import replace
from typing import Any, Dict, Set, cast

from pyrsistent import pmap, pset
from pyrsistent.typing import PMap, PSet

from evovac.state import State
from evovac.types import EntityID


def compute_alive_entities(state: State) -> Set[EntityID]:
    """Return the IDs currently in the entity registry."""
    return set(state.entity.keys())


def run_garbage_collector(state: State) -> State:
    """Prune component maps and id sets to registered entity IDs."""
    alive = compute_alive_entities(state)
    new_fields: Dict[str, Any] = {}
    for field in state.__dataclass_fields__:
        if field == "entity":
            continue
        value = getattr(state, field)
        if isinstance(value, type(pmap())):
            value_map = cast(PMap[EntityID, Any], value)
            new_fields[field] = pmap({k: v for k, v in value_map.items() if k in alive})
        elif isinstance(value, type(pset())):
            value_set = cast(PSet[EntityID], value)
            new_fields[field] = pset(k for k in value_set if k in alive)
    return replace(state, **new_fields)
