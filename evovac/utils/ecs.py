"""ECS convenience queries.

Helpers for querying and editing entity/component relationships without
repeating map bookkeeping in systems. All functions are pure and operate on
the immutable :class:`evovac.state.State` snapshot.
"""

from dataclasses import replace
from typing import List, Mapping

from evovac.state import State
from evovac.types import EntityID


def entities_with_components(state: State, *component_stores: Mapping[EntityID, object]) -> List[EntityID]:
    """Return live IDs possessing every provided component store, sorted."""
    ids = set(state.entity.keys())
    for store in component_stores:
        ids &= set(store.keys())
    return sorted(ids)


def collectibles_in_category(state: State, category: str) -> List[EntityID]:
    """Live collectibles with a transform whose archetype is in ``category``."""
    return [
        eid
        for eid in entities_with_components(state, state.collectible, state.transform)
        if state.collectible[eid].archetype.category == category
    ]


def remove_entity(state: State, entity_id: EntityID) -> State:
    """Drop ``entity_id`` from the registry, every component map and the id sets.

    Tool fields (``session``, ``current_target``) are left to the caller.
    """
    return replace(
        state,
        entity=state.entity.discard(entity_id),
        transform=state.transform.discard(entity_id),
        rigid_body=state.rigid_body.discard(entity_id),
        collectible=state.collectible.discard(entity_id),
        highlighted=state.highlighted.discard(entity_id),
        being_captured=state.being_captured.discard(entity_id),
        spawned=state.spawned.discard(entity_id),
        overlapping=state.overlapping.discard(entity_id),
    )
