from dataclasses import replace

from pyrsistent import pset

from evovac.components import BeingCaptured, Highlighted
from evovac.state import create_empty_state
from evovac.utils.ecs import collectibles_in_category, entities_with_components, remove_entity
from evovac.utils.gc import run_garbage_collector
from evovac.utils.math import Vec3
from tests.test_utils import add_collectible, make_archetype


def test_collectibles_filtered_by_category() -> None:
    state = create_empty_state()
    state, trash_id = add_collectible(state, make_archetype("Can"), Vec3(0.0, 0.0, 1.0))
    state, tool_id = add_collectible(state, make_archetype("Wrench", category="tool"), Vec3(0.0, 0.0, 2.0))
    assert collectibles_in_category(state, "trash") == [trash_id]
    assert collectibles_in_category(state, "tool") == [tool_id]
    assert entities_with_components(state, state.collectible) == sorted([trash_id, tool_id])


def test_remove_entity_drops_every_component() -> None:
    state = create_empty_state()
    state, eid = add_collectible(state, make_archetype(), Vec3(0.0, 0.0, 1.0))
    state = replace(
        state,
        highlighted=state.highlighted.set(eid, Highlighted()),
        being_captured=state.being_captured.set(eid, BeingCaptured()),
        spawned=state.spawned.add(eid),
        overlapping=state.overlapping.add(eid),
    )
    state = remove_entity(state, eid)
    for store in (state.entity, state.transform, state.rigid_body, state.collectible, state.highlighted, state.being_captured):
        assert eid not in store
    assert eid not in state.spawned
    assert eid not in state.overlapping


def test_garbage_collector_prunes_unregistered_ids() -> None:
    state = create_empty_state()
    state, keep = add_collectible(state, make_archetype(), Vec3(0.0, 0.0, 1.0))
    state, drop = add_collectible(state, make_archetype(), Vec3(0.0, 0.0, 2.0))
    state = replace(state, entity=state.entity.discard(drop), spawned=pset([keep, drop]))
    state = run_garbage_collector(state)
    assert drop not in state.transform
    assert drop not in state.rigid_body
    assert state.spawned == pset([keep])
    assert keep in state.collectible


def test_description_skips_empty_fields() -> None:
    state = create_empty_state()
    assert "transform" not in state.description
    assert "session" not in state.description
    state, _ = add_collectible(state, make_archetype(), Vec3())
    assert "transform" in state.description
