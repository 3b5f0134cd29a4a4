from typing import Any, List, Tuple

from evovac.components import ResourcePool
from evovac.events import (
    CaptureReleased,
    CaptureStarted,
    EnergyDepleted,
    ItemCollected,
    ItemRejected,
    PhaseChanged,
    TargetChanged,
    drain_events,
)
from evovac.physics import PointMassPhysics
from evovac.state import State
from evovac.step import physics_step, visual_step
from evovac.types import CapturePhase, RejectReason, ReleaseReason
from evovac.utils.inventory import item_count
from evovac.utils.math import ZERO
from tests.test_utils import fast_tool, make_archetype, make_tool_state

PHYSICS = PointMassPhysics(gravity=ZERO)
TOOL = fast_tool()
DT = 0.02


def press_engage(state: State, max_ticks: int = 1000, stop_on_outcome: bool = True) -> Tuple[State, List[Any]]:
    """Press engage once and hold it while alternating physics and visual ticks."""
    events: List[Any] = []
    pending = True
    for _ in range(max_ticks):
        state = physics_step(state, PHYSICS, TOOL, DT)
        attempt = pending
        if pending and state.current_target is not None:
            pending = False
        state = visual_step(state, PHYSICS, TOOL, DT, engage_pending=attempt)
        state, batch = drain_events(state)
        events.extend(batch)
        if stop_on_outcome and any(isinstance(e, (ItemCollected, ItemRejected)) for e in batch):
            break
    return state, events


def test_item_ahead_is_pulled_in_and_collected() -> None:
    state, eid = make_tool_state(make_archetype("Crumpled Can"), distance=5.0)
    state, events = press_engage(state)

    assert eid not in state.entity
    assert state.session is None
    assert state.phase == CapturePhase.IDLE
    assert item_count(state.inventory, "Crumpled Can") == 1
    assert state.resources.capacity_used == 1
    assert state.resources.energy < state.resources.energy_max

    kinds = [type(e) for e in events]
    assert kinds.index(TargetChanged) < kinds.index(CaptureStarted) < kinds.index(ItemCollected)
    phases = [(e.previous, e.phase) for e in events if isinstance(e, PhaseChanged)]
    assert phases == [
        (CapturePhase.APPROACH, CapturePhase.ALIGN),
        (CapturePhase.ALIGN, CapturePhase.SHRINK),
        (CapturePhase.SHRINK, CapturePhase.COLLECTING),
    ]


def test_full_pool_rejects_item_back_into_world() -> None:
    pool = ResourcePool(capacity_used=100, capacity_max=100)
    state, eid = make_tool_state(distance=4.0, pool=pool)
    state, events = press_engage(state)

    rejected = events[-1]
    assert isinstance(rejected, ItemRejected)
    assert rejected.reason == RejectReason.CAPACITY
    assert eid in state.entity
    assert state.session is None
    assert state.transform[eid].scale == 1.0
    assert state.rigid_body[eid].use_gravity
    assert state.resources.capacity_used == 100
    assert item_count(state.inventory, "Crumpled Can") == 0


def test_depletion_ends_capture_and_blocks_retry() -> None:
    state, eid = make_tool_state(distance=8.0, pool=ResourcePool(energy=0.5))
    state, events = press_engage(state, max_ticks=40, stop_on_outcome=False)

    assert state.resources.depleted
    assert state.session is None
    assert eid in state.entity
    assert sum(isinstance(e, EnergyDepleted) for e in events) == 1
    assert CaptureReleased(eid, ReleaseReason.DEPLETED) in events
    assert sum(isinstance(e, CaptureStarted) for e in events) == 1
    assert not any(isinstance(e, ItemCollected) for e in events)


def test_one_press_rejects_once_and_stops_draining() -> None:
    pool = ResourcePool(capacity_used=100, capacity_max=100)
    state, eid = make_tool_state(distance=4.0, pool=pool)
    state, events = press_engage(state, max_ticks=2000, stop_on_outcome=False)

    assert sum(isinstance(e, CaptureStarted) for e in events) == 1
    assert sum(isinstance(e, ItemRejected) for e in events) == 1
    assert eid in state.entity
    assert state.session is None
    assert not state.resources.depleted
    assert state.resources.energy > 80.0
