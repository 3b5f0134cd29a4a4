import logging
from typing import Any, List, Optional, Set

import pytest

from evovac.archetypes import SpawnTable
from evovac.config import PhysicsConfig, ResourceConfig, SimulationConfig
from evovac.context import create_context
from evovac.events import (
    CaptureReleased,
    CaptureStarted,
    EnergyRecharged,
    ItemCollected,
    ItemRejected,
    TargetChanged,
)
from evovac.simulation import Simulation
from evovac.types import CapturePhase, Rarity, ReleaseReason
from evovac.utils.inventory import item_count
from evovac.utils.math import ZERO, Vec3, horizontal_distance, vector_subtract
from tests.test_utils import hub_spawn_config, make_archetype, single_common_table, square_terrain

DT = 0.02


def make_simulation(table: Optional[SpawnTable] = None, seed: int = 7, capacity_max: int = 100) -> Simulation:
    config = SimulationConfig(
        spawn=hub_spawn_config(total_count=10),
        physics=PhysicsConfig(gravity=ZERO),
        resources=ResourceConfig(capacity_max=capacity_max, weight_max=50.0, energy_max=100.0),
    )
    context = create_context(config, seed=seed)
    return Simulation(context, square_terrain(), table=table or single_common_table())


def aim_at_spawned(sim: Simulation) -> int:
    """Place the nozzle 3 m in front of one spawned item and detect it."""
    eid = sorted(sim.state.spawned)[0]
    position = sim.state.transform[eid].position
    nozzle = Vec3(position.x, position.y, position.z - 3.0)
    sim.move_nozzle(nozzle, vector_subtract(position, nozzle))
    sim.advance_visual(DT)
    assert sim.state.current_target == eid
    return eid


def test_populate_places_valid_items() -> None:
    sim = make_simulation()
    report = sim.populate()
    assert report.requested == 10
    assert report.spawned == 10
    assert len(sim.state.spawned) == 10
    for eid in sim.state.spawned:
        distance = horizontal_distance(sim.state.transform[eid].position, sim.state.hub)
        assert 20.0 <= distance <= 200.0
        assert sim.state.collectible[eid].archetype.rarity == Rarity.COMMON


def spawned_positions(sim: Simulation) -> Set[Vec3]:
    return {sim.state.transform[eid].position for eid in sim.state.spawned}


def test_same_seed_spawns_same_layout() -> None:
    first = make_simulation(seed=99)
    second = make_simulation(seed=99)
    first.populate()
    second.populate()
    assert spawned_positions(first) == spawned_positions(second)


def test_repopulate_replaces_previous_spawns() -> None:
    sim = make_simulation()
    sim.populate()
    old = set(sim.state.spawned)
    sim.populate(4)
    assert len(sim.state.spawned) == 4
    assert not old & set(sim.state.spawned)
    assert all(eid not in sim.state.entity for eid in old)


def test_engage_collects_and_notifies_subscribers() -> None:
    sim = make_simulation()
    sim.populate()
    received: List[Any] = []
    sim.subscribe(TargetChanged, received.append)
    sim.subscribe(CaptureStarted, received.append)
    sim.subscribe(ItemCollected, received.append)

    eid = aim_at_spawned(sim)
    sim.engage()
    assert sim.status.phase == CapturePhase.APPROACH
    assert sim.status.target_id == eid

    for _ in range(1000):
        sim.advance_physics(DT)
        sim.advance_visual(DT)
        if any(isinstance(e, ItemCollected) for e in received):
            break

    assert [type(e) for e in received][:2] == [TargetChanged, CaptureStarted]
    assert isinstance(received[-1], ItemCollected)
    assert eid not in sim.state.entity
    assert eid not in sim.state.spawned
    assert not sim.state.events
    assert item_count(sim.state.inventory, "Crumpled Can") == 1
    assert sim.status.capacity_used == 1
    assert sim.spawn_statistics().total == 9
    assert sim.status.candidate_id is None


def test_release_and_unsubscribe() -> None:
    sim = make_simulation()
    sim.populate()
    released: List[CaptureReleased] = []
    unsubscribe = sim.subscribe(CaptureReleased, released.append)
    eid = aim_at_spawned(sim)

    sim.engage()
    sim.release()
    assert released == [CaptureReleased(eid, ReleaseReason.STOPPED)]
    assert not sim.engage_held

    unsubscribe()
    sim.engage()
    sim.release()
    assert len(released) == 1


def test_disabling_input_releases_and_blocks_engage() -> None:
    sim = make_simulation()
    sim.populate()
    released: List[CaptureReleased] = []
    sim.subscribe(CaptureReleased, released.append)
    eid = aim_at_spawned(sim)
    sim.engage()

    sim.set_input_enabled(False)
    assert released == [CaptureReleased(eid, ReleaseReason.INPUT_DISABLED)]
    assert sim.status.phase == CapturePhase.IDLE

    sim.engage()
    sim.advance_visual(DT)
    assert sim.state.session is None

    sim.set_input_enabled(True)
    sim.engage()
    assert sim.state.session is not None


def test_clear_releases_captured_spawn() -> None:
    sim = make_simulation()
    sim.populate()
    released: List[CaptureReleased] = []
    sim.subscribe(CaptureReleased, released.append)
    eid = aim_at_spawned(sim)
    sim.engage()

    sim.clear()
    assert released == [CaptureReleased(eid, ReleaseReason.CLEARED)]
    assert sim.status.candidate_id is None
    assert not sim.state.highlighted
    assert not sim.state.spawned
    assert not sim.state.transform


def test_upgrades_and_recharge_notify() -> None:
    sim = make_simulation()
    recharged: List[EnergyRecharged] = []
    sim.subscribe(EnergyRecharged, recharged.append)

    sim.upgrade_capacity(20)
    assert sim.status.capacity_max == 120

    sim.upgrade_energy_max(50.0)
    assert sim.status.energy == pytest.approx(150.0)
    assert recharged == [EnergyRecharged(150.0, 150.0)]

    sim.recharge_energy()
    assert len(recharged) == 2
    with pytest.raises(ValueError):
        sim.upgrade_capacity(-1)


def test_unload_frees_pool() -> None:
    sim = make_simulation()
    sim.populate()
    aim_at_spawned(sim)
    sim.engage()
    for _ in range(1000):
        sim.advance_physics(DT)
        sim.advance_visual(DT)
        if sim.state.session is None:
            break
    assert sim.status.capacity_used == 1

    sim.unload_item("Crumpled Can")
    assert sim.status.capacity_used == 0
    assert sim.status.weight_used == pytest.approx(0.0)
    assert item_count(sim.state.inventory, "Crumpled Can") == 0


def test_failing_subscriber_does_not_block_others(caplog: pytest.LogCaptureFixture) -> None:
    sim = make_simulation()
    seen: List[EnergyRecharged] = []

    def broken(event: EnergyRecharged) -> None:
        raise RuntimeError("boom")

    sim.subscribe(EnergyRecharged, broken)
    sim.subscribe(EnergyRecharged, seen.append)
    with caplog.at_level(logging.ERROR, logger="evovac.events"):
        sim.recharge_energy(10.0)
    assert len(seen) == 1
    assert "EnergyRecharged" in caplog.text


def test_missing_terrain_is_reported_not_fatal(caplog: pytest.LogCaptureFixture) -> None:
    context = create_context(SimulationConfig(spawn=hub_spawn_config()), seed=1)
    with caplog.at_level(logging.WARNING, logger="evovac.simulation"):
        sim = Simulation(context, terrain=None, table=SpawnTable([make_archetype()]))
    assert "no terrain" in caplog.text
    report = sim.populate()
    assert report.spawned == 0
    assert not sim.state.spawned


def test_held_engage_after_rejection_does_not_recapture() -> None:
    sim = make_simulation(capacity_max=0)
    sim.populate()
    started: List[CaptureStarted] = []
    energy_at_rejection: List[float] = []
    sim.subscribe(CaptureStarted, started.append)
    sim.subscribe(ItemRejected, lambda event: energy_at_rejection.append(sim.status.energy))
    aim_at_spawned(sim)
    sim.engage()

    for _ in range(1500):
        sim.advance_physics(DT)
        sim.advance_visual(DT)

    assert sim.engage_held
    assert len(started) == 1
    assert len(energy_at_rejection) == 1
    assert sim.status.energy == pytest.approx(energy_at_rejection[0])
    assert not sim.status.depleted


def test_press_before_candidate_waits_for_detection() -> None:
    sim = make_simulation()
    sim.populate()
    eid = sorted(sim.state.spawned)[0]
    position = sim.state.transform[eid].position
    nozzle = Vec3(position.x, position.y, position.z - 3.0)
    sim.move_nozzle(nozzle, vector_subtract(position, nozzle))

    sim.engage()
    assert sim.state.session is None
    sim.advance_visual(DT)
    assert sim.state.current_target == eid
    assert sim.state.session is None
    sim.advance_visual(DT)
    assert sim.status.target_id == eid
