import logging
from typing import Any, List

import pytest

from evovac.config import CaptureThresholds, SimulationConfig, SpawnConfig, ToolConfig
from evovac.context import create_context
from evovac.events import (
    EnergyDepleted,
    EnergyRecharged,
    EventDispatcher,
    drain_events,
    emit,
)
from evovac.state import create_empty_state
from evovac.utils.math import Vec3


def test_emit_and_drain_preserve_order() -> None:
    state = emit(create_empty_state(), EnergyDepleted())
    state = emit(state, EnergyRecharged(10.0, 100.0))
    state, events = drain_events(state)
    assert events == [EnergyDepleted(), EnergyRecharged(10.0, 100.0)]
    assert not state.events
    assert drain_events(state) == (state, [])


def test_dispatch_matches_exact_type() -> None:
    dispatcher = EventDispatcher()
    depleted: List[Any] = []
    recharged: List[Any] = []
    dispatcher.subscribe(EnergyDepleted, depleted.append)
    dispatcher.subscribe(EnergyRecharged, recharged.append)
    dispatcher.dispatch([EnergyRecharged(1.0, 2.0), EnergyDepleted(), EnergyRecharged(2.0, 2.0)])
    assert depleted == [EnergyDepleted()]
    assert recharged == [EnergyRecharged(1.0, 2.0), EnergyRecharged(2.0, 2.0)]


def test_unsubscribe_handle() -> None:
    dispatcher = EventDispatcher()
    seen: List[Any] = []
    remove = dispatcher.subscribe(EnergyDepleted, seen.append)
    assert dispatcher.subscriber_count(EnergyDepleted) == 1
    remove()
    remove()
    assert dispatcher.subscriber_count(EnergyDepleted) == 0
    dispatcher.dispatch([EnergyDepleted()])
    assert seen == []


def test_subscriber_may_unsubscribe_during_dispatch() -> None:
    dispatcher = EventDispatcher()
    seen: List[str] = []
    handles = {}

    def once(event: EnergyDepleted) -> None:
        seen.append("once")
        handles["once"]()

    handles["once"] = dispatcher.subscribe(EnergyDepleted, once)
    dispatcher.subscribe(EnergyDepleted, lambda event: seen.append("always"))
    dispatcher.dispatch([EnergyDepleted(), EnergyDepleted()])
    assert seen == ["once", "always", "always"]


def test_context_seed_makes_rng_reproducible() -> None:
    first = create_context(seed=42)
    second = create_context(SimulationConfig(seed=5), seed=42)
    assert first.seed == 42
    assert second.seed == 42
    assert first.rng.random() == second.rng.random()


def test_context_logs_config_problems(caplog: pytest.LogCaptureFixture) -> None:
    config = SimulationConfig(
        tool=ToolConfig(thresholds=CaptureThresholds(0.5, 1.5, 0.2)),
        spawn=SpawnConfig(hub=Vec3(), safe_radius=300.0, max_spawn_distance=200.0),
    )
    with caplog.at_level(logging.WARNING, logger="evovac.context"):
        context = create_context(config)
    assert context.config is config
    assert "strictly descend" in caplog.text
    assert "nothing can spawn" in caplog.text
