"""Simulation scheduler.

:class:`Simulation` is the one mutable object in the package. It holds the
current :class:`evovac.state.State`, owns the distribution engine and the
physics port, and exposes the entry points an outer game loop drives:
``advance_visual`` once per frame, ``advance_physics`` once per fixed step,
plus input, trigger and administrative calls.

Every entry point runs pure systems, swaps in the resulting state, then
drains the event channel and dispatches the batch to subscribers, so each
notification is delivered exactly once and after the state it describes is
visible through :attr:`Simulation.state`.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, Sequence, Type, TypeVar

from evovac.archetypes import SpawnTable, default_spawn_table
from evovac.components import Nozzle
from evovac.context import GameContext
from evovac.events import EnergyRecharged, EventDispatcher, drain_events, emit
from evovac.physics import PhysicsPort, PointMassPhysics
from evovac.spawning.analytics import SpawnStatistics, analyze_spawned
from evovac.spawning.curves import RarityDistributionCurve
from evovac.spawning.engine import DistributionEngine, SpawnReport
from evovac.spawning.terrain import Terrain
from evovac.spawning.zones import ExclusionZone
from evovac.state import State, create_empty_state
from evovac.step import physics_step, visual_step
from evovac.systems.capture import start_capture, stop_capture
from evovac.systems.overlap import overlap_enter, overlap_exit, overlap_stay
from evovac.systems.storage import unload_item
from evovac.types import CapturePhase, EntityID, ReleaseReason
from evovac.utils import resources
from evovac.utils.math import Vec3, vector_normalize

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class ToolStatus:
    """Read-only snapshot of the capture tool for HUDs."""

    energy: float
    energy_max: float
    capacity_used: int
    capacity_max: int
    weight_used: float
    weight_max: float
    depleted: bool
    phase: CapturePhase
    target_id: Optional[EntityID]
    candidate_id: Optional[EntityID]


class Simulation:
    """Scheduler wiring the spawner, the capture tool and the physics port.

    Args:
        context (GameContext): Configuration and random source.
        terrain (Terrain | None): Ground for spawning and the default physics.
        table (SpawnTable | None): Archetypes; ``None`` uses the stock catalogue.
        zones (Sequence[ExclusionZone]): No-spawn regions.
        physics (PhysicsPort | None): Backend; ``None`` builds a
            :class:`PointMassPhysics` over ``terrain``.
        curves (Iterable[RarityDistributionCurve] | None): Rarity curves;
            ``None`` uses the defaults.
    """

    def __init__(
        self,
        context: GameContext,
        terrain: Optional[Terrain],
        table: Optional[SpawnTable] = None,
        zones: Sequence[ExclusionZone] = (),
        physics: Optional[PhysicsPort] = None,
        curves: Optional[Iterable[RarityDistributionCurve]] = None,
    ) -> None:
        config = context.config
        self.context = context
        self.tool = config.tool
        self.physics: PhysicsPort = (
            physics if physics is not None else PointMassPhysics(gravity=config.physics.gravity, terrain=terrain)
        )
        self.engine = DistributionEngine(
            terrain=terrain,
            table=table if table is not None else default_spawn_table(),
            config=config.spawn,
            zones=zones,
            rng=context.rng,
            curves=curves,
            min_mass=self.tool.min_mass,
        )
        for problem in self.engine.validate():
            logger.warning("Spawner: %s", problem)
        self._state = create_empty_state(hub=self.engine.hub, resources=config.resources, seed=config.seed)
        self._dispatcher = EventDispatcher()
        self._engage_held = False
        self._engage_pending = False
        self._input_enabled = True

    @property
    def state(self) -> State:
        return self._state

    def subscribe(self, event_type: Type[E], callback: Callable[[E], None]) -> Callable[[], None]:
        return self._dispatcher.subscribe(event_type, callback)

    def unsubscribe(self, event_type: Type[E], callback: Callable[[E], None]) -> None:
        self._dispatcher.unsubscribe(event_type, callback)

    def _commit(self, state: State) -> None:
        state, events = drain_events(state)
        self._state = state
        self._dispatcher.dispatch(events)

    # World

    def populate(self, count: Optional[int] = None) -> SpawnReport:
        state, report = self.engine.populate(self._state, count, self.tool)
        self._commit(state)
        return report

    def clear(self) -> None:
        self._commit(self.engine.clear(self._state, self.tool))

    def spawn_statistics(self, bands: int = 5) -> SpawnStatistics:
        return analyze_spawned(self._state, self.engine.hub, self.engine.config.max_spawn_distance, bands)

    # Clocks

    def advance_visual(self, dt: float) -> None:
        pending = self._engage_pending and self._input_enabled
        if pending and self._state.current_target is not None:
            self._engage_pending = False
        self._commit(visual_step(self._state, self.physics, self.tool, dt, pending))

    def advance_physics(self, dt: float) -> None:
        self._commit(physics_step(self._state, self.physics, self.tool, dt))

    # Input

    def move_nozzle(self, position: Vec3, forward: Optional[Vec3] = None) -> None:
        direction = self._state.nozzle.forward if forward is None else vector_normalize(forward)
        self._commit(replace(self._state, nozzle=Nozzle(position=position, forward=direction)))

    def engage(self) -> None:
        """Press the engage input.

        Captures the current candidate. Without one, the press stays pending
        and tries the first candidate detected while engage is held. A press
        makes at most one capture attempt against a candidate.
        """
        if not self._input_enabled:
            return
        self._engage_held = True
        if self._state.session is not None:
            return
        self._commit(start_capture(self._state, self._state.current_target, self.tool))
        self._engage_pending = self._state.session is None and self._state.current_target is None

    def release(self) -> None:
        """Release the engage input and any active capture."""
        self._engage_held = False
        self._engage_pending = False
        self._commit(stop_capture(self._state, self.tool, ReleaseReason.STOPPED))

    @property
    def engage_held(self) -> bool:
        return self._engage_held

    @property
    def input_enabled(self) -> bool:
        return self._input_enabled

    def set_input_enabled(self, enabled: bool) -> None:
        if enabled == self._input_enabled:
            return
        self._input_enabled = enabled
        if not enabled:
            self._engage_held = False
            self._engage_pending = False
            self._commit(stop_capture(self._state, self.tool, ReleaseReason.INPUT_DISABLED))

    # Trigger feed

    def overlap_enter(self, entity_id: EntityID, category: str) -> None:
        self._commit(overlap_enter(self._state, entity_id, category, self.tool))

    def overlap_stay(self, entity_id: EntityID, category: str) -> None:
        self._commit(overlap_stay(self._state, entity_id, category, self.tool))

    def overlap_exit(self, entity_id: EntityID) -> None:
        self._commit(overlap_exit(self._state, entity_id, self.tool))

    # Administration

    def upgrade_capacity(self, amount: int) -> None:
        pool = resources.upgrade_capacity(self._state.resources, amount)
        logger.info("Capacity upgraded to %d", pool.capacity_max)
        self._commit(replace(self._state, resources=pool))

    def upgrade_energy_max(self, amount: float) -> None:
        pool = resources.upgrade_energy_max(self._state.resources, amount)
        logger.info("Energy capacity upgraded to %.1f", pool.energy_max)
        state = replace(self._state, resources=pool)
        self._commit(emit(state, EnergyRecharged(pool.energy, pool.energy_max)))

    def recharge_energy(self, amount: Optional[float] = None) -> None:
        pool = resources.recharge(self._state.resources, amount)
        logger.info("Energy recharged to %.1f/%.1f", pool.energy, pool.energy_max)
        state = replace(self._state, resources=pool)
        self._commit(emit(state, EnergyRecharged(pool.energy, pool.energy_max)))

    def unload_item(self, name: str, quantity: int = 1) -> None:
        self._commit(unload_item(self._state, name, quantity))

    @property
    def status(self) -> ToolStatus:
        pool = self._state.resources
        session = self._state.session
        return ToolStatus(
            energy=pool.energy,
            energy_max=pool.energy_max,
            capacity_used=pool.capacity_used,
            capacity_max=pool.capacity_max,
            weight_used=pool.weight_used,
            weight_max=pool.weight_max,
            depleted=pool.depleted,
            phase=self._state.phase,
            target_id=session.target_id if session is not None else None,
            candidate_id=self._state.current_target,
        )
