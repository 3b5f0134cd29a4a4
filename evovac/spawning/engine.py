"""Distribution engine.

Populates the world with collectibles around the hub. Each requested item
gets a bounded number of sampling attempts; an item that finds no valid
point, or whose drawn tier has no archetype, is skipped and counted.
Under-spawning is a reported outcome, never an error.

The engine owns the live set (``State.spawned``) and is the only thing that
removes it wholesale.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from pyrsistent import pset

from evovac.archetypes import Archetype, SpawnTable
from evovac.components import Collectible, RigidBody, Transform
from evovac.config import SpawnConfig, ToolConfig
from evovac.entity import Entity, new_entity_id
from evovac.spawning.curves import RarityDistributionCurve, default_rarity_curves
from evovac.spawning.rarity import RaritySelector
from evovac.spawning.sampler import SpatialSampler
from evovac.spawning.terrain import Terrain
from evovac.spawning.zones import ExclusionZone
from evovac.state import State
from evovac.systems.capture import stop_capture
from evovac.systems.detection import clear_target
from evovac.types import ReleaseReason
from evovac.utils.gc import run_garbage_collector
from evovac.utils.math import Vec3, yaw_to_forward

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnReport:
    """Outcome of one ``populate`` call.

    Attributes:
        requested: Items asked for.
        spawned: Items placed.
        attempts: Sampling attempts spent over all items.
        skipped_no_position: Items that exhausted their attempt budget.
        skipped_no_archetype: Items whose drawn tier had no archetype.
    """

    requested: int
    spawned: int = 0
    attempts: int = 0
    skipped_no_position: int = 0
    skipped_no_archetype: int = 0


class DistributionEngine:
    """Places collectibles with distance-weighted rarity.

    Args:
        terrain (Terrain | None): Ground to place items on.
        table (SpawnTable): Archetypes by tier.
        config (SpawnConfig): Distances, counts and attempt budget.
        zones (Sequence[ExclusionZone]): No-spawn regions.
        rng (random.Random): Random source shared by sampling and selection.
        curves (Iterable[RarityDistributionCurve] | None): Distance curves;
            ``None`` uses :func:`default_rarity_curves`.
        min_mass (float): Mass floor for spawned bodies.
    """

    def __init__(
        self,
        terrain: Optional[Terrain],
        table: SpawnTable,
        config: SpawnConfig,
        zones: Sequence[ExclusionZone] = (),
        rng: Optional[random.Random] = None,
        curves: Optional[Iterable[RarityDistributionCurve]] = None,
        min_mass: float = 0.1,
    ) -> None:
        self.terrain = terrain
        self.table = table
        self.config = config
        self.zones = tuple(zones)
        self.rng = rng if rng is not None else random.Random()
        self.min_mass = min_mass
        if config.hub is None:
            logger.error("Hub not assigned; using spawner origin %s as hub", config.origin)
        self.hub: Vec3 = config.hub if config.hub is not None else config.origin
        if curves is None:
            curves = default_rarity_curves(config.max_spawn_distance)
        self.curves: List[RarityDistributionCurve] = list(curves)
        self.sampler = SpatialSampler(
            terrain=terrain,
            hub=self.hub,
            safe_radius=config.safe_radius,
            max_distance=config.max_spawn_distance,
            zones=self.zones,
            rng=self.rng,
            height_offset=config.height_offset,
        )
        self.selector = RaritySelector(table, self.curves, self.hub, self.rng)

    def validate(self) -> List[str]:
        """Startup diagnostics; an empty list means the engine can spawn."""
        problems: List[str] = []
        if self.config.hub is None:
            problems.append("hub not assigned; spawner origin used as hub")
        if self.terrain is None:
            problems.append("no terrain; nothing will spawn")
        if len(self.table) == 0:
            problems.append("no archetypes registered; nothing will spawn")
        return problems

    def populate(
        self,
        state: State,
        target_count: Optional[int] = None,
        tool: Optional[ToolConfig] = None,
    ) -> Tuple[State, SpawnReport]:
        """Clear the previous spawns and place ``target_count`` new items."""
        requested = self.config.total_count if target_count is None else target_count
        if requested < 0:
            raise ValueError(f"target_count must be non-negative, got {requested}")
        state = replace(self.clear(state, tool), hub=self.hub)

        if self.terrain is None:
            logger.error("No terrain found; nothing spawned")
            return state, SpawnReport(requested=requested)
        if len(self.table) == 0:
            logger.warning("No archetypes registered; nothing spawned")
            return state, SpawnReport(requested=requested)

        spawned = attempts = no_position = no_archetype = 0
        for _ in range(requested):
            point, used = self.sampler.sample_valid(self.config.max_attempts)
            attempts += used
            if point is None:
                no_position += 1
                continue
            archetype = self.pick_archetype(point)
            if archetype is None:
                no_archetype += 1
                continue
            state = self.instantiate(state, archetype, point)
            spawned += 1

        report = SpawnReport(
            requested=requested,
            spawned=spawned,
            attempts=attempts,
            skipped_no_position=no_position,
            skipped_no_archetype=no_archetype,
        )
        logger.info("Spawned %d/%d items in %d total attempts", spawned, requested, attempts)
        if no_position or no_archetype:
            logger.info(
                "Skipped %d items without a valid position and %d without an archetype",
                no_position,
                no_archetype,
            )
        return state, report

    def pick_archetype(self, point: Vec3) -> Optional[Archetype]:
        rarity = self.selector.select_rarity(point)
        candidates = self.table.archetypes_for(rarity)
        if not candidates:
            logger.debug("No archetype registered for %s", rarity)
            return None
        return self.rng.choice(candidates)

    def instantiate(self, state: State, archetype: Archetype, point: Vec3) -> State:
        """Create one collectible at ``point`` with a random yaw."""
        eid = new_entity_id()
        yaw = self.rng.random() * 360.0
        return replace(
            state,
            entity=state.entity.set(eid, Entity(label=archetype.name)),
            transform=state.transform.set(eid, Transform(position=point, facing=yaw_to_forward(yaw))),
            rigid_body=state.rigid_body.set(eid, RigidBody(mass=max(archetype.weight, self.min_mass))),
            collectible=state.collectible.set(eid, Collectible(archetype=archetype)),
            spawned=state.spawned.add(eid),
        )

    def clear(self, state: State, tool: Optional[ToolConfig] = None) -> State:
        """Remove every live spawned item, releasing a capture on one first."""
        if not state.spawned:
            return state
        if state.session is not None and state.session.target_id in state.spawned:
            state = stop_capture(state, tool or ToolConfig(), ReleaseReason.CLEARED)
        if state.current_target in state.spawned:
            state = clear_target(state)
        entity = state.entity
        for eid in state.spawned:
            entity = entity.discard(eid)
        return run_garbage_collector(replace(state, entity=entity, spawned=pset()))
