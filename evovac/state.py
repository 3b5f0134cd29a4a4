"""Core immutable ECS `State` dataclass.

This module defines the frozen :class:`State` object holding the whole
simulation snapshot: the spawned world items, the capture tool and its
resources. Systems are pure functions that take a ``State`` (plus a config
and a tick length) and return a *new* ``State``; nothing is mutated in
place. The mutable :class:`evovac.simulation.Simulation` scheduler is the
only object that swaps snapshots.

Design notes:

* Per-entity component stores are **persistent maps** (``pyrsistent.PMap``)
    keyed by ``EntityID``. Absence of a key means the entity does not
    currently possess that component.
* The capture tool is a singleton, so its components (``nozzle``,
    ``session``, ``resources``, ``inventory``) are plain fields.
* ``session`` is ``None`` while idle. Only one session can exist, which is
    what makes capture single-target.
* ``events`` is an append-only message channel drained by the scheduler
    (see :mod:`evovac.events`).
* ``spawned`` is the live set owned by the distribution engine and
    ``overlapping`` mirrors the trigger feed of the collection volume.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from pyrsistent import PMap, PSet, PVector, pmap, pset, pvector

from evovac.components import (
    BeingCaptured,
    CaptureSession,
    Collectible,
    Highlighted,
    Inventory,
    Nozzle,
    ResourcePool,
    RigidBody,
    Transform,
)
from evovac.config import ResourceConfig
from evovac.entity import Entity
from evovac.types import CapturePhase, EntityID
from evovac.utils.math import Vec3


@dataclass(frozen=True)
class State:
    """Immutable ECS world state.

    Attributes:
        hub (Vec3): Reference point for spawn distances.
        nozzle (Nozzle): Capture tool reference point.
        entity (PMap[EntityID, Entity]): Registry of live entities.
        transform (PMap[EntityID, Transform]): Placement, facing and scale.
        rigid_body (PMap[EntityID, RigidBody]): Physics directives and velocity.
        collectible (PMap[EntityID, Collectible]): Capturable world items.
        highlighted (PMap[EntityID, Highlighted]): Current detection candidate (0 or 1 entries).
        being_captured (PMap[EntityID, BeingCaptured]): Current session target (0 or 1 entries).
        session (CaptureSession | None): Active capture session.
        resources (ResourcePool): Capacity, weight and energy budget.
        inventory (Inventory): Collected items stacked by archetype.
        current_target (EntityID | None): Candidate chosen by detection last visual tick.
        spawned (PSet[EntityID]): Items created by the distribution engine.
        overlapping (PSet[EntityID]): Items inside the collection volume.
        events (PVector[Any]): Pending notifications.
        visual_time (float): Accumulated visual clock.
        physics_time (float): Accumulated physics clock.
        tick (int): Physics tick counter.
        seed (int | None): Seed of the run, for diagnostics.
    """

    # Tool
    hub: Vec3 = field(default_factory=Vec3)
    nozzle: Nozzle = field(default_factory=Nozzle)

    # Entity
    entity: PMap[EntityID, Entity] = pmap()

    # Components
    transform: PMap[EntityID, Transform] = pmap()
    rigid_body: PMap[EntityID, RigidBody] = pmap()
    collectible: PMap[EntityID, Collectible] = pmap()
    highlighted: PMap[EntityID, Highlighted] = pmap()
    being_captured: PMap[EntityID, BeingCaptured] = pmap()

    # Capture
    session: Optional[CaptureSession] = None
    resources: ResourcePool = field(default_factory=ResourcePool)
    inventory: Inventory = field(default_factory=Inventory)
    current_target: Optional[EntityID] = None

    # Bookkeeping
    spawned: PSet[EntityID] = pset()
    overlapping: PSet[EntityID] = pset()
    events: PVector[Any] = pvector()

    # Clocks
    visual_time: float = 0.0
    physics_time: float = 0.0
    tick: int = 0

    # RNG
    seed: Optional[int] = None

    @property
    def phase(self) -> CapturePhase:
        """Phase of the active session, ``IDLE`` without one."""
        if self.session is None:
            return CapturePhase.IDLE
        return self.session.phase

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse view of the populated fields.

        Empty persistent collections and ``None`` values are omitted, which
        keeps debug dumps short.

        Returns:
            PMap[str, Any]: Field name to value for every populated field.
        """
        description: PMap[str, Any] = pmap()
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, (type(pmap()), type(pset()), type(pvector()))) and len(value) == 0:
                continue
            description = description.set(name, value)
        return description


def create_empty_state(
    hub: Optional[Vec3] = None,
    resources: Optional[ResourceConfig] = None,
    nozzle: Optional[Nozzle] = None,
    seed: Optional[int] = None,
) -> State:
    """Build a state with no entities and a full, empty resource pool."""
    limits = resources or ResourceConfig()
    return State(
        hub=hub if hub is not None else Vec3(),
        nozzle=nozzle if nozzle is not None else Nozzle(),
        resources=ResourcePool(
            capacity_max=limits.capacity_max,
            weight_max=limits.weight_max,
            energy=limits.energy_max,
            energy_max=limits.energy_max,
        ),
        seed=seed,
    )
