"""Physics port and the bundled point-mass backend.

The capture systems never move bodies themselves. They leave directives on
:class:`evovac.components.RigidBody` (accumulated ``force``, a
``kinematic_target``, ``use_gravity``, ``drag`` and direct ``velocity``
changes for impulses) and a :class:`PhysicsPort` turns those into motion
once per physics tick. Detection asks the port for raycasts.

:class:`PointMassPhysics` is the bundled backend: spheres without
collision response, integrated with semi-implicit Euler.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Optional, Protocol, Tuple

from evovac.components import RigidBody, Transform
from evovac.spawning.terrain import Terrain
from evovac.state import State
from evovac.types import EntityID
from evovac.utils.ecs import collectibles_in_category
from evovac.utils.math import (
    ZERO,
    Vec3,
    is_finite_vector,
    vector_add,
    vector_dot,
    vector_normalize,
    vector_scale,
    vector_subtract,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RaycastHit:
    """Nearest ray intersection.

    Attributes:
        entity_id: Entity owning the struck collider.
        point: World position of the hit.
        distance: Distance along the ray from its origin.
    """

    entity_id: EntityID
    point: Vec3
    distance: float


class PhysicsPort(Protocol):
    def integrate(self, state: State, dt: float) -> State:
        """Consume body directives and advance positions by ``dt``."""
        ...

    def raycast(
        self,
        state: State,
        origin: Vec3,
        direction: Vec3,
        max_distance: float,
        category: str,
    ) -> Optional[RaycastHit]:
        """Nearest collectible of ``category`` struck within ``max_distance``."""
        ...


@dataclass
class PointMassPhysics:
    """Semi-implicit Euler point masses with sphere colliders.

    Attributes:
        gravity: Acceleration applied to bodies with ``use_gravity``.
        terrain: Optional ground; bodies are kept at or above its height.
    """

    gravity: Vec3 = field(default_factory=lambda: Vec3(0.0, -9.81, 0.0))
    terrain: Optional[Terrain] = None

    def integrate(self, state: State, dt: float) -> State:
        if dt <= 0.0:
            raise ValueError(f"dt must be positive, got {dt}")
        transforms = state.transform
        bodies = state.rigid_body
        for eid, body in state.rigid_body.items():
            transform = transforms.get(eid)
            if transform is None:
                continue
            new_transform, new_body = self._step_body(eid, transform, body, dt)
            transforms = transforms.set(eid, new_transform)
            bodies = bodies.set(eid, new_body)
        return replace(state, transform=transforms, rigid_body=bodies)

    def _step_body(
        self, eid: EntityID, transform: Transform, body: RigidBody, dt: float
    ) -> Tuple[Transform, RigidBody]:
        cleared = replace(body, force=ZERO, kinematic_target=None)
        if body.kinematic_target is not None:
            return replace(transform, position=body.kinematic_target), cleared

        acceleration = vector_scale(body.force, 1.0 / max(body.mass, 1e-6))
        if body.use_gravity:
            acceleration = vector_add(acceleration, self.gravity)
        velocity = vector_add(body.velocity, vector_scale(acceleration, dt))
        velocity = vector_scale(velocity, 1.0 / (1.0 + max(body.drag, 0.0) * dt))
        position = vector_add(transform.position, vector_scale(velocity, dt))

        if not (is_finite_vector(velocity) and is_finite_vector(position)):
            logger.warning("Non-finite motion for entity %s; body halted", eid)
            return transform, replace(cleared, velocity=ZERO)

        if self.terrain is not None:
            ground = self.terrain.height_at(position.x, position.z)
            if position.y < ground:
                position = Vec3(position.x, ground, position.z)
                velocity = Vec3(velocity.x, max(0.0, velocity.y), velocity.z)

        return replace(transform, position=position), replace(cleared, velocity=velocity)

    def raycast(
        self,
        state: State,
        origin: Vec3,
        direction: Vec3,
        max_distance: float,
        category: str,
    ) -> Optional[RaycastHit]:
        ray = vector_normalize(direction)
        if ray == ZERO or max_distance <= 0.0:
            return None
        best: Optional[RaycastHit] = None
        for eid in collectibles_in_category(state, category):
            transform = state.transform[eid]
            radius = state.collectible[eid].archetype.radius * max(transform.scale, 0.0)
            distance = _ray_sphere(origin, ray, transform.position, radius)
            if distance is None or distance > max_distance:
                continue
            if best is None or distance < best.distance:
                point = vector_add(origin, vector_scale(ray, distance))
                best = RaycastHit(entity_id=eid, point=point, distance=distance)
        return best


def _ray_sphere(origin: Vec3, ray: Vec3, center: Vec3, radius: float) -> Optional[float]:
    """Distance along unit ``ray`` to the sphere surface (0 when starting inside)."""
    offset = vector_subtract(origin, center)
    b = vector_dot(offset, ray)
    c = vector_dot(offset, offset) - radius * radius
    if c <= 0.0:
        return 0.0
    if b > 0.0:
        return None
    discriminant = b * b - c
    if discriminant < 0.0:
        return None
    return -b - math.sqrt(discriminant)
