"""Capture state machine.

Drives the single engaged collectible through ``APPROACH -> ALIGN -> SHRINK
-> COLLECTING``. Transitions are edge-triggered on the distance to the
nozzle crossing descending thresholds, at most one transition per tick, so
phases never skip or regress.

Work is split over the two clocks:

* :func:`capture_physics_system` (physics tick) measures the distance,
    accumulates the attraction force while approaching / aligning, and
    switches to position control in ``SHRINK``.
* :func:`capture_visual_system` (visual tick) turns the item toward the
    nozzle and shrinks it, entering ``COLLECTING`` once it is close or small
    enough.

``COLLECTING`` is never observed between ticks: :func:`finalize_capture`
runs synchronously and either hands the item to the inventory or rejects it
back into the world.
"""

import logging
from dataclasses import replace
from typing import Optional

from evovac.components import BeingCaptured, CaptureSession, RigidBody
from evovac.config import CaptureThresholds, ToolConfig
from evovac.events import (
    CaptureReleased,
    CaptureStarted,
    ItemCollected,
    ItemRejected,
    PhaseChanged,
    emit,
)
from evovac.state import State
from evovac.systems.detection import clear_target
from evovac.types import AdmitResult, CapturePhase, EntityID, RejectReason, ReleaseReason
from evovac.utils.ecs import remove_entity
from evovac.utils.inventory import add_item
from evovac.utils.math import (
    ZERO,
    Vec3,
    clamp,
    clamp01,
    clamp_magnitude,
    is_finite_vector,
    move_towards,
    rotate_towards,
    vector_add,
    vector_distance,
    vector_length,
    vector_normalize,
    vector_scale,
    vector_subtract,
)
from evovac.utils.resources import try_admit

logger = logging.getLogger(__name__)

_MIN_DIRECTION = 0.01


def thresholds_for(state: State, entity_id: EntityID, tool: ToolConfig) -> CaptureThresholds:
    """Per-archetype thresholds, falling back to the tool defaults."""
    collectible = state.collectible.get(entity_id)
    if collectible is not None and collectible.archetype.thresholds is not None:
        return collectible.archetype.thresholds
    return tool.thresholds


def _target_alive(state: State, entity_id: EntityID) -> bool:
    return (
        entity_id in state.entity
        and entity_id in state.transform
        and entity_id in state.rigid_body
        and entity_id in state.collectible
    )


def _released_body(body: RigidBody, tool: ToolConfig) -> RigidBody:
    return replace(
        body,
        use_gravity=True,
        drag=tool.release_drag,
        force=ZERO,
        kinematic_target=None,
    )


def _restore_target(state: State, entity_id: EntityID, tool: ToolConfig) -> State:
    """Give the item back its default physics and full scale."""
    rigid_body = state.rigid_body
    transform = state.transform
    if entity_id in rigid_body:
        rigid_body = rigid_body.set(entity_id, _released_body(rigid_body[entity_id], tool))
    if entity_id in transform:
        transform = transform.set(entity_id, replace(transform[entity_id], scale=1.0))
    return replace(
        state,
        rigid_body=rigid_body,
        transform=transform,
        being_captured=state.being_captured.discard(entity_id),
        session=None,
    )


def _set_phase(state: State, session: CaptureSession, phase: CapturePhase) -> State:
    logger.debug("Capture of %s: %s -> %s", session.target_id, session.phase, phase)
    state = replace(state, session=replace(session, phase=phase))
    return emit(state, PhaseChanged(session.target_id, session.phase, phase))


def start_capture(state: State, target_id: Optional[EntityID], tool: ToolConfig) -> State:
    """Begin a session on ``target_id``.

    No-op when a session is already active (single-target exclusivity), when
    there is no live target, or when the energy pool is depleted.
    """
    if state.session is not None or target_id is None:
        return state
    if not _target_alive(state, target_id):
        return state
    if state.resources.depleted or state.resources.energy <= 0.0:
        return state

    body = state.rigid_body[target_id]
    body = replace(body, use_gravity=False, drag=tool.capture_drag)
    position = state.transform[target_id].position
    session = CaptureSession(
        target_id=target_id,
        phase=CapturePhase.APPROACH,
        distance=vector_distance(position, state.nozzle.position),
        velocity=body.velocity,
    )
    archetype = state.collectible[target_id].archetype
    logger.debug("Capture started on %s (%s)", target_id, archetype.name)
    state = replace(
        state,
        session=session,
        rigid_body=state.rigid_body.set(target_id, body),
        being_captured=state.being_captured.set(target_id, BeingCaptured()),
    )
    return emit(state, CaptureStarted(target_id, archetype))


def stop_capture(state: State, tool: ToolConfig, reason: ReleaseReason = ReleaseReason.STOPPED) -> State:
    """Release the active session and restore the target. Idempotent."""
    if state.session is None:
        return state
    target_id = state.session.target_id
    logger.debug("Capture of %s released (%s)", target_id, reason)
    state = _restore_target(state, target_id, tool)
    return emit(state, CaptureReleased(target_id, reason))


def capture_physics_system(state: State, tool: ToolConfig, dt: float) -> State:
    """Physics-rate capture step: attraction force or terminal position control."""
    session = state.session
    if session is None:
        return state
    target_id = session.target_id
    if not _target_alive(state, target_id):
        return stop_capture(state, tool, ReleaseReason.TARGET_LOST)

    position = state.transform[target_id].position
    body = state.rigid_body[target_id]
    nozzle = state.nozzle.position
    distance = vector_distance(position, nozzle)
    thresholds = thresholds_for(state, target_id, tool)

    if session.phase in (CapturePhase.APPROACH, CapturePhase.ALIGN):
        direction = vector_subtract(nozzle, position)
        if vector_length(direction) >= _MIN_DIRECTION and body.mass > 0.0:
            force = _attraction_force(direction, distance, body.mass, tool)
            if not is_finite_vector(force):
                logger.warning("Non-finite suction force on %s skipped", target_id)
                return state
            body = replace(
                body,
                velocity=clamp_magnitude(body.velocity, tool.max_pull_velocity),
                force=vector_add(body.force, force),
            )
    elif session.phase == CapturePhase.SHRINK:
        target = move_towards(position, nozzle, tool.magnet_snap_speed * dt)
        velocity = vector_scale(vector_subtract(target, position), 1.0 / dt) if dt > 0.0 else ZERO
        body = replace(
            body,
            kinematic_target=target,
            velocity=clamp_magnitude(velocity, tool.max_snap_velocity),
            force=ZERO,
        )

    session = replace(session, distance=distance, velocity=body.velocity)
    state = replace(state, rigid_body=state.rigid_body.set(target_id, body), session=session)

    if session.phase == CapturePhase.APPROACH and distance < thresholds.rotate_distance:
        state = _set_phase(state, session, CapturePhase.ALIGN)
    elif session.phase == CapturePhase.ALIGN and distance < thresholds.shrink_distance:
        state = _set_phase(state, session, CapturePhase.SHRINK)
    return state


def _attraction_force(direction: Vec3, distance: float, mass: float, tool: ToolConfig) -> Vec3:
    mass = max(mass, tool.min_mass)
    pull_speed = clamp(tool.suction_power / mass, tool.min_pull_speed, tool.max_pull_speed)
    closeness = 1.0 - clamp01(distance / tool.detection_range) if tool.detection_range > 0.0 else 1.0
    multiplier = tool.acceleration_curve.evaluate(closeness)
    force = vector_scale(vector_normalize(direction), pull_speed * multiplier)
    return clamp_magnitude(force, tool.max_force)


def capture_visual_system(state: State, tool: ToolConfig, dt: float) -> State:
    """Visual-rate capture step: rotation, shrinking and the collect check."""
    session = state.session
    if session is None:
        return state
    target_id = session.target_id
    if not _target_alive(state, target_id):
        return stop_capture(state, tool, ReleaseReason.TARGET_LOST)
    if session.phase not in (CapturePhase.ALIGN, CapturePhase.SHRINK):
        return state

    transform = state.transform[target_id]
    nozzle = state.nozzle.position
    facing = rotate_towards(
        transform.facing,
        vector_subtract(nozzle, transform.position),
        tool.align_turn_rate * dt,
    )
    scale = transform.scale
    if session.phase == CapturePhase.SHRINK:
        scale = max(0.0, scale - tool.shrink_rate * dt)
    state = replace(
        state,
        transform=state.transform.set(target_id, replace(transform, facing=facing, scale=scale)),
    )

    if session.phase == CapturePhase.SHRINK:
        distance = vector_distance(transform.position, nozzle)
        thresholds = thresholds_for(state, target_id, tool)
        if distance < thresholds.collect_distance or scale < tool.scale_floor:
            return begin_collecting(state, tool)
    return state


def begin_collecting(state: State, tool: ToolConfig) -> State:
    """Enter ``COLLECTING`` from ``SHRINK`` and finalize immediately."""
    session = state.session
    if session is None or session.phase != CapturePhase.SHRINK:
        return state
    state = _set_phase(state, session, CapturePhase.COLLECTING)
    return finalize_capture(state, tool)


def finalize_capture(state: State, tool: ToolConfig) -> State:
    """Admit the target into the pool or reject it back into the world."""
    session = state.session
    if session is None:
        return state
    target_id = session.target_id
    if not _target_alive(state, target_id):
        return stop_capture(state, tool, ReleaseReason.TARGET_LOST)

    archetype = state.collectible[target_id].archetype
    pool, result = try_admit(state.resources, archetype.footprint, archetype.weight)

    if result == AdmitResult.ACCEPTED:
        logger.info(
            "Collected %s (%s); capacity %d/%d",
            archetype.name,
            archetype.rarity,
            pool.capacity_used,
            pool.capacity_max,
        )
        state = replace(
            state,
            resources=pool,
            inventory=add_item(state.inventory, archetype),
            session=None,
        )
        state = remove_entity(state, target_id)
        if state.current_target == target_id:
            state = clear_target(state)
        return emit(state, ItemCollected(archetype))

    reason = RejectReason.CAPACITY if result == AdmitResult.REJECTED_CAPACITY else RejectReason.WEIGHT
    logger.warning("Rejected %s: %s limit reached", archetype.name, reason)
    state = _restore_target(state, target_id, tool)
    state = _push_away(state, target_id, tool)
    return emit(state, ItemRejected(target_id, archetype, reason))


def _push_away(state: State, target_id: EntityID, tool: ToolConfig) -> State:
    """Outward impulse from the nozzle, as a direct velocity change."""
    body = state.rigid_body[target_id]
    away = vector_normalize(vector_subtract(state.transform[target_id].position, state.nozzle.position))
    if away == ZERO:
        away = vector_scale(vector_normalize(state.nozzle.forward), -1.0)
    delta_v = vector_scale(away, tool.reject_impulse / max(body.mass, tool.min_mass))
    if not is_finite_vector(delta_v):
        return state
    body = replace(body, velocity=vector_add(body.velocity, delta_v))
    return replace(state, rigid_body=state.rigid_body.set(target_id, body))
