"""Configuration dataclasses.

All tunables live in frozen dataclasses with defaults matching the shipped
game balance. Configuration is never fatal: :func:`validate_config` returns
human readable diagnostics that the scheduler logs at startup while the
simulation keeps running with whatever values it was given.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from evovac.utils.curves import Curve, ease_in_out
from evovac.utils.math import Vec3


@dataclass(frozen=True)
class CaptureThresholds:
    """Distance-to-nozzle thresholds driving capture phase transitions.

    Attributes:
        rotate_distance: Approach -> Align below this distance.
        shrink_distance: Align -> Shrink below this distance.
        collect_distance: Shrink -> Collecting below this distance.
    """

    rotate_distance: float = 1.5
    shrink_distance: float = 0.5
    collect_distance: float = 0.2


def _default_acceleration_curve() -> Curve:
    return ease_in_out(0.0, 0.0, 1.0, 1.0)


@dataclass(frozen=True)
class ToolConfig:
    """Capture tool (vacuum) tuning.

    Attributes:
        suction_power: Base pull strength, divided by item mass.
        detection_range: Ray / cone reach and the normalization range of the
            acceleration curve.
        capture_category: Only collectibles of this category are detected.
        cone_angle: Full cone angle in degrees for the fallback cone check
            (0 disables the cone).
        thresholds: Default phase thresholds (archetypes may override).
        min_mass: Mass floor used when dividing suction power.
        min_pull_speed: Lower clamp of ``suction_power / mass``.
        max_pull_speed: Upper clamp of ``suction_power / mass``.
        max_force: Hard ceiling on the attraction force magnitude.
        max_pull_velocity: Velocity clamp applied before adding force.
        magnet_snap_speed: Linear speed of the terminal position-controlled pull.
        max_snap_velocity: Velocity clamp during the terminal pull.
        align_turn_rate: Radians per second the item turns to face the nozzle.
        shrink_rate: Scale units lost per second while shrinking.
        scale_floor: Scale below which the item is collected regardless of distance.
        capture_drag: Drag applied while an item is being captured.
        release_drag: Drag restored when an item is released.
        reject_impulse: Outward impulse given to items refused by the pool.
        energy_drain_rate: Energy per second drained while capturing.
        acceleration_curve: Force multiplier over normalized closeness (0 far, 1 at nozzle).
    """

    suction_power: float = 10.0
    detection_range: float = 15.0
    capture_category: str = "trash"
    cone_angle: float = 30.0
    thresholds: CaptureThresholds = field(default_factory=CaptureThresholds)
    min_mass: float = 0.1
    min_pull_speed: float = 1.0
    max_pull_speed: float = 100.0
    max_force: float = 500.0
    max_pull_velocity: float = 50.0
    magnet_snap_speed: float = 20.0
    max_snap_velocity: float = 10.0
    align_turn_rate: float = 5.0
    shrink_rate: float = 3.0
    scale_floor: float = 0.1
    capture_drag: float = 2.0
    release_drag: float = 0.5
    reject_impulse: float = 5.0
    energy_drain_rate: float = 5.0
    acceleration_curve: Curve = field(default_factory=_default_acceleration_curve)


@dataclass(frozen=True)
class ResourceConfig:
    """Initial limits of the resource pool."""

    capacity_max: int = 100
    weight_max: float = 50.0
    energy_max: float = 100.0


@dataclass(frozen=True)
class SpawnConfig:
    """Distribution engine settings.

    Attributes:
        hub: Reference point for all spawn distances. ``None`` falls back to
            ``origin`` with an error diagnostic.
        origin: Position of the spawner itself (hub fallback).
        safe_radius: No spawns closer than this (horizontal) to the hub.
        max_spawn_distance: No spawns farther than this from the hub.
        total_count: Default number of items requested by ``populate``.
        max_attempts: Sampling attempts per item before it is skipped.
        height_offset: Lift above the terrain surface for spawned items.
    """

    hub: Optional[Vec3] = None
    origin: Vec3 = field(default_factory=Vec3)
    safe_radius: float = 20.0
    max_spawn_distance: float = 200.0
    total_count: int = 100
    max_attempts: int = 30
    height_offset: float = 0.1


@dataclass(frozen=True)
class PhysicsConfig:
    gravity: Vec3 = field(default_factory=lambda: Vec3(0.0, -9.81, 0.0))


@dataclass(frozen=True)
class SimulationConfig:
    tool: ToolConfig = field(default_factory=ToolConfig)
    resources: ResourceConfig = field(default_factory=ResourceConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    seed: Optional[int] = None


def validate_thresholds(thresholds: CaptureThresholds) -> List[str]:
    problems: List[str] = []
    if not (
        thresholds.rotate_distance
        > thresholds.shrink_distance
        > thresholds.collect_distance
        >= 0.0
    ):
        problems.append(
            "capture thresholds should strictly descend: "
            f"rotate={thresholds.rotate_distance} "
            f"shrink={thresholds.shrink_distance} "
            f"collect={thresholds.collect_distance}"
        )
    return problems


def validate_config(config: SimulationConfig) -> List[str]:
    """Return configuration diagnostics (empty when everything looks sane)."""
    problems = validate_thresholds(config.tool.thresholds)
    tool = config.tool
    if tool.detection_range <= 0.0:
        problems.append(f"detection_range must be positive, got {tool.detection_range}")
    if tool.min_pull_speed > tool.max_pull_speed:
        problems.append("min_pull_speed exceeds max_pull_speed")
    if tool.max_force <= 0.0:
        problems.append(f"max_force must be positive, got {tool.max_force}")
    spawn = config.spawn
    if spawn.hub is None:
        problems.append("spawn hub is not set; the spawner origin is used instead")
    if spawn.safe_radius > spawn.max_spawn_distance:
        problems.append(
            f"safe_radius ({spawn.safe_radius}) exceeds "
            f"max_spawn_distance ({spawn.max_spawn_distance}); nothing can spawn"
        )
    if spawn.max_attempts <= 0:
        problems.append("max_attempts must be positive; nothing can spawn")
    resources = config.resources
    if resources.capacity_max < 0 or resources.weight_max < 0:
        problems.append("resource limits must be non-negative")
    if resources.energy_max <= 0:
        problems.append("energy_max must be positive; capture is blocked")
    return problems
