"""Vector and scalar helpers for continuous 3D simulation.

``Vec3`` is an immutable value object; every helper returns a new vector.
World convention: ``y`` is up, the ground plane is XZ and a yaw of 0 degrees
faces ``+z`` (yaw grows toward ``+x``).
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D vector.

    Attributes:
        x: Horizontal axis.
        y: Vertical axis (up).
        z: Horizontal axis (forward at zero yaw).
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


ZERO = Vec3(0.0, 0.0, 0.0)
UP = Vec3(0.0, 1.0, 0.0)
FORWARD = Vec3(0.0, 0.0, 1.0)

_EPSILON = 1e-9


def vector_add(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a.x + b.x, a.y + b.y, a.z + b.z)


def vector_subtract(a: Vec3, b: Vec3) -> Vec3:
    """Return ``a - b``."""
    return Vec3(a.x - b.x, a.y - b.y, a.z - b.z)


def vector_scale(v: Vec3, factor: float) -> Vec3:
    return Vec3(v.x * factor, v.y * factor, v.z * factor)


def vector_dot(a: Vec3, b: Vec3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def vector_cross(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def vector_length(v: Vec3) -> float:
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def vector_distance(a: Vec3, b: Vec3) -> float:
    return vector_length(vector_subtract(a, b))


def horizontal_distance(a: Vec3, b: Vec3) -> float:
    """Distance between ``a`` and ``b`` projected on the XZ plane."""
    return math.hypot(a.x - b.x, a.z - b.z)


def vector_normalize(v: Vec3) -> Vec3:
    """Return the unit vector of ``v`` (the zero vector stays zero)."""
    length = vector_length(v)
    if length < _EPSILON:
        return ZERO
    return vector_scale(v, 1.0 / length)


def clamp_magnitude(v: Vec3, max_length: float) -> Vec3:
    """Scale ``v`` down so its length does not exceed ``max_length``."""
    length = vector_length(v)
    if length > max_length and length > 0.0:
        return vector_scale(v, max_length / length)
    return v


def move_towards(current: Vec3, target: Vec3, max_delta: float) -> Vec3:
    """Step from ``current`` toward ``target`` by at most ``max_delta``."""
    delta = vector_subtract(target, current)
    distance = vector_length(delta)
    if distance <= max_delta or distance < _EPSILON:
        return target
    return vector_add(current, vector_scale(delta, max_delta / distance))


def is_finite_vector(v: Vec3) -> bool:
    return math.isfinite(v.x) and math.isfinite(v.y) and math.isfinite(v.z)


def angle_between(a: Vec3, b: Vec3) -> float:
    """Angle in radians between two non-zero vectors (0 if either is zero)."""
    na, nb = vector_normalize(a), vector_normalize(b)
    if na == ZERO or nb == ZERO:
        return 0.0
    return math.acos(clamp(vector_dot(na, nb), -1.0, 1.0))


def rotate_towards(current: Vec3, target: Vec3, max_radians: float) -> Vec3:
    """Rotate unit direction ``current`` toward ``target`` by at most ``max_radians``.

    Both inputs are normalized first. If ``target`` is zero, ``current`` is
    returned unchanged. Exactly opposite directions turn about an axis
    perpendicular to ``current`` (preferring the vertical axis).
    """
    a = vector_normalize(current)
    b = vector_normalize(target)
    if b == ZERO:
        return a
    if a == ZERO:
        return b
    angle = math.acos(clamp(vector_dot(a, b), -1.0, 1.0))
    if angle <= max_radians or angle < _EPSILON:
        return b
    sin_angle = math.sin(angle)
    if sin_angle < 1e-6:
        ortho = vector_normalize(vector_cross(UP, a))
        if ortho == ZERO:
            ortho = vector_normalize(vector_cross(Vec3(1.0, 0.0, 0.0), a))
        return vector_normalize(
            vector_add(
                vector_scale(a, math.cos(max_radians)),
                vector_scale(ortho, math.sin(max_radians)),
            )
        )
    t = max_radians / angle
    return vector_normalize(
        vector_add(
            vector_scale(a, math.sin((1.0 - t) * angle) / sin_angle),
            vector_scale(b, math.sin(t * angle) / sin_angle),
        )
    )


def yaw_to_forward(yaw_degrees: float) -> Vec3:
    """Horizontal unit vector for a yaw angle in degrees."""
    radians = math.radians(yaw_degrees)
    return Vec3(math.sin(radians), 0.0, math.cos(radians))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def smoothstep(t: float) -> float:
    """Cubic ease ``3t^2 - 2t^3`` on ``t`` clamped to [0, 1]."""
    t = clamp01(t)
    return t * t * (3.0 - 2.0 * t)
