"""Exclusion zones.

Authored regions where nothing may spawn. Box and polygon tests happen in
zone-local space: the point is translated by the zone center and rotated by
the negative zone yaw about the vertical axis. Only the XZ plane matters;
height is ignored for every shape.
"""

import math
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from evovac.types import ZoneShape
from evovac.utils.math import Vec3, horizontal_distance

Point2 = Tuple[float, float]


@dataclass(frozen=True)
class ExclusionZone:
    """Named no-spawn region.

    Attributes:
        name: Label used in diagnostics.
        shape: Geometry kind.
        center: Zone origin in world space.
        yaw_degrees: Rotation about the vertical axis (ignored by circles).
        radius: Circle radius.
        size: Box extent ``(size_x, size_z)`` centered on the origin.
        polygon: Local XZ vertices; fewer than 3 contain nothing.
    """

    name: str
    shape: ZoneShape
    center: Vec3 = field(default_factory=Vec3)
    yaw_degrees: float = 0.0
    radius: float = 10.0
    size: Point2 = (10.0, 10.0)
    polygon: Tuple[Point2, ...] = ()

    def contains(self, point: Vec3) -> bool:
        if self.shape == ZoneShape.CIRCLE:
            return horizontal_distance(point, self.center) <= self.radius
        local_x, local_z = self.to_local(point)
        if self.shape == ZoneShape.BOX:
            return abs(local_x) <= self.size[0] / 2.0 and abs(local_z) <= self.size[1] / 2.0
        if self.shape == ZoneShape.POLYGON:
            return point_in_polygon((local_x, local_z), self.polygon)
        return False

    def to_local(self, point: Vec3) -> Point2:
        """World point to zone-local ``(x, z)``."""
        dx = point.x - self.center.x
        dz = point.z - self.center.z
        yaw = math.radians(self.yaw_degrees)
        cos_yaw, sin_yaw = math.cos(yaw), math.sin(yaw)
        # Project onto the zone's right (cos, -sin) and forward (sin, cos) axes.
        return dx * cos_yaw - dz * sin_yaw, dx * sin_yaw + dz * cos_yaw


def point_in_polygon(point: Point2, vertices: Sequence[Point2]) -> bool:
    """Even-odd ray casting test."""
    if len(vertices) < 3:
        return False
    px, pz = point
    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, zi = vertices[i]
        xj, zj = vertices[j]
        if (zi > pz) != (zj > pz) and px < (xj - xi) * (pz - zi) / (zj - zi) + xi:
            inside = not inside
        j = i
    return inside


def circle_zone(name: str, center: Vec3, radius: float) -> ExclusionZone:
    return ExclusionZone(name=name, shape=ZoneShape.CIRCLE, center=center, radius=radius)


def box_zone(name: str, center: Vec3, size_x: float, size_z: float, yaw_degrees: float = 0.0) -> ExclusionZone:
    return ExclusionZone(
        name=name,
        shape=ZoneShape.BOX,
        center=center,
        yaw_degrees=yaw_degrees,
        size=(size_x, size_z),
    )


def polygon_zone(
    name: str, center: Vec3, vertices: Sequence[Point2], yaw_degrees: float = 0.0
) -> ExclusionZone:
    return ExclusionZone(
        name=name,
        shape=ZoneShape.POLYGON,
        center=center,
        yaw_degrees=yaw_degrees,
        polygon=tuple((float(x), float(z)) for x, z in vertices),
    )


def rectangular_polygon(width: float, height: float) -> Tuple[Point2, ...]:
    """Axis-aligned rectangle centered on the zone origin."""
    half_w, half_h = width / 2.0, height / 2.0
    return ((-half_w, -half_h), (half_w, -half_h), (half_w, half_h), (-half_w, half_h))


def triangular_polygon(size: float) -> Tuple[Point2, ...]:
    """Equilateral triangle with side ``size`` centered on its centroid."""
    height = size * math.sqrt(3.0) / 2.0
    return ((0.0, height * 2.0 / 3.0), (-size / 2.0, -height / 3.0), (size / 2.0, -height / 3.0))
