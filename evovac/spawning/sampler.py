"""Spatial sampler.

Rejection sampling of spawn points: :meth:`SpatialSampler.sample` returns a
uniformly random point on the terrain without judging it, and
:meth:`SpatialSampler.is_valid` decides whether the point may be used.
"""

import random
from typing import Optional, Sequence, Tuple

from evovac.spawning.terrain import Terrain
from evovac.spawning.zones import ExclusionZone
from evovac.utils.math import Vec3, horizontal_distance


class SpatialSampler:
    """Uniform terrain sampler with hub-distance and zone filtering.

    Args:
        terrain (Terrain | None): Ground to sample; ``None`` yields no points.
        hub (Vec3): Reference point for the distance limits.
        safe_radius (float): Minimum horizontal distance from the hub.
        max_distance (float): Maximum horizontal distance from the hub.
        zones (Sequence[ExclusionZone]): Regions that reject points.
        rng (random.Random): Random source.
        height_offset (float): Lift above the surface.
    """

    def __init__(
        self,
        terrain: Optional[Terrain],
        hub: Vec3,
        safe_radius: float,
        max_distance: float,
        zones: Sequence[ExclusionZone],
        rng: random.Random,
        height_offset: float = 0.0,
    ) -> None:
        self.terrain = terrain
        self.hub = hub
        self.safe_radius = safe_radius
        self.max_distance = max_distance
        self.zones = tuple(zones)
        self.rng = rng
        self.height_offset = height_offset

    def sample(self) -> Optional[Vec3]:
        if self.terrain is None:
            return None
        bounds = self.terrain.bounds
        x = self.rng.uniform(bounds.min_x, bounds.max_x)
        z = self.rng.uniform(bounds.min_z, bounds.max_z)
        return Vec3(x, self.terrain.height_at(x, z) + self.height_offset, z)

    def is_valid(self, point: Vec3) -> bool:
        distance = horizontal_distance(point, self.hub)
        if distance < self.safe_radius or distance > self.max_distance:
            return False
        return not any(zone.contains(point) for zone in self.zones)

    def sample_valid(self, max_attempts: int) -> Tuple[Optional[Vec3], int]:
        """Sample until a valid point is found or ``max_attempts`` run out.

        Returns:
            Tuple[Vec3 | None, int]: The point (``None`` on failure) and the
            number of attempts spent.
        """
        attempts = 0
        while attempts < max_attempts:
            attempts += 1
            point = self.sample()
            if point is None:
                return None, attempts
            if self.is_valid(point):
                return point, attempts
        return None, attempts
