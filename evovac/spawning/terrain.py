"""Terrain port.

The distribution engine only needs two things from the ground: its
horizontal extent and the surface height at a point. :class:`FlatTerrain`
covers tests and flat arenas; :class:`HeightFieldTerrain` samples a regular
grid of heights with bilinear interpolation.
"""

from dataclasses import dataclass
from typing import Callable, Protocol, Tuple

import numpy as np

from evovac.utils.math import clamp


@dataclass(frozen=True)
class TerrainBounds:
    """Axis-aligned horizontal extent (XZ plane)."""

    min_x: float
    min_z: float
    max_x: float
    max_z: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def depth(self) -> float:
        return self.max_z - self.min_z

    def contains(self, x: float, z: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_z <= z <= self.max_z


class Terrain(Protocol):
    @property
    def bounds(self) -> TerrainBounds: ...

    def height_at(self, x: float, z: float) -> float: ...


@dataclass(frozen=True)
class FlatTerrain:
    bounds: TerrainBounds
    height: float = 0.0

    def height_at(self, x: float, z: float) -> float:
        return self.height


class HeightFieldTerrain:
    """Regular height grid spanning ``bounds``.

    Row ``i`` of ``heights`` lies at ``z = min_z + i * depth / (rows - 1)``
    and column ``j`` at ``x = min_x + j * width / (cols - 1)``. Queries
    outside the bounds clamp to the nearest edge sample.

    Args:
        heights (np.ndarray): 2D array of at least 2x2 samples.
        bounds (TerrainBounds): Horizontal extent covered by the grid.
        base_height (float): Offset added to every sample (terrain origin height).
    """

    def __init__(self, heights: np.ndarray, bounds: TerrainBounds, base_height: float = 0.0) -> None:
        grid = np.asarray(heights, dtype=float)
        if grid.ndim != 2 or grid.shape[0] < 2 or grid.shape[1] < 2:
            raise ValueError(f"height field needs at least 2x2 samples, got shape {grid.shape}")
        if not np.all(np.isfinite(grid)):
            raise ValueError("height field contains non-finite samples")
        self._heights = grid
        self._bounds = bounds
        self.base_height = base_height

    @classmethod
    def from_function(
        cls,
        fn: Callable[[np.ndarray, np.ndarray], np.ndarray],
        bounds: TerrainBounds,
        resolution: int = 65,
        base_height: float = 0.0,
    ) -> "HeightFieldTerrain":
        """Sample a vectorized ``fn(x, z)`` on a ``resolution`` x ``resolution`` grid."""
        xs = np.linspace(bounds.min_x, bounds.max_x, resolution)
        zs = np.linspace(bounds.min_z, bounds.max_z, resolution)
        grid_x, grid_z = np.meshgrid(xs, zs)
        return cls(np.asarray(fn(grid_x, grid_z), dtype=float), bounds, base_height)

    @property
    def bounds(self) -> TerrainBounds:
        return self._bounds

    @property
    def shape(self) -> Tuple[int, int]:
        rows, cols = self._heights.shape
        return int(rows), int(cols)

    def height_at(self, x: float, z: float) -> float:
        rows, cols = self._heights.shape
        b = self._bounds
        u = 0.0 if b.width <= 0.0 else clamp((x - b.min_x) / b.width, 0.0, 1.0) * (cols - 1)
        v = 0.0 if b.depth <= 0.0 else clamp((z - b.min_z) / b.depth, 0.0, 1.0) * (rows - 1)
        j0 = min(int(np.floor(u)), cols - 2)
        i0 = min(int(np.floor(v)), rows - 2)
        fu = u - j0
        fv = v - i0
        cell = self._heights[i0 : i0 + 2, j0 : j0 + 2]
        near = cell[0, 0] * (1.0 - fu) + cell[0, 1] * fu
        far = cell[1, 0] * (1.0 - fu) + cell[1, 1] * fu
        return float(near * (1.0 - fv) + far * fv) + self.base_height
