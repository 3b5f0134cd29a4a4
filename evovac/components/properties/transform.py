"""Transform component.

World-space placement of an entity. ``facing`` is a unit direction rather
than a full rotation: collectibles only ever need to know where they point.
"""

from dataclasses import dataclass, field

from evovac.utils.math import FORWARD, Vec3


@dataclass(frozen=True)
class Transform:
    """Position, facing and visual scale.

    Attributes:
        position: World position.
        facing: Unit forward direction.
        scale: Visual scale relative to the authored size (1.0 = full size).
    """

    position: Vec3
    facing: Vec3 = field(default_factory=lambda: FORWARD)
    scale: float = 1.0
