from dataclasses import dataclass, field

from evovac.utils.math import FORWARD, Vec3


@dataclass(frozen=True)
class Nozzle:
    """Capture tool reference point.

    Captured items are pulled toward ``position``; detection casts along
    ``forward``.

    Attributes:
        position: World position of the nozzle tip.
        forward: Unit aim direction.
    """

    position: Vec3 = field(default_factory=Vec3)
    forward: Vec3 = field(default_factory=lambda: FORWARD)
