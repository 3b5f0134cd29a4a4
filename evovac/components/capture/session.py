from dataclasses import dataclass, field

from evovac.types import CapturePhase, EntityID
from evovac.utils.math import ZERO, Vec3


@dataclass(frozen=True)
class CaptureSession:
    """The single active link between the tool and one collectible.

    ``State.session`` holds at most one instance; ``None`` means idle.

    Attributes:
        target_id: Entity being captured.
        phase: Current capture phase (never ``IDLE`` while stored).
        distance: Distance to the nozzle measured on the last tick.
        velocity: Target velocity snapshot taken on the last physics tick.
    """

    target_id: EntityID
    phase: CapturePhase = CapturePhase.APPROACH
    distance: float = float("inf")
    velocity: Vec3 = field(default_factory=lambda: ZERO)
