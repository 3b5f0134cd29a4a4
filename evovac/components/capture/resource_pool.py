from dataclasses import dataclass


@dataclass(frozen=True)
class ResourcePool:
    """Storage and energy budget of the capture tool.

    ``capacity_used <= capacity_max`` is not enforced: an item that would
    overflow is what triggers a rejection. Energy stays within
    ``[0, energy_max]``.

    Attributes:
        capacity_used: Footprint units currently stored.
        capacity_max: Footprint ceiling.
        weight_used: Total stored weight.
        weight_max: Weight ceiling.
        energy: Current energy.
        energy_max: Energy ceiling.
        depleted: Set when energy reaches 0; cleared only by a recharge.
    """

    capacity_used: int = 0
    capacity_max: int = 100
    weight_used: float = 0.0
    weight_max: float = 50.0
    energy: float = 100.0
    energy_max: float = 100.0
    depleted: bool = False
