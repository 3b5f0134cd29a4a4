"""evovac.components
=================================

Aggregate import surface for all ECS component dataclasses.

*Properties* describe world entities (placement, body, collectible data and
the highlight / capture markers) and live in per-entity maps. *Capture*
components describe the capture tool itself and are stored once on the
state. Import either group from here::

    from evovac.components import Transform, RigidBody, ResourcePool

All component classes are frozen ``@dataclass`` value objects with no
behavior; systems transform them.
"""

# Capture
from .capture import CaptureSession
from .capture import Inventory, InventoryEntry
from .capture import Nozzle
from .capture import ResourcePool

# Properties
from .properties import BeingCaptured
from .properties import Collectible
from .properties import Highlighted
from .properties import RigidBody
from .properties import Transform

__all__ = [
    # Capture
    "CaptureSession",
    "Inventory",
    "InventoryEntry",
    "Nozzle",
    "ResourcePool",
    # Properties
    "BeingCaptured",
    "Collectible",
    "Highlighted",
    "RigidBody",
    "Transform",
]
