"""Capture tool components.

Singletons owned by the capture tool rather than by world entities: the
nozzle, the (at most one) active session, the resource pool and the
inventory of collected items. They hang directly off
:class:`evovac.state.State` instead of living in per-entity maps.
"""

from .inventory import Inventory, InventoryEntry
from .nozzle import Nozzle
from .resource_pool import ResourcePool
from .session import CaptureSession

__all__ = [
    "CaptureSession",
    "Inventory",
    "InventoryEntry",
    "Nozzle",
    "ResourcePool",
]
