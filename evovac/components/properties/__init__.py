"""Property component aggregates.

Per-entity components stored in the component maps of
:class:`evovac.state.State`. All are immutable dataclasses; systems express
change by storing a new instance.
"""

from .being_captured import BeingCaptured
from .collectible import Collectible
from .highlighted import Highlighted
from .rigid_body import RigidBody
from .transform import Transform

__all__ = [
    "BeingCaptured",
    "Collectible",
    "Highlighted",
    "RigidBody",
    "Transform",
]
