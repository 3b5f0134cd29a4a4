"""Rigid body component.

Holds the directives the core hands to the physics backend. Systems never
integrate motion themselves: they accumulate continuous force into
``force`` or request position control through ``kinematic_target``, and the
backend consumes (and clears) both on the next physics tick.
"""

from dataclasses import dataclass, field
from typing import Optional

from evovac.utils.math import ZERO, Vec3


@dataclass(frozen=True)
class RigidBody:
    """Point-mass body state.

    Attributes:
        mass: Mass (strictly positive once spawned).
        velocity: Linear velocity.
        force: Continuous force accumulated for the next physics tick.
        use_gravity: Whether gravity applies (disabled while captured).
        drag: Linear drag coefficient.
        kinematic_target: Position to move to on the next tick, bypassing forces.
    """

    mass: float = 1.0
    velocity: Vec3 = field(default_factory=lambda: ZERO)
    force: Vec3 = field(default_factory=lambda: ZERO)
    use_gravity: bool = True
    drag: float = 0.5
    kinematic_target: Optional[Vec3] = None
