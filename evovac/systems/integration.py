"""Physics integration system.

Hands the accumulated body directives to the physics port and advances the
physics clock.
"""

from dataclasses import replace

from evovac.physics import PhysicsPort
from evovac.state import State


def integration_system(state: State, physics: PhysicsPort, dt: float) -> State:
    state = physics.integrate(state, dt)
    return replace(state, physics_time=state.physics_time + dt, tick=state.tick + 1)
