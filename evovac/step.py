"""Tick reducers.

The two clocks each get one pure reducer that wires the systems together in
a fixed order and returns a new :class:`evovac.state.State`.

Visual tick:

1. Pending press: an engage press that found no candidate yet tries once
    more against the candidate detected on the previous tick.
2. ``energy_system`` drains energy and may release a depleted session.
3. ``detection_system`` refreshes the candidate and its highlight.
4. ``capture_visual_system`` rotates / shrinks the target and may collect it.

Physics tick:

1. ``capture_physics_system`` reads a consistent snapshot of the target and
    writes its force or kinematic directive.
2. ``integration_system`` lets the physics port consume the directives.
"""

from dataclasses import replace

from evovac.config import ToolConfig
from evovac.physics import PhysicsPort
from evovac.state import State
from evovac.systems.capture import capture_physics_system, capture_visual_system, start_capture
from evovac.systems.detection import detection_system
from evovac.systems.energy import energy_system
from evovac.systems.integration import integration_system


def visual_step(
    state: State,
    physics: PhysicsPort,
    tool: ToolConfig,
    dt: float,
    engage_pending: bool = False,
) -> State:
    """Advance the visual clock by ``dt``.

    Args:
        state (State): Previous state.
        physics (PhysicsPort): Raycast provider for detection.
        tool (ToolConfig): Capture tool tuning.
        dt (float): Frame interval in seconds (positive).
        engage_pending (bool): Whether an engage press is still waiting for a
            candidate. The caller clears it once a candidate has been tried.

    Returns:
        State: Next state.
    """
    if dt <= 0.0:
        raise ValueError(f"dt must be positive, got {dt}")
    if engage_pending and state.session is None:
        state = start_capture(state, state.current_target, tool)
    state = energy_system(state, tool, dt)
    state = detection_system(state, physics, tool)
    state = capture_visual_system(state, tool, dt)
    return replace(state, visual_time=state.visual_time + dt)


def physics_step(state: State, physics: PhysicsPort, tool: ToolConfig, dt: float) -> State:
    """Advance the physics clock by one fixed step of ``dt``."""
    if dt <= 0.0:
        raise ValueError(f"dt must be positive, got {dt}")
    state = capture_physics_system(state, tool, dt)
    return integration_system(state, physics, dt)
