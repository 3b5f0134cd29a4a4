"""Energy drain system.

While a capture session is active the tool drains energy at a fixed rate.
The tick that empties the pool also releases the session, so a depleted
tool never holds a target into the next tick.
"""

import logging
from dataclasses import replace

from evovac.config import ToolConfig
from evovac.events import EnergyDepleted, emit
from evovac.state import State
from evovac.systems.capture import stop_capture
from evovac.types import ReleaseReason
from evovac.utils.resources import drain

logger = logging.getLogger(__name__)


def energy_system(state: State, tool: ToolConfig, dt: float) -> State:
    if state.session is None or state.resources.depleted:
        return state
    pool, just_depleted = drain(state.resources, tool.energy_drain_rate, dt)
    state = replace(state, resources=pool)
    if just_depleted:
        logger.info("Energy depleted; releasing capture")
        state = emit(state, EnergyDepleted())
        state = stop_capture(state, tool, ReleaseReason.DEPLETED)
    return state
