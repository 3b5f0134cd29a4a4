"""Target detection system.

Once per visual tick, finds the collectible the tool is pointing at: the
first item struck by a ray along the nozzle's forward axis, or, when the ray
misses, the nearest eligible item inside the aiming cone. Detection only
reads transforms and bodies; it writes the highlight marker and
``current_target``.
"""

import math
from dataclasses import replace
from typing import Optional

from pyrsistent import pmap

from evovac.components import Highlighted
from evovac.config import ToolConfig
from evovac.events import TargetChanged, emit
from evovac.physics import PhysicsPort
from evovac.state import State
from evovac.types import EntityID
from evovac.utils.ecs import collectibles_in_category
from evovac.utils.math import ZERO, angle_between, vector_length, vector_normalize, vector_subtract


def find_target(state: State, physics: PhysicsPort, tool: ToolConfig) -> Optional[EntityID]:
    """Best candidate for the current nozzle pose, or ``None``."""
    nozzle = state.nozzle
    if vector_normalize(nozzle.forward) == ZERO:
        return None
    hit = physics.raycast(state, nozzle.position, nozzle.forward, tool.detection_range, tool.capture_category)
    if hit is not None:
        return hit.entity_id
    if tool.cone_angle <= 0.0:
        return None

    half_angle = math.radians(tool.cone_angle / 2.0)
    best: Optional[EntityID] = None
    best_distance = math.inf
    for eid in collectibles_in_category(state, tool.capture_category):
        offset = vector_subtract(state.transform[eid].position, nozzle.position)
        distance = vector_length(offset)
        if distance > tool.detection_range or distance >= best_distance:
            continue
        if distance > 0.0 and angle_between(nozzle.forward, offset) > half_angle:
            continue
        best, best_distance = eid, distance
    return best


def detection_system(state: State, physics: PhysicsPort, tool: ToolConfig) -> State:
    """Update the candidate and its highlight; notify only on change."""
    candidate = find_target(state, physics, tool)
    if candidate == state.current_target:
        return state

    highlighted = pmap()
    archetype = None
    if candidate is not None:
        highlighted = highlighted.set(candidate, Highlighted())
        archetype = state.collectible[candidate].archetype
    state = replace(state, current_target=candidate, highlighted=highlighted)
    return emit(state, TargetChanged(candidate, archetype))


def clear_target(state: State) -> State:
    """Drop the candidate and its highlight, e.g. once the item leaves the world."""
    if state.current_target is None:
        return state
    state = replace(state, current_target=None, highlighted=pmap())
    return emit(state, TargetChanged(None, None))
