"""Collection volume trigger handling.

The physics backend reports items entering, staying in and leaving the
tool's collection volume. Tracked items are kept in ``State.overlapping``.
An item that enters the volume while it is the shrinking capture target is
collected on the spot.
"""

from dataclasses import replace

from evovac.config import ToolConfig
from evovac.state import State
from evovac.systems.capture import begin_collecting
from evovac.types import CapturePhase, EntityID


def _trackable(state: State, entity_id: EntityID, category: str, tool: ToolConfig) -> bool:
    return category == tool.capture_category and entity_id in state.rigid_body


def overlap_enter(state: State, entity_id: EntityID, category: str, tool: ToolConfig) -> State:
    if not _trackable(state, entity_id, category, tool) or entity_id in state.overlapping:
        return state
    state = replace(state, overlapping=state.overlapping.add(entity_id))
    session = state.session
    if session is not None and session.target_id == entity_id and session.phase == CapturePhase.SHRINK:
        state = begin_collecting(state, tool)
    return state


def overlap_stay(state: State, entity_id: EntityID, category: str, tool: ToolConfig) -> State:
    """Start tracking an item whose enter notification was missed."""
    if not _trackable(state, entity_id, category, tool) or entity_id in state.overlapping:
        return state
    return replace(state, overlapping=state.overlapping.add(entity_id))


def overlap_exit(state: State, entity_id: EntityID, tool: ToolConfig) -> State:
    """Stop tracking; items other than the capture target get default physics back."""
    if entity_id not in state.overlapping:
        return state
    state = replace(state, overlapping=state.overlapping.discard(entity_id))
    is_target = state.session is not None and state.session.target_id == entity_id
    body = state.rigid_body.get(entity_id)
    if body is None or is_target:
        return state
    body = replace(body, use_gravity=True, drag=tool.release_drag)
    return replace(state, rigid_body=state.rigid_body.set(entity_id, body))
