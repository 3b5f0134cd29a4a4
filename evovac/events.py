"""Notification events and dispatch.

Systems are pure, so they cannot call observers directly. Instead they
append frozen event records to ``State.events`` with :func:`emit`; the
scheduler drains the channel once at the end of each entry point and hands
the batch to an :class:`EventDispatcher`, which calls subscribers in
emission order.

Events fire once per change, never once per tick: ``TargetChanged`` is
emitted only when the detected candidate actually changes.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from pyrsistent import pvector

from evovac.archetypes import Archetype
from evovac.state import State
from evovac.types import CapturePhase, EntityID, RejectReason, ReleaseReason

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class TargetChanged:
    """Detection candidate changed (``target_id`` is ``None`` when lost)."""

    target_id: Optional[EntityID]
    archetype: Optional[Archetype]


@dataclass(frozen=True)
class CaptureStarted:
    target_id: EntityID
    archetype: Archetype


@dataclass(frozen=True)
class PhaseChanged:
    target_id: EntityID
    previous: CapturePhase
    phase: CapturePhase


@dataclass(frozen=True)
class ItemCollected:
    """Item admitted into the pool and handed to the inventory."""

    archetype: Archetype


@dataclass(frozen=True)
class ItemRejected:
    """Item refused by the pool; it stays in the world."""

    target_id: EntityID
    archetype: Archetype
    reason: RejectReason


@dataclass(frozen=True)
class CaptureReleased:
    target_id: EntityID
    reason: ReleaseReason


@dataclass(frozen=True)
class EnergyDepleted:
    pass


@dataclass(frozen=True)
class EnergyRecharged:
    energy: float
    energy_max: float


def emit(state: State, event: Any) -> State:
    """Return ``state`` with ``event`` appended to the channel."""
    return replace(state, events=state.events.append(event))


def drain_events(state: State) -> Tuple[State, List[Any]]:
    """Return ``(state with an empty channel, pending events in order)``."""
    if not state.events:
        return state, []
    return replace(state, events=pvector()), list(state.events)


class EventDispatcher:
    """Subscriber registry keyed by exact event type.

    Example:
        dispatcher = EventDispatcher()
        dispatcher.subscribe(ItemCollected, lambda e: print(e.archetype.name))
        dispatcher.dispatch(events)
    """

    def __init__(self) -> None:
        self._subscribers: Dict[type, List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[E], callback: Callable[[E], None]) -> Callable[[], None]:
        """Register ``callback`` for ``event_type``.

        Returns:
            Callable[[], None]: Function removing this subscription.
        """
        self._subscribers.setdefault(event_type, []).append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(event_type, callback)

        return unsubscribe

    def unsubscribe(self, event_type: Type[E], callback: Callable[[E], None]) -> None:
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def subscriber_count(self, event_type: type) -> int:
        return len(self._subscribers.get(event_type, []))

    def dispatch(self, events: Iterable[Any]) -> None:
        """Deliver ``events`` in order.

        A failing subscriber is logged and does not stop delivery to the
        remaining subscribers.
        """
        for event in events:
            event_type = type(event)
            for callback in list(self._subscribers.get(event_type, ())):
                try:
                    callback(event)
                except Exception:
                    logger.exception("Subscriber for %s failed", event_type.__name__)
