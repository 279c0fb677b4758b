"""Event dispatcher that fans selection events out to in-process listeners."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from selectipy.domain.events import SelectionEvent, SelectionEventType

log = getLogger(__name__)

type SelectionListener = Callable[[SelectionEvent], None]


class CallbackEventDispatcher:
    """Call listeners registered for an event type, in registration order.

    Listener exceptions are not caught; they reach whoever dispatched the event.
    """

    def __init__(self) -> None:
        self._listeners: defaultdict[SelectionEventType, list[SelectionListener]] = defaultdict(
            list
        )

    def subscribe(self, event_type: SelectionEventType, listener: SelectionListener) -> None:
        self._listeners[event_type].append(listener)

    def dispatch(self, event: SelectionEvent) -> None:
        listeners = tuple(self._listeners.get(event.event_type, ()))
        log.debug("Dispatching %s to %d listener(s)", event.event_type, len(listeners))
        for listener in listeners:
            listener(event)


if TYPE_CHECKING:
    from selectipy.domain.ports.events import SelectionEventDispatcher

    _dispatcher_check: SelectionEventDispatcher = CallbackEventDispatcher()
