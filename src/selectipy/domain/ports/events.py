"""Port for announcing selection lifecycle events to the host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from selectipy.domain.events import SelectionEvent


@runtime_checkable
class SelectionEventDispatcher(Protocol):
    def dispatch(self, event: SelectionEvent) -> None: ...
