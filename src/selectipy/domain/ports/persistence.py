"""Ports for persisting selections between interaction steps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from selectipy.domain.model import Selection


@runtime_checkable
class SelectionStore(Protocol):
    """Session scoped storage for the current selection.

    ``load`` returns an empty selection for unknown sessions. ``save`` replaces
    whatever was stored before, so concurrent writers resolve last-write-wins.
    """

    def load(self, session_id: str) -> Selection: ...

    def save(self, session_id: str, selection: Selection) -> None: ...

    def clear(self, session_id: str) -> None: ...
