"""Events emitted by the selection display."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from selectipy.domain.model import EntityRef


class SelectionEventType(StrEnum):
    DONE = "selection_done"


@dataclass(frozen=True, slots=True, kw_only=True)
class SelectionEvent:
    """Base event; ``event_type`` lets dispatchers route without isinstance checks."""

    event_type: SelectionEventType


@dataclass(frozen=True, slots=True, kw_only=True)
class SelectionDone(SelectionEvent):
    """The user confirmed the selection; ``entities`` are in final order."""

    entities: tuple[EntityRef, ...]
    event_type: SelectionEventType = SelectionEventType.DONE
