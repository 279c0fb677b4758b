"""Domain port definitions for adapters."""

from __future__ import annotations

from .events import SelectionEventDispatcher
from .persistence import SelectionStore
from .rendering import (
    DisplayDefinition,
    DisplayFragment,
    EntityDisplay,
    EntityDisplayRegistry,
    EntityTypeRegistry,
    RenderError,
    SettingsField,
    UnknownDisplayError,
)
from .unit_of_work import (
    RepositoryCollection,
    SelectionRepositories,
    SelectionUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "DisplayDefinition",
    "DisplayFragment",
    "EntityDisplay",
    "EntityDisplayRegistry",
    "EntityTypeRegistry",
    "RenderError",
    "RepositoryCollection",
    "SelectionEventDispatcher",
    "SelectionRepositories",
    "SelectionStore",
    "SelectionUnitOfWork",
    "SettingsField",
    "UnitOfWork",
    "UnknownDisplayError",
]
