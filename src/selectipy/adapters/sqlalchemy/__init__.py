"""SQLAlchemy adapter package for Selectipy."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, selection_item_table
from .repositories import SqlAlchemySelectionStore
from .unit_of_work import (
    SqlAlchemySelectionUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemySelectionStore",
    "SqlAlchemySelectionUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "selection_item_table",
    "shutdown",
    "startup",
]
