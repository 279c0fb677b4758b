"""SQLAlchemy table metadata for persisted selections."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Column, Index, Integer, MetaData, String, Table, UniqueConstraint, Uuid

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# One row per selected item. ``position`` carries the user-visible order;
# ``row_key`` is the stable key the selection form refers to.
selection_item_table = Table(
    "selection_item",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("session_id", String, nullable=False),
    Column("position", Integer, nullable=False),
    Column("row_key", Integer, nullable=False),
    Column("entity_type", String, nullable=False),
    Column("entity_id", String, nullable=False),
    Column("label", String, nullable=False, default=""),
    UniqueConstraint("session_id", "row_key"),
    Index("ix_selection_item_session_position", "session_id", "position"),
)


def create_all_tables(engine: Engine) -> None:
    """Create all tables known to the selection metadata (idempotent)."""

    log.debug("Creating selection tables on %s", engine.url)
    metadata.create_all(engine, checkfirst=True)
