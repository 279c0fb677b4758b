"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, insert, select

from selectipy.adapters.sqlalchemy.mappings import selection_item_table
from selectipy.domain.model import EntityRef, SelectedItem, Selection

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemySelectionStore:
    """Store each session's selection as ordered ``selection_item`` rows.

    ``save`` replaces all rows of the session inside the caller's transaction.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def load(self, session_id: str) -> Selection:
        table = selection_item_table
        stmt = (
            select(
                table.c.row_key,
                table.c.entity_type,
                table.c.entity_id,
                table.c.label,
            )
            .where(table.c.session_id == session_id)
            .order_by(table.c.position)
        )
        rows = self.session.execute(stmt).all()
        return Selection(
            tuple(
                SelectedItem(
                    row_key=row_key,
                    entity=EntityRef(entity_type=entity_type, entity_id=entity_id, label=label),
                )
                for row_key, entity_type, entity_id, label in rows
            )
        )

    def save(self, session_id: str, selection: Selection) -> None:
        self.clear(session_id)
        if not selection:
            return
        self.session.execute(
            insert(selection_item_table),
            [
                {
                    "session_id": session_id,
                    "position": position,
                    "row_key": item.row_key,
                    "entity_type": item.entity.entity_type,
                    "entity_id": item.entity.entity_id,
                    "label": item.entity.label,
                }
                for position, item in enumerate(selection)
            ],
        )

    def clear(self, session_id: str) -> None:
        self.session.execute(
            delete(selection_item_table).where(selection_item_table.c.session_id == session_id)
        )


if TYPE_CHECKING:
    from selectipy.domain.ports.persistence import SelectionStore

    _session_stub = cast("Session", object())
    _store_check: SelectionStore = SqlAlchemySelectionStore(_session_stub)
