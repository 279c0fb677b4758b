"""In-memory adapters, used by tests and single-process hosts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from selectipy.domain.model import Selection
from selectipy.domain.ports.unit_of_work import SelectionRepositories

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType


@dataclass(slots=True)
class InMemorySelectionStore:
    """Selection store keyed by session id; selections are immutable, so no copies are needed."""

    _selections: dict[str, Selection] = field(default_factory=dict[str, Selection])

    def load(self, session_id: str) -> Selection:
        return self._selections.get(session_id, Selection())

    def save(self, session_id: str, selection: Selection) -> None:
        self._selections[session_id] = selection

    def clear(self, session_id: str) -> None:
        self._selections.pop(session_id, None)

    def sessions(self) -> tuple[str, ...]:
        return tuple(self._selections)


@dataclass(slots=True)
class StaticEntityTypeRegistry:
    types: Mapping[str, str] = field(default_factory=lambda: {"node": "Content"})

    def definitions(self) -> Mapping[str, str]:
        return dict(self.types)


class InMemoryUnitOfWork:
    """Unit of work over an :class:`InMemorySelectionStore`.

    Writes are staged on a scratch store and only copied to the backing store
    on ``commit``.
    """

    def __init__(self, store: InMemorySelectionStore | None = None) -> None:
        self.store = store if store is not None else InMemorySelectionStore()
        self._staged: InMemorySelectionStore | None = None
        self._cleared: set[str] = set()
        self.committed = False

    def __enter__(self) -> InMemoryUnitOfWork:
        self._staged = _StagedSelectionStore(self.store, self._cleared)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self._staged = None
        return False

    @property
    def repositories(self) -> SelectionRepositories:
        if self._staged is None:
            raise RuntimeError("Unit of work used outside of a with block")
        return SelectionRepositories(selections=self._staged)

    def commit(self) -> None:
        if self._staged is None:
            raise RuntimeError("Unit of work used outside of a with block")
        for session_id in self._cleared:
            self.store.clear(session_id)
        for session_id in self._staged.sessions():
            self.store.save(session_id, self._staged.load(session_id))
        self._reset_staging()
        self.committed = True

    def rollback(self) -> None:
        if self._staged is not None:
            self._reset_staging()

    def _reset_staging(self) -> None:
        self._cleared.clear()
        self._staged = _StagedSelectionStore(self.store, self._cleared)


class _StagedSelectionStore(InMemorySelectionStore):
    """Reads fall through to the backing store until a session is written or cleared."""

    __slots__ = ("_backing", "_cleared")

    def __init__(self, backing: InMemorySelectionStore, cleared: set[str]) -> None:
        super().__init__()
        self._backing = backing
        self._cleared = cleared

    def load(self, session_id: str) -> Selection:
        if session_id in self._selections:
            return self._selections[session_id]
        if session_id in self._cleared:
            return Selection()
        return self._backing.load(session_id)

    def save(self, session_id: str, selection: Selection) -> None:
        self._cleared.discard(session_id)
        self._selections[session_id] = selection

    def clear(self, session_id: str) -> None:
        self._selections.pop(session_id, None)
        self._cleared.add(session_id)
