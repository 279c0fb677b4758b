from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from selectipy.adapters.displays import build_default_display_registry
from selectipy.adapters.events import CallbackEventDispatcher
from selectipy.adapters.memory import (
    InMemorySelectionStore,
    InMemoryUnitOfWork,
    StaticEntityTypeRegistry,
)
from selectipy.adapters.sqlalchemy import create_all_tables
from selectipy.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySelectionUnitOfWork,
    shutdown,
    startup,
)
from selectipy.config.display import SelectionDisplayConfig
from selectipy.domain.events import SelectionEvent, SelectionEventType
from selectipy.domain.selection_display import MultiStepDisplay

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemySelectionUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemySelectionUnitOfWork:
        return SqlAlchemySelectionUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def memory_store() -> InMemorySelectionStore:
    return InMemorySelectionStore()


@pytest.fixture
def memory_unit_of_work(memory_store: InMemorySelectionStore) -> Callable[[], InMemoryUnitOfWork]:
    def factory() -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(memory_store)

    return factory


@pytest.fixture
def dispatched_events() -> list[SelectionEvent]:
    return []


@pytest.fixture
def event_dispatcher(dispatched_events: list[SelectionEvent]) -> CallbackEventDispatcher:
    dispatcher = CallbackEventDispatcher()
    dispatcher.subscribe(SelectionEventType.DONE, dispatched_events.append)
    return dispatcher


@pytest.fixture
def display(event_dispatcher: CallbackEventDispatcher) -> MultiStepDisplay:
    return MultiStepDisplay(
        displays=build_default_display_registry(),
        entity_types=StaticEntityTypeRegistry({"node": "Content", "media": "Media"}),
        events=event_dispatcher,
        config=SelectionDisplayConfig(),
    )
