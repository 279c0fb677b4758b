from __future__ import annotations

import pytest

from selectipy.adapters.memory import (
    InMemorySelectionStore,
    InMemoryUnitOfWork,
    StaticEntityTypeRegistry,
)
from selectipy.domain.model import Selection
from tests.helpers.selections import make_selection


def test_store_returns_empty_selection_for_unknown_session() -> None:
    assert InMemorySelectionStore().load("missing") == Selection()


def test_store_save_and_clear() -> None:
    store = InMemorySelectionStore()
    selection = make_selection((0, "A"))

    store.save("s1", selection)
    assert store.load("s1") == selection

    store.clear("s1")
    store.clear("s1")
    assert store.load("s1") == Selection()


def test_unit_of_work_only_persists_on_commit(memory_store: InMemorySelectionStore) -> None:
    with InMemoryUnitOfWork(memory_store) as uow:
        uow.repositories.selections.save("s1", make_selection((0, "A")))
        assert memory_store.load("s1") == Selection()

    assert memory_store.load("s1") == Selection()

    with InMemoryUnitOfWork(memory_store) as uow:
        uow.repositories.selections.save("s1", make_selection((0, "A")))
        uow.commit()

    assert memory_store.load("s1") == make_selection((0, "A"))


def test_unit_of_work_rolls_back_on_error(memory_store: InMemorySelectionStore) -> None:
    memory_store.save("s1", make_selection((0, "A")))

    with pytest.raises(RuntimeError), InMemoryUnitOfWork(memory_store) as uow:
        uow.repositories.selections.clear("s1")
        raise RuntimeError("boom")

    assert memory_store.load("s1") == make_selection((0, "A"))


def test_unit_of_work_commits_clears(memory_store: InMemorySelectionStore) -> None:
    memory_store.save("s1", make_selection((0, "A")))

    with InMemoryUnitOfWork(memory_store) as uow:
        store = uow.repositories.selections
        store.clear("s1")
        assert store.load("s1") == Selection()
        uow.commit()

    assert memory_store.load("s1") == Selection()


def test_unit_of_work_requires_context() -> None:
    with pytest.raises(RuntimeError):
        _ = InMemoryUnitOfWork().repositories


def test_static_entity_type_registry_defaults() -> None:
    assert StaticEntityTypeRegistry().definitions() == {"node": "Content"}
