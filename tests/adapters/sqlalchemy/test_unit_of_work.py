from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from selectipy.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySelectionUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from selectipy.domain.model import Selection
from tests.helpers.selections import make_selection

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemySelectionUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_repositories_require_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(StartupError):
        _ = SqlAlchemySelectionUnitOfWork().repositories


def test_unit_of_work_persists_selection(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemySelectionUnitOfWork() as uow:
        uow.repositories.selections.save("s1", make_selection((0, "A"), (1, "B")))
        uow.commit()

    with SqlAlchemySelectionUnitOfWork() as uow:
        assert uow.repositories.selections.load("s1") == make_selection((0, "A"), (1, "B"))


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemySelectionUnitOfWork() as uow:
        uow.repositories.selections.save("s1", make_selection((0, "A")))
        raise RuntimeError("boom")

    with SqlAlchemySelectionUnitOfWork() as uow:
        assert uow.repositories.selections.load("s1") == Selection()
