"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from selectipy.adapters.displays import build_default_display_registry
from selectipy.adapters.events import CallbackEventDispatcher
from selectipy.adapters.form_values import parse_submission
from selectipy.adapters.memory import StaticEntityTypeRegistry
from selectipy.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySelectionUnitOfWork,
    is_started,
    startup,
)
from selectipy.config.display import get_selection_display_config
from selectipy.domain.ports.unit_of_work import SelectionUnitOfWork
from selectipy.domain.selection_display import MultiStepDisplay, SubmitOutcome
from selectipy.domain.submission import SelectionSubmission

if TYPE_CHECKING:
    from selectipy.config.display import SelectionDisplayConfig
    from selectipy.domain.forms import SelectionForm
    from selectipy.domain.model import EntityRef, Selection
    from selectipy.domain.ports import (
        EntityDisplayRegistry,
        EntityTypeRegistry,
        SelectionEventDispatcher,
    )

UnitOfWorkFactory = Callable[[], SelectionUnitOfWork]

log = getLogger(__name__)


def build_selection_display(
    config: SelectionDisplayConfig | None = None,
    *,
    displays: EntityDisplayRegistry | None = None,
    entity_types: EntityTypeRegistry | None = None,
    events: SelectionEventDispatcher | None = None,
) -> MultiStepDisplay:
    """Compose a :class:`MultiStepDisplay` from explicit collaborators or defaults."""

    return MultiStepDisplay(
        displays=displays or build_default_display_registry(),
        entity_types=entity_types or StaticEntityTypeRegistry(),
        events=events or CallbackEventDispatcher(),
        config=config or get_selection_display_config(),
    )


def _default_unit_of_work() -> SelectionUnitOfWork:
    if not is_started():
        startup()
    return SqlAlchemySelectionUnitOfWork()


def show_selection(
    session_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Selection:
    """Return the selection currently stored for ``session_id``."""

    factory = unit_of_work_factory or _default_unit_of_work
    with factory() as uow:
        return uow.repositories.selections.load(session_id)


def add_to_selection(
    session_id: str,
    entities: Iterable[EntityRef],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Selection:
    """Append ``entities`` to the stored selection; duplicates get their own rows."""

    factory = unit_of_work_factory or _default_unit_of_work
    with factory() as uow:
        store = uow.repositories.selections
        selection = store.load(session_id).extend(entities)
        store.save(session_id, selection)
        uow.commit()
    log.info("Session %s now has %d selected entities", session_id, len(selection))
    return selection


def render_selection_form(
    session_id: str,
    *,
    display: MultiStepDisplay | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SelectionForm:
    selection = show_selection(session_id, unit_of_work_factory=unit_of_work_factory)
    return (display or build_selection_display()).get_form(selection)


def submit_selection_form(
    session_id: str,
    submission: SelectionSubmission | Mapping[str, object],
    *,
    display: MultiStepDisplay | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SubmitOutcome:
    """Apply one form submission to the stored selection.

    Raw payloads are parsed first (``InvalidSubmissionError`` on bad input).
    A confirmed selection is cleared from the store once the ``SelectionDone``
    event was dispatched; otherwise the reconciled selection is saved.
    """

    parsed = submission if isinstance(submission, SelectionSubmission) else parse_submission(
        submission
    )
    effective_display = display or build_selection_display()
    factory = unit_of_work_factory or _default_unit_of_work

    with factory() as uow:
        store = uow.repositories.selections
        outcome = effective_display.handle(store.load(session_id), parsed)
        if outcome.done:
            store.clear(session_id)
        else:
            store.save(session_id, outcome.selection)
        uow.commit()

    log.info(
        "Handled submission for session %s: items=%d, rebuild=%s, done=%s",
        session_id,
        len(outcome.selection),
        outcome.rebuild,
        outcome.done,
    )
    return outcome
