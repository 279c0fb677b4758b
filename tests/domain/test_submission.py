from __future__ import annotations

from selectipy.domain.submission import USE_SELECTED, SelectionSubmission
from tests.helpers.selections import make_selection


def test_submission_confirms_only_for_use_selected() -> None:
    assert SelectionSubmission(triggering_element=USE_SELECTED).confirms_selection
    assert not SelectionSubmission(triggering_element="show_selection").confirms_selection
    assert not SelectionSubmission().confirms_selection


def test_without_weight_drops_only_that_row() -> None:
    submission = SelectionSubmission(weights={1: 0, 2: 1}, remove=2)

    pending = submission.without_weight(2)

    assert dict(pending.weights) == {1: 0}
    assert pending.remove == 2
    assert dict(submission.weights) == {1: 0, 2: 1}


def test_submission_weights_are_copied() -> None:
    weights = {1: 0}
    submission = SelectionSubmission(weights=weights)

    weights[2] = 5

    assert dict(submission.weights) == {1: 0}


def test_targets_compares_submitted_entity_ids() -> None:
    selection = make_selection((0, "A"), (1, "C"))
    submission = SelectionSubmission(row_entities={0: "A", 1: "B", 7: "Z"})

    assert submission.targets(selection, 0)
    assert not submission.targets(selection, 1)
    assert submission.targets(selection, 7)
    assert SelectionSubmission().targets(selection, 1)


def test_current_weights_drop_rows_that_changed_entity() -> None:
    selection = make_selection((0, "A"), (1, "C"))
    submission = SelectionSubmission(weights={0: 1, 1: 0, 4: 2}, row_entities={0: "A", 1: "B"})

    assert dict(submission.current_weights(selection)) == {0: 1, 4: 2}
