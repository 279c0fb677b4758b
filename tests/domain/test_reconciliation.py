from __future__ import annotations

import pytest

from selectipy.domain.model import Selection
from selectipy.domain.reconciliation import remove, reorder, weights_from
from tests.helpers.selections import entity_ids, make_selection, row_keys


def test_reorder_follows_submitted_weights() -> None:
    selection = make_selection((1, "A"), (2, "B"), (3, "C"))

    result = reorder(selection, {1: 2, 2: 1, 3: 0})

    assert row_keys(result) == [3, 2, 1]
    assert entity_ids(result) == ["C", "B", "A"]


def test_reorder_appends_rows_without_weight_after_max() -> None:
    selection = make_selection((1, "A"), (2, "B"))

    result = reorder(selection, {1: 5})

    assert row_keys(result) == [1, 2]


def test_reorder_places_unweighted_rows_last_in_original_order() -> None:
    selection = make_selection((0, "A"), (1, "B"), (2, "C"), (3, "D"), (4, "E"))

    # B and D were added after the form was rendered
    result = reorder(selection, {0: 3, 2: -1, 4: 0})

    assert row_keys(result) == [2, 4, 0, 1, 3]


def test_reorder_without_weights_returns_selection_unchanged() -> None:
    selection = make_selection((1, "A"), (2, "B"))

    assert reorder(selection, {}) is selection


def test_reorder_empty_selection_ignores_weights() -> None:
    selection = Selection()

    assert reorder(selection, {1: 0, 2: 1}) is selection


def test_reorder_keeps_original_order_for_duplicate_weights() -> None:
    selection = make_selection((1, "A"), (2, "B"), (3, "C"))

    result = reorder(selection, {1: 1, 2: 0, 3: 1})

    assert row_keys(result) == [2, 1, 3]


def test_reorder_ignores_weights_for_unknown_rows() -> None:
    selection = make_selection((1, "A"), (2, "B"))

    result = reorder(selection, {9: 0, 2: 1, 1: 2})

    assert row_keys(result) == [2, 1]
    assert 9 not in result


def test_reorder_never_drops_rows() -> None:
    selection = make_selection((1, "A"), (2, "B"), (3, "C"))

    result = reorder(selection, {3: 10})

    assert sorted(row_keys(result)) == [1, 2, 3]
    assert len(result) == len(selection)


@pytest.mark.parametrize(
    "rows",
    [
        ((0, "A"),),
        ((4, "A"), (2, "B"), (9, "C")),
        ((0, "X"), (1, "X"), (2, "Y")),
    ],
)
def test_reorder_with_positional_weights_round_trips(rows: tuple[tuple[int, str], ...]) -> None:
    selection = make_selection(*rows)

    assert reorder(selection, weights_from(selection)) == selection


def test_reorder_does_not_mutate_input() -> None:
    selection = make_selection((1, "A"), (2, "B"))

    reorder(selection, {1: 1, 2: 0})

    assert row_keys(selection) == [1, 2]


def test_remove_drops_matching_row() -> None:
    selection = make_selection((1, "A"), (2, "B"), (3, "C"))

    result = remove(selection, 2)

    assert row_keys(result) == [1, 3]
    assert entity_ids(result) == ["A", "C"]


def test_remove_unknown_row_is_noop() -> None:
    selection = make_selection((1, "A"), (2, "B"))

    assert remove(selection, 7) == selection


@pytest.mark.parametrize("row_key", [1, 2, 5])
def test_remove_is_idempotent(row_key: int) -> None:
    selection = make_selection((1, "A"), (2, "B"))

    once = remove(selection, row_key)

    assert remove(once, row_key) == once


def test_remove_only_drops_one_of_duplicate_entities() -> None:
    selection = make_selection((0, "A"), (1, "A"), (2, "B"))

    result = remove(selection, 0)

    assert row_keys(result) == [1, 2]
    assert entity_ids(result) == ["A", "B"]


def test_weights_from_uses_positions() -> None:
    selection = make_selection((5, "A"), (1, "B"), (3, "C"))

    assert weights_from(selection) == {5: 0, 1: 1, 3: 2}
