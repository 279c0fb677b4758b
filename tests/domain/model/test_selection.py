from __future__ import annotations

import pytest

from selectipy.domain.model import EntityRef, SelectedItem, Selection
from tests.helpers.selections import make_entity, make_selection, row_keys


def test_selection_rejects_duplicate_row_keys() -> None:
    with pytest.raises(ValueError, match="Duplicate row key"):
        Selection((SelectedItem(1, make_entity("A")), SelectedItem(1, make_entity("B"))))


def test_entity_ref_requires_type_and_id() -> None:
    with pytest.raises(ValueError, match="entity type"):
        EntityRef(entity_type="", entity_id="1")
    with pytest.raises(ValueError, match="entity id"):
        EntityRef(entity_type="node", entity_id="")


def test_from_entities_assigns_sequential_row_keys() -> None:
    selection = Selection.from_entities([make_entity("A"), make_entity("B")])

    assert row_keys(selection) == [0, 1]
    assert [item.identity for item in selection] == [("A", 0), ("B", 1)]


def test_append_uses_next_free_row_key() -> None:
    selection = make_selection((4, "A"), (1, "B"))

    appended = selection.append(make_entity("C"))

    assert row_keys(appended) == [4, 1, 5]
    assert row_keys(selection) == [4, 1]


def test_append_to_empty_selection_starts_at_zero() -> None:
    assert row_keys(Selection().append(make_entity("A"))) == [0]


def test_same_entity_can_be_selected_twice() -> None:
    entity = make_entity("A")

    selection = Selection().extend([entity, entity])

    assert row_keys(selection) == [0, 1]
    assert selection.entities() == (entity, entity)


def test_lookup_helpers() -> None:
    selection = make_selection((3, "A"), (7, "B"))

    assert 3 in selection
    assert 5 not in selection
    assert selection.get(7) == SelectedItem(7, make_entity("B"))
    assert selection.get(5) is None
    assert len(selection) == 2
    assert not Selection()


def test_selections_compare_by_value() -> None:
    assert make_selection((1, "A"), (2, "B")) == make_selection((1, "A"), (2, "B"))
    assert make_selection((1, "A"), (2, "B")) != make_selection((2, "B"), (1, "A"))
