"""Submitted values for one round trip of the selection form."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from selectipy.domain.model import RowKey, Selection, WeightSubmission

USE_SELECTED = "use_selected"
SHOW_SELECTION = "show_selection"


def _frozen_weights(weights: WeightSubmission | None = None) -> WeightSubmission:
    return MappingProxyType(dict(weights or {}))


def _frozen_row_entities(
    row_entities: Mapping[RowKey, str] | None = None,
) -> Mapping[RowKey, str]:
    return MappingProxyType(dict(row_entities or {}))


@dataclass(frozen=True, slots=True)
class SelectionSubmission:
    """Weights and the triggering element delivered by one form submission.

    ``remove`` holds the row key of the remove button that triggered the
    submission, if any. ``row_entities`` records which entity id each submitted
    row key was rendered with; rows without an entry are trusted as-is.
    """

    weights: WeightSubmission = field(default_factory=_frozen_weights)
    triggering_element: str | None = None
    remove: RowKey | None = None
    row_entities: Mapping[RowKey, str] = field(default_factory=_frozen_row_entities)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", _frozen_weights(self.weights))
        object.__setattr__(self, "row_entities", _frozen_row_entities(self.row_entities))

    @property
    def confirms_selection(self) -> bool:
        return self.triggering_element == USE_SELECTED

    def without_weight(self, row_key: RowKey) -> SelectionSubmission:
        """Drop the pending weight of ``row_key`` so it cannot re-place a removed row."""

        remaining = {key: weight for key, weight in self.weights.items() if key != row_key}
        return replace(self, weights=remaining)

    def targets(self, selection: Selection, row_key: RowKey) -> bool:
        """Whether ``row_key`` still holds the entity it was submitted for."""

        expected = self.row_entities.get(row_key)
        item = selection.get(row_key)
        if expected is None or item is None:
            return True
        return item.entity.entity_id == expected

    def current_weights(self, selection: Selection) -> WeightSubmission:
        """Submitted weights minus those aimed at rows that changed hands since rendering."""

        return MappingProxyType(
            {
                key: weight
                for key, weight in self.weights.items()
                if self.targets(selection, key)
            }
        )
