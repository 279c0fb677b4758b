"""Translate raw selection form payloads into domain submissions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from selectipy.domain.submission import SelectionSubmission

from .schema import ITEM_KEY_PATTERN, REMOVE_BUTTON_PATTERN, SelectionFormValues

if TYPE_CHECKING:
    from collections.abc import Mapping

    from selectipy.domain.model import RowKey, Weight

log = getLogger(__name__)


class InvalidSubmissionError(ValueError):
    """Raised when a posted selection form cannot be interpreted."""


def parse_submission(payload: Mapping[str, object]) -> SelectionSubmission:
    """Validate ``payload`` and convert it into a :class:`SelectionSubmission`."""

    try:
        values = SelectionFormValues.model_validate(payload)
    except ValidationError as exc:
        raise InvalidSubmissionError(f"Invalid selection form payload: {exc}") from exc
    return translate_form_values(values)


def translate_form_values(values: SelectionFormValues) -> SelectionSubmission:
    weights: dict[RowKey, Weight] = {}
    row_entities: dict[RowKey, str] = {}
    for element_key, item in values.selected.items():
        match = ITEM_KEY_PATTERN.match(element_key)
        if match is None:  # pragma: no cover - rejected by the schema
            raise InvalidSubmissionError(f"Unrecognised selection item key: {element_key}")
        row_key = int(match["row_key"])
        row_entities[row_key] = match["entity_id"]
        if item.weight is not None:
            weights[row_key] = item.weight

    trigger = values.triggering_element
    remove: RowKey | None = None
    if trigger is not None:
        remove_match = REMOVE_BUTTON_PATTERN.match(trigger)
        if remove_match is not None:
            remove = int(remove_match["row_key"])
            row_entities[remove] = remove_match["entity_id"]

    log.debug("Parsed submission: %d weight(s), trigger=%s", len(weights), trigger)
    return SelectionSubmission(
        weights=weights, triggering_element=trigger, remove=remove, row_entities=row_entities
    )
