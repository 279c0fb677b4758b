"""Pydantic models describing raw selection form payloads.

A payload looks like::

    {
        "selected": {
            "items_42_0": {"weight": "1"},
            "items_7_1": {"weight": "0"},
        },
        "triggering_element": "use_selected",
    }

Values arrive as strings from HTML forms; pydantic coerces them.
"""

from __future__ import annotations

import re
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

ITEM_KEY_PATTERN: Final = re.compile(r"^items_(?P<entity_id>.+)_(?P<row_key>\d+)$")
REMOVE_BUTTON_PATTERN: Final = re.compile(r"^remove_(?P<entity_id>.+)_(?P<row_key>\d+)$")


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class FormValuesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class SelectedItemValues(FormValuesBaseModel):
    weight: int | None = None

    _normalize_weight = field_validator("weight", mode="before")(_blank_to_none)


class SelectionFormValues(FormValuesBaseModel):
    selected: dict[str, SelectedItemValues] = Field(default_factory=dict)
    triggering_element: str | None = Field(default=None, alias="op")

    _normalize_trigger = field_validator("triggering_element", mode="before")(_blank_to_none)

    @field_validator("selected", mode="before")
    @classmethod
    def _empty_selected(cls, value: object) -> object:
        # an empty container is posted as "" by some form encoders
        return {} if value in ("", None) else value

    @field_validator("selected")
    @classmethod
    def _check_item_keys(
        cls, value: dict[str, SelectedItemValues]
    ) -> dict[str, SelectedItemValues]:
        invalid = sorted(key for key in value if ITEM_KEY_PATTERN.match(key) is None)
        if invalid:
            raise ValueError(f"Unrecognised selection item keys: {', '.join(invalid)}")
        return value
