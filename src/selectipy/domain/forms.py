"""Render-neutral form structures produced by the selection display.

These mirror what a web form would contain (containers, hidden weight fields,
buttons) without committing to a template engine; adapters turn them into
markup or terminal output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from selectipy.domain.model import RowKey, Weight
    from selectipy.domain.ports import DisplayFragment, SettingsField


@dataclass(frozen=True, slots=True)
class FormButton:
    name: str
    label: str
    access: bool = True
    attributes: Mapping[str, str] = field(default_factory=dict[str, str])


@dataclass(frozen=True, slots=True)
class SelectionFormItem:
    element_key: str
    row_key: RowKey
    entity_id: str
    display: DisplayFragment
    remove_button: FormButton
    weight: Weight


@dataclass(frozen=True, slots=True)
class SelectionForm:
    items: tuple[SelectionFormItem, ...]
    use_selected: FormButton
    show_selection: FormButton
    hidden: bool = False

    @property
    def container_classes(self) -> tuple[str, ...]:
        return ("entities-list", "hidden") if self.hidden else ("entities-list",)

    def item(self, element_key: str) -> SelectionFormItem | None:
        return next((item for item in self.items if item.element_key == element_key), None)


@dataclass(frozen=True, slots=True)
class ConfigurationForm:
    """Options and current values for configuring the selection display."""

    entity_type: str
    entity_type_options: Mapping[str, str]
    display: str
    display_options: Mapping[str, str]
    display_settings: tuple[SettingsField, ...]
    select_text: str
    selection_hidden: bool
