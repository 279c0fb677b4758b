"""Ports for rendering selected entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from selectipy.domain.model import EntityRef


class RenderError(RuntimeError):
    """Raised by an entity display when an entity cannot be rendered."""


class UnknownDisplayError(LookupError):
    """Raised when a display plugin id is not registered."""


@dataclass(frozen=True, slots=True)
class DisplayFragment:
    """Rendered representation of one entity, ready to be embedded as markup."""

    markup: str


@dataclass(frozen=True, slots=True)
class DisplayDefinition:
    plugin_id: str
    label: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class SettingsField:
    """Descriptor for one field of a display plugin's settings form."""

    name: str
    title: str
    field_type: str = "textfield"
    default_value: object = None
    description: str = ""


@runtime_checkable
class EntityDisplay(Protocol):
    """Turns a selected entity into a display fragment."""

    @property
    def plugin_id(self) -> str: ...

    def view(self, entity: EntityRef) -> DisplayFragment | str: ...

    def is_applicable(self, entity_type: str) -> bool: ...

    def settings_form(self) -> tuple[SettingsField, ...]: ...


@runtime_checkable
class EntityDisplayRegistry(Protocol):
    """Lookup and factory for entity display plugins."""

    def definitions(self) -> Mapping[str, DisplayDefinition]: ...

    def create(self, plugin_id: str, settings: Mapping[str, object] | None = None) -> EntityDisplay:
        ...


@runtime_checkable
class EntityTypeRegistry(Protocol):
    """Known entity types keyed by id, mapped to human readable labels."""

    def definitions(self) -> Mapping[str, str]: ...
