"""Built-in entity display plugins and their registry."""

from __future__ import annotations

import html
import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from selectipy.domain.ports.rendering import (
    DisplayDefinition,
    DisplayFragment,
    EntityDisplay,
    RenderError,
    SettingsField,
    UnknownDisplayError,
)

if TYPE_CHECKING:
    from selectipy.domain.model import EntityRef

log = getLogger(__name__)

type DisplayFactory = Callable[[Mapping[str, object]], EntityDisplay]

DEFAULT_TEMPLATE = "{label} ({entity_id})"
_TEMPLATE_FIELDS = frozenset({"label", "entity_id", "entity_type"})


@dataclass(slots=True)
class LabelDisplay:
    """Render the entity label, falling back to its id when the label is blank."""

    settings: Mapping[str, object] = field(default_factory=dict[str, object])

    @property
    def plugin_id(self) -> str:
        return "label"

    def view(self, entity: EntityRef) -> DisplayFragment:
        return DisplayFragment(markup=html.escape(entity.label or entity.entity_id))

    def is_applicable(self, entity_type: str) -> bool:
        _ = entity_type
        return True

    def settings_form(self) -> tuple[SettingsField, ...]:
        return ()


@dataclass(slots=True)
class TemplateDisplay:
    """Render entities through a ``str.format`` template.

    Settings:
    - ``template``: format string using ``{label}``, ``{entity_id}`` and ``{entity_type}``
    - ``entity_types``: optional list restricting which entity types the plugin supports
    """

    settings: Mapping[str, object] = field(default_factory=dict[str, object])

    @property
    def plugin_id(self) -> str:
        return "template"

    @property
    def template(self) -> str:
        value = self.settings.get("template", DEFAULT_TEMPLATE)
        return value if isinstance(value, str) and value else DEFAULT_TEMPLATE

    def view(self, entity: EntityRef) -> str:
        unknown = _template_fields(self.template) - _TEMPLATE_FIELDS
        if unknown:
            raise RenderError(
                f"Template for {entity.entity_type}:{entity.entity_id} uses unknown "
                f"placeholders: {', '.join(sorted(unknown))}"
            )
        try:
            return self.template.format(
                label=html.escape(entity.label),
                entity_id=html.escape(entity.entity_id),
                entity_type=html.escape(entity.entity_type),
            )
        except (KeyError, IndexError) as exc:
            raise RenderError(f"Cannot render template {self.template!r}: {exc}") from exc

    def is_applicable(self, entity_type: str) -> bool:
        allowed = self.settings.get("entity_types")
        if not allowed:
            return True
        if isinstance(allowed, str):
            return entity_type == allowed
        if isinstance(allowed, (list, tuple, set, frozenset)):
            return entity_type in allowed
        return False

    def settings_form(self) -> tuple[SettingsField, ...]:
        return (
            SettingsField(
                name="template",
                title="Template",
                default_value=self.template,
                description="Placeholders: {label}, {entity_id}, {entity_type}.",
            ),
        )


def _template_fields(template: str) -> set[str]:
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as exc:
        raise RenderError(f"Invalid display template: {template!r}") from exc
    return {name for _, name, _, _ in parsed if name is not None}


@dataclass(slots=True)
class DisplayRegistry:
    """In-process registry of display plugin factories."""

    _factories: dict[str, DisplayFactory] = field(default_factory=dict[str, DisplayFactory])
    _definitions: dict[str, DisplayDefinition] = field(
        default_factory=dict[str, DisplayDefinition]
    )

    def register(self, definition: DisplayDefinition, factory: DisplayFactory) -> None:
        if definition.plugin_id in self._factories:
            raise ValueError(f"Display plugin already registered: {definition.plugin_id}")
        self._factories[definition.plugin_id] = factory
        self._definitions[definition.plugin_id] = definition

    def definitions(self) -> Mapping[str, DisplayDefinition]:
        return dict(self._definitions)

    def create(self, plugin_id: str, settings: Mapping[str, object] | None = None) -> EntityDisplay:
        factory = self._factories.get(plugin_id)
        if factory is None:
            raise UnknownDisplayError(f"Unknown entity display plugin: {plugin_id}")
        return factory(dict(settings or {}))


def build_default_display_registry() -> DisplayRegistry:
    registry = DisplayRegistry()
    registry.register(
        DisplayDefinition(
            plugin_id="label",
            label="Entity label",
            description="Displays the entity label.",
        ),
        LabelDisplay,
    )
    registry.register(
        DisplayDefinition(
            plugin_id="template",
            label="Template",
            description="Displays entities through a configurable text template.",
        ),
        TemplateDisplay,
    )
    log.debug("Registered display plugins: %s", ", ".join(registry.definitions()))
    return registry


if TYPE_CHECKING:
    from selectipy.domain.ports.rendering import EntityDisplayRegistry

    _label_check: EntityDisplay = LabelDisplay()
    _template_check: EntityDisplay = TemplateDisplay()
    _registry_check: EntityDisplayRegistry = DisplayRegistry()
