"""Selection display configuration values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Final

from .env import optional_env_flag, optional_env_var
from .errors import ConfigurationError

DEFAULT_ENTITY_TYPE: Final[str] = "node"
DEFAULT_DISPLAY: Final[str] = "label"
DEFAULT_SELECT_TEXT: Final[str] = "Use selected"


def _frozen_settings(values: Mapping[str, object] | None = None) -> Mapping[str, object]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True, slots=True)
class SelectionDisplayConfig:
    """Settings for the multi-step selection display.

    ``display`` names the entity display plugin used to render each selected
    entity and ``display_settings`` is handed to that plugin when it is created.
    ``entity_type`` is only consulted by display plugins that need to know what
    they are rendering; the selection itself may mix entity types.
    """

    entity_type: str = DEFAULT_ENTITY_TYPE
    display: str = DEFAULT_DISPLAY
    display_settings: Mapping[str, object] = field(default_factory=_frozen_settings)
    select_text: str = DEFAULT_SELECT_TEXT
    selection_hidden: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> SelectionDisplayConfig:
        """Overlay ``values`` on the defaults, validating keys and types."""

        return cls().merged(values)

    def merged(self, values: Mapping[str, object]) -> SelectionDisplayConfig:
        known = {item.name for item in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(f"Unknown selection display settings: {', '.join(unknown)}")

        changes: dict[str, object] = {}
        for key in ("entity_type", "display", "select_text"):
            if key in values:
                changes[key] = _require_text(key, values[key])
        if "selection_hidden" in values:
            hidden = values["selection_hidden"]
            # 0/1 are accepted for parity with checkbox values
            if isinstance(hidden, bool) or hidden in (0, 1):
                changes["selection_hidden"] = bool(hidden)
            else:
                raise ConfigurationError(f"selection_hidden must be a boolean, got {hidden!r}")
        if "display_settings" in values:
            settings = values["display_settings"]
            if not isinstance(settings, Mapping):
                raise ConfigurationError("display_settings must be a mapping")
            changes["display_settings"] = _frozen_settings(settings)  # pyright: ignore[reportUnknownArgumentType]
        return replace(self, **changes)  # pyright: ignore[reportArgumentType]

    def plugin_settings(self) -> dict[str, object]:
        """Settings passed to the display plugin, including the entity type."""

        return {**self.display_settings, "entity_type": self.entity_type}


def _require_text(key: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{key} must be a non-empty string")
    return value


def get_selection_display_config() -> SelectionDisplayConfig:
    overrides: dict[str, object] = {}
    for key, env_name in (
        ("entity_type", "SELECTIPY_ENTITY_TYPE"),
        ("display", "SELECTIPY_DISPLAY"),
        ("select_text", "SELECTIPY_SELECT_TEXT"),
    ):
        value = optional_env_var(env_name)
        if value is not None:
            overrides[key] = value
    hidden = optional_env_flag("SELECTIPY_SELECTION_HIDDEN")
    if hidden is not None:
        overrides["selection_hidden"] = hidden
    return SelectionDisplayConfig.from_mapping(overrides)
