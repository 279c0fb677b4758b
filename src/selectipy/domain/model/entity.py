"""References to entities picked by a user."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EntityRef:
    """Opaque pointer to a host entity.

    Selectipy never loads or mutates the entity itself; ``label`` is carried
    along so displays can render something without a lookup.
    """

    entity_type: str
    entity_id: str
    label: str = ""

    def __post_init__(self) -> None:
        if not self.entity_type:
            raise ValueError("Entity reference requires an entity type")
        if not self.entity_id:
            raise ValueError("Entity reference requires an entity id")
