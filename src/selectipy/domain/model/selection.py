"""Selection value objects.

A :class:`Selection` is an immutable, ordered collection of
:class:`SelectedItem` rows. Every operation that changes a selection returns
a new instance; callers commit the result to a store explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from .entity import EntityRef  # noqa: TC001 # dataclass field type

type RowKey = int
type Weight = int
type WeightSubmission = Mapping[RowKey, Weight]


@dataclass(frozen=True, slots=True)
class SelectedItem:
    """One row of a selection.

    The row key tells apart repeated selections of the same entity, so the
    identity of a row is ``(entity.entity_id, row_key)``.
    """

    row_key: RowKey
    entity: EntityRef

    @property
    def identity(self) -> tuple[str, RowKey]:
        return (self.entity.entity_id, self.row_key)


@dataclass(frozen=True, slots=True)
class Selection:
    """Ordered selection of entities, indexed by row key."""

    items: tuple[SelectedItem, ...] = ()
    _index: dict[RowKey, SelectedItem] = field(
        init=False, repr=False, compare=False, default_factory=dict[RowKey, SelectedItem]
    )

    def __post_init__(self) -> None:
        items = tuple(self.items)
        object.__setattr__(self, "items", items)
        for item in items:
            if item.row_key in self._index:
                raise ValueError(f"Duplicate row key in selection: {item.row_key}")
            self._index[item.row_key] = item

    @classmethod
    def from_entities(cls, entities: Iterable[EntityRef]) -> Selection:
        """Seed a selection (e.g. a preselection) with row keys ``0..n-1``."""

        return cls(tuple(SelectedItem(row_key, entity) for row_key, entity in enumerate(entities)))

    def __iter__(self) -> Iterator[SelectedItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    def __contains__(self, row_key: object) -> bool:
        return row_key in self._index

    def get(self, row_key: RowKey) -> SelectedItem | None:
        return self._index.get(row_key)

    def keys(self) -> tuple[RowKey, ...]:
        return tuple(item.row_key for item in self.items)

    def entities(self) -> tuple[EntityRef, ...]:
        return tuple(item.entity for item in self.items)

    def next_row_key(self) -> RowKey:
        return max(self._index, default=-1) + 1

    def append(self, entity: EntityRef) -> Selection:
        """Return a copy with ``entity`` added at the end under a fresh row key."""

        return Selection((*self.items, SelectedItem(self.next_row_key(), entity)))

    def extend(self, entities: Iterable[EntityRef]) -> Selection:
        selection = self
        for entity in entities:
            selection = selection.append(entity)
        return selection
