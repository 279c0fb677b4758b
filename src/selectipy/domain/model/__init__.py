"""Selection domain model."""

from __future__ import annotations

from .entity import EntityRef
from .selection import RowKey, SelectedItem, Selection, Weight, WeightSubmission

__all__ = [
    "EntityRef",
    "RowKey",
    "SelectedItem",
    "Selection",
    "Weight",
    "WeightSubmission",
]
