"""Reconcile a selection with the ordering a user submitted.

The submitted weights come from hidden weight fields rendered next to each
selected row. Rows added after the form was rendered have no weight yet; they
are placed after every weighted row, in the order they were added.

None of these functions raise for empty or partial input, and none mutate
their arguments.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from selectipy.domain.model import Selection

if TYPE_CHECKING:
    from selectipy.domain.model import RowKey, Weight, WeightSubmission

log = getLogger(__name__)


def reorder(selection: Selection, submitted_weights: WeightSubmission) -> Selection:
    """Return ``selection`` ordered by ascending submitted weight.

    Rows without a submitted weight get ``max(submitted) + 1``, ``+ 2``, ... in
    selection order. Equal weights keep their original relative order. Weights
    for row keys that are not part of the selection are ignored.
    """

    if not selection or not submitted_weights:
        return selection

    next_weight = max(submitted_weights.values()) + 1
    weights: dict[RowKey, Weight] = {}
    for row_key in selection.keys():
        if row_key in submitted_weights:
            weights[row_key] = submitted_weights[row_key]
        else:
            weights[row_key] = next_weight
            next_weight += 1

    # sorted() is stable, so duplicate weights fall back to selection order
    ordered = sorted(selection, key=lambda item: weights[item.row_key])
    log.debug("Reordered selection: %s -> %s", selection.keys(), [i.row_key for i in ordered])
    return Selection(tuple(ordered))


def remove(selection: Selection, row_key: RowKey) -> Selection:
    """Return ``selection`` without the row ``row_key``; unknown keys are a no-op."""

    if row_key not in selection:
        return selection
    return Selection(tuple(item for item in selection if item.row_key != row_key))


def weights_from(selection: Selection) -> dict[RowKey, Weight]:
    """Positional weights for ``selection``, as rendered into a fresh form."""

    return {item.row_key: position for position, item in enumerate(selection)}


__all__ = ["remove", "reorder", "weights_from"]
