"""Multi-step selection display.

Shows the entities picked so far as an ordered list, lets the user reorder
rows (hidden weight fields) and remove rows (one button per row), and hands
the final ordered selection to the host through a ``SelectionDone`` event.

The display never stores anything itself: every operation takes the current
:class:`Selection` and returns the new one inside a :class:`SubmitOutcome`.
Committing it to a store is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from selectipy.config.display import SelectionDisplayConfig
from selectipy.domain.events import SelectionDone
from selectipy.domain.forms import ConfigurationForm, FormButton, SelectionForm, SelectionFormItem
from selectipy.domain.ports.rendering import DisplayFragment
from selectipy.domain.reconciliation import remove, reorder, weights_from
from selectipy.domain.submission import SHOW_SELECTION, USE_SELECTED

if TYPE_CHECKING:
    from collections.abc import Mapping

    from selectipy.domain.model import RowKey, SelectedItem, Selection
    from selectipy.domain.ports import (
        EntityDisplay,
        EntityDisplayRegistry,
        EntityTypeRegistry,
        SelectionEventDispatcher,
    )
    from selectipy.domain.submission import SelectionSubmission

log = getLogger(__name__)

REMOVE_LABEL = "Remove"
SHOW_SELECTION_LABEL = "Show selected"


def item_element_key(entity_id: str, row_key: RowKey) -> str:
    return f"items_{entity_id}_{row_key}"


def remove_button_name(entity_id: str, row_key: RowKey) -> str:
    return f"remove_{entity_id}_{row_key}"


@dataclass(frozen=True, slots=True)
class SubmitOutcome:
    """Result of handling one submission.

    ``rebuild`` asks the caller to render the form again; ``done`` means the
    selection was confirmed and a ``SelectionDone`` event was dispatched.
    """

    selection: Selection
    rebuild: bool = False
    done: bool = False


class MultiStepDisplay:
    """Selection display that accumulates entities across several steps."""

    plugin_id = "multi_step_display"
    label = "Multi step selection display"
    accepts_preselection = True

    def __init__(
        self,
        *,
        displays: EntityDisplayRegistry,
        entity_types: EntityTypeRegistry,
        events: SelectionEventDispatcher,
        config: SelectionDisplayConfig | None = None,
    ) -> None:
        self.displays = displays
        self.entity_types = entity_types
        self.events = events
        self.config = config or SelectionDisplayConfig()

    @staticmethod
    def default_configuration() -> SelectionDisplayConfig:
        return SelectionDisplayConfig()

    # Selection form ---------------------------------------------------------

    def get_form(self, selection: Selection) -> SelectionForm:
        """Build the selection form for ``selection``.

        ``RenderError`` raised by the display plugin propagates unchanged.
        """

        weights = weights_from(selection)
        items = tuple(self._build_item(item, weights[item.row_key]) for item in selection)
        has_selection = bool(selection)
        return SelectionForm(
            items=items,
            use_selected=FormButton(
                name=USE_SELECTED, label=self.config.select_text, access=has_selection
            ),
            show_selection=FormButton(
                name=SHOW_SELECTION,
                label=SHOW_SELECTION_LABEL,
                access=has_selection,
                attributes={"class": "entity-browser-show-selection"},
            ),
            hidden=self.config.selection_hidden,
        )

    def _build_item(self, item: SelectedItem, weight: int) -> SelectionFormItem:
        entity_id = item.entity.entity_id
        return SelectionFormItem(
            element_key=item_element_key(entity_id, item.row_key),
            row_key=item.row_key,
            entity_id=entity_id,
            display=self._render(item),
            remove_button=FormButton(
                name=remove_button_name(entity_id, item.row_key),
                label=REMOVE_LABEL,
                attributes={
                    "data-row-id": str(item.row_key),
                    "data-remove-entity": f"items_{entity_id}",
                },
            ),
            weight=weight,
        )

    def _render(self, item: SelectedItem) -> DisplayFragment:
        display = self._display_plugin()
        rendered = display.view(item.entity)
        if isinstance(rendered, str):
            return DisplayFragment(markup=rendered)
        return rendered

    def _display_plugin(self) -> EntityDisplay:
        return self.displays.create(self.config.display, self.config.plugin_settings())

    # Submission handling ----------------------------------------------------

    def handle(self, selection: Selection, submission: SelectionSubmission) -> SubmitOutcome:
        """Route a submission to the remove handler or the regular submit handler."""

        if submission.remove is not None:
            return self.remove_item_submit(selection, submission)
        return self.submit(selection, submission)

    def submit(self, selection: Selection, submission: SelectionSubmission) -> SubmitOutcome:
        ordered = reorder(selection, submission.current_weights(selection))
        if not submission.confirms_selection:
            return SubmitOutcome(selection=ordered)
        if not ordered:
            log.debug("Confirmation submitted for an empty selection; ignoring")
            return SubmitOutcome(selection=ordered)
        self.selection_done(ordered)
        return SubmitOutcome(selection=ordered, done=True)

    def remove_item_submit(
        self, selection: Selection, submission: SelectionSubmission
    ) -> SubmitOutcome:
        row_key = submission.remove
        if row_key is None:
            ordered = reorder(selection, submission.current_weights(selection))
            return SubmitOutcome(selection=ordered, rebuild=True)

        pending = submission.without_weight(row_key)
        if not submission.targets(selection, row_key):
            # the row key was reused for another entity after the form was rendered
            log.debug("Row %s no longer holds the submitted entity; ignoring remove", row_key)
            ordered = reorder(selection, pending.current_weights(selection))
            return SubmitOutcome(selection=ordered, rebuild=True)

        remaining = remove(selection, row_key)
        if len(remaining) == len(selection):
            log.debug("Remove requested for unknown row %s; ignoring", row_key)
        else:
            log.debug("Removed row %s from selection", row_key)
        return SubmitOutcome(
            selection=reorder(remaining, pending.current_weights(remaining)), rebuild=True
        )

    def selection_done(self, selection: Selection) -> None:
        entities = selection.entities()
        log.info("Selection done with %d entities", len(entities))
        self.events.dispatch(SelectionDone(entities=entities))

    # Configuration form -----------------------------------------------------

    def build_configuration_form(
        self, values: Mapping[str, object] | None = None
    ) -> ConfigurationForm:
        """Build the configuration form, preferring submitted ``values`` over stored ones."""

        current = self.config.merged(values or {})
        entity_type_options = dict(self.entity_types.definitions())

        display_options: dict[str, str] = {}
        for plugin_id, definition in self.displays.definitions().items():
            if self.displays.create(plugin_id).is_applicable(current.entity_type):
                display_options[plugin_id] = definition.label

        settings_plugin = self.displays.create(current.display, current.plugin_settings())
        return ConfigurationForm(
            entity_type=current.entity_type,
            entity_type_options=entity_type_options,
            display=current.display,
            display_options=display_options,
            display_settings=settings_plugin.settings_form(),
            select_text=current.select_text,
            selection_hidden=current.selection_hidden,
        )

    def submit_configuration(self, values: Mapping[str, object]) -> SelectionDisplayConfig:
        """Validate ``values`` and adopt them as the display configuration."""

        updated = self.config.merged(values)
        # make sure the chosen display plugin exists before accepting it
        self.displays.create(updated.display, updated.plugin_settings())
        self.config = updated
        log.info("Updated selection display configuration: display=%s", updated.display)
        return updated
