# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from selectipy.adapters.events import CallbackEventDispatcher
from selectipy.app import (
    add_to_selection,
    build_selection_display,
    render_selection_form,
    submit_selection_form,
)
from selectipy.config import configure_logging
from selectipy.domain.events import SelectionDone, SelectionEvent, SelectionEventType
from selectipy.domain.model import EntityRef
from selectipy.domain.submission import USE_SELECTED, SelectionSubmission

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from selectipy.domain.forms import SelectionForm
    from selectipy.domain.model import RowKey, Weight

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage multi-step entity selections")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Show the current selection")
    show.add_argument("session", help="Selection session id")

    add = subparsers.add_parser("add", help="Add an entity to the selection")
    add.add_argument("session", help="Selection session id")
    add.add_argument("entity_type", help="Entity type id, e.g. node")
    add.add_argument("entity_id", help="Entity id")
    add.add_argument("label", nargs="?", default="", help="Label shown for the entity")

    reorder = subparsers.add_parser("reorder", help="Submit new weights for selected rows")
    reorder.add_argument("session", help="Selection session id")
    reorder.add_argument(
        "weights",
        nargs="+",
        metavar="ROW=WEIGHT",
        help="Row key and its new weight; rows left out keep their order at the end",
    )

    remove = subparsers.add_parser("remove", help="Remove one row from the selection")
    remove.add_argument("session", help="Selection session id")
    remove.add_argument("row_key", type=int, help="Row key to remove")

    use = subparsers.add_parser("use", help="Confirm the selection and print it")
    use.add_argument("session", help="Selection session id")

    return parser.parse_args(list(argv))


def _parse_weights(values: Sequence[str]) -> dict[RowKey, Weight]:
    weights: dict[RowKey, Weight] = {}
    for value in values:
        row_key, separator, weight = value.partition("=")
        if not separator:
            raise ValueError(f"Expected ROW=WEIGHT, got {value!r}")
        try:
            weights[int(row_key)] = int(weight)
        except ValueError as exc:
            raise ValueError(f"Row keys and weights must be integers: {value!r}") from exc
    return weights


def _print_form(form: SelectionForm) -> None:
    if not form.items:
        print("Selection is empty")
        return
    for item in form.items:
        print(f"[{item.row_key}] {item.display.markup}")


def _print_done(event: SelectionEvent) -> None:
    if not isinstance(event, SelectionDone):
        return
    for position, entity in enumerate(event.entities, start=1):
        print(f"{position}. {entity.entity_type}:{entity.entity_id} {entity.label}".rstrip())


def _run(args: argparse.Namespace) -> None:
    events = CallbackEventDispatcher()
    events.subscribe(SelectionEventType.DONE, _print_done)
    display = build_selection_display(events=events)

    match args.command:
        case "show":
            _print_form(render_selection_form(args.session, display=display))
        case "add":
            entity = EntityRef(
                entity_type=args.entity_type, entity_id=args.entity_id, label=args.label
            )
            add_to_selection(args.session, [entity])
            _print_form(render_selection_form(args.session, display=display))
        case "reorder":
            submission = SelectionSubmission(weights=_parse_weights(args.weights))
            submit_selection_form(args.session, submission, display=display)
            _print_form(render_selection_form(args.session, display=display))
        case "remove":
            submission = SelectionSubmission(remove=args.row_key)
            submit_selection_form(args.session, submission, display=display)
            _print_form(render_selection_form(args.session, display=display))
        case "use":
            submission = SelectionSubmission(triggering_element=USE_SELECTED)
            outcome = submit_selection_form(args.session, submission, display=display)
            if not outcome.selection:
                print("Selection is empty")
        case _:  # pragma: no cover - argparse restricts choices
            raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Command line entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        args = _parse_args(args_list)
        if args.command == "reorder":
            _parse_weights(args.weights)
        if args.command == "add":
            EntityRef(entity_type=args.entity_type, entity_id=args.entity_id)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        _run(args)
    except Exception:
        log.exception("Command failed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
