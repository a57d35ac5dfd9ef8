#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from routeplanner.app import (
    apply_mapping,
    build_import_job_service,
    list_unmapped_suggestions,
    resolve_company_id,
    suggest_routes,
)
from routeplanner.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from routeplanner.domain.ingest_pipeline import ImportSummary
    from routeplanner.domain.routing import SuggestionResult
    from routeplanner.jobs import ImportJobService

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan hauls between cities")
    subparsers = parser.add_subparsers(dest="command", required=True)

    importer = subparsers.add_parser("import", help="Import feeds and reconcile companies")
    importer.add_argument(
        "--path",
        type=Path,
        help="Import directory holding definitions.json (defaults to the detected one)",
    )
    importer.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help="Seconds between progress polls (default: %(default)s)",
    )

    subparsers.add_parser("clear", help="Delete every imported row")
    subparsers.add_parser("unmapped", help="List unmapped companies with candidates")

    mapper = subparsers.add_parser("map", help="Map an unmapped company onto another one")
    mapper.add_argument("alias_key", help="Key of the unmapped company or alias")
    mapper.add_argument("target", help="Target company id or key")

    suggest = subparsers.add_parser("suggest", help="Suggest hauls between two cities")
    suggest.add_argument("start", help="Start city")
    suggest.add_argument("target", help="Target city")

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if args.command == "import" and args.poll_interval <= 0:
        raise ValueError("Poll interval must be positive")
    if args.command == "map" and not args.alias_key.strip():
        raise ValueError("Alias key must not be empty")


def _run_import(service: ImportJobService, path: Path | None, poll_interval: float) -> None:
    result = service.start_full_import(path)
    if not result.started:
        raise RuntimeError(result.message)

    cursor = 0
    while True:
        idle = service.wait_until_idle(poll_interval)
        status = service.get_status(cursor)
        for line in status.logs.lines:
            print(line)
        cursor = status.logs.next_cursor
        if idle and not status.is_running:
            break

    if status.needs_manual_input:
        raise RuntimeError(f"{status.last_error} (use --path)")
    if status.last_error is not None:
        raise RuntimeError(status.last_error)
    if status.last_summary is not None:
        _print_summary(status.last_summary)


def _print_summary(summary: ImportSummary) -> None:
    for name, value in summary.as_dict().items():
        print(f"{name}: {value}")


def _print_unmapped() -> None:
    suggestions = list_unmapped_suggestions()
    if not suggestions:
        print("No unmapped companies.")
        return
    for suggestion in suggestions:
        print(f"{suggestion.alias_key} ({suggestion.display_name})")
        for candidate in suggestion.candidates:
            print(f"    {candidate.score:.2f}  {candidate.key}  {candidate.company_id}")


def _print_suggestions(result: SuggestionResult) -> None:
    if result.start_city is None:
        print(f"Unknown start city. Did you mean: {', '.join(result.start_hints) or '-'}")
    if result.target_city is None:
        print(f"Unknown target city. Did you mean: {', '.join(result.target_hints) or '-'}")
    if not result.resolved:
        return
    if not result.suggestions:
        print(f"No hauls from {result.start_city} to {result.target_city}.")
        return
    for suggestion in result.suggestions:
        print(
            f"{suggestion.start_company} -> {suggestion.cargo_type} -> "
            f"{suggestion.target_company}"
        )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        configure_logging()
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        sys.exit(2)
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "import":
            with build_import_job_service() as service:
                _run_import(service, parsed_args.path, parsed_args.poll_interval)
        elif parsed_args.command == "clear":
            with build_import_job_service() as service:
                service.clear_store()
            print("Store cleared.")
        elif parsed_args.command == "unmapped":
            _print_unmapped()
        elif parsed_args.command == "map":
            target_id = resolve_company_id(parsed_args.target)
            apply_mapping(parsed_args.alias_key.strip(), target_id)
            print(f"Mapped {parsed_args.alias_key.strip()} onto {parsed_args.target}.")
        elif parsed_args.command == "suggest":
            _print_suggestions(suggest_routes(parsed_args.start, parsed_args.target))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
