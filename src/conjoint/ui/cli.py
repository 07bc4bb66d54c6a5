from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from conjoint.adapters.files import RequestFileError
from conjoint.app import disambiguate_files
from conjoint.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from conjoint.adapters.files import ResultReport

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="conjoint",
        description="Disambiguate candidate assertions about a concept",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    disambiguate = subparsers.add_parser(
        "disambiguate",
        help="Find the best consistent interpretations of a request file",
    )
    source = disambiguate.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--ontology",
        type=Path,
        help="JSON file describing the ontology",
    )
    source.add_argument(
        "--remote",
        action="store_true",
        help="Query the ontology service at CONJOINT_ONTOLOGY_URL",
    )
    disambiguate.add_argument(
        "--request",
        type=Path,
        required=True,
        help="JSON file with the focus concept and its candidate assertions",
    )
    disambiguate.add_argument(
        "--top",
        type=_positive_int,
        default=None,
        help="Number of cases to return (defaults to the request file, then config)",
    )
    disambiguate.add_argument(
        "--commit",
        action="store_true",
        help="Assert the best case back into the ontology",
    )
    disambiguate.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    disambiguate.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    return parser.parse_args(list(argv))


def _format_report(report: ResultReport) -> str:
    if not report.cases:
        return f"{report.focus}: no consistent case found"
    lines = [f"{report.focus}: {len(report.cases)} case(s)"]
    for case in report.cases:
        lines.append(f"#{case.rank} {case.standing} weight={case.weight:.4f}")
        for entry in case.assertions:
            marker = "*" if entry.synthesized else " "
            lines.append(f"  {marker} {entry.assertion}")
    if report.committed:
        lines.append(f"committed {report.committed} assertion(s)")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command != "disambiguate":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        run = disambiguate_files(
            request_path=parsed_args.request,
            ontology_path=parsed_args.ontology,
            top_n=parsed_args.top,
            commit=parsed_args.commit,
        )
    except (RequestFileError, ConfigurationError, ValueError):
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during disambiguation")
        sys.exit(1)

    if parsed_args.json:
        sys.stdout.write(run.report.model_dump_json(indent=2) + "\n")
    else:
        sys.stdout.write(_format_report(run.report) + "\n")


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def entrypoint() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    entrypoint()
