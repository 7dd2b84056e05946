"""CLI entry point for the candidate grid."""

import argparse
import logging
import sys

from candidate_grid.core.config import Settings
from candidate_grid.core.registry import OPERATOR_LABELS, columns_of
from candidate_grid.engine.session import TableSession

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Candidate grid - search, filter, sort and export candidate records",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- view subcommand (default) ---
    view_parser = subparsers.add_parser("view", help="Print the filtered, sorted view")
    view_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    view_parser.add_argument(
        "--search", "-s",
        default="",
        help="Free-text query matched against every field",
    )
    view_parser.add_argument(
        "--filter", "-f",
        dest="filters",
        action="append",
        default=[],
        metavar="COLUMN:OPERATOR[:VALUE]",
        help="Filter condition; repeat for AND (e.g. annualSalaryExpectation:greater_than:70000)",
    )
    view_parser.add_argument(
        "--sort",
        dest="sorts",
        action="append",
        default=[],
        metavar="KEY",
        help="Sort by column key; repeat the same key to sort descending",
    )
    view_parser.add_argument(
        "--export",
        choices=["csv", "json"],
        help="Output format (default: from settings, csv)",
    )
    view_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- columns subcommand ---
    columns_parser = subparsers.add_parser("columns", help="List columns and their operators")
    columns_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- check-rank subcommand ---
    rank_parser = subparsers.add_parser(
        "check-rank",
        help="Check whether a rank is free for a record",
    )
    rank_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    rank_parser.add_argument("--rank", type=int, required=True, help="Candidate rank")
    rank_parser.add_argument(
        "--exclude",
        default=None,
        metavar="ID",
        help="Record id being updated (its own rank does not conflict)",
    )
    rank_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # Default to view when no subcommand given
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or (argv[0] not in subparsers.choices and argv[0] not in ("-h", "--help")):
        argv = ["view", *argv]

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_filter(spec: str) -> tuple[str, str, str]:
    """Split ``COLUMN:OPERATOR[:VALUE]``; the value may itself contain colons."""
    parts = spec.split(":", 2)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        msg = f"Invalid filter '{spec}', expected COLUMN:OPERATOR[:VALUE]"
        raise ValueError(msg)
    value = parts[2] if len(parts) == 3 else ""
    return parts[0], parts[1], value


def cmd_view(args: argparse.Namespace) -> None:
    """Handle view subcommand."""
    settings = Settings.from_yaml(args.config)
    session = TableSession.from_settings(settings)

    session.set_query(args.search)
    for spec in args.filters:
        column, operator, value = parse_filter(spec)
        condition = session.add_filter(column, operator, value)
        if not condition.is_active:
            logger.warning("Filter '%s' has no value and will be ignored", spec)
    for key in args.sorts:
        session.request_sort(key)

    rows = session.visible()
    logger.info("Showing %d of %d rows", len(rows), len(session.records))
    print(session.export(args.export))


def cmd_columns(args: argparse.Namespace) -> None:
    """Handle columns subcommand."""
    for column in columns_of():
        operators = ", ".join(OPERATOR_LABELS[column.type])
        print(f"{column.key:<26} {column.label:<28} {column.type:<8} {operators}")


def cmd_check_rank(args: argparse.Namespace) -> bool:
    """Handle check-rank subcommand. Returns True if the rank is valid."""
    settings = Settings.from_yaml(args.config)
    session = TableSession.from_settings(settings)
    valid = session.is_rank_valid(args.rank, args.exclude)
    print("valid" if valid else "invalid")
    return valid


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "columns":
        cmd_columns(args)
    elif args.command == "check-rank":
        try:
            valid = cmd_check_rank(args)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if not valid:
            sys.exit(1)
    else:
        # view (default)
        try:
            cmd_view(args)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
