#!/usr/bin/env python3
"""
Contribution planner CLI - allocation, purchases and retirement outlook.

Usage:
    nestegg
    python -m nestegg.cli.plan --data portfolio.yaml -v
"""

import argparse
import logging
import sys
from typing import Optional

from ..config.validator import (
    DEFAULT_DATA_PATH,
    SnapshotValidationError,
    load_snapshot,
    validate_snapshot_file,
)
from ..portfolio.rebalancer import ContributionRebalancer
from ..reporting.formatter import ReportFormatter
from ..reporting.sink import ReportSink, StreamSink
from ..retirement.projector import project_snapshot
from ..utils.logging import LogContext, setup_logging

logger = logging.getLogger(__name__)


def run_plan(data_path: str = DEFAULT_DATA_PATH, sink: Optional[ReportSink] = None) -> list[str]:
    """
    Load the portfolio, compute all three reports and write them to the sink.

    Nothing is written unless the input loads cleanly.

    Args:
        data_path: Path to the portfolio document
        sink: Report destination (default: stdout)

    Returns:
        The report lines that were written

    Raises:
        FileNotFoundError: If the data file doesn't exist
        OSError: If the data file can't be read
        SnapshotValidationError: If the data file is malformed
    """
    sink = sink or StreamSink()

    with LogContext(data_file=str(data_path)):
        snapshot = load_snapshot(data_path)

        plan = ContributionRebalancer.from_snapshot(snapshot).plan()
        projection = project_snapshot(snapshot)

        lines = ReportFormatter().render(snapshot, plan, projection)
        sink.write_lines(lines)

    return lines


def check_data(data_path: str) -> int:
    """Validate the data file and print the outcome. Returns an exit code."""
    result = validate_snapshot_file(data_path)

    for warning in result.warnings:
        print(f"Warning: {warning}")

    if not result.valid:
        for error in result.errors:
            print(f"Error: {error}")
        return 1

    print(f"{data_path} is valid")
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the planner CLI."""
    parser = argparse.ArgumentParser(
        description="Plan where to put a contribution and check retirement progress",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read data.json from the current directory
  nestegg

  # YAML input with debug logging
  nestegg --data portfolio.yaml -v

  # Only validate the input file
  nestegg --data portfolio.json --check
        """,
    )
    parser.add_argument(
        "--data",
        type=str,
        default=DEFAULT_DATA_PATH,
        help=f"Portfolio data file, .json or .yaml (default: {DEFAULT_DATA_PATH})",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the data file and exit",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log record format on stderr (default: text)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    setup_logging(
        level="DEBUG" if args.verbose else "WARNING",
        log_file=args.log_file,
        json_format=args.log_format == "json",
    )

    try:
        if args.check:
            sys.exit(check_data(args.data))
        run_plan(args.data)
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        sys.exit(130)
    except (OSError, SnapshotValidationError) as e:
        logger.error(f"Could not load portfolio data: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
