"""SortMerge CLI entry points.
This module exposes the four-way join command.
It maps argparse arguments onto the join pipeline and exit codes.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import sys
from typing import Sequence

from core.config import SortMergeConfig, parse_output_ceiling, parse_positive_int
from core.errors import SortMergeError
from core.logging_config import configure_logging
from core.types import JoinInputs, JoinRunResult
from core.verification import render_verification_report, verify_output
from ingest.pipeline import run_four_way_join
from store.record_writer import write_records


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="sortmerge",
        description=(
            "Join four comma-delimited files: (file1 x file2) on column 1, "
            "then file3 on column 1, then file4 on column 4 of that result."
        ),
    )
    parser.add_argument("file1", help="First input, joined with file2 on column 1")
    parser.add_argument("file2", help="Second input, joined on column 1")
    parser.add_argument("file3", help="Third input, joined on column 1")
    parser.add_argument("file4", help="Fourth input, joined on column 1 against result column 4")
    parser.add_argument(
        "--expected",
        help="Compare sorted output with this file instead of printing records",
    )
    parser.add_argument("--max-fields", help="Override SORTMERGE_MAX_FIELDS for this run")
    parser.add_argument(
        "--max-output-records",
        help="Override SORTMERGE_MAX_OUTPUT_RECORDS for this run ('none' disables)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SortMerge CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        configure_logging(config.log_level)
        inputs = JoinInputs.from_paths([args.file1, args.file2, args.file3, args.file4])
        result = run_four_way_join(inputs, config)
        if args.expected:
            return _run_verification(result, args.expected)
    except SortMergeError as error:
        print(f"{parser.prog}: error: {error}", file=sys.stderr)
        return 1
    write_records(result.records, sys.stdout.buffer)
    return 0


def _build_config(args: argparse.Namespace) -> SortMergeConfig:
    """Build config from the environment with optional CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Validated config.
    """
    config = SortMergeConfig.from_env()
    if args.max_fields is not None:
        config = replace(config, max_fields=parse_positive_int("--max-fields", args.max_fields))
    if args.max_output_records is not None:
        config = replace(
            config,
            max_output_records=parse_output_ceiling(
                "--max-output-records", args.max_output_records
            ),
        )
    return config


def _run_verification(result: JoinRunResult, expected_path: str) -> int:
    """Print the verification report for a finished run.

    Args:
        result: Completed join result.
        expected_path: Expected-output file path.

    Returns:
        Exit code, zero only when output matches.
    """
    report = verify_output(result.records.lines(), expected_path)
    print(render_verification_report(report))
    return 0 if report.status == "passed" else 1
