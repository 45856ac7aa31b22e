"""Output verification against an expected result file.

Joined output order within a key is unspecified, so both sides are
compared as sorted line multisets rather than in emitted order.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable

from core.constants import (
    SOURCE_ENCODING,
    SOURCE_ENCODING_ERRORS,
    VERIFICATION_DIFF_PREVIEW_LIMIT,
)
from core.errors import SortMergeVerificationError
from core.verification_types import VerificationReport, VerificationStatus

__all__ = [
    "VerificationReport",
    "VerificationStatus",
    "read_expected_lines",
    "render_verification_report",
    "verify_output",
]


def verify_output(actual_lines: Iterable[str], expected_path: str | Path) -> VerificationReport:
    """Compare output lines with the lines of an expected file.

    Args:
        actual_lines: Rendered output lines without terminators.
        expected_path: File holding the expected lines in any order.

    Returns:
        Report listing missing and unexpected lines, each sorted.

    Raises:
        SortMergeVerificationError: If the expected file cannot be read.
    """
    expected = Counter(read_expected_lines(expected_path))
    actual = Counter(actual_lines)
    return VerificationReport(
        expected_path=str(expected_path),
        expected_count=sum(expected.values()),
        actual_count=sum(actual.values()),
        missing_lines=tuple(sorted((expected - actual).elements())),
        unexpected_lines=tuple(sorted((actual - expected).elements())),
    )


def read_expected_lines(expected_path: str | Path) -> list[str]:
    """Read non-empty expected lines with terminators stripped."""
    path = Path(expected_path).expanduser()
    try:
        text = path.read_text(encoding=SOURCE_ENCODING, errors=SOURCE_ENCODING_ERRORS)
    except OSError as error:
        raise SortMergeVerificationError(
            f"Failed to read expected output at {path}: {error.strerror or error}. "
            "Provide an existing expected-output file."
        ) from error
    return [line.rstrip("\r") for line in text.split("\n") if line.rstrip("\r")]


def render_verification_report(report: VerificationReport) -> str:
    """Render report into stable multi-line text for CLI output."""
    lines = [
        f"expected_path={report.expected_path}",
        f"expected_lines={report.expected_count}",
        f"actual_lines={report.actual_count}",
        f"missing_lines={len(report.missing_lines)}",
        f"unexpected_lines={len(report.unexpected_lines)}",
    ]
    for line in report.missing_lines[:VERIFICATION_DIFF_PREVIEW_LIMIT]:
        lines.append(f"< {line}")
    for line in report.unexpected_lines[:VERIFICATION_DIFF_PREVIEW_LIMIT]:
        lines.append(f"> {line}")
    lines.append(f"status={report.status}")
    return "\n".join(lines)
