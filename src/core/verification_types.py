"""Typed models for output verification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

VerificationStatus = Literal["passed", "failed"]


@dataclass(frozen=True)
class VerificationReport:
    """Comparison of joined output lines against an expected file."""

    expected_path: str
    expected_count: int
    actual_count: int
    missing_lines: tuple[str, ...]
    unexpected_lines: tuple[str, ...]

    @property
    def status(self) -> VerificationStatus:
        """Overall result of the comparison."""
        if self.missing_lines or self.unexpected_lines:
            return "failed"
        return "passed"
