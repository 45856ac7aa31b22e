"""Shared typed models.

This module defines immutable data models used by ingest, store,
transform, and pipeline layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Sequence

from core.constants import PIPELINE_INPUT_COUNT
from core.errors import SortMergeUsageError

if TYPE_CHECKING:
    from store.record_store import RecordStore


@dataclass(frozen=True)
class Record:
    """One parsed delimited line.

    Attributes:
        line: Original line without its trailing newline.
        fields: Captured fields, bounded by the configured field limit.
    """

    line: str
    fields: tuple[str, ...]

    @property
    def nfields(self) -> int:
        """Number of captured fields."""
        return len(self.fields)

    def value_at(self, column: int) -> str:
        """Return the 1-based column value, or ``""`` when absent."""
        if column <= len(self.fields):
            return self.fields[column - 1]
        return ""


@dataclass(frozen=True)
class JoinStage:
    """One fixed step of the four-way join topology.

    Attributes:
        name: Stage identifier used in logs and results.
        left_column: 1-based join column on the left input.
        right_column: 1-based join column on the right input.
    """

    name: str
    left_column: int
    right_column: int


@dataclass(frozen=True)
class JoinInputs:
    """Validated source paths for the four-way join.

    Attributes:
        file1: First input, joined with file2 on column 1.
        file2: Second input.
        file3: Third input, joined on column 1 of the first result.
        file4: Fourth input, joined on column 4 of the second result.
    """

    file1: str
    file2: str
    file3: str
    file4: str

    @classmethod
    def from_paths(cls, paths: Sequence[str]) -> "JoinInputs":
        """Build inputs from an ordered path sequence.

        Args:
            paths: Exactly four source paths.

        Returns:
            Typed join inputs.

        Raises:
            SortMergeUsageError: If the path count is not four.
        """
        if len(paths) != PIPELINE_INPUT_COUNT:
            raise SortMergeUsageError(
                f"Expected {PIPELINE_INPUT_COUNT} input files, got {len(paths)}. "
                "Provide file1 file2 file3 file4."
            )
        file1, file2, file3, file4 = (str(path) for path in paths)
        return cls(file1=file1, file2=file2, file3=file3, file4=file4)


@dataclass(frozen=True)
class JoinRunResult:
    """Four-way join output.

    Attributes:
        records: Final joined record store.
        stage_counts: Output record count per stage name, in run order.
    """

    records: "RecordStore"
    stage_counts: Mapping[str, int]
