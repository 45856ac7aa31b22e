"""Column ordering shared by sorting and merge-joins.

Values compare byte-lexicographically on their encoded form, so the
sorter and the merge-join agree on one ordering for every column.
"""

from __future__ import annotations

from typing import Callable

from core.constants import SOURCE_ENCODING, SOURCE_ENCODING_ERRORS
from core.errors import SortMergeJoinError
from core.types import Record


def column_value(record: Record, column: int) -> str:
    """Return the 1-based column value, treating absent columns as empty.

    Args:
        record: Record to read.
        column: 1-based column index.

    Returns:
        Field text, or ``""`` when the record is shorter than ``column``.

    Raises:
        SortMergeJoinError: If ``column`` is below 1.
    """
    validate_column(column)
    return record.value_at(column)


def column_sort_key(column: int) -> Callable[[Record], bytes]:
    """Build a sort key function bound to one column.

    Args:
        column: 1-based column index captured by the key.

    Returns:
        Callable mapping a record onto its comparable byte key.

    Raises:
        SortMergeJoinError: If ``column`` is below 1.
    """
    validate_column(column)

    def _key(record: Record) -> bytes:
        return encode_value(record.value_at(column))

    return _key


def compare_by_column(left: Record, right: Record, column: int) -> int:
    """Three-way compare two records on one column.

    Args:
        left: First record.
        right: Second record.
        column: 1-based column index.

    Returns:
        ``-1``, ``0`` or ``1`` as ``left`` sorts before, with, or after ``right``.
    """
    return compare_values(column_value(left, column), column_value(right, column))


def compare_values(left_value: str, right_value: str) -> int:
    """Three-way compare two field values byte-lexicographically."""
    left_bytes = encode_value(left_value)
    right_bytes = encode_value(right_value)
    if left_bytes < right_bytes:
        return -1
    if left_bytes > right_bytes:
        return 1
    return 0


def encode_value(value: str) -> bytes:
    """Encode a field value into its byte-ordered comparison form."""
    return value.encode(SOURCE_ENCODING, SOURCE_ENCODING_ERRORS)


def validate_column(column: int) -> None:
    """Reject column references below 1."""
    if column < 1:
        raise SortMergeJoinError(
            f"Invalid column {column}: columns are 1-based. Use a column of 1 or more."
        )
