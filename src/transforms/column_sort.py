"""In-place column sort for record stores."""

from __future__ import annotations

from core.types import Record
from store.record_store import RecordStore
from transforms.column_comparator import column_sort_key, validate_column


def sort_by_column(store: RecordStore, column: int) -> RecordStore:
    """Sort a store ascending on one column without copying records.

    Uses the built-in list sort, which is O(n log n) in the worst case.
    Callers must not rely on the relative order of equal keys.

    Args:
        store: Store to reorder in place.
        column: 1-based column index.

    Returns:
        The same store, now ordered by ``column``.

    Raises:
        SortMergeJoinError: If ``column`` is below 1.
    """
    store.records.sort(key=column_sort_key(column))
    return store


def is_sorted_by_column(store: RecordStore, column: int) -> bool:
    """Return whether no adjacent pair is out of order on ``column``."""
    return find_unsorted_index(store.records, column) is None


def find_unsorted_index(records: list[Record], column: int) -> int | None:
    """Return the first index whose record sorts before its predecessor.

    Args:
        records: Records to scan.
        column: 1-based column index.

    Returns:
        Offending index, or ``None`` when the records are ordered.
    """
    validate_column(column)
    key = column_sort_key(column)
    previous: bytes | None = None
    for index, record in enumerate(records):
        current = key(record)
        if previous is not None and current < previous:
            return index
        previous = current
    return None
