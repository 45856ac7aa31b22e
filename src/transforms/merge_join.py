"""Ordered merge-join of two column-sorted record stores.

Both inputs must already be sorted ascending on their join columns
with the shared column comparator. The join walks both stores once,
expanding every matching key run into its cartesian product.
"""

from __future__ import annotations

from core.constants import DEFAULT_MAX_FIELDS, DEFAULT_MAX_OUTPUT_RECORDS, FIELD_DELIMITER
from core.errors import SortMergeCapacityError, SortMergeJoinError
from core.types import Record
from ingest.csv_reader import parse_record
from store.record_store import RecordStore
from transforms.column_comparator import column_sort_key, validate_column


def merge_join(
    left: RecordStore,
    left_column: int,
    right: RecordStore,
    right_column: int,
    *,
    max_fields: int = DEFAULT_MAX_FIELDS,
    max_output_records: int | None = DEFAULT_MAX_OUTPUT_RECORDS,
    stage_name: str = "merge_join",
) -> RecordStore:
    """Inner-join two sorted stores on one column each.

    Every output record holds the join key, then the left fields without
    the left join column, then the right fields without the right join
    column. Output is ascending by key; within a key, pairs are emitted
    left-major.

    Args:
        left: Store sorted on ``left_column``.
        left_column: 1-based join column of ``left``.
        right: Store sorted on ``right_column``.
        right_column: 1-based join column of ``right``.
        max_fields: Field bound applied when re-parsing output lines.
        max_output_records: Output ceiling, or ``None`` for no limit.
        stage_name: Label for the output store and error messages.

    Returns:
        New store with one record per matching left/right pair.

    Raises:
        SortMergeJoinError: If a column is invalid or an input is unsorted.
        SortMergeCapacityError: If output would exceed ``max_output_records``.
    """
    validate_column(left_column)
    validate_column(right_column)
    left_keys = _sorted_keys(left, left_column, stage_name)
    right_keys = _sorted_keys(right, right_column, stage_name)
    output = RecordStore(stage_name)
    i = 0
    j = 0
    while i < len(left_keys) and j < len(right_keys):
        if left_keys[i] < right_keys[j]:
            i += 1
            continue
        if left_keys[i] > right_keys[j]:
            j += 1
            continue
        left_end = _run_end(left_keys, i)
        right_end = _run_end(right_keys, j)
        for left_index in range(i, left_end):
            for right_index in range(j, right_end):
                _check_capacity(output, max_output_records, stage_name)
                output.append(
                    build_joined_record(
                        left[left_index],
                        left_column,
                        right[right_index],
                        right_column,
                        max_fields,
                    )
                )
        i = left_end
        j = right_end
    return output


def build_joined_record(
    left: Record,
    left_column: int,
    right: Record,
    right_column: int,
    max_fields: int,
) -> Record:
    """Combine one matching pair into a bounded output record.

    Args:
        left: Left record.
        left_column: 1-based join column removed from ``left``.
        right: Right record.
        right_column: 1-based join column removed from ``right``.
        max_fields: Field bound for the combined record.

    Returns:
        Record for ``key, left-rest..., right-rest...``.
    """
    tokens = [left.value_at(left_column)]
    tokens.extend(_fields_without(left, left_column))
    tokens.extend(_fields_without(right, right_column))
    return parse_record(FIELD_DELIMITER.join(tokens), max_fields)


def _fields_without(record: Record, column: int) -> list[str]:
    """Return fields in order, skipping the 1-based ``column`` position."""
    return [value for position, value in enumerate(record.fields, 1) if position != column]


def _sorted_keys(store: RecordStore, column: int, stage_name: str) -> list[bytes]:
    """Compute comparison keys and verify ascending order."""
    key = column_sort_key(column)
    keys = [key(record) for record in store]
    for index in range(1, len(keys)):
        if keys[index] < keys[index - 1]:
            raise SortMergeJoinError(
                f"Merge-join {stage_name} input {store.source_name} is not sorted on "
                f"column {column} (record {index + 1} precedes record {index}). "
                "Sort both inputs on their join columns before joining."
            )
    return keys


def _run_end(keys: list[bytes], start: int) -> int:
    """Return the index one past the run of keys equal to ``keys[start]``."""
    end = start + 1
    while end < len(keys) and keys[end] == keys[start]:
        end += 1
    return end


def _check_capacity(
    output: RecordStore,
    max_output_records: int | None,
    stage_name: str,
) -> None:
    if max_output_records is not None and len(output) >= max_output_records:
        raise SortMergeCapacityError(
            f"Merge-join {stage_name} exceeded the output ceiling of "
            f"{max_output_records} records. Raise SORTMERGE_MAX_OUTPUT_RECORDS "
            "or reduce duplicate join keys."
        )
