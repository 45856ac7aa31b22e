"""Unit tests for the ordered merge-join engine."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from core.errors import SortMergeCapacityError, SortMergeJoinError
from ingest.csv_reader import parse_lines
from store.record_store import RecordStore
from transforms.column_comparator import column_value
from transforms.column_sort import sort_by_column
from transforms.merge_join import build_joined_record, merge_join
from tests.record_helpers import store_from_lines


def _sorted_store(lines: list[str], column: int, name: str = "test") -> RecordStore:
    return sort_by_column(store_from_lines(lines, name=name), column)


def test_merge_join_expands_duplicate_right_keys() -> None:
    """Each left row pairs with every right row sharing its key."""
    left = _sorted_store(["1,a", "2,b"], 1)
    right = _sorted_store(["1,x", "1,y", "3,z"], 1)

    output = merge_join(left, 1, right, 1)

    assert sorted(output.lines()) == ["1,a,x", "1,a,y"]


def test_merge_join_disjoint_keys_produce_nothing() -> None:
    """Inner join semantics drop keys present on one side only."""
    left = _sorted_store(["1,a", "2,b"], 1)
    right = _sorted_store(["3,x", "4,y"], 1)

    output = merge_join(left, 1, right, 1)

    assert len(output) == 0


def test_merge_join_removes_join_columns_by_position() -> None:
    """Join columns are removed positionally, other fields keep order."""
    left = _sorted_store(["p,k,q"], 2)
    right = _sorted_store(["r,s,k"], 3)

    output = merge_join(left, 2, right, 3)

    assert output.lines() == ["k,p,q,r,s"]


def test_merge_join_matches_missing_columns_as_empty_key() -> None:
    """Rows lacking the join column cross-join as the empty key."""
    left = _sorted_store(["onlyonefield", "a,b,c"], 3)
    right = _sorted_store(["p,q", "r,s,t"], 3)

    output = merge_join(left, 3, right, 3)

    assert [record.fields for record in output] == [("", "onlyonefield", "p", "q")]


def test_merge_join_output_count_is_sum_of_run_products() -> None:
    """Output size equals the sum of left*right counts per shared key."""
    rng = random.Random(11)
    left_lines = [f"{rng.choice('abcdef')},L{index}" for index in range(120)]
    right_lines = [f"R{index},{rng.choice('cdefgh')}" for index in range(90)]
    left = _sorted_store(left_lines, 1, name="left")
    right = _sorted_store(right_lines, 2, name="right")
    left_counts = Counter(column_value(record, 1) for record in left)
    right_counts = Counter(column_value(record, 2) for record in right)
    expected = sum(left_counts[key] * right_counts[key] for key in left_counts)

    output = merge_join(left, 1, right, 2)

    assert len(output) == expected


def test_merge_join_is_commutative_by_field_multiset() -> None:
    """Swapping sides changes field order but not the joined content."""
    left_lines = ["1,a", "1,b", "2,c", ",d", "4,e"]
    right_lines = ["x,1", "y,2", "z,2", "w", "v,5"]
    forward = merge_join(_sorted_store(left_lines, 1), 1, _sorted_store(right_lines, 2), 2)
    backward = merge_join(_sorted_store(right_lines, 2), 2, _sorted_store(left_lines, 1), 1)

    def _rows(store: RecordStore) -> Counter[tuple[str, ...]]:
        return Counter(tuple(sorted(record.fields)) for record in store)

    assert len(forward) > 0 and _rows(forward) == _rows(backward)


def test_merge_join_output_ascends_by_key() -> None:
    """Output follows the ascending order of the join key."""
    left = _sorted_store(["c,1", "a,2", "b,3", "a,4"], 1)
    right = _sorted_store(["b,x", "a,y", "c,z"], 1)

    output = merge_join(left, 1, right, 1)

    assert [record.fields[0] for record in output] == ["a", "a", "b", "c"]


def test_merge_join_does_not_mutate_inputs() -> None:
    """Inputs are read-only; the join builds a new store."""
    left = _sorted_store(["1,a"], 1)
    right = _sorted_store(["1,b"], 1)

    output = merge_join(left, 1, right, 1)

    assert output is not left and (left.lines(), right.lines()) == (["1,a"], ["1,b"])


def test_merge_join_rejects_unsorted_input() -> None:
    """Unsorted input would silently drop matches, so it is refused."""
    left = store_from_lines(["2,a", "1,b"], name="unsorted")
    right = _sorted_store(["1,x"], 1)

    with pytest.raises(SortMergeJoinError, match="not sorted"):
        merge_join(left, 1, right, 1)


def test_merge_join_allows_output_at_ceiling() -> None:
    """Producing exactly the ceiling is allowed."""
    left = _sorted_store(["k,1", "k,2", "k,3"], 1)
    right = _sorted_store(["k,a", "k,b", "k,c"], 1)

    output = merge_join(left, 1, right, 1, max_output_records=9)

    assert len(output) == 9


def test_merge_join_raises_when_ceiling_exceeded() -> None:
    """Producing more than the ceiling raises a typed capacity error."""
    left = _sorted_store(["k,1", "k,2", "k,3"], 1)
    right = _sorted_store(["k,a", "k,b", "k,c"], 1)

    with pytest.raises(SortMergeCapacityError):
        merge_join(left, 1, right, 1, max_output_records=8)


def test_merge_join_without_ceiling_accepts_large_products() -> None:
    """A disabled ceiling lets the cartesian product grow freely."""
    left = parse_lines([f"k,{index}" for index in range(60)], "left", 8)
    right = parse_lines([f"k,{index}" for index in range(60)], "right", 8)

    output = merge_join(left, 1, right, 1, max_output_records=None)

    assert len(output) == 3600


def test_build_joined_record_reapplies_field_bound() -> None:
    """Combined rows are re-parsed with the configured field bound."""
    left = parse_lines(["k,a,b,c"], "left", 8)[0]
    right = parse_lines(["k,x,y,z"], "right", 8)[0]

    record = build_joined_record(left, 1, right, 1, max_fields=4)

    assert (record.fields, record.line) == (("k", "a", "b", "c"), "k,a,b,c,x,y,z")


def test_merge_join_rejects_zero_column() -> None:
    """Join columns are 1-based."""
    store = _sorted_store(["1,a"], 1)

    with pytest.raises(SortMergeJoinError):
        merge_join(store, 0, store, 1)
