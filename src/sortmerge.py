"""Public SDK surface for SortMerge.

This module provides a stable import path for library users.
It re-exports the join pipeline, its building blocks, and typed models.
"""

from __future__ import annotations

from core.config import SortMergeConfig
from core.errors import (
    SortMergeCapacityError,
    SortMergeError,
    SortMergeIngestError,
    SortMergeJoinError,
)
from core.types import JoinInputs, JoinRunResult, Record
from ingest.csv_reader import parse_lines, read_record_store
from ingest.pipeline import run_four_way_join
from store.record_store import RecordStore
from store.record_writer import write_records
from transforms.column_comparator import compare_by_column
from transforms.column_sort import sort_by_column
from transforms.merge_join import merge_join

__all__ = [
    "JoinInputs",
    "JoinRunResult",
    "Record",
    "RecordStore",
    "SortMergeCapacityError",
    "SortMergeConfig",
    "SortMergeError",
    "SortMergeIngestError",
    "SortMergeJoinError",
    "compare_by_column",
    "merge_join",
    "parse_lines",
    "read_record_store",
    "run_four_way_join",
    "sort_by_column",
    "write_records",
]
