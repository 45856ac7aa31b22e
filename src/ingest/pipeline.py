"""Four-way join orchestration.

This module drives the fixed join topology: file1 and file2 on column 1,
that result with file3 on column 1, then that result on column 4 with
file4 on column 1. Each consumed store is released once its stage ends.
"""

from __future__ import annotations

import time

from core.config import SortMergeConfig
from core.logging_config import get_logger
from core.types import JoinInputs, JoinRunResult, JoinStage
from ingest.csv_reader import read_record_store
from store.record_store import RecordStore
from transforms.column_sort import sort_by_column
from transforms.merge_join import merge_join

_LOGGER = get_logger(__name__)

FIRST_JOIN = JoinStage(name="join_file1_file2", left_column=1, right_column=1)
SECOND_JOIN = JoinStage(name="join_file3", left_column=1, right_column=1)
FINAL_JOIN = JoinStage(name="join_file4", left_column=4, right_column=1)
JOIN_STAGES = (FIRST_JOIN, SECOND_JOIN, FINAL_JOIN)


class FourWayJoinRunner:
    """Runner for the fixed sequence of sort and merge-join stages."""

    def __init__(self, inputs: JoinInputs, config: SortMergeConfig) -> None:
        self._inputs = inputs
        self._config = config
        self._stage_counts: dict[str, int] = {}

    def run(self) -> JoinRunResult:
        """Execute all three joins and return the final store."""
        file1 = self._load_sorted(self._inputs.file1, FIRST_JOIN.left_column)
        file2 = self._load_sorted(self._inputs.file2, FIRST_JOIN.right_column)
        joined12 = self._join(file1, file2, FIRST_JOIN)

        file3 = self._load_sorted(self._inputs.file3, SECOND_JOIN.right_column)
        sort_by_column(joined12, SECOND_JOIN.left_column)
        joined123 = self._join(joined12, file3, SECOND_JOIN)

        sort_by_column(joined123, FINAL_JOIN.left_column)
        file4 = self._load_sorted(self._inputs.file4, FINAL_JOIN.right_column)
        final = self._join(joined123, file4, FINAL_JOIN)
        return JoinRunResult(records=final, stage_counts=dict(self._stage_counts))

    def _load_sorted(self, source_path: str, column: int) -> RecordStore:
        store = read_record_store(source_path, self._config)
        return sort_by_column(store, column)

    def _join(self, left: RecordStore, right: RecordStore, stage: JoinStage) -> RecordStore:
        started_at = time.monotonic()
        left_count = len(left)
        right_count = len(right)
        output = merge_join(
            left,
            stage.left_column,
            right,
            stage.right_column,
            max_fields=self._config.max_fields,
            max_output_records=self._config.max_output_records,
            stage_name=stage.name,
        )
        left.release()
        right.release()
        self._stage_counts[stage.name] = len(output)
        _log_stage_completion(
            stage, left_count, right_count, len(output), time.monotonic() - started_at
        )
        return output


def run_four_way_join(inputs: JoinInputs, config: SortMergeConfig) -> JoinRunResult:
    """Join four delimited files through the fixed merge-join pipeline.

    Args:
        inputs: Four validated source paths.
        config: Runtime configuration.

    Returns:
        Final joined records and per-stage output counts.

    Raises:
        SortMergeIngestError: If any source cannot be read.
        SortMergeCapacityError: If a stage exceeds the output ceiling.
    """
    runner = FourWayJoinRunner(inputs, config)
    return runner.run()


def _log_stage_completion(
    stage: JoinStage,
    left_count: int,
    right_count: int,
    output_count: int,
    duration_seconds: float,
) -> None:
    """Log one join stage with its record counts."""
    _LOGGER.info(
        "join_stage_completed",
        stage=stage.name,
        left_column=stage.left_column,
        right_column=stage.right_column,
        left_count=left_count,
        right_count=right_count,
        output_count=output_count,
        duration_seconds=round(duration_seconds, 3),
    )
