"""Delimited source readers for ingestion.

This module loads newline-delimited, comma-delimited files into
record stores. Every non-empty line becomes one bounded record.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from core.config import SortMergeConfig
from core.constants import FIELD_DELIMITER, SOURCE_ENCODING, SOURCE_ENCODING_ERRORS
from core.errors import SortMergeIngestError
from core.logging_config import get_logger
from core.types import Record
from store.record_store import RecordStore

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ParseSummary:
    """Line accounting for one parsed source."""

    record_count: int
    skipped_empty_lines: int
    truncated_lines: int


def read_record_store(source_path: str | Path, config: SortMergeConfig) -> RecordStore:
    """Load a record store from a local delimited file.

    Args:
        source_path: Path to a newline-delimited, comma-delimited file.
        config: Runtime configuration providing the field bound.

    Returns:
        Record store holding one record per non-empty line, in file order.

    Raises:
        SortMergeIngestError: If the file cannot be opened or read.
    """
    path = Path(source_path).expanduser()
    try:
        with path.open(
            "r",
            encoding=SOURCE_ENCODING,
            errors=SOURCE_ENCODING_ERRORS,
            newline="\n",
        ) as source_file:
            store, summary = _parse_with_summary(source_file, str(path), config.max_fields)
    except OSError as error:
        reason = error.strerror or str(error)
        raise SortMergeIngestError(
            f"Failed to read source at {path}: {reason}. "
            "Provide an existing, readable file."
        ) from error
    _LOGGER.debug(
        "source_loaded",
        source=str(path),
        record_count=summary.record_count,
        skipped_empty_lines=summary.skipped_empty_lines,
        truncated_lines=summary.truncated_lines,
    )
    return store


def parse_lines(lines: Iterable[str], source_name: str, max_fields: int) -> RecordStore:
    """Parse raw text lines into a record store.

    Args:
        lines: Lines with or without trailing line terminators.
        source_name: Label attached to the resulting store.
        max_fields: Maximum fields captured per record.

    Returns:
        Record store with empty lines skipped.
    """
    store, _ = _parse_with_summary(lines, source_name, max_fields)
    return store


def parse_record(line: str, max_fields: int) -> Record:
    """Split one line into a bounded record.

    Fields past ``max_fields`` are dropped; the last captured field
    ends at its delimiter. Empty fields keep their position.

    Args:
        line: Line without its terminator.
        max_fields: Maximum fields captured.

    Returns:
        Parsed record keeping the original line.
    """
    pieces = line.split(FIELD_DELIMITER, max_fields)
    return Record(line=line, fields=tuple(pieces[:max_fields]))


def strip_line_terminator(raw_line: str) -> str:
    """Remove the trailing newline and any trailing carriage returns."""
    return raw_line.rstrip("\n").rstrip("\r")


def _parse_with_summary(
    lines: Iterable[str],
    source_name: str,
    max_fields: int,
) -> tuple[RecordStore, ParseSummary]:
    store = RecordStore(source_name)
    skipped = 0
    truncated = 0
    for raw_line in lines:
        line = strip_line_terminator(raw_line)
        if not line:
            skipped += 1
            continue
        record = parse_record(line, max_fields)
        if line.count(FIELD_DELIMITER) >= max_fields:
            truncated += 1
        store.append(record)
    summary = ParseSummary(
        record_count=len(store),
        skipped_empty_lines=skipped,
        truncated_lines=truncated,
    )
    return store, summary
