"""In-memory record store for one source or join stage.

A store owns its records exclusively. Sorting reorders it in place;
every merge-join builds a new store and never mutates its inputs.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from core.constants import FIELD_DELIMITER
from core.types import Record


class RecordStore:
    """Ordered, owned sequence of records from a single source."""

    def __init__(self, source_name: str, records: Iterable[Record] = ()) -> None:
        self._source_name = source_name
        self._records: list[Record] = list(records)

    @property
    def source_name(self) -> str:
        """Source path or stage name the records came from."""
        return self._source_name

    @property
    def records(self) -> list[Record]:
        """Mutable backing list, reordered in place by the sorter."""
        return self._records

    def append(self, record: Record) -> None:
        """Append one record to the end of the store."""
        self._records.append(record)

    def release(self) -> None:
        """Drop all held records once the consuming stage is finished."""
        self._records = []

    def lines(self) -> list[str]:
        """Return each record's fields rejoined with the delimiter."""
        return [FIELD_DELIMITER.join(record.fields) for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __getitem__(self, index: int) -> Record:
        return self._records[index]

    def __repr__(self) -> str:
        return f"RecordStore(source_name={self._source_name!r}, size={len(self._records)})"
