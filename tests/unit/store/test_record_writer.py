"""Unit tests for record output rendering."""

from __future__ import annotations

import io

from ingest.csv_reader import parse_lines
from store.record_writer import write_records
from tests.record_helpers import store_from_lines


def test_write_records_emits_one_line_per_record() -> None:
    """Each record should render as comma-joined fields plus newline."""
    stream = io.BytesIO()

    written = write_records(store_from_lines(["1,a,x", "1,a,y"]), stream)

    assert (written, stream.getvalue()) == (2, b"1,a,x\n1,a,y\n")


def test_write_records_restores_undecodable_bytes() -> None:
    """Bytes decoded with surrogate escapes should be written back verbatim."""
    raw_line = b"k\xfe,v".decode("utf-8", "surrogateescape")
    stream = io.BytesIO()

    write_records(parse_lines([raw_line], "bytes", 8), stream)

    assert stream.getvalue() == b"k\xfe,v\n"
