"""Record output rendering.

This module writes a record store as delimited lines to a binary stream.
Text is encoded back with the source codec so input bytes round trip.
"""

from __future__ import annotations

from typing import BinaryIO

from core.constants import SOURCE_ENCODING, SOURCE_ENCODING_ERRORS
from store.record_store import RecordStore


def write_records(store: RecordStore, stream: BinaryIO) -> int:
    """Write every record as one comma-joined line.

    Args:
        store: Records to render, in store order.
        stream: Binary destination such as ``sys.stdout.buffer``.

    Returns:
        Number of lines written.
    """
    written = 0
    for line in store.lines():
        stream.write(encode_line(line))
        written += 1
    stream.flush()
    return written


def encode_line(line: str) -> bytes:
    """Encode one output line with its trailing newline."""
    return (line + "\n").encode(SOURCE_ENCODING, SOURCE_ENCODING_ERRORS)
