"""Helpers for safe upload size checks."""

from __future__ import annotations

from os import SEEK_END
from typing import BinaryIO


MULTIPART_OVERHEAD_BYTES = 64 * 1024


def content_length_exceeds_limit(
    content_length_header: str | None,
    *,
    max_size_bytes: int,
    overhead_bytes: int = MULTIPART_OVERHEAD_BYTES,
) -> bool:
    """Return True when Content-Length clearly exceeds the allowed file size."""
    if not content_length_header:
        return False
    try:
        content_length = int(content_length_header)
    except (TypeError, ValueError):
        return False
    return content_length > (max_size_bytes + overhead_bytes)


def stream_size(stream: BinaryIO) -> int:
    """Size of a seekable stream, leaving its position untouched."""
    original_pos = stream.tell()
    try:
        stream.seek(0, SEEK_END)
        return stream.tell()
    finally:
        stream.seek(original_pos)

