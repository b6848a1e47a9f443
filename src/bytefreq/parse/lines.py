from __future__ import annotations

from typing import BinaryIO, Iterator

ENCODING = "utf-8"


def _decode(raw: bytes) -> str:
    return raw.decode(ENCODING, errors="replace")


def iter_text_chunks(stream: BinaryIO) -> Iterator[str]:
    """Yield decoded lines with their terminators kept."""
    for raw in stream:
        yield _decode(raw)


def iter_lines(stream: BinaryIO) -> Iterator[str]:
    """Yield decoded lines without ``\\n`` / ``\\r\\n`` terminators.

    Invalid UTF-8 is replaced rather than raised; a trailing line without a
    terminator is still yielded. Read errors from ``stream`` propagate.
    """
    for raw in stream:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        yield _decode(raw)
