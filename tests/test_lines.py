from __future__ import annotations

import io

import pytest

from bytefreq.parse.lines import iter_lines, iter_text_chunks


def test_iter_lines_strips_terminators() -> None:
    stream = io.BytesIO(b"a|b\r\nc|d\n\nlast")
    assert list(iter_lines(stream)) == ["a|b", "c|d", "", "last"]


def test_iter_lines_decodes_lossily() -> None:
    stream = io.BytesIO(b"\xffabc\ncaf\xc3\xa9\n")
    assert list(iter_lines(stream)) == ["\ufffdabc", "caf\u00e9"]


def test_iter_text_chunks_keeps_terminators() -> None:
    stream = io.BytesIO(b"x\r\ny")
    assert list(iter_text_chunks(stream)) == ["x\r\n", "y"]


def test_read_errors_propagate() -> None:
    class Broken(io.RawIOBase):
        def readable(self) -> bool:
            return True

        def readinto(self, b) -> int:
            raise OSError("disk went away")

    with pytest.raises(OSError):
        list(iter_lines(io.BufferedReader(Broken())))
