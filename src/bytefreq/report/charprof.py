from __future__ import annotations

import unicodedata
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

END_OF_REPORT = "--------END OF REPORT--------"
UNKNOWN_NAME = "UNKNOWN"

_C0_CONTROLS = [
    "NUL - Null char",
    "SOH - Start of Heading",
    "STX - Start of Text",
    "ETX - End of Text",
    "EOT - End of Transmission",
    "ENQ - Enquiry",
    "ACK - Acknowledgment",
    "BEL - Bell",
    "BS - Back Space",
    "HT - Horizontal Tab",
    "LF - Line Feed",
    "VT - Vertical Tab",
    "FF - Form Feed",
    "CR - Carriage Return",
    "SO - Shift Out / X-On",
    "SI - Shift In / X-Off",
    "DLE - Data Line Escape",
    "DC1 - Device Control 1 (oft. XON)",
    "DC2 - Device Control 2",
    "DC3 - Device Control 3 (oft. XOFF)",
    "DC4 - Device Control 4",
    "NAK - Negative Acknowledgement",
    "SYN - Synchronous Idle",
    "ETB - End of Transmit Block",
    "CAN - Cancel",
    "EM - End of Medium",
    "SUB - Substitute",
    "ESC - Escape",
    "FS - File Separator",
    "GS - Group Separator",
    "RS - Record Separator",
    "US - Unit Separator",
]


def _build_descriptions() -> dict[str, str]:
    table = {chr(i): desc for i, desc in enumerate(_C0_CONTROLS)}
    table["\u008a"] = "LINE TABULATION SET * Deprecated from Unicode 3.2, 2002"
    table["\u0090"] = "ERROR - Undefined CTRL Character."
    table["\u009a"] = "LATIN CAPITAL S WITH CARON"
    for cp in range(0xFDD0, 0xFDF0):
        table[chr(cp)] = "Non-character code point"
    for cp in (0xFFFA, 0xFFFB, 0xFFFC):
        table[chr(cp)] = "Undefined Control Character"
    for plane in range(1, 17):
        for low in (0xFFFE, 0xFFFF):
            table[chr((plane << 16) | low)] = "Undefined Control Character"
    return table


CONTROL_DESCRIPTIONS = _build_descriptions()


def character_name(ch: str) -> str:
    return unicodedata.name(ch, None) or CONTROL_DESCRIPTIONS.get(ch, UNKNOWN_NAME)


def escape_char(ch: str) -> str:
    if ch == "\\":
        return "\\\\"
    if ch.isprintable():
        return ch
    return ch.encode("unicode_escape").decode("ascii")


@dataclass(frozen=True)
class CharacterRow:
    char: str
    count: int

    @property
    def code_point(self) -> str:
        return f"U+{ord(self.char):04X}"

    @property
    def escaped(self) -> str:
        return escape_char(self.char)

    @property
    def name(self) -> str:
        return character_name(self.char)


class CharacterProfile:
    """Histogram of every character seen in a stream, terminators included."""

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def observe(self, text: str) -> None:
        self.counts.update(text)

    def run(self, chunks: Iterable[str]) -> "CharacterProfile":
        for chunk in chunks:
            self.observe(chunk)
        return self

    def rows(self) -> list[CharacterRow]:
        return [CharacterRow(char=ch, count=n) for ch, n in sorted(self.counts.items(), key=lambda kv: ord(kv[0]))]

    def render_text(self) -> str:
        lines = [
            f"{'char':<8}\t{'count':<8}\tdescription\tname",
            f"{'':-<8}\t{'':-<8}\t{'':-<15}\t{'':-<15}",
        ]
        for row in self.rows():
            lines.append(f"{row.code_point:<8}\t{row.count:<8}\t{row.escaped}\t{row.name}")
        lines.append(END_OF_REPORT)
        return "\n".join(lines) + "\n"
