from __future__ import annotations

import unicodedata
from enum import Enum
from itertools import groupby


class Grain(str, Enum):
    HIGH = "H"
    LOW = "L"
    UNICODE = "U"
    LOW_UNICODE = "LU"


GRAIN_CODES = [g.value for g in Grain]

# punctuation kept verbatim by the unicode grains
PASSTHROUGH = frozenset('"-.,')

_CATEGORY_CLASS = {
    "Lu": "A",
    "Lt": "A",
    "Ll": "a",
    "Lo": "a",
    "Lm": "a",
    "Nd": "9",
    "Nl": "9",
    "No": "9",
    "Zs": " ",
    "Zl": " ",
    "Zp": " ",
}

EMPTY_PATTERN = "_"


def parse_grain(code: str | Grain) -> Grain:
    """Map a grain code to a Grain; unknown codes fall back to UNICODE."""
    if isinstance(code, Grain):
        return code
    try:
        return Grain(code)
    except ValueError:
        return Grain.UNICODE


def ascii_class(ch: str) -> str:
    if "a" <= ch <= "z":
        return "a"
    if "A" <= ch <= "Z":
        return "A"
    if "0" <= ch <= "9":
        return "9"
    return ch


def unicode_class(ch: str) -> str:
    """Classify one character for the U and LU grains."""
    if ch.isascii() and ch.isalnum():
        return ascii_class(ch)
    if ch in PASSTHROUGH:
        return ch
    if ch.isspace():
        return " "
    return _CATEGORY_CLASS.get(unicodedata.category(ch), "_")


def high_grain_mask(value: str) -> str:
    return "".join(ascii_class(ch) for ch in value)


def high_grain_unicode_mask(value: str) -> str:
    return "".join(unicode_class(ch) for ch in value)


def compress_runs(text: str) -> str:
    """Collapse runs of identical characters; empty input yields ``_``."""
    out = "".join(ch for ch, _ in groupby(text))
    return out or EMPTY_PATTERN


def mask_value(value: str, grain: str | Grain) -> str:
    """Generalize ``value`` into its pattern under ``grain``.

    >>> mask_value("password123", "H")
    'aaaaaaaa999'
    >>> mask_value("password123", "L")
    'a9'
    >>> mask_value("EMAIL@example.com", "LU")
    'A_a.a'
    """
    grain = parse_grain(grain)
    if grain is Grain.HIGH:
        return high_grain_mask(value)
    if grain is Grain.LOW:
        return compress_runs(high_grain_mask(value))
    if grain is Grain.LOW_UNICODE:
        return compress_runs(high_grain_unicode_mask(value))
    return high_grain_unicode_mask(value)
