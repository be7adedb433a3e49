"""Integer rupiah helpers.

Amounts are whole rupiah. Formatting drops any fraction and groups digits
with a comma every three places (``100000 -> "100,000"``). Parsing never
raises because it backs fields that are edited one keystroke at a time.
"""

from __future__ import annotations

import math
import re
from fractions import Fraction

_NOT_AMOUNT = re.compile(r"[^0-9.\-]+")
_NOT_DIGIT = re.compile(r"[^0-9\-]+")
_GROUPS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def as_fraction(value: int | float | Fraction) -> Fraction:
    """Exact rational form of a number; floats go through their repr so 1.1 stays 11/10."""
    if isinstance(value, (int, Fraction)):
        return Fraction(value)
    return Fraction(str(value))


def round_half_up(value: int | float | Fraction) -> int:
    """Round to the nearest whole rupiah, halves away from zero for positive amounts."""
    return math.floor(as_fraction(value) + Fraction(1, 2))


def format_idr(value: int | float | str, *, prefix: str | None = None, allow_negative: bool = True) -> str:
    if isinstance(value, str):
        cleaned = _NOT_AMOUNT.sub("", value)
        try:
            number = float(cleaned or 0)
        except ValueError:
            return ""
    else:
        number = value

    if isinstance(number, float) and not math.isfinite(number):
        return ""

    negative = number < 0
    whole = abs(int(number))
    grouped = _GROUPS.sub(",", str(whole))
    result = ("-" if negative and allow_negative and whole else "") + grouped
    return f"{prefix}{result}" if prefix else result


def parse_idr(text: str | None) -> int:
    if not text:
        return 0
    cleaned = _NOT_DIGIT.sub("", text)
    if not cleaned:
        return 0
    try:
        return int(cleaned)
    except ValueError:
        return 0
