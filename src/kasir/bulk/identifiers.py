from __future__ import annotations

import random
import re
from dataclasses import dataclass
from datetime import datetime

import structlog

from ..errors import InvalidRange
from .sampling import SampleResult, sort_values

log = structlog.get_logger(__name__)

DEFAULT_SUFFIX_WIDTH = 5

_LAST_DIGIT_RUN = re.compile(r"(\d+)(?=\D*$)")
_FIRST_DIGIT_RUN = re.compile(r"\d+")
_NON_LETTER = re.compile(r"[^A-Z]")
_VOWEL = re.compile(r"[AEIOU]")


@dataclass(frozen=True, slots=True)
class NumericSuffix:
    prefix: str
    number: int
    width: int
    suffix: str


def parse_numeric_suffix(invoice: str) -> NumericSuffix | None:
    """Split an invoice id around its last run of digits."""
    m = _LAST_DIGIT_RUN.search(invoice)
    if not m:
        return None
    return NumericSuffix(
        prefix=invoice[: m.start()],
        number=int(m.group(1)),
        width=len(m.group(1)),
        suffix=invoice[m.end() :],
    )


def generate_invoice_numbers(base_invoice: str, count: int) -> list[str]:
    """Sequential invoice ids starting at ``base_invoice``.

    ``SO-AB.25.10.00042`` yields ``...00042``, ``...00043`` and so on, keeping
    the digit width. Ids without digits get a 1-based five digit counter.
    """
    if count <= 0:
        return []
    parsed = parse_numeric_suffix(base_invoice)
    if parsed is None:
        return [f"{base_invoice}{i + 1:0{DEFAULT_SUFFIX_WIDTH}d}" for i in range(count)]
    return [
        f"{parsed.prefix}{parsed.number + i:0{parsed.width}d}{parsed.suffix}"
        for i in range(count)
    ]


def parse_range(value: int | str | tuple[int, int] | list[int]) -> tuple[int, int]:
    if isinstance(value, bool):
        raise InvalidRange(f"Invalid range: {value!r}")
    if isinstance(value, int):
        return value, value
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise InvalidRange(f"Range needs exactly two bounds, got {value!r}")
        low, high = int(value[0]), int(value[1])
    else:
        text = str(value).strip()
        head, sep, tail = text.partition("-")
        try:
            if sep and head.strip():
                low, high = int(head.strip()), int(tail.strip())
            else:
                low = high = int(text)
        except ValueError as exc:
            raise InvalidRange(f"Invalid range: {value!r}") from exc
    if high < low:
        raise InvalidRange(f"Range end {high} is before start {low}")
    return low, high


def format_invoice_value(value: int, pad: int | None = None, prefix: str = "") -> str:
    text = str(value)
    if pad and pad > 0:
        text = text.zfill(pad)
    return f"{prefix}{text}" if prefix else text


def random_invoices(
    value_range: int | str | tuple[int, int] | list[int],
    *,
    count: int = 1,
    unique: bool = False,
    sort: str | None = None,
    pad: int | None = None,
    prefix: str = "",
    as_string: bool = False,
    rng: random.Random | None = None,
) -> SampleResult:
    """Draw invoice numbers from an inclusive range.

    With ``unique`` the draw gives up after ``max(1000, count * 10)`` attempts
    and returns what it has rather than looping; check ``satisfied``.
    """
    low, high = parse_range(value_range)
    if count <= 0:
        return SampleResult(values=[], requested=0)

    rng = rng or random
    distinct_available = high - low + 1
    attempts_limit = max(1000, count * 10)
    attempts = 0
    seen: set[int] = set()
    results: list[int] = []

    while len(results) < count and attempts < attempts_limit:
        attempts += 1
        candidate = rng.randint(low, high)
        if unique:
            if candidate in seen:
                continue
            seen.add(candidate)
        results.append(candidate)
        if unique and len(results) >= distinct_available:
            break

    if len(results) < count:
        log.info("sample_shortfall", sampler="invoices", requested=count, produced=len(results))

    sort_values(results, sort)
    if as_string:
        return SampleResult(values=[format_invoice_value(v, pad, prefix) for v in results], requested=count)
    return SampleResult(values=results, requested=count)


def outlet_abbreviation(outlet_code: str) -> str:
    letters = _NON_LETTER.sub("", outlet_code.upper())
    return _VOWEL.sub("", letters)[:4]


def build_so_number(invoice_number: str, created_at: datetime, outlet_code: str | None = None) -> str:
    """Printed sales-order number, e.g. ``SO-PJRN.25.10.01900``."""
    if not outlet_code:
        return f"SO-{invoice_number}"
    m = _FIRST_DIGIT_RUN.search(invoice_number)
    digits = m.group(0) if m else "0"
    return (
        f"SO-{outlet_abbreviation(outlet_code)}"
        f".{created_at.year % 100:02d}.{created_at.month:02d}.{digits.zfill(5)}"
    )
