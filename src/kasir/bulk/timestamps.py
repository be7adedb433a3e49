"""Random and strictly increasing timestamps inside a daily ``HH:MM`` window.

Windows are ``[start, end)`` on a single calendar day; ``end`` must be after
``start`` or :class:`~kasir.errors.InvalidRange` is raised.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import structlog

from ..errors import InvalidRange
from .sampling import SampleResult, sort_values

log = structlog.get_logger(__name__)

DEFAULT_START = "09:00"
DEFAULT_END = "21:00"
DEFAULT_MIN_INCREMENT_SECONDS = 60
DEFAULT_MAX_INCREMENT_SECONDS = 300


@dataclass(frozen=True, slots=True)
class ClockTime:
    hours: int
    minutes: int

    def on(self, day: datetime) -> datetime:
        return day.replace(hour=self.hours, minute=self.minutes, second=0, microsecond=0)


def parse_hhmm(value: str) -> ClockTime:
    hh, sep, mm = value.strip().partition(":")
    try:
        if not sep:
            raise ValueError(value)
        hours, minutes = int(hh), int(mm)
    except ValueError as exc:
        raise InvalidRange(f"Invalid time: {value!r}") from exc
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise InvalidRange(f"Invalid time: {value!r}")
    return ClockTime(hours, minutes)


def format_hhmm(moment: datetime) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}"


def _window(start: str, end: str, day: date | None, tz: str | None) -> tuple[datetime, datetime]:
    s = parse_hhmm(start)
    e = parse_hhmm(end)
    zone = ZoneInfo(tz) if tz else None
    day = day or datetime.now(tz=zone).date()
    start_at = datetime.combine(day, time(s.hours, s.minutes), tzinfo=zone)
    end_at = datetime.combine(day, time(e.hours, e.minutes), tzinfo=zone)
    if end_at <= start_at:
        raise InvalidRange(f"end {end} must be after start {start}")
    return start_at, end_at


def _random_in(start_at: datetime, end_at: datetime, rng) -> datetime:
    span_ms = (end_at - start_at) // timedelta(milliseconds=1)
    return start_at + timedelta(milliseconds=rng.randrange(span_ms))


def random_time_between(
    start: str = DEFAULT_START,
    end: str = DEFAULT_END,
    *,
    day: date | None = None,
    tz: str | None = None,
    rng: random.Random | None = None,
) -> datetime:
    """A uniform random moment on ``day`` (today by default) in ``[start, end)``."""
    start_at, end_at = _window(start, end, day, tz)
    return _random_in(start_at, end_at, rng or random)


def random_times(
    start: str = DEFAULT_START,
    end: str = DEFAULT_END,
    *,
    count: int = 1,
    unique: bool = False,
    sort: str | None = None,
    as_string: bool = False,
    day: date | None = None,
    tz: str | None = None,
    rng: random.Random | None = None,
) -> SampleResult:
    """Several random moments in the window.

    Uniqueness is judged on what is returned: ``HH:MM`` strings are unique per
    minute, and a unique string request is capped at the number of minutes in
    the window. Datetimes are unique per millisecond.
    """
    start_at, end_at = _window(start, end, day, tz)
    if count <= 0:
        return SampleResult(values=[], requested=0)

    rng = rng or random
    total_minutes = (end_at - start_at) // timedelta(minutes=1)
    effective = min(count, total_minutes) if unique and as_string else count

    attempts_limit = max(2000, effective * 50, min(100_000, total_minutes * 2))
    attempts = 0
    seen: set[object] = set()
    results: list[datetime] = []

    while len(results) < effective and attempts < attempts_limit:
        attempts += 1
        moment = _random_in(start_at, end_at, rng)
        if unique:
            key = format_hhmm(moment) if as_string else moment
            if key in seen:
                continue
            seen.add(key)
        results.append(moment)

    if len(results) < count:
        log.info("sample_shortfall", sampler="times", requested=count, produced=len(results))

    sort_values(results, sort)
    values = [format_hhmm(m) for m in results] if as_string else results
    return SampleResult(values=values, requested=count)


def generate_timestamp_sequence(
    base: datetime,
    count: int,
    *,
    start: str = DEFAULT_START,
    end: str = DEFAULT_END,
    min_increment_seconds: int = DEFAULT_MIN_INCREMENT_SECONDS,
    max_increment_seconds: int = DEFAULT_MAX_INCREMENT_SECONDS,
    rng: random.Random | None = None,
) -> list[datetime]:
    """Strictly increasing timestamps for a mass print run.

    The first value is ``base`` clamped into the window of its own day (past
    the end rolls to the next day's start). Each next value adds a random
    ``[min, max]`` second step; a step past the current day's end moves to the
    next day's start plus a random offset of up to ``max`` seconds.
    """
    if count <= 0:
        return []
    s = parse_hhmm(start)
    e = parse_hhmm(end)
    if (e.hours, e.minutes) <= (s.hours, s.minutes):
        raise InvalidRange(f"end {end} must be after start {start}")
    min_step = max(1, min_increment_seconds)
    if max_increment_seconds < min_step:
        raise InvalidRange(
            f"max_increment_seconds {max_increment_seconds} is below min_increment_seconds {min_step}"
        )

    rng = rng or random
    current = base
    if current < s.on(current):
        current = s.on(current)
    elif current > e.on(current):
        current = s.on(current + timedelta(days=1))

    out = [current]
    for _ in range(1, count):
        step = timedelta(seconds=rng.randint(min_step, max_increment_seconds))
        candidate = current + step
        if candidate <= e.on(current):
            current = candidate
        else:
            offset = timedelta(seconds=rng.randint(0, max_increment_seconds))
            current = s.on(current + timedelta(days=1)) + offset
        out.append(current)
    return out
