"""
Parser for the compact due-date expressions accepted by ``add --date``.

Forms, tried in this order:

    23        next 23:00 (tomorrow if 23:00 has already passed today)
    23:15     next 23:15, same rollover rule
    3d        three days from now, same time of day
    3d11:15   11:15 three days from now, no rollover check
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from .errors import InvalidDateFormat


HOUR_RE = re.compile(r"^(\d{1,2})$")
HOUR_MINUTE_RE = re.compile(r"^(\d{1,2}):(\d{1,2})$")
DAY_OFFSET_RE = re.compile(r"^(\d+)d(.*)$")


@dataclass(frozen=True)
class HourOnly:
    hour: int


@dataclass(frozen=True)
class HourMinute:
    hour: int
    minute: int


@dataclass(frozen=True)
class DayOffset:
    days: int
    rest: str


DateSpecMatch = Union[HourOnly, HourMinute, DayOffset]


def match_date_spec(text: str) -> Optional[DateSpecMatch]:
    """Classify ``text`` as one of the date spec forms, or None."""
    m = HOUR_RE.match(text)
    if m:
        return HourOnly(int(m.group(1)))

    m = HOUR_MINUTE_RE.match(text)
    if m:
        return HourMinute(int(m.group(1)), int(m.group(2)))

    m = DAY_OFFSET_RE.match(text)
    if m:
        return DayOffset(int(m.group(1)), m.group(2))

    return None


def _set_time(base: datetime, hour: int, minute: int, text: str) -> datetime:
    # 24 and 7:60 carry over into the next day or hour
    midnight = base.replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        return midnight + timedelta(hours=hour, minutes=minute)
    except OverflowError:
        raise InvalidDateFormat(text) from None


def parse_date_spec(text: str, now: datetime, seed: Optional[datetime] = None) -> datetime:
    """
    Turn a date spec into a concrete local date-time.

    Args:
        text: The expression, e.g. ``"23"``, ``"9:30"``, ``"2d"``, ``"2d9:30"``
        now: Reference time for a top-level parse
        seed: Accumulator carried into a recursive parse after a day
            offset. When given, the hour forms never roll over to the
            next day.

    Returns:
        The resulting date-time

    Raises:
        InvalidDateFormat: If ``text`` matches none of the forms
    """
    base = seed if seed is not None else now
    spec = match_date_spec(text)

    if isinstance(spec, HourOnly):
        if seed is None and spec.hour < base.hour:
            base += timedelta(days=1)
        return _set_time(base, spec.hour, 0, text)

    if isinstance(spec, HourMinute):
        wanted = spec.hour * 60 + spec.minute
        if seed is None and wanted < base.hour * 60 + base.minute:
            base += timedelta(days=1)
        return _set_time(base, spec.hour, spec.minute, text)

    if isinstance(spec, DayOffset):
        try:
            shifted = base + timedelta(days=spec.days)
        except OverflowError:
            raise InvalidDateFormat(text) from None
        if spec.rest:
            try:
                return parse_date_spec(spec.rest, now, seed=shifted)
            except InvalidDateFormat:
                raise InvalidDateFormat(text) from None
        return shifted

    raise InvalidDateFormat(text)
