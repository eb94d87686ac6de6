"""
Timex notation for resolved values.

Grammar:

    point     := date [time] | time
    date      := YYYY | YYYY-MM | YYYY-MM-DD | YYYY-Www
    time      := THH:mm:ss
    range     := (point,point,duration)
    duration  := P<n>Y | P<n>M | P<n>W | P<n>D | PT<n>H | PT<n>M | PT<n>S
    reference := PRESENT_REF | PAST_REF | FUTURE_REF

Unknown or anchor-defaulted date components are written as ``XXXX``/``XX``.
``encode`` is total; ``decode`` accepts exactly what ``encode`` produces and
raises ``ValueError`` otherwise.
"""

from __future__ import annotations
from datetime import datetime
from typing import Optional

import regex as re

from timexparser.values import (
    DATE_FIELDS,
    Period,
    Point,
    Range,
    ReferenceClass,
    ResolvedValue,
    Unit,
)


_POINT_RE = re.compile(
    r"^(?:(?P<year>\d{4}|XXXX)"
    r"(?:-W(?P<week>\d{2})|-(?P<month>\d{2}|XX)(?:-(?P<day>\d{2}|XX))?)?)?"
    r"(?:T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}))?$"
)
_RANGE_RE = re.compile(r"^\((?P<start>[^,()]+),(?P<end>[^,()]+),(?P<duration>P[^,()]+)\)$")
_DURATION_RE = re.compile(
    r"^P(?:(?P<value>-?\d+)(?P<unit>[YMWD])|T(?P<time_value>-?\d+)(?P<time_unit>[HMS]))$"
)

_DATE_DESIGNATORS = {
    Unit.DAY: ("D", 1),
    Unit.WEEK: ("W", 1),
    Unit.MONTH: ("M", 1),
    Unit.QUARTER: ("M", 3),
    Unit.YEAR: ("Y", 1),
    Unit.DECADE: ("Y", 10),
    Unit.CENTURY: ("Y", 100),
}
_TIME_DESIGNATORS = {
    Unit.HOUR: "H",
    Unit.MINUTE: "M",
    Unit.SECOND: "S",
}
_DATE_UNITS = {"Y": Unit.YEAR, "M": Unit.MONTH, "W": Unit.WEEK, "D": Unit.DAY}
_TIME_UNITS = {"H": Unit.HOUR, "M": Unit.MINUTE, "S": Unit.SECOND}


# =============================================================================
# Encoding
# =============================================================================

def encode(value: ResolvedValue) -> str:
    """
    Serialize a resolved value.

    Examples:
        Point(year=2026)                            -> "2026"
        Point(2024, 7, 5, inferred={"year", "month"}) -> "XXXX-XX-05"
        Range(2024-06-17, 2024-06-24, P1W)          -> "(2024-06-17,2024-06-24,P1W)"
        ReferenceClass.PRESENT_REF                  -> "PRESENT_REF"
    """
    if value.reference is not None:
        return value.reference.value
    if value.duration is not None:
        return encode_period(value.duration)
    if value.range is not None:
        return encode_range(value.range)
    return encode_point(value.point)


def encode_period(period: Period) -> str:
    if period.unit in _TIME_DESIGNATORS:
        return f"PT{period.value}{_TIME_DESIGNATORS[period.unit]}"
    designator, factor = _DATE_DESIGNATORS[period.unit]
    return f"P{period.value * factor}{designator}"


def encode_range(value: Range) -> str:
    return "({},{},{})".format(
        encode_point(value.start), encode_point(value.end), encode_period(value.duration)
    )


def _slot(point: Point, name: str, width: int) -> str:
    if point.is_known(name):
        return str(getattr(point, name)).zfill(width)
    return "X" * width


def encode_point(point: Point) -> str:
    time = ""
    if point.hour is not None:
        time = "T{:02d}:{:02d}:{:02d}".format(point.hour, point.minute or 0, point.second or 0)

    date_known = any(point.is_known(name) for name in DATE_FIELDS)
    if not date_known:
        return time or "XXXX"

    text = _slot(point, "year", 4)
    if point.week is not None:
        text += "-W" + _slot(point, "week", 2)
    elif point.month is not None or point.day is not None:
        text += "-" + _slot(point, "month", 2)
        if point.day is not None:
            text += "-" + _slot(point, "day", 2)
    return text + time


# =============================================================================
# Decoding
# =============================================================================

def _field(match, name: str) -> Optional[int]:
    raw = match.group(name)
    if raw is None or raw.startswith("X"):
        return None
    return int(raw)


def decode_point(text: str) -> Point:
    match = _POINT_RE.match(text)
    if not text or match is None:
        raise ValueError(f"not a timex point: {text!r}")
    month = _field(match, "month")
    day = _field(match, "day")
    week = _field(match, "week")
    # "XXXX-XX-05": the month slot is present but unknown
    return Point(
        year=_field(match, "year"),
        month=month,
        day=day,
        hour=_field(match, "hour"),
        minute=_field(match, "minute"),
        second=_field(match, "second"),
        week=week,
    )


def decode_period(text: str) -> Period:
    match = _DURATION_RE.match(text)
    if match is None:
        raise ValueError(f"not a timex duration: {text!r}")
    if match.group("unit"):
        return Period(_DATE_UNITS[match.group("unit")], int(match.group("value")))
    return Period(_TIME_UNITS[match.group("time_unit")], int(match.group("time_value")))


def decode(text: str) -> ResolvedValue:
    """Parse a timex string back into a value of the same precision."""
    for reference in ReferenceClass:
        if text == reference.value:
            return ResolvedValue.of_reference(reference)
    match = _RANGE_RE.match(text)
    if match:
        return ResolvedValue.of_range(
            decode_point(match.group("start")),
            decode_point(match.group("end")),
            decode_period(match.group("duration")),
        )
    if text.startswith("P"):
        return ResolvedValue.of_duration(decode_period(text))
    return ResolvedValue.of_point(decode_point(text))


def period_between(start: datetime, end: datetime) -> Period:
    """Largest whole unit (day, hour, minute, second) measuring ``end - start``."""
    delta = end - start
    seconds = int(delta.total_seconds())
    if seconds % 86400 == 0:
        return Period(Unit.DAY, seconds // 86400)
    if seconds % 3600 == 0:
        return Period(Unit.HOUR, seconds // 3600)
    if seconds % 60 == 0:
        return Period(Unit.MINUTE, seconds // 60)
    return Period(Unit.SECOND, seconds)
