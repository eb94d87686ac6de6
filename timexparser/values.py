"""
Resolved temporal values.

A recognized expression resolves to exactly one of:

- a ``Point``: calendar fields from year down to second, any of which may be
  unknown (``None``) or defaulted from the anchor (listed in ``inferred``);
- a ``Range``: two Points plus the ``Period`` between them;
- a bare ``Period`` (a duration such as "3 weeks");
- a ``ReferenceClass`` marker ("now", "recently", "asap").

Values are immutable. Precision is derived from which fields are present, so
it always agrees with the timex string written for the value.

Examples:
    Point(year=2026)                                  # "in 2 years"
    Point(year=2024, month=7, day=5,
          inferred=frozenset({"year", "month"}))      # "the 5th"
    Range(Point(2024, 6, 17), Point(2024, 6, 24),
          Period(Unit.WEEK, 1))                       # "next week"
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timedelta
from enum import Enum
from typing import FrozenSet, Optional, Tuple
import calendar

from dateutil.relativedelta import relativedelta


# =============================================================================
# Enums
# =============================================================================

class Unit(Enum):
    """Temporal units for offsets and durations."""
    SECOND = "SECOND"
    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    YEAR = "YEAR"
    DECADE = "DECADE"
    CENTURY = "CENTURY"

    @property
    def is_time(self) -> bool:
        return self in (Unit.SECOND, Unit.MINUTE, Unit.HOUR)


class Precision(Enum):
    """How much of a resolved value was actually determined."""
    YEAR = "YEAR"
    MONTH = "MONTH"
    WEEK = "WEEK"
    DAY = "DAY"
    TIME = "TIME"
    UNSPECIFIED = "UNSPECIFIED"


class ReferenceClass(Enum):
    """Deictic markers that do not denote a computable instant."""
    PRESENT_REF = "PRESENT_REF"
    PAST_REF = "PAST_REF"
    FUTURE_REF = "FUTURE_REF"


_UNIT_PRECISION = {
    Unit.SECOND: Precision.TIME,
    Unit.MINUTE: Precision.TIME,
    Unit.HOUR: Precision.TIME,
    Unit.DAY: Precision.DAY,
    Unit.WEEK: Precision.WEEK,
    Unit.MONTH: Precision.MONTH,
    Unit.QUARTER: Precision.MONTH,
    Unit.YEAR: Precision.YEAR,
    Unit.DECADE: Precision.YEAR,
    Unit.CENTURY: Precision.YEAR,
}


# =============================================================================
# Period
# =============================================================================

@dataclass(frozen=True)
class Period:
    """A count of calendar units, e.g. Period(Unit.MONTH, 1) for one month."""
    unit: Unit
    value: int

    def to_relativedelta(self) -> relativedelta:
        if self.unit == Unit.SECOND:
            return relativedelta(seconds=self.value)
        if self.unit == Unit.MINUTE:
            return relativedelta(minutes=self.value)
        if self.unit == Unit.HOUR:
            return relativedelta(hours=self.value)
        if self.unit == Unit.DAY:
            return relativedelta(days=self.value)
        if self.unit == Unit.WEEK:
            return relativedelta(weeks=self.value)
        if self.unit == Unit.MONTH:
            return relativedelta(months=self.value)
        if self.unit == Unit.QUARTER:
            return relativedelta(months=3 * self.value)
        if self.unit == Unit.YEAR:
            return relativedelta(years=self.value)
        if self.unit == Unit.DECADE:
            return relativedelta(years=10 * self.value)
        return relativedelta(years=100 * self.value)

    @property
    def precision(self) -> Precision:
        return _UNIT_PRECISION[self.unit]

    def __repr__(self) -> str:
        return f"Period({self.unit.value}, {self.value})"


# =============================================================================
# Point
# =============================================================================

DATE_FIELDS = ("year", "month", "day", "week")
TIME_FIELDS = ("hour", "minute", "second")


@dataclass(frozen=True)
class Point:
    """
    A calendar point whose fields may be partially known.

    Parameters are ordered largest→smallest: year, month, day, hour, minute,
    second. ``week`` is an ISO week number and excludes month/day.
    ``inferred`` names the fields that were filled in from the anchor rather
    than read from the text; they are still usable for arithmetic but are
    written as ``X`` in the timex.
    """
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    week: Optional[int] = None
    inferred: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "inferred", frozenset(self.inferred))
        if (self.minute is not None or self.second is not None) and self.hour is None:
            raise ValueError("minute/second require an hour")
        if self.week is not None and (self.month is not None or self.day is not None):
            raise ValueError("week excludes month and day")
        for name in self.inferred:
            if name not in DATE_FIELDS + TIME_FIELDS:
                raise ValueError(f"unknown field {name!r}")
            if getattr(self, name) is None:
                raise ValueError(f"inferred field {name!r} is not set")
        self._validate_ranges()

    def _validate_ranges(self):
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        if self.day is not None:
            if self.month is not None:
                # Without a year, February may still have 29 days
                year = self.year if self.year is not None else 2000
                last = calendar.monthrange(year, self.month)[1]
            else:
                last = 31
            if not 1 <= self.day <= last:
                raise ValueError(f"day out of range: {self.day}")
        if self.week is not None:
            last_week = 53
            if self.year is not None:
                last_week = date(self.year, 12, 28).isocalendar()[1]
            if not 1 <= self.week <= last_week:
                raise ValueError(f"week out of range: {self.week}")
        if self.hour is not None and not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if self.minute is not None and not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")
        if self.second is not None and not 0 <= self.second <= 59:
            raise ValueError(f"second out of range: {self.second}")
        if self.year is not None and not 1 <= self.year <= 9999:
            raise ValueError(f"year out of range: {self.year}")

    @classmethod
    def from_datetime(cls, dt: datetime, with_time: bool = False,
                      inferred=frozenset()) -> "Point":
        if with_time:
            return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second,
                       inferred=frozenset(inferred))
        return cls(dt.year, dt.month, dt.day, inferred=frozenset(inferred))

    def is_known(self, name: str) -> bool:
        """True when the field was read from the text (set and not inferred)."""
        return getattr(self, name) is not None and name not in self.inferred

    @property
    def has_time(self) -> bool:
        return self.hour is not None

    @property
    def precision(self) -> Precision:
        if self.hour is not None:
            return Precision.TIME
        if self.day is not None:
            return Precision.DAY
        if self.week is not None:
            return Precision.WEEK
        if self.month is not None:
            return Precision.MONTH
        if self.year is not None:
            return Precision.YEAR
        return Precision.UNSPECIFIED

    def to_datetime(self) -> Optional[datetime]:
        """First instant covered by the point, or None when not calendar-anchored."""
        if self.year is None:
            return None
        if self.week is not None:
            start = date.fromisocalendar(self.year, self.week, 1)
            return datetime(start.year, start.month, start.day)
        if self.day is not None and self.month is None:
            return None
        if self.hour is not None and self.day is None:
            return None
        return datetime(
            self.year,
            self.month or 1,
            self.day or 1,
            self.hour or 0,
            self.minute or 0,
            self.second or 0,
        )

    def bounds(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        Concrete ``(start, end)`` covered by the point, end exclusive.

        A point carrying a time of day is an instant, so start == end.
        """
        start = self.to_datetime()
        if start is None:
            return (None, None)
        if self.hour is not None:
            return (start, start)
        if self.day is not None:
            return (start, start + timedelta(days=1))
        if self.week is not None:
            return (start, start + timedelta(weeks=1))
        if self.month is not None:
            return (start, start + relativedelta(months=1))
        return (start, start + relativedelta(years=1))

    def __repr__(self) -> str:
        parts = []
        for f in fields(self):
            if f.name == "inferred":
                continue
            value = getattr(self, f.name)
            if value is not None:
                parts.append(f"{f.name}={value}")
        if self.inferred:
            parts.append(f"inferred={sorted(self.inferred)}")
        return f"Point({', '.join(parts)})"


# =============================================================================
# Range
# =============================================================================

@dataclass(frozen=True)
class Range:
    """Two points and the period between them; end is never before start."""
    start: Point
    end: Point
    duration: Period

    def __post_init__(self):
        start, end = self.start.to_datetime(), self.end.to_datetime()
        if start is not None and end is not None and end < start:
            raise ValueError(f"range end {end} is before start {start}")

    @property
    def precision(self) -> Precision:
        if self.start.has_time:
            return Precision.TIME
        return self.duration.precision

    def bounds(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        return (self.start.to_datetime(), self.end.to_datetime())

    def __repr__(self) -> str:
        return f"Range(start={self.start!r}, end={self.end!r}, duration={self.duration!r})"


# =============================================================================
# ResolvedValue
# =============================================================================

@dataclass(frozen=True)
class ResolvedValue:
    """Exactly one of a point, a range, a duration or a reference marker."""
    point: Optional[Point] = None
    range: Optional[Range] = None
    duration: Optional[Period] = None
    reference: Optional[ReferenceClass] = None

    def __post_init__(self):
        present = [v for v in (self.point, self.range, self.duration, self.reference)
                   if v is not None]
        if len(present) != 1:
            raise ValueError("a resolved value holds exactly one component")

    @classmethod
    def of_point(cls, point: Point) -> "ResolvedValue":
        return cls(point=point)

    @classmethod
    def of_range(cls, start: Point, end: Point, duration: Period) -> "ResolvedValue":
        return cls(range=Range(start, end, duration))

    @classmethod
    def of_duration(cls, period: Period) -> "ResolvedValue":
        return cls(duration=period)

    @classmethod
    def of_reference(cls, reference: ReferenceClass) -> "ResolvedValue":
        return cls(reference=reference)

    @property
    def precision(self) -> Precision:
        if self.point is not None:
            return self.point.precision
        if self.range is not None:
            return self.range.precision
        return Precision.UNSPECIFIED

    def bounds(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        if self.point is not None:
            return self.point.bounds()
        if self.range is not None:
            return self.range.bounds()
        return (None, None)

    def __repr__(self) -> str:
        for name in ("point", "range", "duration", "reference"):
            value = getattr(self, name)
            if value is not None:
                return f"ResolvedValue({name}={value!r})"
        return "ResolvedValue()"
