"""
Value resolution.

:class:`ValueResolver` turns one candidate span into a :class:`ResolvedValue`
against an anchor moment. Each span carries the name of the pattern that
produced it; the resolver dispatches on that name.

Components the text leaves open are defaulted from the anchor and recorded in
``Point.inferred``. Where a default has to pick between an earlier and a later
occurrence ("the 5th", "June 5", "Friday") the ``PREFER_DATES_FROM`` and
``PREFER_WEEKDAYS_FROM`` settings decide.

Spans that cannot be completed raise :class:`UnresolvableSpanError`; the
pipeline drops them without affecting the other spans of the text.
"""

import calendar
from dataclasses import replace
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from timexparser.errors import UnresolvableSpanError
from timexparser.extraction import SpanKind
from timexparser.numbers import NumberExtractor
from timexparser.swift import (
    adjust_hour,
    classify,
    match_now_reference,
    normalize,
    resolve_offset,
    swift_day,
)
from timexparser.timex import period_between
from timexparser.values import (
    DATE_FIELDS,
    Period,
    Point,
    Precision,
    ResolvedValue,
    Unit,
)

INFERRED_DATE = frozenset({"year", "month", "day"})

SEASON_START_MONTHS = {"SP": 3, "SU": 6, "FA": 9, "WI": 12}

# How far the future/past policies may move a defaulted component
MAX_YEAR_STEPS = 8
MAX_MONTH_STEPS = 12

_YEAR_LEVEL_PATTERNS = ("month_only", "season", "year_number")


def _day_point(day, inferred=frozenset()):
    return Point(day.year, day.month, day.day, inferred=inferred)


def _safe_date(year, month, day):
    if 1 <= year <= 9999 and 1 <= day <= calendar.monthrange(year, month)[1]:
        return date(year, month, day)
    return None


def _shift_month(year, month, step):
    index = year * 12 + (month - 1) + step
    return index // 12, index % 12 + 1


class ValueResolver:
    """Resolves candidate spans of one language against an anchor."""

    def __init__(self, config, settings):
        self.config = config
        self.settings = settings
        self.numbers = NumberExtractor(config)
        self._handlers = {
            "now": self._resolve_now,
            "relative_day": self._resolve_relative_day,
            "weekday": self._resolve_weekday,
            "month_day": self._resolve_month_day,
            "iso_date": self._resolve_iso_date,
            "numeric_date": self._resolve_numeric_date,
            "ordinal_day": self._resolve_ordinal_day,
            "clock_time": self._resolve_clock_time,
            "special_time": self._resolve_special_time,
            "duration": self._resolve_duration,
            "duration_ago": self._resolve_duration_ago,
            "duration_later": self._resolve_duration_later,
            "to_date": self._resolve_to_date,
            "relative_unit": self._resolve_relative_unit,
            "month_only": self._resolve_month_only,
            "year_number": self._resolve_year_number,
            "season": self._resolve_season,
            "quarter": self._resolve_quarter,
            "decade": self._resolve_decade,
            "century": self._resolve_century,
            "next_n_units": self._resolve_next_n_units,
            "within_next": self._resolve_within_next,
            "day_part": self._resolve_day_part,
            "date_time": self._resolve_date_time,
            "date_day_part": self._resolve_date_day_part,
            "range": self._resolve_range,
        }

    # =========================================================================
    # Entry points
    # =========================================================================

    def resolve_span(self, span, anchor) -> ResolvedValue:
        """Derive the offset and precision hints of ``span`` and resolve it."""
        offset = resolve_offset(self.config, span.text, self._offset_unit(span))
        hints = classify(self.config, span.text)
        return self.resolve(span, offset, hints, anchor)

    def resolve(self, span, offset, hints, anchor) -> ResolvedValue:
        """
        Resolve ``span`` given its swift ``offset``, its precision ``hints`` and
        the ``anchor`` datetime.

        Raises:
            UnresolvableSpanError: the span is structurally incomplete or
                names an impossible calendar value.
        """
        handler = self._handlers.get(span.pattern)
        if handler is None:
            raise UnresolvableSpanError(f"no resolution rule for '{span.pattern}'", span.text)
        try:
            return handler(span, offset, hints, anchor)
        except (ValueError, OverflowError) as e:
            raise UnresolvableSpanError(str(e), span.text) from e

    def _offset_unit(self, span):
        unit = span.group("unit")
        if unit is not None:
            return self.config.unit_map.get(normalize(unit), Unit.DAY)
        if span.pattern in _YEAR_LEVEL_PATTERNS:
            return Unit.YEAR
        return Unit.DAY

    # =========================================================================
    # Helpers
    # =========================================================================

    def _lookup(self, table, span, group):
        raw = span.group(group)
        if raw is None:
            raise UnresolvableSpanError(f"missing '{group}'", span.text)
        key = normalize(raw)
        if key not in table:
            raise UnresolvableSpanError(f"unknown {group} '{raw}'", span.text)
        return table[key]

    def _number(self, span, group):
        value = self.numbers.extract_number(span.group(group))
        if value is None:
            raise UnresolvableSpanError(f"'{span.group(group)}' is not a number", span.text)
        return value

    def _duration_parts(self, span):
        return self._number(span, "number"), self._lookup(self.config.unit_map, span, "unit")

    def _year_group(self, span):
        raw = span.group("year")
        return int(raw) if raw is not None else None

    def _pick_year(self, month, day, anchor):
        """Year for a month/day without one, per PREFER_DATES_FROM."""
        policy = self.settings.PREFER_DATES_FROM
        today = anchor.date()
        year = anchor.year
        for _ in range(MAX_YEAR_STEPS):
            candidate = _safe_date(year, month, day)
            if policy == "future":
                if candidate is not None and candidate >= today:
                    return year
                year += 1
            elif policy == "past":
                if candidate is not None and candidate <= today:
                    return year
                year -= 1
            else:
                if candidate is None:
                    break
                return year
        raise UnresolvableSpanError(f"no valid year for {month:02d}-{day:02d}")

    def _pick_month_year(self, month, anchor):
        policy = self.settings.PREFER_DATES_FROM
        if policy == "future" and month < anchor.month:
            return anchor.year + 1
        if policy == "past" and month > anchor.month:
            return anchor.year - 1
        return anchor.year

    def _time_point(self, anchor, hour, minute=0, second=0):
        return Point(anchor.year, anchor.month, anchor.day, hour, minute, second,
                     inferred=INFERRED_DATE)

    def _day_part_range(self, day, part, inferred=frozenset()):
        start_hour, end_hour = self.config.day_part_map[normalize(part)]
        midnight = datetime(day.year, day.month, day.day)
        start = midnight + timedelta(hours=start_hour)
        end = midnight + timedelta(hours=end_hour)
        return ResolvedValue.of_range(
            Point.from_datetime(start, with_time=True, inferred=inferred),
            Point.from_datetime(end, with_time=True, inferred=inferred),
            Period(Unit.HOUR, end_hour - start_hour),
        )

    def _point_of(self, child, anchor):
        value = self.resolve_span(child, anchor)
        if value.point is None:
            raise UnresolvableSpanError("component is not a point", child.text)
        return value.point

    # =========================================================================
    # Reference and day-level handlers
    # =========================================================================

    def _resolve_now(self, span, offset, hints, anchor):
        reference = match_now_reference(self.config, span.group("idiom") or span.text)
        if reference is None:
            raise UnresolvableSpanError("not a now-class idiom", span.text)
        return ResolvedValue.of_reference(reference)

    def _resolve_relative_day(self, span, offset, hints, anchor):
        days = self._lookup(self.config.relative_day_map, span, "reldate")
        return ResolvedValue.of_point(_day_point(anchor.date() + timedelta(days=days)))

    def _resolve_weekday(self, span, offset, hints, anchor):
        weekday = self._lookup(self.config.day_of_week_map, span, "weekday")
        today = anchor.date()
        monday = today - timedelta(days=today.weekday())

        swift = offset if offset.marker == "after_next" else swift_day(self.config, span.text)
        if swift.marker is not None:
            target = monday + timedelta(weeks=swift.value, days=weekday)
        else:
            policy = self.settings.PREFER_WEEKDAYS_FROM
            if policy == "future":
                target = today + timedelta(days=(weekday - today.weekday()) % 7)
            elif policy == "past":
                target = today - timedelta(days=(today.weekday() - weekday) % 7)
            else:
                target = monday + timedelta(days=weekday)
        return ResolvedValue.of_point(_day_point(target))

    def _resolve_month_day(self, span, offset, hints, anchor):
        month = self._lookup(self.config.month_map, span, "month")
        if span.group("day") is None:
            if not hints.month_only:
                raise UnresolvableSpanError("month without a day", span.text)
            return self._resolve_month_only(span, offset, hints, anchor)
        day = int(span.group("day"))
        year = self._year_group(span)
        if year is not None:
            return ResolvedValue.of_point(Point(year, month, day))
        year = self._pick_year(month, day, anchor)
        return ResolvedValue.of_point(Point(year, month, day, inferred={"year"}))

    def _resolve_iso_date(self, span, offset, hints, anchor):
        return ResolvedValue.of_point(Point(
            int(span.group("year")), int(span.group("monthnum")), int(span.group("day"))
        ))

    def _resolve_numeric_date(self, span, offset, hints, anchor):
        order = (self.settings.DATE_ORDER or self.config.date_order).upper()
        first, second = int(span.group("first")), int(span.group("second"))
        if order.startswith("D"):
            day, month = first, second
        else:
            month, day = first, second
        if not 1 <= month <= 12:
            raise UnresolvableSpanError(f"month out of range: {month}", span.text)

        year = self._year_group(span)
        if year is None:
            year = self._pick_year(month, day, anchor)
            return ResolvedValue.of_point(Point(year, month, day, inferred={"year"}))
        if len(span.group("year")) == 2:
            year += 2000 if year < 50 else 1900
        return ResolvedValue.of_point(Point(year, month, day))

    def _resolve_ordinal_day(self, span, offset, hints, anchor):
        day = int(span.group("day"))
        policy = self.settings.PREFER_DATES_FROM
        today = anchor.date()
        step = {"future": 1, "past": -1}.get(policy, 0)
        year, month = anchor.year, anchor.month
        for _ in range(MAX_MONTH_STEPS):
            candidate = _safe_date(year, month, day)
            if candidate is not None:
                if step == 0:
                    break
                if (step > 0 and candidate >= today) or (step < 0 and candidate <= today):
                    break
            elif step == 0:
                raise UnresolvableSpanError(f"day {day} does not exist in {year}-{month:02d}", span.text)
            year, month = _shift_month(year, month, step)
        else:
            raise UnresolvableSpanError(f"no month has day {day}", span.text)
        return ResolvedValue.of_point(Point(year, month, day, inferred={"year", "month"}))

    # =========================================================================
    # Time handlers
    # =========================================================================

    def _resolve_clock_time(self, span, offset, hints, anchor):
        hour = int(span.group("hour"))
        minute = int(span.group("minute") or 0)
        second = int(span.group("second") or 0)

        meridiem = span.group("ampm")
        if meridiem is not None and hour <= 12:
            hour = hour % 12 + (12 if meridiem.lower().startswith("p") else 0)
        elif span.group("daypart") is not None:
            hour = adjust_hour(self.config, span.group("daypart"), hour)
        return ResolvedValue.of_point(self._time_point(anchor, hour, minute, second))

    def _resolve_special_time(self, span, offset, hints, anchor):
        hour, minute = self._lookup(self.config.special_time_map, span, "special")
        return ResolvedValue.of_point(self._time_point(anchor, hour, minute))

    def _resolve_day_part(self, span, offset, hints, anchor):
        return self._day_part_range(anchor.date(), span.group("daypart"))

    # =========================================================================
    # Duration handlers
    # =========================================================================

    def _resolve_duration(self, span, offset, hints, anchor):
        value, unit = self._duration_parts(span)
        return ResolvedValue.of_duration(Period(unit, value))

    def _shifted_point(self, span, anchor, sign):
        value, unit = self._duration_parts(span)
        delta = Period(unit, value).to_relativedelta()
        moment = anchor + delta if sign > 0 else anchor - delta

        if unit.is_time:
            return ResolvedValue.of_point(Point.from_datetime(moment, with_time=True))
        if unit == Unit.DAY:
            return ResolvedValue.of_point(Point.from_datetime(moment))
        if unit == Unit.WEEK:
            iso_year, iso_week, _ = moment.isocalendar()
            return ResolvedValue.of_point(Point(year=iso_year, week=iso_week))
        if unit in (Unit.MONTH, Unit.QUARTER):
            return ResolvedValue.of_point(Point(moment.year, moment.month))
        return ResolvedValue.of_point(Point(moment.year))

    def _resolve_duration_ago(self, span, offset, hints, anchor):
        return self._shifted_point(span, anchor, -1)

    def _resolve_duration_later(self, span, offset, hints, anchor):
        return self._shifted_point(span, anchor, 1)

    def _resolve_next_n_units(self, span, offset, hints, anchor):
        if offset.value not in (1, -1):
            raise UnresolvableSpanError("needs a next/last marker", span.text)
        value, unit = self._duration_parts(span)
        period = Period(unit, value)
        delta = period.to_relativedelta()

        if unit.is_time:
            start, end = (anchor, anchor + delta) if offset.value > 0 else (anchor - delta, anchor)
            return ResolvedValue.of_range(
                Point.from_datetime(start, with_time=True),
                Point.from_datetime(end, with_time=True),
                period,
            )

        if offset.value > 0:
            start = anchor.date() + timedelta(days=1)
            end = start + delta
        else:
            end = anchor.date()
            start = end - delta
        return ResolvedValue.of_range(_day_point(start), _day_point(end), period)

    def _resolve_within_next(self, span, offset, hints, anchor):
        """Range starting at the anchor: "within the next 3 days"."""
        value, unit = self._duration_parts(span)
        period = Period(unit, value)
        delta = period.to_relativedelta()
        if unit.is_time:
            return ResolvedValue.of_range(
                Point.from_datetime(anchor, with_time=True),
                Point.from_datetime(anchor + delta, with_time=True),
                period,
            )
        start = anchor.date()
        return ResolvedValue.of_range(_day_point(start), _day_point(start + delta), period)

    # =========================================================================
    # Period handlers
    # =========================================================================

    def _resolve_to_date(self, span, offset, hints, anchor):
        unit = hints.to_date_unit
        if unit is None:
            raise UnresolvableSpanError("not a to-date idiom", span.text)
        midnight = datetime(anchor.year, anchor.month, anchor.day)
        if unit == Unit.WEEK:
            start = midnight - timedelta(days=anchor.weekday())
        elif unit == Unit.MONTH:
            start = midnight.replace(day=1)
        else:
            start = midnight.replace(month=1, day=1)
        return ResolvedValue.of_range(
            Point.from_datetime(start, with_time=True),
            Point.from_datetime(anchor, with_time=True),
            period_between(start, anchor),
        )

    def _resolve_relative_unit(self, span, offset, hints, anchor):
        if not offset.is_specified:
            raise UnresolvableSpanError("no relative marker", span.text)
        swift = offset.value
        today = anchor.date()
        monday = today - timedelta(days=today.weekday())

        if hints.weekend:
            saturday = monday + timedelta(days=5, weeks=swift)
            return ResolvedValue.of_range(
                _day_point(saturday), _day_point(saturday + timedelta(days=2)), Period(Unit.DAY, 2)
            )

        if hints.week_only:
            unit = Unit.WEEK
        elif hints.month_only:
            unit = Unit.MONTH
        elif hints.year_only:
            unit = Unit.YEAR
        else:
            unit = self._lookup(self.config.unit_map, span, "unit")

        if unit == Unit.WEEK:
            start = monday + timedelta(weeks=swift)
            return ResolvedValue.of_range(
                _day_point(start), _day_point(start + timedelta(weeks=1)), Period(Unit.WEEK, 1)
            )
        if unit == Unit.MONTH:
            moment = today + relativedelta(months=swift)
            return ResolvedValue.of_point(Point(moment.year, moment.month))
        if unit == Unit.YEAR:
            return ResolvedValue.of_point(Point(anchor.year + swift))
        if unit == Unit.QUARTER:
            first_month = 3 * ((anchor.month - 1) // 3) + 1
            start = date(anchor.year, first_month, 1) + relativedelta(months=3 * swift)
            return ResolvedValue.of_range(
                _day_point(start), _day_point(start + relativedelta(months=3)), Period(Unit.QUARTER, 1)
            )
        if unit == Unit.DECADE:
            year = anchor.year // 10 * 10 + 10 * swift
            return ResolvedValue.of_range(Point(year, 1, 1), Point(year + 10, 1, 1), Period(Unit.DECADE, 1))
        if unit == Unit.CENTURY:
            year = anchor.year // 100 * 100 + 100 * swift
            return ResolvedValue.of_range(Point(year, 1, 1), Point(year + 100, 1, 1), Period(Unit.CENTURY, 1))
        raise UnresolvableSpanError(f"no calendar period for unit {unit.value}", span.text)

    def _resolve_month_only(self, span, offset, hints, anchor):
        month = self._lookup(self.config.month_map, span, "month")
        year = self._year_group(span)
        if year is not None:
            return ResolvedValue.of_point(Point(year, month))
        if offset.is_specified:
            return ResolvedValue.of_point(Point(anchor.year + offset.value, month))
        year = self._pick_month_year(month, anchor)
        return ResolvedValue.of_point(Point(year, month, inferred={"year"}))

    def _resolve_year_number(self, span, offset, hints, anchor):
        return ResolvedValue.of_point(Point(int(span.group("year"))))

    def _resolve_season(self, span, offset, hints, anchor):
        season = self._lookup(self.config.season_map, span, "season")
        start_month = SEASON_START_MONTHS[season]

        inferred = frozenset()
        year = self._year_group(span)
        if year is None and offset.is_specified:
            year = anchor.year + offset.value
        elif year is None:
            year = anchor.year
            # January and February still belong to the winter that began in December
            if season == "WI" and anchor.month < 3:
                year -= 1
            inferred = frozenset({"year"})

        end_year, end_month = _shift_month(year, start_month, 3)
        return ResolvedValue.of_range(
            Point(year, start_month, inferred=inferred),
            Point(end_year, end_month, inferred=inferred),
            Period(Unit.MONTH, 3),
        )

    def _resolve_quarter(self, span, offset, hints, anchor):
        quarter = self._number(span, "quarter")
        if not 1 <= quarter <= 4:
            raise UnresolvableSpanError(f"quarter out of range: {quarter}", span.text)
        year = self._year_group(span)
        inferred = frozenset()
        if year is None:
            year = anchor.year
            inferred = frozenset({"year"})
        start = date(year, 3 * quarter - 2, 1)
        return ResolvedValue.of_range(
            _day_point(start, inferred),
            _day_point(start + relativedelta(months=3), inferred),
            Period(Unit.QUARTER, 1),
        )

    def _resolve_decade(self, span, offset, hints, anchor):
        digits = span.group("decade")
        year = int(digits)
        if len(digits) == 2:
            year = 2000 + year if 2000 + year <= anchor.year else 1900 + year
        return ResolvedValue.of_range(Point(year, 1, 1), Point(year + 10, 1, 1), Period(Unit.DECADE, 1))

    def _resolve_century(self, span, offset, hints, anchor):
        century = self._number(span, "century")
        if century < 2:
            raise UnresolvableSpanError(f"century {century} precedes year 1", span.text)
        year = (century - 1) * 100
        return ResolvedValue.of_range(Point(year, 1, 1), Point(year + 100, 1, 1), Period(Unit.CENTURY, 1))

    # =========================================================================
    # Composite handlers
    # =========================================================================

    def _resolve_date_time(self, span, offset, hints, anchor):
        date_span = next(c for c in span.children if c.kind == SpanKind.DATE)
        time_span = next(c for c in span.children if c.kind == SpanKind.TIME)
        day = self._point_of(date_span, anchor)
        time = self._point_of(time_span, anchor)
        if day.day is None or day.to_datetime() is None:
            raise UnresolvableSpanError("date component has no day", span.text)
        return ResolvedValue.of_point(Point(
            day.year, day.month, day.day, time.hour, time.minute, time.second,
            inferred=day.inferred,
        ))

    def _resolve_date_day_part(self, span, offset, hints, anchor):
        day = self._point_of(span.children[0], anchor)
        if day.day is None or day.to_datetime() is None:
            raise UnresolvableSpanError("date component has no day", span.text)
        return self._day_part_range(day.to_datetime().date(), span.group("daypart"),
                                    day.inferred & INFERRED_DATE)

    def _resolve_range(self, span, offset, hints, anchor):
        start = self._point_of(span.children[0], anchor)
        end = self._point_of(span.children[1], anchor)
        bare_end = end.has_time and not any(end.is_known(f) for f in DATE_FIELDS)

        # "tomorrow 3pm to 5pm": the bare end time takes the start's date
        if start.has_time and bare_end:
            end = replace(end, year=start.year, month=start.month, day=start.day,
                          inferred=start.inferred & INFERRED_DATE)
        else:
            start, end = self._propagate_year(start, end)

        start_dt, end_dt = start.to_datetime(), end.to_datetime()
        if start_dt is None or end_dt is None:
            raise UnresolvableSpanError("range endpoint is not calendar-anchored", span.text)

        if end_dt < start_dt:
            if bare_end:
                end = Point.from_datetime(end_dt + timedelta(days=1), with_time=True,
                                          inferred=end.inferred)
            elif "year" in end.inferred:
                end = replace(end, year=end.year + 1)
            else:
                raise UnresolvableSpanError("range ends before it starts", span.text)
            end_dt = end.to_datetime()
            if end_dt < start_dt:
                raise UnresolvableSpanError("range ends before it starts", span.text)

        return ResolvedValue.of_range(start, end, self._range_period(span, start, end))

    def _propagate_year(self, start, end):
        """Share a stated year between range endpoints: "June 5 to June 8, 2025"."""
        if start.week is not None or end.week is not None:
            return start, end
        if start.is_known("year") and not end.is_known("year") and end.is_known("month"):
            end = replace(end, year=start.year, inferred=end.inferred - {"year"})
        elif end.is_known("year") and not start.is_known("year") and start.is_known("month"):
            start = replace(start, year=end.year, inferred=start.inferred - {"year"})
        return start, end

    def _range_period(self, span, start, end):
        start_dt, end_dt = start.to_datetime(), end.to_datetime()
        if start.has_time and end.has_time:
            return period_between(start_dt, end_dt)
        if start.precision != end.precision:
            raise UnresolvableSpanError("range endpoints differ in precision", span.text)
        if start.precision == Precision.DAY:
            return Period(Unit.DAY, (end_dt - start_dt).days)
        if start.precision == Precision.MONTH:
            return Period(Unit.MONTH, (end.year - start.year) * 12 + end.month - start.month)
        if start.precision == Precision.YEAR:
            return Period(Unit.YEAR, end.year - start.year)
        raise UnresolvableSpanError("range endpoints have no common unit", span.text)
