"""
Tests for value resolution.

Most tests run whole expressions through ``recognize`` against a fixed anchor
so the expected timex strings are stable. The anchor 2024-06-15 is a Saturday.
"""

import pytest
from datetime import datetime

import timexparser
from timexparser.errors import UnresolvableSpanError
from timexparser.extraction import CandidateSpan, SpanKind
from timexparser.languages import get_configuration
from timexparser.conf import settings
from timexparser.resolution import ValueResolver
from timexparser.values import Precision


def recognize_one(text, anchor, **setting_overrides):
    results = timexparser.recognize(
        text, language="en", anchor=anchor, settings=setting_overrides or None
    )
    assert len(results) == 1, results
    return results[0]


# =============================================================================
# Relative units
# =============================================================================

class TestRelativeUnits:
    """Tests for next/last/this with calendar units."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def test_next_week(self, anchor):
        result = recognize_one("next week", anchor)
        assert result.timex == "(2024-06-17,2024-06-24,P1W)"
        assert result.value.precision == Precision.WEEK
        assert result.value.bounds() == (datetime(2024, 6, 17), datetime(2024, 6, 24))

    def test_this_weekend(self, anchor):
        assert recognize_one("this weekend", anchor).timex == "(2024-06-15,2024-06-17,P2D)"

    def test_weekend_after_next(self, anchor):
        assert recognize_one("the weekend after next", anchor).timex == "(2024-06-29,2024-07-01,P2D)"

    def test_years(self, anchor):
        assert recognize_one("this year", anchor).timex == "2024"
        assert recognize_one("last year", anchor).timex == "2023"

    def test_next_quarter(self, anchor):
        assert recognize_one("next quarter", anchor).timex == "(2024-07-01,2024-10-01,P3M)"

    def test_next_n_days(self, anchor):
        assert recognize_one("next 3 days", anchor).timex == "(2024-06-16,2024-06-19,P3D)"

    def test_last_n_hours(self, anchor):
        result = recognize_one("last 2 hours", anchor)
        assert result.timex == "(2024-06-15T10:00:00,2024-06-15T12:00:00,PT2H)"
        assert result.kind == SpanKind.DATETIMEPERIOD

    def test_month_to_date(self, anchor):
        assert recognize_one("month to date", anchor).timex == "(2024-06-01T00:00:00,2024-06-15T12:00:00,PT348H)"


class TestMonthArithmetic:
    """Month offsets roll over to the last valid day."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 1, 31)

    def test_next_month(self, anchor):
        result = recognize_one("next month", anchor)
        assert result.timex == "2024-02"
        assert result.value.bounds() == (datetime(2024, 2, 1), datetime(2024, 3, 1))

    def test_in_one_month(self, anchor):
        assert recognize_one("in 1 month", anchor).timex == "2024-02"

    def test_month_ago_from_month_end(self):
        assert recognize_one("1 month ago", datetime(2024, 3, 31)).timex == "2024-02"


# =============================================================================
# Durations shifted from the anchor
# =============================================================================

class TestShiftedDurations:
    """Tests for "ago" and "in"/"later" expressions."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def test_in_two_years(self, anchor):
        result = recognize_one("in 2 years", anchor)
        assert result.timex == "2026"
        assert result.value.precision == Precision.YEAR

    def test_days_ago(self, anchor):
        assert recognize_one("3 days ago", anchor).timex == "2024-06-12"

    def test_weeks_ago_is_an_iso_week(self, anchor):
        assert recognize_one("2 weeks ago", anchor).timex == "2024-W22"

    def test_hours_later(self, anchor):
        assert recognize_one("5 hours later", anchor).timex == "2024-06-15T17:00:00"

    def test_bare_duration(self, anchor):
        result = recognize_one("3 weeks", anchor)
        assert result.timex == "P3W"
        assert result.kind == SpanKind.DURATION


# =============================================================================
# Dates
# =============================================================================

class TestDates:
    """Tests for dates with defaulted components."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def test_ordinal_day_moves_to_next_month(self):
        result = recognize_one("the 5th", datetime(2024, 6, 20))
        assert result.timex == "XXXX-XX-05"
        assert result.value.bounds()[0] == datetime(2024, 7, 5)

    def test_relative_days(self, anchor):
        assert recognize_one("tomorrow", anchor).timex == "2024-06-16"
        assert recognize_one("the day before yesterday", anchor).timex == "2024-06-13"

    def test_weekdays(self, anchor):
        assert recognize_one("last Friday", anchor).timex == "2024-06-07"
        assert recognize_one("next Friday", anchor).timex == "2024-06-21"
        assert recognize_one("Friday", anchor).timex == "2024-06-14"

    def test_weekday_policy(self, anchor):
        assert recognize_one("Friday", anchor, PREFER_WEEKDAYS_FROM="future").timex == "2024-06-21"
        assert recognize_one("Friday", anchor, PREFER_WEEKDAYS_FROM="past").timex == "2024-06-14"

    def test_month_day_prefers_future(self, anchor):
        result = recognize_one("June 5", anchor)
        assert result.timex == "XXXX-06-05"
        assert result.value.point.year == 2025

    def test_month_day_policies(self, anchor):
        assert recognize_one("June 5", anchor, PREFER_DATES_FROM="past").value.point.year == 2024
        assert recognize_one("June 5", anchor, PREFER_DATES_FROM="current_period").value.point.year == 2024

    def test_explicit_year(self, anchor):
        assert recognize_one("June 5, 2025", anchor).timex == "2025-06-05"
        assert recognize_one("the 5th of June 2025", anchor).timex == "2025-06-05"

    def test_numeric_dates(self, anchor):
        assert recognize_one("6/5/2024", anchor).timex == "2024-06-05"
        assert recognize_one("6/5/2024", anchor, DATE_ORDER="DMY").timex == "2024-05-06"
        assert recognize_one("6/5/24", anchor).timex == "2024-06-05"
        assert recognize_one("2024-06-05", anchor).timex == "2024-06-05"


# =============================================================================
# Periods
# =============================================================================

class TestPeriods:
    """Tests for month, season, quarter, decade and century periods."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def test_bare_month(self, anchor):
        result = recognize_one("March", anchor)
        assert result.timex == "XXXX-03"
        assert result.value.bounds()[0] == datetime(2025, 3, 1)

    def test_next_month_name(self, anchor):
        assert recognize_one("next March", anchor).timex == "2025-03"

    def test_season(self, anchor):
        assert recognize_one("summer 2024", anchor).timex == "(2024-06,2024-09,P3M)"

    def test_quarter(self, anchor):
        assert recognize_one("Q3 2024", anchor).timex == "(2024-07-01,2024-10-01,P3M)"

    def test_decade(self, anchor):
        assert recognize_one("the 90s", anchor).timex == "(1990-01-01,2000-01-01,P10Y)"

    def test_century(self, anchor):
        assert recognize_one("the 21st century", anchor).timex == "(2000-01-01,2100-01-01,P100Y)"


# =============================================================================
# Times
# =============================================================================

class TestTimes:
    """Tests for clock times and day parts."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def test_clock_time_with_day_part(self, anchor):
        assert recognize_one("3:30 in the afternoon", anchor).timex == "T15:30:00"
        assert recognize_one("8 in the evening", anchor).timex == "T20:00:00"

    def test_meridiem(self, anchor):
        assert recognize_one("12pm", anchor).timex == "T12:00:00"
        assert recognize_one("12am", anchor).timex == "T00:00:00"

    def test_this_morning(self, anchor):
        assert recognize_one("this morning", anchor).timex == "(2024-06-15T08:00:00,2024-06-15T12:00:00,PT4H)"

    def test_date_time(self, anchor):
        result = recognize_one("tomorrow at 3pm", anchor)
        assert result.timex == "2024-06-16T15:00:00"
        assert result.kind == SpanKind.DATETIME

    def test_date_and_day_part(self, anchor):
        result = recognize_one("tomorrow evening", anchor)
        assert result.timex == "(2024-06-16T16:00:00,2024-06-16T20:00:00,PT4H)"
        assert result.kind == SpanKind.DATETIMEPERIOD


# =============================================================================
# Ranges
# =============================================================================

class TestRanges:
    """Tests for explicit ranges joined by a connector."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 1)

    def test_date_range(self, anchor):
        result = recognize_one("from June 5 to June 8", anchor)
        assert result.timex == "(XXXX-06-05,XXXX-06-08,P3D)"
        assert result.value.bounds() == (datetime(2024, 6, 5), datetime(2024, 6, 8))

    def test_year_propagates_to_start(self, anchor):
        assert recognize_one("from June 5 to June 8, 2025", anchor).timex == "(2025-06-05,2025-06-08,P3D)"

    def test_time_range_wraps_midnight(self, anchor):
        result = recognize_one("between 10pm and 2am", anchor)
        assert result.timex == "(T22:00:00,T02:00:00,PT4H)"
        assert result.value.bounds() == (datetime(2024, 6, 1, 22), datetime(2024, 6, 2, 2))

    def test_year_propagates_without_prefix(self, anchor):
        assert recognize_one("June 5 to June 8, 2025", anchor).timex == "(2025-06-05,2025-06-08,P3D)"

    def test_between_dates(self, anchor):
        result = recognize_one("between June 5 and June 8", anchor)
        assert result.timex == "(XXXX-06-05,XXXX-06-08,P3D)"
        assert result.kind == SpanKind.DATEPERIOD


class TestDateTimeRanges:
    """A bare end time takes the date of a date-time start."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def test_tomorrow_afternoon(self, anchor):
        result = recognize_one("tomorrow 3pm to 5pm", anchor)
        assert result.timex == "(2024-06-16T15:00:00,2024-06-16T17:00:00,PT2H)"
        assert result.kind == SpanKind.DATETIMEPERIOD

    def test_yesterday_afternoon(self, anchor):
        result = recognize_one("yesterday 3pm to 5pm", anchor)
        assert result.timex == "(2024-06-14T15:00:00,2024-06-14T17:00:00,PT2H)"
        assert result.value.bounds() == (datetime(2024, 6, 14, 15), datetime(2024, 6, 14, 17))

    def test_end_time_past_midnight(self, anchor):
        result = recognize_one("tomorrow 10pm to 2am", anchor)
        assert result.timex == "(2024-06-16T22:00:00,2024-06-17T02:00:00,PT4H)"


class TestWithinNext:
    """Ranges that run from the anchor: "within the next N units"."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def test_days(self, anchor):
        result = recognize_one("within the next 3 days", anchor)
        assert result.timex == "(2024-06-15,2024-06-18,P3D)"
        assert result.value.range is not None
        assert result.kind == SpanKind.DATEPERIOD

    def test_hours(self, anchor):
        result = recognize_one("within the next 2 hours", anchor)
        assert result.timex == "(2024-06-15T12:00:00,2024-06-15T14:00:00,PT2H)"
        assert result.kind == SpanKind.DATETIMEPERIOD

    def test_in_still_shifts(self, anchor):
        assert recognize_one("in 3 days", anchor).timex == "2024-06-18"


# =============================================================================
# Unresolvable spans
# =============================================================================

class TestUnresolvable:
    """Spans that cannot be completed are dropped without affecting siblings."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    @pytest.fixture
    def resolver(self):
        return ValueResolver(get_configuration("en"), settings)

    def _span(self, text, pattern, groups, kind=SpanKind.DATE):
        return CandidateSpan(0, len(text), kind, text, pattern, groups, 0)

    def test_impossible_day_falls_back_to_month(self, anchor):
        assert recognize_one("February 30", anchor).timex == "XXXX-02"

    def test_siblings_survive(self, anchor):
        results = timexparser.recognize("February 30 or tomorrow", anchor=anchor)
        assert [r.timex for r in results] == ["XXXX-02", "2024-06-16"]

    def test_siblings_survive_an_out_of_range_shift(self, anchor):
        results = timexparser.recognize("tomorrow or in 99999999999 days", anchor=anchor)
        assert results[0].timex == "2024-06-16"
        assert "in 99999999999 days" not in [r.text for r in results]

    def test_out_of_range_shift_is_unresolvable(self, resolver, anchor):
        span = self._span("in 99999999999 days", "duration_later",
                          {"number": "99999999999", "unit": "days"})
        with pytest.raises(UnresolvableSpanError):
            resolver.resolve_span(span, anchor)

    def test_impossible_month_day(self, resolver, anchor):
        span = self._span("February 30", "month_day", {"month": "February", "day": "30"})
        with pytest.raises(UnresolvableSpanError):
            resolver.resolve_span(span, anchor)

    def test_first_century(self, resolver, anchor):
        span = self._span("the 1st century", "century", {"century": "1st"}, SpanKind.DATEPERIOD)
        with pytest.raises(UnresolvableSpanError):
            resolver.resolve_span(span, anchor)

    def test_unknown_pattern(self, resolver, anchor):
        with pytest.raises(UnresolvableSpanError) as excinfo:
            resolver.resolve_span(self._span("whenever", "bogus", {}), anchor)
        assert excinfo.value.span_text == "whenever"

    def test_year_level_unit_needs_a_marker(self, resolver, anchor):
        span = self._span("decade", "relative_unit", {"unit": "decade"}, SpanKind.DATEPERIOD)
        with pytest.raises(UnresolvableSpanError):
            resolver.resolve_span(span, anchor)
