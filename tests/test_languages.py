"""
Tests for lexical configurations: loading, validation and the German rules.
"""

import logging
import pytest
from dataclasses import replace
from datetime import datetime

import timexparser
from timexparser.errors import ConfigurationIncompleteError
from timexparser.extraction import SpanExtractor, SpanKind
from timexparser.languages import (
    LexicalConfiguration,
    alternation,
    available_languages,
    get_configuration,
)


# =============================================================================
# Configuration contract
# =============================================================================

class TestLexicalConfiguration:
    """Tests for building and validating configurations."""

    def test_available_languages(self):
        assert available_languages() == ["de", "en"]

    def test_configuration_is_cached(self):
        assert get_configuration("en") is get_configuration("en")
        assert get_configuration("EN") is get_configuration("en")

    def test_unknown_language(self):
        with pytest.raises(ConfigurationIncompleteError) as excinfo:
            get_configuration("xx")
        assert excinfo.value.slot == "language"

    def test_missing_required_slot(self):
        with pytest.raises(ConfigurationIncompleteError) as excinfo:
            LexicalConfiguration(language="xx")
        assert excinfo.value.slot == "next_prefix"
        assert excinfo.value.language == "xx"

    def test_broken_pattern(self, caplog):
        en = get_configuration("en")
        with caplog.at_level(logging.WARNING, logger="timexparser.languages.config"):
            with pytest.raises(ConfigurationIncompleteError) as excinfo:
                replace(en, date_patterns=(("weekday", r"(unclosed"),))
        assert excinfo.value.slot == "date_patterns"
        assert "Failed to compile" in caplog.text

    def test_maps_are_read_only(self):
        with pytest.raises(TypeError):
            get_configuration("en").month_map["smarch"] = 13

    def test_missing_optional_slot_disables_the_feature(self):
        config = replace(get_configuration("en"), ago_suffix=None)
        spans = SpanExtractor(config).extract("3 days ago")
        assert [s.kind for s in spans] == [SpanKind.DURATION]

    def test_alternation_prefers_longer_words(self):
        assert alternation(["mar", "march"]) == "march|mar"
        assert alternation(["day after tomorrow"]) == r"day\s+after\s+tomorrow"


# =============================================================================
# German
# =============================================================================

class TestGerman:
    """The same engine driven by the German configuration."""

    @pytest.fixture
    def anchor(self):
        return datetime(2024, 6, 15, 12, 0, 0)

    def timexes(self, text, anchor):
        return [r.timex for r in timexparser.recognize(text, language="de", anchor=anchor)]

    def test_next_week(self, anchor):
        assert self.timexes("nächste Woche", anchor) == ["(2024-06-17,2024-06-24,P1W)"]
        assert self.timexes("übernächste Woche", anchor) == ["(2024-06-24,2024-07-01,P1W)"]

    def test_ago_prefix(self, anchor):
        assert self.timexes("vor 3 Tagen", anchor) == ["2024-06-12"]

    def test_later_prefix(self, anchor):
        assert self.timexes("in 2 Jahren", anchor) == ["2026"]

    def test_date_and_time(self, anchor):
        assert self.timexes("morgen um 15 Uhr", anchor) == ["2024-06-16T15:00:00"]

    def test_evening_today(self, anchor):
        results = timexparser.recognize("heute Abend", language="de", anchor=anchor)
        assert [r.timex for r in results] == ["(2024-06-15T16:00:00,2024-06-15T20:00:00,PT4H)"]
        assert results[0].kind == SpanKind.DATETIMEPERIOD

    def test_day_month_year(self, anchor):
        assert self.timexes("am 5. Juni 2024", anchor) == ["2024-06-05"]
        assert self.timexes("05.06.2024", anchor) == ["2024-06-05"]

    def test_clock_with_day_part(self, anchor):
        assert self.timexes("um 8 Uhr abends", anchor) == ["T20:00:00"]

    def test_now_idioms(self, anchor):
        assert self.timexes("jetzt", anchor) == ["PRESENT_REF"]
        assert self.timexes("vorhin", anchor) == ["PAST_REF"]
