import pytest
from datetime import datetime

import timexparser
from timexparser.conf import Settings, apply_settings, check_settings, settings
from timexparser.errors import SettingValidationError
from timexparser.settings import settings as default_settings


class TestSettings:
    """Tests for default settings and per-call overrides."""

    def test_defaults(self):
        assert settings.PREFER_DATES_FROM == "future"
        assert settings.PREFER_WEEKDAYS_FROM == "current_period"
        assert settings.RELATIVE_BASE is False
        assert settings.DEFAULT_LANGUAGE == "en"
        assert settings._default

    def test_replace_returns_a_new_instance(self):
        custom = settings.replace(PREFER_DATES_FROM="past")
        assert custom.PREFER_DATES_FROM == "past"
        assert custom.MAX_TEXT_LENGTH == settings.MAX_TEXT_LENGTH
        assert not custom._default
        assert settings.PREFER_DATES_FROM == "future"

    def test_replace_rejects_none(self):
        with pytest.raises(TypeError):
            settings.replace(PREFER_DATES_FROM=None)

    def test_get_key(self):
        assert Settings.get_key() == "default"
        assert Settings.get_key({"B": 1, "A": 2}) == (("A", "2"), ("B", "1"))

    def test_replace_records_the_overrides(self):
        custom = settings.replace(PREFER_DATES_FROM="past")
        assert custom._mod_settings == {"PREFER_DATES_FROM": "past"}
        assert custom.key == (("PREFER_DATES_FROM", "'past'"),)
        assert settings.key == "default"

    def test_overrides_accumulate(self):
        custom = settings.replace(PREFER_DATES_FROM="past").replace(DATE_ORDER="DMY")
        assert custom._mod_settings == {"PREFER_DATES_FROM": "past", "DATE_ORDER": "DMY"}


class TestRecognizerCache:
    """Recognizers are shared between calls with equal settings."""

    def test_dict_settings_share_a_recognizer(self):
        overrides = {"PREFER_DATES_FROM": "past"}
        anchor = datetime(2024, 6, 15)
        first = timexparser.recognize("June 5", anchor=anchor, settings=dict(overrides))
        cached = timexparser._recognizers[("en", Settings.get_key(overrides))]
        second = timexparser.recognize("June 5", anchor=anchor, settings=dict(overrides))
        assert timexparser._recognizers[("en", Settings.get_key(overrides))] is cached
        assert cached.settings.PREFER_DATES_FROM == "past"
        assert [r.value.point.year for r in first] == [r.value.point.year for r in second] == [2024]

    def test_different_settings_do_not_share(self):
        anchor = datetime(2024, 6, 15)
        past = timexparser.recognize("June 5", anchor=anchor, settings={"PREFER_DATES_FROM": "past"})
        future = timexparser.recognize("June 5", anchor=anchor, settings={"PREFER_DATES_FROM": "future"})
        assert past[0].value.point.year == 2024
        assert future[0].value.point.year == 2025

    def test_hand_built_settings_are_not_cached(self):
        custom = Settings(dict(default_settings, PREFER_DATES_FROM="past"))
        assert custom.key is None
        results = timexparser.recognize("June 5", anchor=datetime(2024, 6, 15), settings=custom)
        assert results[0].value.point.year == 2024
        assert Settings(dict(default_settings)).key == "default"


class TestCheckSettings:
    """Tests for validating user supplied settings."""

    @pytest.mark.parametrize("mod_settings", [
        {"PREFER_DATES_FROM": "past"},
        {"PREFER_WEEKDAYS_FROM": "future"},
        {"RELATIVE_BASE": datetime(2024, 6, 15)},
        {"RELATIVE_BASE": False},
        {"DATE_ORDER": "dmy"},
        {"MAX_TEXT_LENGTH": 500},
        {"TIMEZONE": "Europe/Berlin"},
    ])
    def test_valid(self, mod_settings):
        check_settings(mod_settings)

    @pytest.mark.parametrize("mod_settings", [
        {"UNKNOWN_SETTING": 1},
        {"PREFER_DATES_FROM": "sometimes"},
        {"PREFER_DATES_FROM": 1},
        {"DATE_ORDER": "XYZ"},
        {"MAX_TEXT_LENGTH": "100"},
        {"MAX_TEXT_LENGTH": 0},
        {"MAX_TEXT_LENGTH": True},
        {"RELATIVE_BASE": "2024-06-15"},
    ])
    def test_invalid(self, mod_settings):
        with pytest.raises(SettingValidationError):
            check_settings(mod_settings)


class TestApplySettings:
    """Tests for the settings decorator."""

    def test_dict_is_turned_into_settings(self):
        @apply_settings
        def handler(settings=None):
            return settings

        result = handler(settings={"PREFER_DATES_FROM": "past"})
        assert isinstance(result, Settings)
        assert result.PREFER_DATES_FROM == "past"

    def test_no_settings_uses_defaults(self):
        @apply_settings
        def handler(settings=None):
            return settings

        assert handler() is settings

    def test_invalid_type(self):
        with pytest.raises(TypeError):
            timexparser.recognize("tomorrow", settings=42)

    def test_invalid_value_reaches_the_caller(self):
        with pytest.raises(SettingValidationError):
            timexparser.recognize("tomorrow", settings={"PREFER_DATES_FROM": "never"})

    def test_unknown_timezone(self):
        with pytest.raises(SettingValidationError):
            timexparser.recognize("tomorrow", settings={"TIMEZONE": "Mars/Olympus_Mons"})
