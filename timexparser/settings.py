# Default settings. Each key can be overridden per call through the
# ``settings`` argument of :func:`timexparser.recognize`.

settings = {
    "PREFER_DATES_FROM": "future",
    "PREFER_WEEKDAYS_FROM": "current_period",
    "RELATIVE_BASE": False,
    "TIMEZONE": "local",
    "DATE_ORDER": None,
    "DEFAULT_LANGUAGE": "en",
    "MAX_TEXT_LENGTH": 10000,
}

date_orders = ("MDY", "DMY", "YMD")

preference_policies = ("future", "past", "current_period")
