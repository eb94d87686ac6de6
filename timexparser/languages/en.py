"""English lexical configuration."""

from timexparser.languages.config import LexicalConfiguration, alternation
from timexparser.values import Unit


MONTHS = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

DAYS_OF_WEEK = {
    "monday": 0, "mon": 0,
    "tuesday": 1, "tues": 1, "tue": 1,
    "wednesday": 2, "weds": 2, "wed": 2,
    "thursday": 3, "thurs": 3, "thu": 3,
    "friday": 4, "fri": 4,
    "saturday": 5,
    "sunday": 6,
}

UNITS = {
    "second": Unit.SECOND, "seconds": Unit.SECOND, "sec": Unit.SECOND, "secs": Unit.SECOND,
    "minute": Unit.MINUTE, "minutes": Unit.MINUTE, "min": Unit.MINUTE, "mins": Unit.MINUTE,
    "hour": Unit.HOUR, "hours": Unit.HOUR, "hr": Unit.HOUR, "hrs": Unit.HOUR,
    "day": Unit.DAY, "days": Unit.DAY,
    "week": Unit.WEEK, "weeks": Unit.WEEK,
    "month": Unit.MONTH, "months": Unit.MONTH,
    "quarter": Unit.QUARTER, "quarters": Unit.QUARTER,
    "year": Unit.YEAR, "years": Unit.YEAR,
    "decade": Unit.DECADE, "decades": Unit.DECADE,
    "century": Unit.CENTURY, "centuries": Unit.CENTURY,
}

CARDINALS = {
    "a": 1, "an": 1, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11,
    "twelve": 12, "thirteen": 13, "fourteen": 14, "fifteen": 15,
    "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50, "sixty": 60,
    "seventy": 70, "eighty": 80, "ninety": 90, "hundred": 100,
    "a couple of": 2, "a few": 3, "several": 3,
}

ORDINALS = {
    "first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5,
    "sixth": 6, "seventh": 7, "eighth": 8, "ninth": 9, "tenth": 10,
    "eleventh": 11, "twelfth": 12, "thirteenth": 13, "fourteenth": 14,
    "fifteenth": 15, "sixteenth": 16, "seventeenth": 17, "eighteenth": 18,
    "nineteenth": 19, "twentieth": 20, "twenty-first": 21, "twenty first": 21,
}

SEASONS = {
    "spring": "SP",
    "summer": "SU",
    "fall": "FA", "autumn": "FA",
    "winter": "WI",
}

RELATIVE_DAYS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
    "day after tomorrow": 2,
    "day before yesterday": -2,
}

DAY_PARTS = {
    "morning": (8, 12),
    "afternoon": (12, 16),
    "evening": (16, 20),
    "night": (20, 24),
    "tonight": (20, 24),
}

SPECIAL_TIMES = {
    "noon": (12, 0),
    "midday": (12, 0),
    "midnight": (0, 0),
}

SWIFT_WORDS = r"next|following|upcoming|coming|last|previous|past|prior|this|current"
DAY = r"(?P<day>3[01]|[12]\d|0?[1-9])"
ORDINAL_SUFFIX = r"(?:st|nd|rd|th)"
MONTH = r"(?P<month>{})\.?".format(alternation(MONTHS))
FULL_MONTH = r"(?P<month>{})".format(
    alternation(name for name, num in MONTHS.items() if len(name) > 3 and name != "may")
)
WEEKDAY = r"(?P<weekday>{})".format(alternation(DAYS_OF_WEEK))
YEAR = r"(?P<year>1[5-9]\d{2}|20\d{2})"
TENS = r"twenty|thirty|forty|fifty|sixty|seventy|eighty|ninety"
ONES = r"one|two|three|four|five|six|seven|eight|nine"
NUMBER = r"(?P<number>\d+|(?:{})[\s-](?:{})|{})".format(TENS, ONES, alternation(CARDINALS))
UNIT = r"(?P<unit>{})".format(alternation(UNITS))
DATE_UNIT = r"(?P<unit>{})".format(
    alternation(name for name, unit in UNITS.items() if not unit.is_time)
)
TIME_UNIT = r"(?P<unit>{})".format(
    alternation(name for name, unit in UNITS.items() if unit.is_time)
)
DAY_PART = r"(?P<daypart>morning|afternoon|evening|night)"
AMPM = r"(?P<ampm>[ap]\.?m\.?)(?!\w)"

NOW_IDIOMS = (
    "right now", "just now", "now", "currently", "at the moment", "at present",
    "presently", "right away", "recently", "previously", "lately",
    "as soon as possible", "asap",
)


configuration = LexicalConfiguration(
    language="en",

    next_prefix=r"\b(?:next|following|upcoming|coming)\b",
    previous_prefix=r"\b(?:last|previous|past|prior)\b",
    this_prefix=r"\b(?:this|current)\b",
    after_next_suffix=r"\bafter\s+next\b",

    now_suffixes=("now",),
    present_idioms=("currently", "at the moment", "at present", "presently", "right away"),
    past_idioms=("recently", "previously", "lately"),
    future_idioms=("as soon as possible", "asap"),

    week_terms=("week",),
    weekend_terms=("weekend",),
    month_terms=("month",),
    year_terms=("year",),
    generic_year_terms=("calendar year", "fiscal year"),
    week_to_date=("week to date", "wtd"),
    month_to_date=("month to date", "mtd"),
    year_to_date=("year to date", "ytd"),
    morning_terms=("morning",),

    unit_map=UNITS,
    cardinal_map=CARDINALS,
    ordinal_map=ORDINALS,
    month_map=MONTHS,
    day_of_week_map=DAYS_OF_WEEK,
    season_map=SEASONS,
    relative_day_map=RELATIVE_DAYS,
    day_part_map=DAY_PARTS,
    special_time_map=SPECIAL_TIMES,

    ago_suffix=r"ago|before\s+now|earlier",
    later_suffix=r"later|from\s+now|hence",
    later_prefix=r"in",
    range_prefix=r"from|starting",
    range_connector=r"to|until|till|through|thru|-|–",
    between_prefix=r"between",
    between_connector=r"and",
    date_time_connector=r",|at|on|@|",
    date_day_part_suffix=r"(?:in\s+the\s+)?" + DAY_PART,

    date_order="MDY",

    date_patterns=(
        ("relative_day", r"\b(?:the\s+)?(?P<reldate>{})\b".format(alternation(RELATIVE_DAYS))),
        ("weekday", r"\b(?:(?P<swift>{})\s+)?{}(?:\s+after\s+next)?\b".format(SWIFT_WORDS, WEEKDAY)),
        ("month_day", r"\b{}\s+(?:the\s+)?{}{}?(?:,?\s+{})?\b".format(MONTH, DAY, ORDINAL_SUFFIX, YEAR)),
        ("month_day", r"\b(?:the\s+)?{}{}?\s+(?:of\s+)?{}(?:,?\s+{})?\b".format(DAY, ORDINAL_SUFFIX, MONTH, YEAR)),
        ("iso_date", r"\b(?P<year>\d{4})-(?P<monthnum>\d{1,2})-(?P<day>\d{1,2})\b"),
        ("numeric_date", r"\b(?P<first>\d{1,2})/(?P<second>\d{1,2})(?:/(?P<year>\d{4}|\d{2}))?\b"),
        ("ordinal_day", r"\bthe\s+{}{}\b".format(DAY, ORDINAL_SUFFIX)),
    ),
    time_patterns=(
        ("clock_time",
         r"\b(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)(?::(?P<second>[0-5]\d))?"
         r"(?:\s*{})?(?:\s+in\s+the\s+{})?".format(AMPM, DAY_PART)),
        ("clock_time", r"\b(?P<hour>1[0-2]|0?[1-9])\s*{}".format(AMPM)),
        ("clock_time",
         r"\b(?P<hour>1[0-2]|0?[1-9])(?:\s*o'?clock)?\s+(?:in\s+the|at)\s+{}\b".format(DAY_PART)),
        ("clock_time", r"\b(?P<hour>1[0-2]|0?[1-9])\s*o'?clock\b"),
        ("special_time", r"\b(?P<special>{})\b".format(alternation(SPECIAL_TIMES))),
    ),
    duration_patterns=(
        ("duration", r"\b{}\s+{}\b".format(NUMBER, UNIT)),
    ),
    date_period_patterns=(
        ("to_date", r"\b(?P<idiom>week\s+to\s+date|month\s+to\s+date|year\s+to\s+date|wtd|mtd|ytd)\b"),
        ("relative_unit",
         r"\b(?:the\s+)?(?P<swift>{})\s+(?P<unit>weekend|week|month|quarter|year|decade|century)\b".format(SWIFT_WORDS)),
        ("relative_unit",
         r"\b(?:the\s+)?(?P<unit>weekend|week|month|quarter|year|decade|century)\s+after\s+next\b"),
        ("month_only", r"\b(?:(?P<swift>{})\s+)?{}(?:,?\s+{})?\b".format(SWIFT_WORDS, FULL_MONTH, YEAR)),
        ("month_only", r"\b(?:(?P<swift>{})\s+(?P<month>may)|(?P<month>may)\s+{})\b".format(SWIFT_WORDS, YEAR)),
        ("year_number", r"\b{}\b".format(YEAR)),
        ("season",
         r"\b(?:(?P<swift>{})\s+)?(?P<season>{})(?:\s+(?:of\s+)?{})?\b".format(
             SWIFT_WORDS, alternation(SEASONS), YEAR)),
        ("quarter",
         r"\b(?:the\s+)?(?P<quarter>first|second|third|fourth|1st|2nd|3rd|4th)\s+quarter"
         r"(?:\s+(?:of\s+)?{})?\b".format(YEAR)),
        ("quarter", r"\bQ(?P<quarter>[1-4])(?:\s+{})?\b".format(YEAR)),
        ("decade", r"\b(?:the\s+)?(?P<decade>(?:1[5-9]|20)\d0|\d0)'?s\b"),
        ("century",
         r"\b(?:the\s+)?(?P<century>\d{{1,2}}{}|{})\s+century\b".format(ORDINAL_SUFFIX, alternation(ORDINALS))),
        ("next_n_units", r"\b(?:the\s+)?(?P<swift>{})\s+{}\s+{}\b".format(SWIFT_WORDS, NUMBER, DATE_UNIT)),
        ("within_next", r"\bwithin\s+(?:the\s+)?next\s+{}\s+{}\b".format(NUMBER, DATE_UNIT)),
    ),
    time_period_patterns=(
        ("day_part", r"\b(?:this|in\s+the|during\s+the)\s+{}\b".format(DAY_PART)),
        ("day_part", r"\b(?P<daypart>tonight)\b"),
    ),
    date_time_patterns=(
        ("now", r"\b(?P<idiom>{})\b".format(alternation(NOW_IDIOMS))),
    ),
    date_time_period_patterns=(
        ("next_n_units", r"\b(?:the\s+)?(?P<swift>{})\s+{}\s+{}\b".format(SWIFT_WORDS, NUMBER, TIME_UNIT)),
        ("within_next", r"\bwithin\s+(?:the\s+)?next\s+{}\s+{}\b".format(NUMBER, TIME_UNIT)),
    ),
)
