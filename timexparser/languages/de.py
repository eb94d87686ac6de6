"""German lexical configuration."""

from timexparser.languages.config import LexicalConfiguration, alternation
from timexparser.values import Unit


def _inflect(stems, endings=("", "n", "r", "s", "m")):
    return [stem + ending for stem in stems for ending in endings]


MONTHS = {
    "januar": 1, "jänner": 1, "jan": 1,
    "februar": 2, "feber": 2, "feb": 2,
    "märz": 3, "mär": 3,
    "april": 4, "apr": 4,
    "mai": 5,
    "juni": 6, "jun": 6,
    "juli": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "oktober": 10, "okt": 10,
    "november": 11, "nov": 11,
    "dezember": 12, "dez": 12,
}

DAYS_OF_WEEK = {
    "montag": 0,
    "dienstag": 1,
    "mittwoch": 2,
    "donnerstag": 3,
    "freitag": 4,
    "samstag": 5, "sonnabend": 5,
    "sonntag": 6,
}

UNITS = {}
for _unit, _forms in (
    (Unit.SECOND, ("sekunde", "sekunden")),
    (Unit.MINUTE, ("minute", "minuten")),
    (Unit.HOUR, ("stunde", "stunden")),
    (Unit.DAY, ("tag", "tage", "tagen", "tages")),
    (Unit.WEEK, ("woche", "wochen")),
    (Unit.MONTH, ("monat", "monate", "monaten", "monats")),
    (Unit.QUARTER, ("quartal", "quartale", "quartalen", "quartals")),
    (Unit.YEAR, ("jahr", "jahre", "jahren", "jahres")),
    (Unit.DECADE, ("jahrzehnt", "jahrzehnte", "jahrzehnten")),
    (Unit.CENTURY, ("jahrhundert", "jahrhunderte", "jahrhunderten")),
):
    UNITS.update((form, _unit) for form in _forms)

CARDINALS = {
    "ein": 1, "eine": 1, "einen": 1, "einem": 1, "einer": 1, "eins": 1,
    "zwei": 2, "drei": 3, "vier": 4, "fünf": 5, "sechs": 6, "sieben": 7,
    "acht": 8, "neun": 9, "zehn": 10, "elf": 11, "zwölf": 12,
    "zwanzig": 20, "dreißig": 30, "vierzig": 40, "fünfzig": 50,
    "sechzig": 60, "hundert": 100, "paar": 2,
}

ORDINALS = {}
for _value, _stem in enumerate(
    ("erste", "zweite", "dritte", "vierte", "fünfte", "sechste", "siebte",
     "achte", "neunte", "zehnte", "elfte", "zwölfte"),
    start=1,
):
    ORDINALS.update((form, _value) for form in _inflect([_stem]))

SEASONS = {
    "frühling": "SP", "frühjahr": "SP",
    "sommer": "SU",
    "herbst": "FA",
    "winter": "WI",
}

RELATIVE_DAYS = {
    "heute": 0,
    "morgen": 1,
    "gestern": -1,
    "übermorgen": 2,
    "vorgestern": -2,
}

DAY_PARTS = {
    "morgen": (8, 12), "morgens": (8, 12),
    "vormittag": (8, 12), "vormittags": (8, 12),
    "nachmittag": (12, 16), "nachmittags": (12, 16),
    "abend": (16, 20), "abends": (16, 20),
    "nacht": (20, 24), "nachts": (20, 24),
}

SPECIAL_TIMES = {
    "mittag": (12, 0), "mittags": (12, 0),
    "mitternacht": (0, 0),
}

NEXT_WORDS = _inflect(["nächste", "kommende", "folgende"])
PREVIOUS_WORDS = _inflect(["letzte", "vergangene", "vorige"])
THIS_WORDS = _inflect(["diese", "aktuelle"])
AFTER_NEXT_WORDS = _inflect(["übernächste"])

SWIFT = r"(?P<swift>{})".format(
    alternation(NEXT_WORDS + PREVIOUS_WORDS + THIS_WORDS + AFTER_NEXT_WORDS)
)
DAY = r"(?P<day>3[01]|[12]\d|0?[1-9])"
MONTH = r"(?P<month>{})\.?".format(alternation(MONTHS))
FULL_MONTH = r"(?P<month>{})".format(alternation(name for name in MONTHS if len(name) > 3 or name == "mai"))
WEEKDAY = r"(?P<weekday>{})".format(alternation(DAYS_OF_WEEK))
YEAR = r"(?P<year>1[5-9]\d{2}|20\d{2})"
NUMBER = r"(?P<number>\d+|{})".format(alternation(CARDINALS))
UNIT = r"(?P<unit>{})".format(alternation(UNITS))
DATE_UNIT = r"(?P<unit>{})".format(alternation(n for n, u in UNITS.items() if not u.is_time))
TIME_UNIT = r"(?P<unit>{})".format(alternation(n for n, u in UNITS.items() if u.is_time))
DAY_PART = r"(?P<daypart>{})".format(alternation(DAY_PARTS))

NOW_IDIOMS = (
    "jetzt", "gerade jetzt", "genau jetzt", "momentan", "gerade", "aktuell",
    "im moment", "in diesem moment", "derzeit", "neulich", "vorher", "vorhin",
    "so früh wie möglich",
)


configuration = LexicalConfiguration(
    language="de",

    next_prefix=r"\b(?:{})\b".format(alternation(NEXT_WORDS)),
    previous_prefix=r"\b(?:{})\b".format(alternation(PREVIOUS_WORDS)),
    this_prefix=r"\b(?:{})\b".format(alternation(THIS_WORDS)),
    after_next_suffix=r"\b(?:{})\b".format(alternation(AFTER_NEXT_WORDS)),

    now_suffixes=("jetzt",),
    present_idioms=("momentan", "gerade", "aktuell", "aktuelle", "im moment",
                    "in diesem moment", "derzeit"),
    past_idioms=("neulich", "vorher", "vorhin"),
    future_idioms=("so früh wie möglich",),

    week_terms=("woche",),
    weekend_terms=("wochenende",),
    month_terms=("monat",),
    year_terms=("jahr",),
    generic_year_terms=("kalenderjahr", "geschäftsjahr"),
    morning_terms=("morgen", "morgens", "vormittag", "vormittags"),

    unit_map=UNITS,
    cardinal_map=CARDINALS,
    ordinal_map=ORDINALS,
    month_map=MONTHS,
    day_of_week_map=DAYS_OF_WEEK,
    season_map=SEASONS,
    relative_day_map=RELATIVE_DAYS,
    day_part_map=DAY_PARTS,
    special_time_map=SPECIAL_TIMES,

    ago_prefix=r"vor",
    later_prefix=r"in|binnen",
    later_suffix=r"später",
    range_prefix=r"von|vom|ab",
    range_connector=r"bis\s+zum|bis|-|–",
    between_prefix=r"zwischen",
    between_connector=r"und",
    date_time_connector=r",|um|am|gegen|",
    date_day_part_suffix=DAY_PART,

    date_order="DMY",

    date_patterns=(
        # "am Morgen" and "heute Morgen" name a day part, not tomorrow
        ("relative_day",
         r"(?<!\b(?:am|heute)\s+)\b(?P<reldate>{})\b".format(alternation(RELATIVE_DAYS))),
        ("weekday", r"\b(?:{}\s+)?{}\b".format(SWIFT, WEEKDAY)),
        ("month_day", r"\b(?:am\s+)?{}\.?\s+{}(?:\s+{})?\b".format(DAY, MONTH, YEAR)),
        ("iso_date", r"\b(?P<year>\d{4})-(?P<monthnum>\d{1,2})-(?P<day>\d{1,2})\b"),
        ("numeric_date",
         r"\b(?P<first>\d{1,2})\.(?P<second>\d{1,2})\.(?:(?P<year>\d{4}|\d{2})(?!\d))?"),
        ("ordinal_day", r"\bam\s+{}\.(?!\d)".format(DAY)),
    ),
    time_patterns=(
        ("clock_time",
         r"\b(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)(?::(?P<second>[0-5]\d))?"
         r"(?:\s*uhr)?(?:\s+{})?\b".format(DAY_PART)),
        ("clock_time", r"\b(?P<hour>[01]?\d|2[0-3])\s*uhr(?:\s+{})?\b".format(DAY_PART)),
        ("special_time", r"\b(?P<special>{})\b".format(alternation(SPECIAL_TIMES))),
    ),
    duration_patterns=(
        ("duration", r"\b{}\s+{}\b".format(NUMBER, UNIT)),
    ),
    date_period_patterns=(
        ("relative_unit",
         r"\b(?:(?:im|am|in\s+der)\s+)?{}\s+"
         r"(?P<unit>wochenende|woche|monat|quartal|jahrzehnt|jahrhundert|jahr)\b".format(SWIFT)),
        ("month_only", r"\b(?:(?:im\s+)?{}\s+)?(?:im\s+)?{}(?:\s+{})?\b".format(SWIFT, FULL_MONTH, YEAR)),
        ("year_number", r"\b(?:im\s+jahre?\s+)?{}\b".format(YEAR)),
        ("season",
         r"\b(?:(?:im\s+)?{}\s+)?(?:im\s+)?(?P<season>{})(?:\s+{})?\b".format(
             SWIFT, alternation(SEASONS), YEAR)),
        ("quarter",
         r"\b(?:im\s+)?(?P<quarter>(?:erste|zweite|dritte|vierte)[nms]?|[1-4]\.)\s+quartal(?:\s+{})?\b".format(YEAR)),
        ("quarter", r"\bQ(?P<quarter>[1-4])(?:\s+{})?\b".format(YEAR)),
        ("decade", r"\b(?:die\s+)?(?P<decade>(?:1[5-9]|20)?\d0)er(?:\s+jahre)?\b"),
        ("century", r"\b(?:im\s+)?(?P<century>\d{1,2}\.)\s+jahrhundert\b"),
        ("next_n_units",
         r"\b(?:die\s+|in\s+den\s+)?(?P<swift>nächsten|kommenden|letzten|vergangenen)\s+{}\s+{}\b".format(
             NUMBER, DATE_UNIT)),
    ),
    time_period_patterns=(
        ("day_part", r"\b(?:heute|diesen|am|in\s+der)\s+{}\b".format(DAY_PART)),
    ),
    date_time_patterns=(
        ("now", r"\b(?P<idiom>{})\b".format(alternation(NOW_IDIOMS))),
    ),
    date_time_period_patterns=(
        ("next_n_units",
         r"\b(?:die\s+|in\s+den\s+)?(?P<swift>nächsten|kommenden|letzten|vergangenen)\s+{}\s+{}\b".format(
             NUMBER, TIME_UNIT)),
    ),
)
