"""
Swift (relative offset) resolution and boundary predicates.

All functions here work on the *normalized* span text (trimmed, lower case,
single spaces) and take the language configuration explicitly.

Swift markers are tested in a fixed priority order: after-next (+2), next
(+1), previous (-1), this (0). "the weekend after next" therefore resolves to
+2 even though it also contains "next".
"""

from dataclasses import dataclass
from typing import Optional

import regex as re

from timexparser.values import ReferenceClass, Unit

_SPACES = re.compile(r"\s+")

_MARKERS = (
    ("after_next_suffix", 2, "after_next"),
    ("next_prefix", 1, "next"),
    ("previous_prefix", -1, "previous"),
    ("this_prefix", 0, "this"),
)

_YEAR_LEVEL_UNITS = (Unit.YEAR, Unit.DECADE, Unit.CENTURY)

HALF_DAY_HOURS = 12


def normalize(text):
    return _SPACES.sub(" ", text.strip().lower())


@dataclass(frozen=True)
class Offset:
    """
    A signed count of ``unit`` produced by a lexical marker.

    ``value`` is None when the span carries no marker and the unit has no
    neutral default (year-level units): "no marker" and "this year" differ.
    """
    unit: Unit
    value: Optional[int]
    marker: Optional[str] = None

    @classmethod
    def unspecified(cls, unit: Unit) -> "Offset":
        return cls(unit, None, None)

    @property
    def is_specified(self) -> bool:
        return self.value is not None

    def value_or(self, default: int) -> int:
        return default if self.value is None else self.value

    def __repr__(self) -> str:
        value = "unspecified" if self.value is None else self.value
        return f"Offset({self.unit.value}, {value}, marker={self.marker})"


def resolve_offset(config, text, unit=Unit.DAY) -> Offset:
    """
    Map the swift markers of ``text`` to an offset against ``unit``.

    Examples (English):
        resolve_offset(en, "next week", Unit.WEEK)             -> +1
        resolve_offset(en, "the week after next", Unit.WEEK)   -> +2
        resolve_offset(en, "last year", Unit.YEAR)             -> -1
        resolve_offset(en, "june", Unit.YEAR)                  -> unspecified
        resolve_offset(en, "friday", Unit.DAY)                 -> 0 (no marker)
    """
    normalized = normalize(text)
    for slot, value, marker in _MARKERS:
        regex = config.regex(slot)
        if regex is not None and regex.search(normalized):
            return Offset(unit, value, marker)
    if unit in _YEAR_LEVEL_UNITS:
        return Offset.unspecified(unit)
    return Offset(unit, 0, None)


def swift_day(config, text) -> Offset:
    """Day-level swift from a leading marker: "next friday" -> +1, "last friday" -> -1."""
    normalized = normalize(text)
    for slot, value, marker in _MARKERS[1:]:
        regex = config.regex(slot)
        if regex is not None and regex.match(normalized):
            return Offset(Unit.DAY, value, marker)
    return Offset(Unit.DAY, 0, None)


# =============================================================================
# Boundary predicates
# =============================================================================

def _ends_with_any(text, terms):
    return any(text.endswith(term) for term in terms)


def _contains_padded(text, terms):
    return any(f" {term} " in text for term in terms)


def _has_after_next(config, text):
    regex = config.regex("after_next_suffix")
    return bool(regex is not None and regex.search(text))


def _unit_only(config, text, terms):
    text = normalize(text)
    return _ends_with_any(text, terms) or (
        _contains_padded(text, terms) and _has_after_next(config, text)
    )


def is_week_only(config, text):
    return _unit_only(config, text, config.week_terms)


def is_weekend(config, text):
    return _unit_only(config, text, config.weekend_terms)


def is_month_only(config, text):
    return _unit_only(config, text, config.month_terms)


def is_year_only(config, text):
    if _unit_only(config, text, config.year_terms):
        return True
    normalized = normalize(text)
    unspecific_end = config.regex("unspecific_end_of_range")
    return bool(
        unspecific_end is not None
        and _ends_with_any(normalized, config.generic_year_terms)
        and unspecific_end.search(normalized)
    )


def is_week_to_date(config, text):
    return normalize(text) in config.week_to_date


def is_month_to_date(config, text):
    return normalize(text) in config.month_to_date


def is_year_to_date(config, text):
    return normalize(text) in config.year_to_date


@dataclass(frozen=True)
class PrecisionHints:
    week_only: bool = False
    weekend: bool = False
    month_only: bool = False
    year_only: bool = False
    week_to_date: bool = False
    month_to_date: bool = False
    year_to_date: bool = False

    @property
    def to_date_unit(self) -> Optional[Unit]:
        if self.week_to_date:
            return Unit.WEEK
        if self.month_to_date:
            return Unit.MONTH
        if self.year_to_date:
            return Unit.YEAR
        return None


def classify(config, text) -> PrecisionHints:
    return PrecisionHints(
        week_only=is_week_only(config, text),
        weekend=is_weekend(config, text),
        month_only=is_month_only(config, text),
        year_only=is_year_only(config, text),
        week_to_date=is_week_to_date(config, text),
        month_to_date=is_month_to_date(config, text),
        year_to_date=is_year_to_date(config, text),
    )


# =============================================================================
# Lexical rules
# =============================================================================

def match_now_reference(config, text) -> Optional[ReferenceClass]:
    """
    Reference class of a now-class idiom, or None.

    Present is tested first and also matches any text ending with the
    language's "now" word ("right now", "genau jetzt").
    """
    normalized = normalize(text)
    if _ends_with_any(normalized, config.now_suffixes) or normalized in config.present_idioms:
        return ReferenceClass.PRESENT_REF
    if normalized in config.past_idioms:
        return ReferenceClass.PAST_REF
    if normalized in config.future_idioms:
        return ReferenceClass.FUTURE_REF
    return None


def adjust_hour(config, day_part, hour):
    """
    Shift a 12-hour clock value into the day part that follows it.

    A morning marker pulls hours >= 12 back by twelve; any other day-part
    marker pushes hours < 12 forward by twelve.
    """
    is_morning = _ends_with_any(normalize(day_part), config.morning_terms)
    if is_morning and hour >= HALF_DAY_HOURS:
        return hour - HALF_DAY_HOURS
    if not is_morning and hour < HALF_DAY_HOURS:
        return hour + HALF_DAY_HOURS
    return hour
