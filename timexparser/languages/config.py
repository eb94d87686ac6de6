"""
Lexical configuration contract.

One :class:`LexicalConfiguration` value per language carries everything the
engine needs to know about that language: the swift markers, connector and
suffix regexes, token maps, and the primary patterns of every span category.
The engine is the same for all languages; only this value changes.

Optional slots left as ``None``/empty mean "feature not supported in this
language". Required slots raise :class:`ConfigurationIncompleteError` at
construction time.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import regex as re

from timexparser.errors import ConfigurationIncompleteError

logger = logging.getLogger(__name__)


REQUIRED_SLOTS = (
    "next_prefix",
    "previous_prefix",
    "this_prefix",
    "unit_map",
    "cardinal_map",
    "month_map",
    "day_of_week_map",
    "date_patterns",
    "time_patterns",
    "duration_patterns",
    "date_period_patterns",
)

# Matched anywhere in the normalized span text
SEARCH_SLOTS = (
    "next_prefix",
    "previous_prefix",
    "this_prefix",
    "after_next_suffix",
    "unspecific_end_of_range",
)

# Matched right after a span: "3 days| ago"
SUFFIX_SLOTS = ("ago_suffix", "later_suffix", "date_day_part_suffix")

# Matched right before a span: "in |3 days"
PREFIX_SLOTS = ("ago_prefix", "later_prefix", "range_prefix", "between_prefix")

# Matched against the whole gap between two spans
GAP_SLOTS = ("range_connector", "between_connector", "date_time_connector")

PATTERN_SLOTS = (
    "date_patterns",
    "time_patterns",
    "duration_patterns",
    "date_period_patterns",
    "time_period_patterns",
    "date_time_patterns",
    "date_time_period_patterns",
)

MAP_SLOTS = (
    "unit_map",
    "cardinal_map",
    "ordinal_map",
    "month_map",
    "day_of_week_map",
    "season_map",
    "relative_day_map",
    "day_part_map",
    "special_time_map",
)


def alternation(words):
    """Regex alternation of literal words, longest first so prefixes never shadow."""
    ordered = sorted(set(words), key=lambda w: (-len(w), w))
    return "|".join(re.escape(w).replace("\\ ", " ").replace(" ", r"\s+") for w in ordered)


@dataclass(frozen=True, eq=False)
class LexicalConfiguration:
    language: str

    # Swift markers
    next_prefix: Optional[str] = None
    previous_prefix: Optional[str] = None
    this_prefix: Optional[str] = None
    after_next_suffix: Optional[str] = None

    # Now-class idioms, compared against the normalized span text
    now_suffixes: Tuple[str, ...] = ()
    present_idioms: Tuple[str, ...] = ()
    past_idioms: Tuple[str, ...] = ()
    future_idioms: Tuple[str, ...] = ()

    # Boundary predicate vocabularies
    week_terms: Tuple[str, ...] = ()
    weekend_terms: Tuple[str, ...] = ()
    month_terms: Tuple[str, ...] = ()
    year_terms: Tuple[str, ...] = ()
    generic_year_terms: Tuple[str, ...] = ()
    unspecific_end_of_range: Optional[str] = None
    week_to_date: Tuple[str, ...] = ()
    month_to_date: Tuple[str, ...] = ()
    year_to_date: Tuple[str, ...] = ()
    morning_terms: Tuple[str, ...] = ()

    # Token maps
    unit_map: Mapping = field(default_factory=dict)
    cardinal_map: Mapping = field(default_factory=dict)
    ordinal_map: Mapping = field(default_factory=dict)
    month_map: Mapping = field(default_factory=dict)
    day_of_week_map: Mapping = field(default_factory=dict)
    season_map: Mapping = field(default_factory=dict)
    relative_day_map: Mapping = field(default_factory=dict)
    day_part_map: Mapping = field(default_factory=dict)
    special_time_map: Mapping = field(default_factory=dict)

    # Connectors and affixes
    ago_suffix: Optional[str] = None
    ago_prefix: Optional[str] = None
    later_suffix: Optional[str] = None
    later_prefix: Optional[str] = None
    range_prefix: Optional[str] = None
    range_connector: Optional[str] = None
    between_prefix: Optional[str] = None
    between_connector: Optional[str] = None
    date_time_connector: Optional[str] = None
    date_day_part_suffix: Optional[str] = None

    date_order: str = "MDY"

    # Primary patterns: tuples of (handler name, regex)
    date_patterns: Tuple[Tuple[str, str], ...] = ()
    time_patterns: Tuple[Tuple[str, str], ...] = ()
    duration_patterns: Tuple[Tuple[str, str], ...] = ()
    date_period_patterns: Tuple[Tuple[str, str], ...] = ()
    time_period_patterns: Tuple[Tuple[str, str], ...] = ()
    date_time_patterns: Tuple[Tuple[str, str], ...] = ()
    date_time_period_patterns: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        for slot in REQUIRED_SLOTS:
            if not getattr(self, slot):
                raise ConfigurationIncompleteError(self.language, slot)

        for slot in MAP_SLOTS:
            object.__setattr__(self, slot, MappingProxyType(dict(getattr(self, slot))))

        compiled: Dict[str, object] = {}
        for slot in SEARCH_SLOTS:
            compiled[slot] = self._compile(slot, getattr(self, slot), "{}")
        for slot in SUFFIX_SLOTS:
            compiled[slot] = self._compile(slot, getattr(self, slot), r"\s*(?:{})(?!\w)")
        for slot in PREFIX_SLOTS:
            compiled[slot] = self._compile(slot, getattr(self, slot), r"(?<!\w)(?:{})\s*$")
        for slot in GAP_SLOTS:
            compiled[slot] = self._compile(slot, getattr(self, slot), r"\s*(?:{})\s*")
        for slot in PATTERN_SLOTS:
            compiled[slot] = tuple(
                (handler, self._compile(slot, pattern, "{}"))
                for handler, pattern in getattr(self, slot)
            )
        object.__setattr__(self, "_compiled", MappingProxyType(compiled))

    def _compile(self, slot, pattern, template):
        if pattern is None:
            return None
        try:
            return re.compile(template.format(pattern), re.IGNORECASE)
        except re.error as e:
            logger.warning(f"Failed to compile pattern for slot '{slot}' ({self.language}): {e}")
            raise ConfigurationIncompleteError(self.language, slot, reason="not a valid pattern") from e

    def regex(self, slot: str):
        """Compiled regex for a marker/connector slot, or None when unsupported."""
        return self._compiled[slot]

    def compiled_patterns(self, slot: str):
        """``(handler, compiled)`` pairs of a pattern slot in registration order."""
        return self._compiled[slot]

    def __repr__(self) -> str:
        return f"LexicalConfiguration(language={self.language!r})"
