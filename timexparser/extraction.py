"""
Span extraction.

The extractor runs the primary patterns of every category over the text and
then grows the candidates in three passes:

1. durations absorb an adjacent "ago"/"later" affix and become dates
   ("3 days ago", "in 2 years");
2. a date next to a time becomes a date-time ("tomorrow at 3pm"), and a date
   followed by a day part becomes a date-time period ("friday evening");
3. two compatible spans joined by a range connector become a period
   ("from June 5 to June 8", "between 3pm and 5pm").

Every pass adds spans; none removes any. Overlapping candidates are expected
and are settled by :mod:`timexparser.merging` after resolution.
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Tuple

logger = logging.getLogger(__name__)

# Largest gap (in characters) between two spans that may still be combined
MAX_GAP = 12

# Window searched for a prefix ("from", "in", "vor") in front of a span
PREFIX_WINDOW = 30


class SpanKind(Enum):
    DATE = "Date"
    TIME = "Time"
    DURATION = "Duration"
    DATEPERIOD = "DatePeriod"
    TIMEPERIOD = "TimePeriod"
    DATETIME = "DateTime"
    DATETIMEPERIOD = "DateTimePeriod"

    @property
    def specificity(self) -> int:
        return _SPECIFICITY[self]


_SPECIFICITY = {
    SpanKind.DATE: 1,
    SpanKind.TIME: 1,
    SpanKind.DURATION: 1,
    SpanKind.DATEPERIOD: 2,
    SpanKind.TIMEPERIOD: 2,
    SpanKind.DATETIME: 2,
    SpanKind.DATETIMEPERIOD: 3,
}

# Registration order of the categories; ties in the merger go to the earlier one
CATEGORY_SLOTS = (
    (SpanKind.DATE, "date_patterns"),
    (SpanKind.TIME, "time_patterns"),
    (SpanKind.DURATION, "duration_patterns"),
    (SpanKind.DATEPERIOD, "date_period_patterns"),
    (SpanKind.TIMEPERIOD, "time_period_patterns"),
    (SpanKind.DATETIME, "date_time_patterns"),
    (SpanKind.DATETIMEPERIOD, "date_time_period_patterns"),
)

RANGE_KINDS = {
    (SpanKind.DATE, SpanKind.DATE): SpanKind.DATEPERIOD,
    (SpanKind.DATEPERIOD, SpanKind.DATEPERIOD): SpanKind.DATEPERIOD,
    (SpanKind.TIME, SpanKind.TIME): SpanKind.TIMEPERIOD,
    (SpanKind.DATETIME, SpanKind.DATETIME): SpanKind.DATETIMEPERIOD,
    (SpanKind.DATETIME, SpanKind.TIME): SpanKind.DATETIMEPERIOD,
}


@dataclass(frozen=True, eq=False)
class CandidateSpan:
    """
    A candidate temporal expression: ``text[start:end]``.

    ``pattern`` names the resolution handler, ``groups`` holds the named
    captures that matched, and ``children`` the spans a composed span was
    built from.
    """
    start: int
    end: int
    kind: SpanKind
    text: str
    pattern: str
    groups: Mapping[str, str]
    order: int
    children: Tuple["CandidateSpan", ...] = ()

    @property
    def length(self) -> int:
        return self.end - self.start

    def group(self, name):
        return self.groups.get(name)

    def overlaps(self, other) -> bool:
        return self.start < other.end and other.start < self.end

    def to_dict(self):
        return {
            "start": self.start,
            "end": self.end,
            "kind": self.kind.value,
            "text": self.text,
            "pattern": self.pattern,
        }

    def __repr__(self) -> str:
        return (f"CandidateSpan({self.kind.value}, {self.text!r}, "
                f"[{self.start}:{self.end}], pattern={self.pattern})")


class SpanExtractor:
    """Produces every candidate span of a text for one language configuration."""

    def __init__(self, config):
        self.config = config

    def extract(self, text) -> List[CandidateSpan]:
        """
        Candidate spans ordered by start offset, longer spans first on ties.

        Text without temporal content yields an empty list.
        """
        if not text or not text.strip():
            return []

        counter = itertools.count()
        spans = self._primary_spans(text, counter)
        spans += self._absorb_duration_affixes(text, spans, counter)
        spans += self._compose_date_time(text, spans, counter)
        spans += self._compose_ranges(text, spans, counter)
        return sorted(spans, key=lambda s: (s.start, -s.length, s.order))

    # -------------------------------------------------------------------------

    def _make_span(self, text, start, end, kind, pattern, groups, counter, children=()):
        span = CandidateSpan(
            start=start,
            end=end,
            kind=kind,
            text=text[start:end],
            pattern=pattern,
            groups=MappingProxyType({k: v for k, v in groups.items() if v is not None}),
            order=next(counter),
            children=tuple(children),
        )
        logger.debug(f"Candidate {kind.value} span '{span.text}' [{start}:{end}] from '{pattern}'")
        return span

    def _primary_spans(self, text, counter):
        spans = []
        seen = set()
        for kind, slot in CATEGORY_SLOTS:
            for pattern, regex in self.config.compiled_patterns(slot):
                for match in regex.finditer(text):
                    start, end = match.span()
                    key = (start, end, kind, pattern)
                    if start == end or key in seen:
                        continue
                    seen.add(key)
                    spans.append(self._make_span(
                        text, start, end, kind, pattern, match.groupdict(), counter
                    ))
        return spans

    def _absorb_duration_affixes(self, text, spans, counter):
        config = self.config
        absorbed = []
        for span in spans:
            if span.kind != SpanKind.DURATION:
                continue
            for slot, pattern in (("ago_suffix", "duration_ago"), ("later_suffix", "duration_later")):
                regex = config.regex(slot)
                match = regex.match(text, span.end) if regex is not None else None
                if match:
                    absorbed.append(self._make_span(
                        text, span.start, match.end(), SpanKind.DATE, pattern,
                        span.groups, counter, children=(span,),
                    ))
            for slot, pattern in (("ago_prefix", "duration_ago"), ("later_prefix", "duration_later")):
                start = self._prefix_start(text, slot, span.start)
                if start is not None:
                    absorbed.append(self._make_span(
                        text, start, span.end, SpanKind.DATE, pattern,
                        span.groups, counter, children=(span,),
                    ))
        return absorbed

    def _prefix_start(self, text, slot, position):
        regex = self.config.regex(slot)
        if regex is None:
            return None
        match = regex.search(text, max(0, position - PREFIX_WINDOW), position)
        return match.start() if match else None

    def is_connector(self, gap) -> bool:
        """True when ``gap`` may join a date and a time: empty, a preposition or a connector."""
        if not gap.strip():
            return True
        regex = self.config.regex("date_time_connector")
        return bool(regex is not None and regex.fullmatch(gap))

    def _compose_date_time(self, text, spans, counter):
        composed = []
        dates = [s for s in spans if s.kind == SpanKind.DATE]
        times = [s for s in spans if s.kind == SpanKind.TIME]

        for first, second in itertools.chain(
            itertools.product(dates, times), itertools.product(times, dates)
        ):
            if first.end > second.start or second.start - first.end > MAX_GAP:
                continue
            if self.is_connector(text[first.end:second.start]):
                composed.append(self._make_span(
                    text, first.start, second.end, SpanKind.DATETIME, "date_time",
                    {}, counter, children=(first, second),
                ))

        suffix = self.config.regex("date_day_part_suffix")
        if suffix is not None:
            for date in dates:
                match = suffix.match(text, date.end)
                if match:
                    groups = dict(date.groups, daypart=match.group("daypart"))
                    composed.append(self._make_span(
                        text, date.start, match.end(), SpanKind.DATETIMEPERIOD, "date_day_part",
                        groups, counter, children=(date,),
                    ))
        return composed

    def _compose_ranges(self, text, spans, counter):
        config = self.config
        composed = []
        connector = config.regex("range_connector")
        between = config.regex("between_connector")

        ordered = sorted(spans, key=lambda s: (s.start, -s.length, s.order))
        for i, first in enumerate(ordered):
            for second in ordered[i + 1:]:
                if second.start < first.end:
                    continue
                if second.start - first.end > MAX_GAP:
                    break
                kind = RANGE_KINDS.get((first.kind, second.kind))
                if kind is None:
                    continue

                gap = text[first.end:second.start]
                start = None
                if between is not None and between.fullmatch(gap):
                    start = self._prefix_start(text, "between_prefix", first.start)
                elif connector is not None and connector.fullmatch(gap):
                    start = self._prefix_start(text, "range_prefix", first.start)
                    if start is None:
                        start = first.start
                if start is None:
                    continue

                composed.append(self._make_span(
                    text, start, second.end, kind, "range", {}, counter,
                    children=(first, second),
                ))
        return composed
