"""
Disambiguation of overlapping resolved candidates.

``merge`` is a pure fold over the candidates in text order. A candidate
enters the kept sequence when it overlaps nothing already kept, or when it
beats every kept candidate it overlaps; those rivals then leave. One
candidate beats another when, in this order, it:

1. covers more text;
2. has the more specific kind (DateTimePeriod > DatePeriod, TimePeriod,
   DateTime > Date, Time, Duration);
3. came from an earlier-registered pattern.

Candidates dropped by the first fold are folded once more into the result,
so one that lost only to a rival that was itself displaced later comes back
when it no longer overlaps a survivor.

Only successfully resolved candidates reach this stage.
"""

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, List, Optional, Tuple

from timexparser.extraction import CandidateSpan
from timexparser.values import ResolvedValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ResolvedCandidate:
    span: CandidateSpan
    value: ResolvedValue


def beats(challenger: ResolvedCandidate, incumbent: ResolvedCandidate) -> Optional[str]:
    """Name of the rule under which ``challenger`` wins over ``incumbent``, or None."""
    a, b = challenger.span, incumbent.span
    if a.length != b.length:
        return "coverage" if a.length > b.length else None
    if a.kind.specificity != b.kind.specificity:
        return "specificity" if a.kind.specificity > b.kind.specificity else None
    if a.order < b.order:
        return "registration order"
    return None


def _step(kept: Tuple[ResolvedCandidate, ...], candidate: ResolvedCandidate):
    rivals = [k for k in kept if k.span.overlaps(candidate.span)]
    if not rivals:
        return kept + (candidate,)

    rules = []
    for rival in rivals:
        rule = beats(candidate, rival)
        if rule is None:
            logger.debug(f"Dropping '{candidate.span.text}' ({candidate.span.kind.value}): "
                         f"loses to '{rival.span.text}' ({rival.span.kind.value})")
            return kept
        rules.append(rule)

    for rival, rule in zip(rivals, rules):
        logger.debug(f"'{candidate.span.text}' ({candidate.span.kind.value}) replaces "
                     f"'{rival.span.text}' ({rival.span.kind.value}) by {rule}")
    return tuple(k for k in kept if not any(k is r for r in rivals)) + (candidate,)


def merge(candidates: Iterable[ResolvedCandidate]) -> List[ResolvedCandidate]:
    """Non-overlapping winners among ``candidates``, ordered by text position."""
    ordered = sorted(candidates, key=lambda c: (c.span.start, -c.span.length, c.span.order))
    kept = reduce(_step, ordered, ())
    # a candidate that lost only to a rival displaced later gets a second chance
    dropped = [c for c in ordered if not any(c is k for k in kept)]
    kept = reduce(_step, dropped, kept)
    return sorted(kept, key=lambda c: c.span.start)
