from typing import Optional

import regex as re

_DIGITS = re.compile(r"^(?P<value>\d+)(?:st|nd|rd|th|\.)?$", re.IGNORECASE)
_COMPOUND = re.compile(r"^(?P<tens>\w+)[\s-]+(?P<ones>\w+)$")
_SPACES = re.compile(r"\s+")


class NumberExtractor:
    """
    Turns the numeral captured by a pattern into an integer.

    Accepts digits (optionally with an ordinal suffix or a trailing dot, as in
    "21st" or "21."), the cardinal and ordinal words of the language, and
    compounds of a tens word and a ones word ("twenty-one", "twenty one").
    """

    def __init__(self, config):
        self.cardinals = config.cardinal_map
        self.ordinals = config.ordinal_map

    def extract_number(self, text) -> Optional[int]:
        if not text:
            return None
        normalized = _SPACES.sub(" ", text.strip().lower())

        match = _DIGITS.match(normalized)
        if match:
            return int(match.group("value"))

        for table in (self.cardinals, self.ordinals):
            if normalized in table:
                return table[normalized]

        match = _COMPOUND.match(normalized)
        if match:
            tens = self.cardinals.get(match.group("tens"), 0)
            ones = self.cardinals.get(match.group("ones"))
            if ones is None:
                ones = self.ordinals.get(match.group("ones"))
            if 20 <= tens < 100 and tens % 10 == 0 and ones is not None and 0 < ones < 10:
                return tens + ones

        return None
