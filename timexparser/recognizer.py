import logging
from datetime import date, datetime

from dateutil import parser as date_parser
from dateutil import tz
from tzlocal import get_localzone

from timexparser.errors import (
    InvalidAnchorError,
    SettingValidationError,
    UnresolvableSpanError,
)
from timexparser.extraction import SpanExtractor
from timexparser.languages import get_configuration
from timexparser.merging import ResolvedCandidate, merge
from timexparser.resolution import ValueResolver
from timexparser.timex import encode

logger = logging.getLogger(__name__)


class RecognitionResult:
    """
    One recognized temporal expression.
    It can be accessed with square brackets like a dict object.
    """

    def __init__(self, *, text, start, end, kind, timex, value):
        self.text = text
        self.start = start
        self.end = end
        self.kind = kind
        self.timex = timex
        self.value = value

    def __getitem__(self, k):
        if not hasattr(self, k):
            raise KeyError(k)
        return getattr(self, k)

    def to_dict(self):
        start, end = self.value.bounds()
        return {
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "kind": self.kind.value,
            "timex": self.timex,
            "precision": self.value.precision.value,
            "value_start": start.isoformat() if start else None,
            "value_end": end.isoformat() if end else None,
        }

    def __repr__(self):
        properties_text = ", ".join(
            "{}={}".format(prop, val.__repr__()) for prop, val in self.__dict__.items()
        )
        return "{}({})".format(self.__class__.__name__, properties_text)


def _now(settings):
    timezone_name = settings.TIMEZONE
    if not timezone_name or "local" in timezone_name.lower():
        zone = get_localzone()
    else:
        zone = tz.gettz(timezone_name)
        if zone is None:
            raise SettingValidationError(f'"{timezone_name}" is not a known timezone')
    return datetime.now(zone).replace(tzinfo=None)


def get_anchor(anchor, settings):
    """
    Normalize the caller's anchor to a naive datetime.

    ``None`` falls back to ``RELATIVE_BASE`` and then to the current wall-clock
    time in ``TIMEZONE``. Strings must be ISO-8601.
    """
    if anchor is None:
        anchor = settings.RELATIVE_BASE or _now(settings)

    if isinstance(anchor, str):
        try:
            anchor = date_parser.isoparse(anchor)
        except (ValueError, OverflowError) as e:
            raise InvalidAnchorError(f"Anchor {anchor!r} is not an ISO-8601 instant: {e}") from e

    if isinstance(anchor, datetime):
        if anchor.tzinfo is not None:
            anchor = anchor.replace(tzinfo=None)
        return anchor.replace(microsecond=0)
    if isinstance(anchor, date):
        return datetime(anchor.year, anchor.month, anchor.day)
    raise InvalidAnchorError(f"Anchor must be a datetime, date or ISO string, not {type(anchor).__name__}")


class DateTimeRecognizer:
    """
    Extraction and resolution pipeline for one language.

    :param language:
        Language code, e.g. 'en' or 'de'.
    :type language: str

    :param settings:
        A :class:`timexparser.conf.Settings` instance.

    :raises:
        ConfigurationIncompleteError: the language is unknown or incomplete.
    """

    def __init__(self, language, settings):
        self.config = get_configuration(language)
        self.settings = settings
        self.extractor = SpanExtractor(self.config)
        self.resolver = ValueResolver(self.config, settings)

    def recognize(self, text, anchor=None):
        """
        Recognize every temporal expression of ``text``.

        :return: a list of :class:`RecognitionResult` ordered by position;
            empty when the text has no temporal content.
        """
        anchor = get_anchor(anchor, self.settings)
        if len(text) > self.settings.MAX_TEXT_LENGTH:
            raise ValueError(
                f"Text of {len(text)} characters exceeds MAX_TEXT_LENGTH ({self.settings.MAX_TEXT_LENGTH})"
            )

        candidates = []
        for span in self.extractor.extract(text):
            try:
                value = self.resolver.resolve_span(span, anchor)
            except UnresolvableSpanError as e:
                logger.debug(f"Dropping unresolvable span '{span.text}': {e}")
                continue
            candidates.append(ResolvedCandidate(span, value))

        return [
            RecognitionResult(
                text=c.span.text,
                start=c.span.start,
                end=c.span.end,
                kind=c.span.kind,
                timex=encode(c.value),
                value=c.value,
            )
            for c in merge(candidates)
        ]
