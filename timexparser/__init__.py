__version__ = "0.3.0"

from .conf import apply_settings, Settings
from .errors import (
    TimexParserError,
    UnresolvableSpanError,
    ConfigurationIncompleteError,
    InvalidAnchorError,
    SettingValidationError,
)
from .extraction import CandidateSpan, SpanExtractor, SpanKind
from .merging import ResolvedCandidate, merge
from .recognizer import DateTimeRecognizer, RecognitionResult
from .resolution import ValueResolver
from .swift import Offset, resolve_offset
from .timex import decode, encode
from .values import (
    Period,
    Point,
    Precision,
    Range,
    ReferenceClass,
    ResolvedValue,
    Unit,
)

_recognizers = {}


@apply_settings
def recognize(text, language=None, anchor=None, settings=None):
    """Find the date, time and range expressions of a text and resolve them.

    :param text:
        Free-form text.
    :type text: str

    :param language:
        Language code, ``'en'`` or ``'de'``. Defaults to the
        ``DEFAULT_LANGUAGE`` setting.
    :type language: str

    :param anchor:
        Reference moment for relative expressions: a ``datetime``, a ``date``
        or an ISO-8601 string. Defaults to ``RELATIVE_BASE`` or the current time.

    :param settings:
        Configure customized behavior using settings defined in :mod:`timexparser.conf.Settings`.
    :type settings: dict

    :return: Recognized expressions ordered by position; empty if none.
    :rtype: list of :class:`RecognitionResult`

    :raises:
        ``InvalidAnchorError``: the anchor is not a calendar instant,
        ``ConfigurationIncompleteError``: unknown language,
        ``SettingValidationError``: a provided setting is not valid.

    Example usage::

        >>> import timexparser
        >>> results = timexparser.recognize("next week", anchor="2024-06-15")
        >>> results[0].timex
        '(2024-06-17,2024-06-24,P1W)'
        >>> timexparser.recognize("right now")[0].timex
        'PRESENT_REF'
    """
    language = (language or settings.DEFAULT_LANGUAGE).lower()

    key = settings.key
    if key is None:
        return DateTimeRecognizer(language, settings).recognize(text, anchor=anchor)

    recognizer = _recognizers.get((language, key))
    if recognizer is None:
        recognizer = _recognizers[(language, key)] = DateTimeRecognizer(language, settings)

    return recognizer.recognize(text, anchor=anchor)
