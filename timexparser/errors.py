"""
Error kinds raised by the recognition pipeline.

"No match" is not an error: extraction simply returns an empty list.
"""


class TimexParserError(Exception):
    """Base class for all errors raised by timexparser."""


class UnresolvableSpanError(TimexParserError):
    """A candidate span is structurally incomplete and no default applies.

    Raised by the value resolver; the pipeline drops the span and keeps
    resolving its siblings.
    """

    def __init__(self, message, span_text=None):
        super().__init__(message)
        self.span_text = span_text


class ConfigurationIncompleteError(TimexParserError):
    """A lexical configuration lacks a required slot or holds a broken pattern."""

    def __init__(self, language, slot, reason="missing"):
        super().__init__(
            "Lexical configuration for {!r} is incomplete: slot {!r} is {}".format(
                language, slot, reason
            )
        )
        self.language = language
        self.slot = slot


class InvalidAnchorError(TimexParserError, ValueError):
    """The caller-supplied anchor is not a valid calendar instant."""


class SettingValidationError(TimexParserError, ValueError):
    pass
