from timexparser.languages.config import LexicalConfiguration, alternation
from timexparser.languages.loader import available_languages, get_configuration

__all__ = [
    "LexicalConfiguration",
    "alternation",
    "available_languages",
    "get_configuration",
]
