import importlib
import logging
from functools import lru_cache

from timexparser.errors import ConfigurationIncompleteError

logger = logging.getLogger(__name__)

LANGUAGES = {
    "en": "timexparser.languages.en",
    "de": "timexparser.languages.de",
}


def available_languages():
    return sorted(LANGUAGES)


@lru_cache(maxsize=None)
def get_configuration(language):
    """
    Return the lexical configuration for ``language``, building it once per process.

    Raises:
        ConfigurationIncompleteError: the language is unknown or its
            configuration is missing a required slot.
    """
    language = (language or "").lower()
    module_name = LANGUAGES.get(language)
    if module_name is None:
        raise ConfigurationIncompleteError(language, "language", reason="not available")

    configuration = importlib.import_module(module_name).configuration
    logger.info(f"Loaded lexical configuration for '{language}'")
    return configuration
