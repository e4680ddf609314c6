"""
Translation providers.

Every provider implements the async `BaseTranslator.translate` and is looked up by
the name used in the `provider` setting.
"""

from .base import BaseTranslator
from .google_translator import GoogleTranslator
from .mock_translator import MockTranslator

# Provider name -> translator class, used by newsglot.translate.get_translator.
TRANSLATOR_MAPPING: dict[str, type[BaseTranslator]] = {
    "google": GoogleTranslator,
    "mock": MockTranslator,
}

__all__ = [
    "TRANSLATOR_MAPPING",
    "BaseTranslator",
    "GoogleTranslator",
    "MockTranslator",
]
