"""Translator implementation using the Google Translate API."""
# Implementation for the Google Translate API using deep-translator

import asyncio

from deep_translator import GoogleTranslator as DeepGoogleTranslator  # type: ignore[import-untyped]

from newsglot.config import ProviderSettings

from .base import BaseTranslator

# deep-translator names a few languages differently from the portal's language codes.
_LANGUAGE_CODE_MAP = {
    "zh": "zh-CN",
}


def to_provider_code(code: str) -> str:
    """Map a portal language code to the code deep-translator expects."""
    return _LANGUAGE_CODE_MAP.get(code, code)


class GoogleTranslator(BaseTranslator):
    """A translator using the Google Translate API via the 'deep-translator' library."""

    def __init__(self, settings: ProviderSettings | None = None) -> None:
        """
        Initialize the Google Translator.

        Args:
            settings: Provider-specific configurations, which are ignored by this provider.

        """
        super().__init__(settings)
        # deep-translator handles the client setup internally.

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = "auto",
    ) -> str:
        """
        Translate a text using deep-translator.

        deep-translator is synchronous, so the request runs in a worker thread to keep
        the event loop responsive.

        Args:
            text: The text to translate.
            target_language: The target language code (e.g., 'en').
            source_language: The source language code (e.g., 'id'). Defaults to 'auto'.

        Returns:
            The translated text.

        Raises:
            ConnectionError: If the translation request fails.

        """
        if not text.strip():
            return text

        try:
            translator = DeepGoogleTranslator(
                source=to_provider_code(source_language or "auto"),
                target=to_provider_code(target_language),
            )
            translated = await asyncio.to_thread(translator.translate, text)
        except Exception as e:
            msg = f"deep-translator (Google) request failed: {e}"
            raise ConnectionError(msg) from e
        return translated or ""
