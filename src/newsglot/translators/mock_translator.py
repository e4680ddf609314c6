"""A mock translator for testing purposes."""

import logging

from newsglot.config import ProviderSettings

from .base import BaseTranslator

logger = logging.getLogger(__name__)


class MockTranslatorError(Exception):
    """Custom exception for mock translator errors."""


class MockTranslator(BaseTranslator):
    """
    A mock translator for testing that prepends a '[MOCK]' prefix.

    It can also be configured to raise an exception for testing error handling.
    """

    def __init__(self, settings: ProviderSettings | None = None, *, return_error: bool = False) -> None:
        """
        Initialize the Mock Translator.

        Args:
            settings: Provider-specific configurations (ignored).
            return_error: If True, the translate method will raise an exception.

        """
        super().__init__(settings)
        self.return_error = return_error
        self.calls: list[tuple[str, str]] = []

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        """
        Prepend '[MOCK] ' to the text to simulate translation.

        Raises:
            MockTranslatorError: If `return_error` was set to True during initialization.

        """
        _ = source_language
        self.calls.append((text, target_language))

        if self.return_error:
            msg = "Mock translator was configured to fail."
            raise MockTranslatorError(msg)

        logger.debug("MockTranslator processed %d characters for target '%s'.", len(text), target_language)
        return f"[MOCK] {text}"
