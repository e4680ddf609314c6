"""Defines the base class for all translators."""

from abc import ABC, abstractmethod

from newsglot.config import ProviderSettings


class BaseTranslator(ABC):
    """Abstract base class for all translator implementations."""

    def __init__(self, settings: ProviderSettings | None = None) -> None:
        """
        Initialize the translator with provider-specific settings.

        Args:
            settings: A Pydantic model containing provider-specific configurations.

        """
        self.settings = settings

    @abstractmethod
    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        """
        Translate a single piece of text.

        Providers are free to treat the text as opaque; the pipeline never relies on a
        provider preserving anything but the words themselves.

        Args:
            text: The text to translate.
            target_language: The target language code.
            source_language: The source language code (optional).

        Returns:
            The translated text.

        """
        raise NotImplementedError
