"""The provider boundary: translator selection and the translate capability handed to the pipeline."""

import asyncio
import logging

from .cache import TranslationCache
from .config import PipelineConfig, ProviderSettings
from .errors import TranslationError, TranslationTimeoutError
from .translators import TRANSLATOR_MAPPING
from .translators.base import BaseTranslator
from .types import TranslateFn

logger = logging.getLogger(__name__)

# Text snippet length for debug logging
_TEXT_SNIPPET_MAX_LENGTH = 50

# A cache to store initialized translator instances to avoid re-creating them.
_translator_cache: dict[str, BaseTranslator] = {}


def _snippet(text: str) -> str:
    """Shorten a text for log output."""
    if len(text) <= _TEXT_SNIPPET_MAX_LENGTH:
        return text
    return f"{text[:_TEXT_SNIPPET_MAX_LENGTH]}..."


def _get_translator(provider_name: str, settings: ProviderSettings | None) -> BaseTranslator | None:
    """
    Instantiate a translator class using a dictionary-based factory pattern.

    Args:
        provider_name: The name of the provider (e.g., "google", "mock").
        settings: The provider-specific settings object from the main config.

    Returns:
        An initialized translator instance, or None if instantiation fails.

    """
    provider_name_lower = provider_name.lower()
    if provider_name_lower not in TRANSLATOR_MAPPING:
        logger.warning("Unknown translator provider: '%s'", provider_name)
        return None

    translator_class = TRANSLATOR_MAPPING.get(provider_name_lower)
    if not translator_class:
        logger.warning("No translator class mapped for provider: '%s'", provider_name)
        return None

    try:
        return translator_class(settings=settings)
    except (ImportError, AttributeError, KeyError, ValueError) as e:
        logger.warning("Could not initialize translator '%s': %s", provider_name, e)
        return None


def get_translator(provider_name: str, config: PipelineConfig) -> BaseTranslator | None:
    """
    Retrieve an initialized translator instance, using a cache to avoid re-initialization.

    The active provider may be left out of the `providers` block, in which case it runs
    with default settings. Any other provider must be configured explicitly.

    Args:
        provider_name: The name of the provider to retrieve.
        config: The pipeline configuration object.

    Returns:
        An initialized and cached translator instance, or None if it fails.

    Raises:
        ValueError: If the provider is neither configured nor the active provider.

    """
    if provider_name in _translator_cache:
        return _translator_cache[provider_name]

    provider_settings = config.providers.get(provider_name)
    if provider_settings is None:
        if provider_name != config.provider:
            msg = f"Provider '{provider_name}' is not configured in your settings file."
            raise ValueError(msg)
        provider_settings = ProviderSettings()

    translator = _get_translator(provider_name, provider_settings)

    if translator:
        _translator_cache[provider_name] = translator
        logger.debug("Provider '%s' initialized.", provider_name)

    return translator


def build_translate_fn(
    translator: BaseTranslator,
    config: PipelineConfig,
    cache: TranslationCache | None = None,
) -> TranslateFn:
    """
    Wrap a translator into the `(text, target_language) -> text` capability used by the pipeline.

    The returned coroutine function:
    - returns blank text and text already in the source language unchanged, without a call;
    - serves repeated texts from `cache`;
    - bounds every provider call with the provider's timeout;
    - falls back to `config.fallback_translations` when the provider fails.

    Args:
        translator: The provider to call.
        config: Supplies the source language, timeout and fallback glossary.
        cache: Optional cache shared by every call of the returned function.

    Returns:
        An async callable.

    """
    settings = translator.settings or ProviderSettings()
    timeout = settings.timeout
    source_language = config.source_language

    async def translate_fn(text: str, target_language: str) -> str:
        if not text.strip() or target_language == source_language:
            return text

        if cache is not None:
            cached = cache.get(text, target_language)
            if cached is not None:
                logger.debug("Cache hit for '%s' -> %s.", _snippet(text), target_language)
                return cached

        try:
            translated = await asyncio.wait_for(
                translator.translate(text, target_language, source_language),
                timeout=timeout,
            )
        except TimeoutError as e:
            fallback = _lookup_fallback(config, text, target_language)
            if fallback is not None:
                return fallback
            msg = f"Translation to '{target_language}' timed out after {timeout} seconds."
            raise TranslationTimeoutError(msg) from e
        except Exception as e:
            fallback = _lookup_fallback(config, text, target_language)
            if fallback is not None:
                return fallback
            msg = f"Translation to '{target_language}' failed: {e}"
            raise TranslationError(msg) from e

        if cache is not None:
            cache.put(text, target_language, translated)
        return translated

    return translate_fn


def _lookup_fallback(config: PipelineConfig, text: str, target_language: str) -> str | None:
    """Return a static glossary translation for `text`, if the configuration carries one."""
    fallback = config.fallback_translations.get(target_language, {}).get(text)
    if fallback is not None:
        logger.info("Provider failed; using fallback translation for '%s'.", _snippet(text))
    return fallback
