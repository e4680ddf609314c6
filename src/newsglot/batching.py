"""
Batch translation with a per-text fallback.

All texts of a fragment are joined with a separator and translated in one call. The
result is split back on the same separator; when the translator merged, dropped or
duplicated a separator the counts no longer line up and every text is translated on
its own instead.
"""

import logging
from collections.abc import Sequence

import regex

from .config import DEFAULT_SEPARATOR
from .errors import TranslationError
from .types import TranslateFn

logger = logging.getLogger(__name__)


def join_texts(texts: Sequence[str], separator: str = DEFAULT_SEPARATOR) -> str:
    """Join texts into the single payload sent to the translator."""
    return f" {separator} ".join(texts)


def split_translation(translated: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """
    Split a translated payload back into its parts.

    Translators tend to add or drop the spaces around an unfamiliar token, so the
    separator matches with any surrounding whitespace.
    """
    pattern = regex.compile(rf"\s*{regex.escape(separator)}\s*")
    return [part.strip() for part in pattern.split(translated.strip())]


async def translate_individually(
    texts: Sequence[str],
    target_language: str,
    translate_fn: TranslateFn,
) -> list[str]:
    """
    Translate each text with its own call, in order.

    A failing call leaves that text untranslated; the remaining texts are still translated.
    If every call fails nothing was translated, and the failure is raised instead.

    Args:
        texts: The texts to translate.
        target_language: The target language code.
        translate_fn: The translation capability.

    Returns:
        One string per input text.

    Raises:
        TranslationError: If every call failed.

    """
    results: list[str] = []
    failures = 0
    last_error: Exception | None = None
    for position, text in enumerate(texts):
        try:
            results.append(await translate_fn(text, target_language))
        except Exception as e:  # noqa: BLE001
            failures += 1
            last_error = e
            logger.warning("Keeping text %d untranslated after a failed call: %s", position, e)
            results.append(text)
    if texts and failures == len(texts):
        msg = f"All {failures} texts failed to translate to '{target_language}': {last_error}"
        raise TranslationError(msg) from last_error
    if failures:
        logger.info("%d of %d texts kept their original wording.", failures, len(texts))
    return results


async def translate_batch(
    texts: Sequence[str],
    target_language: str,
    translate_fn: TranslateFn,
    separator: str = DEFAULT_SEPARATOR,
) -> list[str]:
    """
    Translate texts with a single call, falling back to one call per text.

    Args:
        texts: Trimmed texts in document order.
        target_language: The target language code.
        translate_fn: The translation capability.
        separator: A token that does not occur in natural-language content.

    Returns:
        One translated string per input text, in the same order.

    Raises:
        TranslationError: If the fallback could not translate a single text.

    """
    if not texts:
        return []

    try:
        translated = await translate_fn(join_texts(texts, separator), target_language)
    except Exception as e:  # noqa: BLE001
        logger.warning("Combined translation call failed (%s); translating %d texts one by one.", e, len(texts))
        return await translate_individually(texts, target_language, translate_fn)

    parts = split_translation(translated, separator)
    if len(parts) != len(texts):
        logger.info(
            "Translator returned %d parts for %d texts; translating one by one.",
            len(parts),
            len(texts),
        )
        return await translate_individually(texts, target_language, translate_fn)

    logger.debug("Translated %d texts to '%s' in one call.", len(texts), target_language)
    return parts
