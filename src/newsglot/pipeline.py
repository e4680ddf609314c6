"""The translate-and-render pipeline shared by every way content is displayed."""

import html
import logging
from dataclasses import dataclass

from .batching import translate_batch
from .config import DEFAULT_SEPARATOR, RenderStyle
from .extraction import extract, project_plain_text, reinsert
from .quotes import render_html
from .types import ContentUnit, RenderedContent, TranslateFn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslatedContent:
    """
    The outcome of one successful translation pass.

    Attributes:
        language: The language the content was translated into.
        html: The translated markup, or None for content without markup.
        plain_text: The plain-text projection of the translated content.

    """

    language: str
    html: str | None
    plain_text: str


async def translate_content(
    unit: ContentUnit,
    target_language: str,
    translate_fn: TranslateFn,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> TranslatedContent:
    """
    Translate a content unit into `target_language`.

    Markup is translated run by run through extraction, batching and reinsertion;
    content without markup is translated with one call on its plain-text body.
    Markup without visible text is returned unchanged without any call.

    Raises:
        Exception: Whatever `translate_fn` raises for plain-text content.
        TranslationError: If no run of the markup could be translated. Runs that
            fail while others succeed keep their original text.

    """
    if not unit.has_html:
        translated = await translate_fn(unit.plain_body, target_language)
        return TranslatedContent(language=target_language, html=None, plain_text=translated)

    source_html = unit.html_body or ""
    fragment = extract(source_html)
    if fragment.is_empty:
        logger.debug("No translatable text in markup; keeping it as-is.")
        return TranslatedContent(language=target_language, html=source_html, plain_text=project_plain_text(source_html))

    translated_texts = await translate_batch(fragment.texts, target_language, translate_fn, separator)
    # An empty translation would erase the run; keep the original wording instead.
    translated_texts = [translated or run.text for run, translated in zip(fragment.runs, translated_texts, strict=True)]
    translated_html = reinsert(fragment, translated_texts, separator)
    return TranslatedContent(
        language=target_language,
        html=translated_html,
        plain_text=project_plain_text(translated_html),
    )


def plain_text_to_html(text: str) -> str:
    """Render plain text as escaped paragraphs, one per blank-line separated block."""
    paragraphs = [block.strip() for block in text.split("\n\n") if block.strip()]
    return "".join(f"<p>{html.escape(paragraph)}</p>" for paragraph in paragraphs)


def render_content(
    unit: ContentUnit,
    translated: TranslatedContent | None,
    style: RenderStyle,
) -> RenderedContent:
    """
    Build the display markup and plain-text projection for a unit.

    Args:
        unit: The content being displayed.
        translated: The installed translation, or None to show the original.
        style: Presentation parameters for quotation framing and font size.

    """
    language = translated.language if translated else unit.source_language
    if unit.has_html:
        markup = translated.html if translated and translated.html is not None else unit.html_body or ""
        plain_text = translated.plain_text if translated else unit.plain_body
    else:
        plain_text = translated.plain_text if translated else unit.plain_body
        markup = plain_text_to_html(plain_text)
    return RenderedContent(html=render_html(markup, style), plain_text=plain_text, language=language)
