"""Tests for the translate-and-render pipeline."""

import asyncio

import pytest

from newsglot.config import RenderStyle
from newsglot.errors import TranslationError
from newsglot.pipeline import TranslatedContent, plain_text_to_html, render_content, translate_content
from newsglot.types import ContentUnit

GLOSSARY = {
    "Presiden": "President",
    "mengumumkan": "announced",
    "kebijakan": "the",
    "baru.": "policy.",
    "Kutipan": "Quote",
}


class GlossaryTranslator:
    """Translates word by word from a fixed glossary, leaving unknown tokens alone."""

    def __init__(self) -> None:
        """Start with no recorded calls."""
        self.calls: list[tuple[str, str]] = []

    async def __call__(self, text: str, target_language: str) -> str:
        """Translate one text."""
        self.calls.append((text, target_language))
        return " ".join(GLOSSARY.get(word, word) for word in text.split(" "))


@pytest.fixture
def translator() -> GlossaryTranslator:
    """Return a fresh glossary translator."""
    return GlossaryTranslator()


def test_translate_indonesian_article(translator: GlossaryTranslator) -> None:
    """Verify markup is translated run by run with structure intact, in one call."""
    unit = ContentUnit(
        plain_body="Presiden mengumumkan kebijakan baru.",
        source_language="id",
        html_body="<p>Presiden <strong>mengumumkan</strong> kebijakan baru.</p>",
    )

    result = asyncio.run(translate_content(unit, "en", translator, separator="|||"))

    assert result.language == "en"
    assert result.html == "<p>President <strong>announced</strong> the policy.</p>"
    assert result.plain_text == "President announced the policy."
    assert len(translator.calls) == 1


def test_translate_plain_text_unit(translator: GlossaryTranslator) -> None:
    """Verify a unit without markup is translated with one call on its plain body."""
    unit = ContentUnit(plain_body="Presiden mengumumkan", source_language="id")

    result = asyncio.run(translate_content(unit, "en", translator))

    assert result == TranslatedContent(language="en", html=None, plain_text="President announced")
    assert translator.calls == [("Presiden mengumumkan", "en")]


def test_translate_markup_without_text(translator: GlossaryTranslator) -> None:
    """Verify markup with no visible text is returned unchanged without a call."""
    unit = ContentUnit(plain_body="Foto", source_language="id", html_body='<img src="foto.jpg">')

    result = asyncio.run(translate_content(unit, "en", translator))

    assert result.html == '<img src="foto.jpg">'
    assert translator.calls == []


def test_empty_translation_keeps_original_run() -> None:
    """Verify a run translated to nothing keeps its original wording."""

    async def drop_first(text: str, target_language: str) -> str:
        _ = target_language
        return " ||| ".join(["", *text.split(" ||| ")[1:]])

    unit = ContentUnit(plain_body="Satu Dua", source_language="id", html_body="<p>Satu <b>Dua</b></p>")

    result = asyncio.run(translate_content(unit, "en", drop_first, separator="|||"))

    assert result.html == "<p>Satu <b>Dua</b></p>"


def test_plain_text_failure_propagates() -> None:
    """Verify a failing call on a plain-text unit surfaces to the caller."""

    async def failing(text: str, target_language: str) -> str:
        msg = f"cannot translate {text!r} to {target_language}"
        raise TranslationError(msg)

    unit = ContentUnit(plain_body="Halo", source_language="id")

    with pytest.raises(TranslationError, match="cannot translate"):
        asyncio.run(translate_content(unit, "en", failing))


def test_markup_total_failure_raises() -> None:
    """Verify markup whose every run fails to translate is reported as a failure."""

    async def failing(text: str, target_language: str) -> str:
        msg = f"cannot translate {text!r} to {target_language}"
        raise TranslationError(msg)

    unit = ContentUnit(plain_body="Halo dunia", source_language="id", html_body="<p>Halo <i>dunia</i></p>")

    with pytest.raises(TranslationError, match="All 2 texts failed"):
        asyncio.run(translate_content(unit, "en", failing))


def test_plain_text_to_html_escapes_paragraphs() -> None:
    """Verify plain text becomes escaped paragraphs."""
    assert plain_text_to_html("Satu\n\n  Dua <3  \n\n\n") == "<p>Satu</p><p>Dua &lt;3</p>"


def test_render_original_content() -> None:
    """Verify rendering without a translation shows the original markup and plain body."""
    unit = ContentUnit(plain_body="Halo", source_language="id", html_body="<p>Halo</p>")

    rendered = render_content(unit, None, RenderStyle())

    assert rendered.language == "id"
    assert rendered.plain_text == "Halo"
    assert "<p>Halo</p>" in rendered.html


def test_render_translated_content_with_quotation() -> None:
    """Verify translated quotations are framed on every render."""
    unit = ContentUnit(plain_body="Kutipan", source_language="id", html_body="<blockquote>Kutipan</blockquote>")
    translated = TranslatedContent(language="en", html="<blockquote>Quote</blockquote>", plain_text="Quote")

    rendered = render_content(unit, translated, RenderStyle(theme="dark"))

    assert rendered.language == "en"
    assert rendered.plain_text == "Quote"
    assert '<div class="relative z-20 pl-8">Quote</div>' in rendered.html
    assert "from-slate-800" in rendered.html


def test_render_plain_text_unit() -> None:
    """Verify a unit without markup renders its plain text as paragraphs."""
    unit = ContentUnit(plain_body="Halo", source_language="id")
    translated = TranslatedContent(language="en", html=None, plain_text="Hello")

    rendered = render_content(unit, translated, RenderStyle())

    assert "<p>Hello</p>" in rendered.html
    assert rendered.plain_text == "Hello"


def test_word_reversing_scenario_with_quotation() -> None:
    """Verify every run is translated on its own and the quotation keeps its place and framing."""

    async def reverse_words(text: str, target_language: str) -> str:
        _ = target_language
        return " ||| ".join(" ".join(reversed(part.split())) for part in text.split(" ||| "))

    unit = ContentUnit(
        plain_body="Halo dunia. Ilmu adalah cahaya.",
        source_language="id",
        html_body="<p>Halo dunia</p><blockquote><p>Ilmu adalah cahaya.</p><cite>Penulis</cite></blockquote>",
    )

    translated = asyncio.run(translate_content(unit, "en", reverse_words, separator="|||"))
    rendered = render_content(unit, translated, RenderStyle())

    assert translated.html == "<p>dunia Halo</p><blockquote><p>cahaya. adalah Ilmu</p><cite>Penulis</cite></blockquote>"
    assert '<div class="relative z-20 pl-8"><p>cahaya. adalah Ilmu</p><cite>Penulis</cite></div>' in rendered.html
    assert 'data-citation="Penulis"' in rendered.html
    assert rendered.html.index("dunia Halo") < rendered.html.index("quote-icon")
