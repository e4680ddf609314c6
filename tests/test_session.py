"""Tests for the language-switch state machine."""

import asyncio
import unittest

import pytest

from newsglot.config import PipelineConfig, RenderStyle
from newsglot.errors import NewsglotError
from newsglot.session import (
    ERROR_MESSAGE,
    LOADING_MESSAGE,
    Error,
    Idle,
    Notification,
    SessionPhase,
    Translating,
    TranslationSession,
)
from newsglot.types import ContentUnit

# Constants for magic values
SHORT_TIMEOUT = 0.01
SLOW_CALL_SECONDS = 5


class GatedTranslator:
    """Prefixes text with the target language; calls into gated languages wait for release."""

    def __init__(self, gated: tuple[str, ...] = ()) -> None:
        """Configure which target languages block until `release` is called."""
        self.calls: list[tuple[str, str]] = []
        self.fail = False
        self._gates = {language: asyncio.Event() for language in gated}

    def release(self, language: str) -> None:
        """Let calls into `language` complete."""
        self._gates[language].set()

    async def __call__(self, text: str, target_language: str) -> str:
        """Translate one text."""
        self.calls.append((text, target_language))
        gate = self._gates.get(target_language)
        if gate is not None:
            await gate.wait()
        if self.fail:
            msg = "Provider unavailable."
            raise ConnectionError(msg)
        return f"[{target_language}] {text}"


def _article() -> ContentUnit:
    return ContentUnit(
        plain_body="Halo dunia",
        source_language="id",
        html_body="<p>Halo <b>dunia</b></p>",
    )


class TestTranslationSession(unittest.IsolatedAsyncioTestCase):
    """Test suite for TranslationSession."""

    async def test_initial_state(self) -> None:
        """1. Initial: A new session is idle in the source language."""
        session = TranslationSession(_article(), GatedTranslator())

        assert session.state == Idle("id")
        assert session.state.phase is SessionPhase.IDLE
        assert session.translated_html is None
        assert not session.in_flight

    async def test_select_language_translates(self) -> None:
        """2. Success: Selecting a language runs one pass and installs the result."""
        translator = GatedTranslator()
        session = TranslationSession(_article(), translator)
        transitions: list[tuple[object, object]] = []
        session.subscribe(lambda previous, current: transitions.append((previous, current)))

        state = await session.select_language("en")

        assert state == Idle("en")
        assert session.translated_html == "<p>[en] Halo <b>dunia</b></p>"
        assert session.translated_plain_text == "[en] Halo dunia"
        assert session.pass_count == 1
        assert transitions == [(Idle("id"), Translating("en")), (Translating("en"), Idle("en"))]

    async def test_reselecting_same_language_is_a_no_op(self) -> None:
        """3. Idempotence: Selecting the displayed language makes no call."""
        translator = GatedTranslator()
        session = TranslationSession(_article(), translator)
        await session.select_language("en")
        calls_after_first = len(translator.calls)

        state = await session.select_language("en")

        assert state == Idle("en")
        assert len(translator.calls) == calls_after_first
        assert session.pass_count == 1

    async def test_selecting_source_reverts_without_call(self) -> None:
        """4. Revert: Selecting the source language restores the original with no call."""
        translator = GatedTranslator()
        session = TranslationSession(_article(), translator)
        plain_texts: list[str] = []
        session.on_plain_text(plain_texts.append)
        await session.select_language("en")
        calls_after_first = len(translator.calls)

        state = await session.select_language("id")

        assert state == Idle("id")
        assert session.translated_html is None
        assert len(translator.calls) == calls_after_first
        assert plain_texts == ["[en] Halo dunia", "Halo dunia"]
        assert "<p>Halo <b>dunia</b></p>" in session.render().html

    async def test_loading_notification(self) -> None:
        """5. Notification: A pass announces itself with a loading notification."""
        session = TranslationSession(_article(), GatedTranslator())
        notifications: list[Notification] = []
        session.on_notification(notifications.append)

        await session.select_language("fr")

        assert notifications == [Notification(kind="loading", message=LOADING_MESSAGE, language="fr")]

    async def test_stale_response_is_discarded(self) -> None:
        """6. Superseded: A slow pass finishing after a newer selection is ignored."""
        translator = GatedTranslator(gated=("en",))
        session = TranslationSession(_article(), translator)

        slow_pass = asyncio.create_task(session.select_language("en"))
        await asyncio.sleep(0)
        assert session.state == Translating("en")

        await session.select_language("fr")
        translator.release("en")
        final_state = await slow_pass

        assert final_state == Idle("fr")
        assert session.state == Idle("fr")
        assert session.translated_html == "<p>[fr] Halo <b>dunia</b></p>"

    async def test_source_selection_supersedes_pass(self) -> None:
        """7. Superseded: Reverting to the source while translating wins over the pass."""
        translator = GatedTranslator(gated=("en",))
        session = TranslationSession(_article(), translator)

        slow_pass = asyncio.create_task(session.select_language("en"))
        await asyncio.sleep(0)
        await session.select_language("id")
        translator.release("en")
        await slow_pass

        assert session.state == Idle("id")
        assert session.translated_html is None

    async def test_reselecting_installed_translation_during_pass(self) -> None:
        """8. Superseded: Going back to the installed translation needs no new call."""
        translator = GatedTranslator(gated=("fr",))
        session = TranslationSession(_article(), translator)
        await session.select_language("en")
        calls_after_first = len(translator.calls)

        slow_pass = asyncio.create_task(session.select_language("fr"))
        await asyncio.sleep(0)
        state = await session.select_language("en")
        translator.release("fr")
        await slow_pass

        assert state == Idle("en")
        assert session.state == Idle("en")
        assert session.translated_html == "<p>[en] Halo <b>dunia</b></p>"
        assert len(translator.calls) == calls_after_first + 1

    async def test_failure_enters_error_state(self) -> None:
        """9. Failure: A failed pass shows the original content and notifies the reader."""
        translator = GatedTranslator()
        translator.fail = True
        session = TranslationSession(ContentUnit(plain_body="Halo", source_language="id"), translator)
        notifications: list[Notification] = []
        plain_texts: list[str] = []
        session.on_notification(notifications.append)
        session.on_plain_text(plain_texts.append)

        with self.assertLogs("newsglot.session", level="WARNING"):
            state = await session.select_language("en")

        assert state == Error("en", "id")
        assert state.phase is SessionPhase.ERROR
        assert session.translated_plain_text is None
        assert notifications[-1] == Notification(kind="error", message=ERROR_MESSAGE, language="en")
        assert plain_texts == ["Halo"]
        assert session.render().plain_text == "Halo"

    async def test_retry_after_failure(self) -> None:
        """10. Retry: Selecting the failed language again runs a new pass."""
        translator = GatedTranslator()
        translator.fail = True
        session = TranslationSession(ContentUnit(plain_body="Halo", source_language="id"), translator)
        with self.assertLogs("newsglot.session", level="WARNING"):
            await session.select_language("en")
        translator.fail = False

        state = await session.select_language("en")

        assert state == Idle("en")
        assert session.translated_plain_text == "[en] Halo"
        assert session.pass_count == 2  # noqa: PLR2004

    async def test_total_provider_outage_on_markup(self) -> None:
        """11. Outage: Markup that cannot be translated at all fails the pass and can be retried."""
        translator = GatedTranslator()
        translator.fail = True
        session = TranslationSession(_article(), translator)
        notifications: list[Notification] = []
        session.on_notification(notifications.append)

        with self.assertLogs("newsglot.session", level="WARNING"):
            state = await session.select_language("en")

        assert state == Error("en", "id")
        assert session.translated_html is None
        assert notifications[-1] == Notification(kind="error", message=ERROR_MESSAGE, language="en")
        calls_after_failure = len(translator.calls)

        translator.fail = False
        state = await session.select_language("en")

        assert state == Idle("en")
        assert len(translator.calls) == calls_after_failure + 1
        assert session.translated_html == "<p>[en] Halo <b>dunia</b></p>"

    async def test_pass_timeout(self) -> None:
        """12. Timeout: A pass exceeding its bound ends in the error state."""

        async def slow(text: str, target_language: str) -> str:
            await asyncio.sleep(SLOW_CALL_SECONDS)
            return f"{target_language}: {text}"

        session = TranslationSession(ContentUnit(plain_body="Halo", source_language="id"), slow, pass_timeout=SHORT_TIMEOUT)

        with self.assertLogs("newsglot.session", level="WARNING") as cm:
            state = await session.select_language("en")

        assert state == Error("en", "id")
        assert "exceeded" in cm.output[0]

    async def test_close_discards_in_flight_pass(self) -> None:
        """13. Close: A pass finishing after close does not install its result."""
        translator = GatedTranslator(gated=("en",))
        session = TranslationSession(_article(), translator)

        slow_pass = asyncio.create_task(session.select_language("en"))
        await asyncio.sleep(0)
        session.close()
        translator.release("en")
        await slow_pass

        assert session.translated_html is None
        with pytest.raises(NewsglotError, match="closed"):
            await session.select_language("fr")

    async def test_from_config(self) -> None:
        """14. Configuration: Separator, pass timeout and style come from the config."""
        config = PipelineConfig(separator="###", pass_timeout=5, style=RenderStyle(theme="dark"))
        translator = GatedTranslator()
        session = TranslationSession.from_config(_article(), translator, config)

        await session.select_language("en")

        assert translator.calls[0][0] == "Halo ### dunia"
        assert "dark" in session.render().html
