"""
Language-switch state machine for one displayed content unit.

A `TranslationSession` decides when a language selection needs a translation pass,
runs at most one live pass at a time, and keeps the displayed content consistent.

State Transition Flow:
    Idle(source) --select L--> Translating(L) --success--> Idle(L)
                                              --failure--> Error(L, previous)
    any state --select source--> Idle(source)   (no translation call)

A newer selection supersedes a pass that is still running. The superseded call is
not cancelled; its result is discarded when it arrives.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from .config import DEFAULT_SEPARATOR, PipelineConfig, RenderStyle
from .errors import NewsglotError, TranslationTimeoutError
from .pipeline import TranslatedContent, render_content, translate_content
from .types import ContentUnit, RenderedContent, TranslateFn

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Translating content..."
ERROR_MESSAGE = "Translation failed. Showing the original content."


class SessionPhase(str, Enum):
    """The three phases a session can be in."""

    IDLE = "idle"
    TRANSLATING = "translating"
    ERROR = "error"


@dataclass(frozen=True)
class Idle:
    """Displayed content is settled in `last_language`."""

    last_language: str
    phase: SessionPhase = SessionPhase.IDLE


@dataclass(frozen=True)
class Translating:
    """A pass into `target_language` is in flight; the previous content stays on display."""

    target_language: str
    phase: SessionPhase = SessionPhase.TRANSLATING


@dataclass(frozen=True)
class Error:
    """The pass into `target_language` failed; the original content is on display."""

    target_language: str
    fallback_language: str
    phase: SessionPhase = SessionPhase.ERROR


SessionState = Idle | Translating | Error


@dataclass(frozen=True)
class Notification:
    """A transient message for the reader, such as a loading toast."""

    kind: Literal["loading", "error"]
    message: str
    language: str


TransitionListener = Callable[[SessionState, SessionState], None]
NotificationListener = Callable[[Notification], None]
PlainTextListener = Callable[[str], None]


class TranslationSession:
    """Owns the translation state of one displayed content unit."""

    def __init__(
        self,
        unit: ContentUnit,
        translate_fn: TranslateFn,
        *,
        separator: str = DEFAULT_SEPARATOR,
        pass_timeout: float | None = None,
        style: RenderStyle | None = None,
    ) -> None:
        """
        Create a session displaying the unit in its source language.

        Args:
            unit: The content to display.
            translate_fn: The translation capability.
            separator: Batching separator handed to the pipeline.
            pass_timeout: Upper bound in seconds for one pass; None for no bound.
            style: Presentation parameters used by `render`.

        """
        self.unit = unit
        self.style = style or RenderStyle()
        self._translate_fn = translate_fn
        self._separator = separator
        self._pass_timeout = pass_timeout
        self._state: SessionState = Idle(unit.source_language)
        self._translated: TranslatedContent | None = None
        self._generation = 0
        self._closed = False
        self.pass_count = 0
        self._transition_listeners: list[TransitionListener] = []
        self._notification_listeners: list[NotificationListener] = []
        self._plain_text_listeners: list[PlainTextListener] = []

    @classmethod
    def from_config(cls, unit: ContentUnit, translate_fn: TranslateFn, config: PipelineConfig) -> "TranslationSession":
        """Create a session using the separator, pass timeout and style of a configuration."""
        return cls(
            unit,
            translate_fn,
            separator=config.separator,
            pass_timeout=config.pass_timeout,
            style=config.style,
        )

    # --- Observed state ----------------------------------------------------

    @property
    def state(self) -> SessionState:
        """Return the current state."""
        return self._state

    @property
    def source_language(self) -> str:
        """Return the language the content was authored in."""
        return self.unit.source_language

    @property
    def last_language(self) -> str:
        """Return the language of the content currently on display."""
        return self._translated.language if self._translated else self.source_language

    @property
    def in_flight(self) -> bool:
        """Return True while a translation pass is running."""
        return isinstance(self._state, Translating)

    @property
    def translated_html(self) -> str | None:
        """Return the installed translated markup, if any."""
        return self._translated.html if self._translated else None

    @property
    def translated_plain_text(self) -> str | None:
        """Return the installed translated plain text, if any."""
        return self._translated.plain_text if self._translated else None

    def render(self) -> RenderedContent:
        """Render whatever is currently on display."""
        return render_content(self.unit, self._translated, self.style)

    # --- Listeners ---------------------------------------------------------

    def subscribe(self, listener: TransitionListener) -> None:
        """Call `listener(previous, current)` on every state change."""
        self._transition_listeners.append(listener)

    def on_notification(self, listener: NotificationListener) -> None:
        """Call `listener` with loading and failure notifications."""
        self._notification_listeners.append(listener)

    def on_plain_text(self, listener: PlainTextListener) -> None:
        """Call `listener` with the plain text of the content on display whenever it changes."""
        self._plain_text_listeners.append(listener)

    # --- Transitions -------------------------------------------------------

    def _active_language(self) -> str | None:
        """Return the language on display or being translated to; None after a failure."""
        if isinstance(self._state, Idle):
            return self._state.last_language
        if isinstance(self._state, Translating):
            return self._state.target_language
        return None

    def _transition(self, new_state: SessionState) -> None:
        previous = self._state
        self._state = new_state
        logger.debug("Session transition: %s -> %s", previous, new_state)
        for listener in self._transition_listeners:
            listener(previous, new_state)

    def _notify(self, notification: Notification) -> None:
        for listener in self._notification_listeners:
            listener(notification)

    def _emit_plain_text(self) -> None:
        text = self._translated.plain_text if self._translated else self.unit.plain_body
        for listener in self._plain_text_listeners:
            listener(text)

    async def _run_pass(self, target_language: str) -> TranslatedContent:
        """Run the pipeline for one pass, bounded by the pass timeout."""
        pass_coro = translate_content(self.unit, target_language, self._translate_fn, separator=self._separator)
        if self._pass_timeout is None:
            return await pass_coro
        try:
            return await asyncio.wait_for(pass_coro, timeout=self._pass_timeout)
        except TimeoutError as e:
            msg = f"Translation pass to '{target_language}' exceeded {self._pass_timeout} seconds."
            raise TranslationTimeoutError(msg) from e

    def _revert_to_source(self) -> None:
        self._generation += 1
        self._translated = None
        self._transition(Idle(self.source_language))
        self._emit_plain_text()

    async def select_language(self, language: str) -> SessionState:
        """
        React to the reader selecting `language`.

        Args:
            language: The selected language code.

        Returns:
            The state after this selection has been handled. If a newer selection
            arrived while this one was translating, that newer state is returned.

        Raises:
            NewsglotError: If the session has been closed.

        """
        if self._closed:
            msg = "Cannot select a language on a closed translation session."
            raise NewsglotError(msg)

        if language == self._active_language():
            logger.debug("Language '%s' already selected; nothing to do.", language)
            return self._state

        if language == self.source_language:
            logger.debug("Reverting to source language '%s'.", language)
            self._revert_to_source()
            return self._state

        if self._translated is not None and language == self._translated.language:
            # The requested translation is still installed; drop the pass in flight.
            self._generation += 1
            self._transition(Idle(language))
            return self._state

        self._generation += 1
        generation = self._generation
        previous_language = self.last_language
        self.pass_count += 1
        self._transition(Translating(language))
        self._notify(Notification(kind="loading", message=LOADING_MESSAGE, language=language))
        logger.info("Translating content from '%s' to '%s'.", previous_language, language)

        try:
            result = await self._run_pass(language)
        except Exception as e:
            if generation != self._generation:
                logger.debug("Ignoring failure of superseded pass to '%s': %s", language, e)
                return self._state
            logger.warning("Translation to '%s' failed; showing original content: %s", language, e)
            self._translated = None
            self._transition(Error(language, previous_language))
            self._notify(Notification(kind="error", message=ERROR_MESSAGE, language=language))
            self._emit_plain_text()
            return self._state

        if generation != self._generation:
            logger.debug("Discarding result of superseded pass to '%s'.", language)
            return self._state

        self._translated = result
        self._transition(Idle(language))
        self._emit_plain_text()
        return self._state

    def close(self) -> None:
        """Discard the session state. Passes still in flight will not touch it anymore."""
        self._generation += 1
        self._closed = True
        self._translated = None
        self._transition_listeners.clear()
        self._notification_listeners.clear()
        self._plain_text_listeners.clear()
