"""Defines shared data structures and types for newsglot."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

# The translation capability consumed by the pipeline: (text, target_language) -> translated text.
TranslateFn = Callable[[str, str], Awaitable[str]]


@dataclass(frozen=True)
class ContentUnit:
    """
    One translatable piece of content: optional rich markup plus a plain-text fallback.

    Attributes:
        plain_body: The plain-text rendition of the content. Always present.
        source_language: The language the content was authored in.
        html_body: The markup fragment, if any. Takes precedence for rendering.

    """

    plain_body: str
    source_language: str
    html_body: str | None = None

    def __post_init__(self) -> None:
        """Validate that the plain-text fallback is present."""
        if not self.plain_body or not self.plain_body.strip():
            msg = "A content unit requires a non-empty plain-text body."
            raise ValueError(msg)

    @property
    def has_html(self) -> bool:
        """Return True if the unit carries a non-blank markup body."""
        return bool(self.html_body and self.html_body.strip())


@dataclass(frozen=True)
class TextRun:
    """
    A trimmed span of human-readable text and the position it was extracted from.

    Attributes:
        index: The run's position in document order. Translated text `i` belongs to run `i`.
        path: Child indexes leading from the fragment root to the text node.
        text: The trimmed text that is sent for translation.
        leading_whitespace: Whitespace that preceded `text` in the node.
        trailing_whitespace: Whitespace that followed `text` in the node.

    """

    index: int
    path: tuple[int, ...]
    text: str
    leading_whitespace: str = ""
    trailing_whitespace: str = ""

    def with_text(self, translated: str) -> str:
        """Return `translated` padded with this run's original surrounding whitespace."""
        return f"{self.leading_whitespace}{translated}{self.trailing_whitespace}"


@dataclass(frozen=True)
class ExtractedFragment:
    """An immutable snapshot of a parsed fragment and the runs found in it."""

    source_html: str
    runs: tuple[TextRun, ...] = field(default_factory=tuple)

    @property
    def texts(self) -> list[str]:
        """Return the trimmed text of every run, in document order."""
        return [run.text for run in self.runs]

    @property
    def is_empty(self) -> bool:
        """Return True if the fragment holds no translatable text."""
        return not self.runs


@dataclass(frozen=True)
class MarkupSegment:
    """A stretch of markup between quotation blocks, rendered as-is."""

    html: str


@dataclass(frozen=True)
class QuotationBlock:
    """A top-level block quotation detected in rendered content."""

    inner_html: str
    citation: str | None = None


@dataclass(frozen=True)
class RenderedContent:
    """What the rendering layer receives: display markup and a plain-text projection."""

    html: str
    plain_text: str
    language: str
