"""
Text extraction and reinsertion over an immutable snapshot of an HTML fragment.

`extract` walks a fragment depth-first and records every non-blank text node as a
`TextRun` addressed by its child-index path. `reinsert` parses a fresh private tree
from the same snapshot, writes translated text back at those paths and serializes
it. The caller's markup is never mutated, so passes for different languages can
never see each other's changes.
"""

import logging

import regex
from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString

from .config import DEFAULT_SEPARATOR
from .errors import RunCountMismatchError
from .types import ExtractedFragment, TextRun

logger = logging.getLogger(__name__)

_PARSER = "html.parser"
# Elements whose text is code or styling rather than prose.
_NON_TEXT_ELEMENTS = frozenset({"script", "style", "template", "noscript"})


def _parse(html: str) -> BeautifulSoup:
    """Parse a fragment without wrapping it in <html>/<body>."""
    return BeautifulSoup(html, _PARSER)


def _is_text_bearing(node: NavigableString) -> bool:
    """Return True for prose text nodes; comments, doctypes and CDATA are excluded."""
    return not isinstance(node, PreformattedString)


def split_whitespace(text: str) -> tuple[str, str, str]:
    """Split `text` into (leading whitespace, trimmed content, trailing whitespace)."""
    stripped = text.strip()
    if not stripped:
        return text, "", ""
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]
    return leading, stripped, trailing


def _collect_runs(tag: Tag, path: tuple[int, ...], runs: list[TextRun]) -> None:
    """Append the runs found under `tag` to `runs`, in document order."""
    if tag.name in _NON_TEXT_ELEMENTS:
        return
    for position, child in enumerate(tag.contents):
        child_path = (*path, position)
        if isinstance(child, Tag):
            _collect_runs(child, child_path, runs)
        elif isinstance(child, NavigableString) and _is_text_bearing(child):
            leading, text, trailing = split_whitespace(str(child))
            if text:
                runs.append(
                    TextRun(
                        index=len(runs),
                        path=child_path,
                        text=text,
                        leading_whitespace=leading,
                        trailing_whitespace=trailing,
                    ),
                )


def extract(html_fragment: str) -> ExtractedFragment:
    """
    Collect the translatable text runs of a markup fragment.

    Args:
        html_fragment: A markup fragment; may be partial or malformed.

    Returns:
        A snapshot holding the fragment and its runs. Unparseable markup and markup
        without visible text both produce a snapshot with no runs.

    """
    if not html_fragment or not html_fragment.strip():
        return ExtractedFragment(source_html=html_fragment or "")

    try:
        soup = _parse(html_fragment)
    except (ParserRejectedMarkup, AssertionError) as e:
        logger.warning("Could not parse markup fragment; leaving it untranslated: %s", e)
        return ExtractedFragment(source_html=html_fragment)

    runs: list[TextRun] = []
    _collect_runs(soup, (), runs)
    logger.debug("Extracted %d text runs from a %d-character fragment.", len(runs), len(html_fragment))
    return ExtractedFragment(source_html=html_fragment, runs=tuple(runs))


def _resolve(soup: BeautifulSoup, path: tuple[int, ...]) -> NavigableString:
    """Follow a child-index path from the root to a text node."""
    node: Tag | NavigableString = soup
    for position in path:
        if not isinstance(node, Tag):
            msg = f"Path {path} does not lead to a text node."
            raise LookupError(msg)
        node = node.contents[position]
    if isinstance(node, Tag):
        msg = f"Path {path} leads to an element, not a text node."
        raise LookupError(msg)
    return node


def strip_separator(text: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Remove leftover batching separators, collapsing only the whitespace around each one."""
    if separator not in text:
        return text
    return regex.sub(rf"\s*{regex.escape(separator)}\s*", " ", text).strip()


def reinsert(
    fragment: ExtractedFragment,
    translated_texts: list[str],
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """
    Write translated texts back into a fresh copy of the fragment and serialize it.

    Args:
        fragment: The snapshot produced by `extract`.
        translated_texts: One translated text per run, in run order.
        separator: The batching separator to strip from translated texts.

    Returns:
        The serialized markup with every run replaced.

    Raises:
        RunCountMismatchError: If the number of texts differs from the number of runs.

    """
    if len(translated_texts) != len(fragment.runs):
        msg = f"Expected {len(fragment.runs)} translated texts, got {len(translated_texts)}."
        raise RunCountMismatchError(msg)
    if fragment.is_empty:
        return fragment.source_html

    soup = _parse(fragment.source_html)
    # Resolve every node before replacing any, so paths are read from an untouched tree.
    targets = [_resolve(soup, run.path) for run in fragment.runs]
    for run, node, translated in zip(fragment.runs, targets, translated_texts, strict=True):
        node.replace_with(NavigableString(run.with_text(strip_separator(translated, separator))))
    return str(soup)


def project_plain_text(html_fragment: str) -> str:
    """Return the visible text of a fragment, as a reader or read-aloud engine sees it."""
    if not html_fragment:
        return ""
    try:
        soup = _parse(html_fragment)
    except (ParserRejectedMarkup, AssertionError):
        logger.warning("Could not parse markup fragment for plain-text projection.")
        return html_fragment
    for element in soup.find_all(list(_NON_TEXT_ELEMENTS)):
        element.decompose()
    return soup.get_text()
