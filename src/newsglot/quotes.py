"""Re-rendering of block quotations with decorative framing."""

import html
import logging

import regex
from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag

from .config import RenderStyle
from .types import MarkupSegment, QuotationBlock

logger = logging.getLogger(__name__)

_MARKER_TEMPLATE = "__BLOCKQUOTE_MARKER_{index}__"
_MARKER_PATTERN = regex.compile(r"__BLOCKQUOTE_MARKER_(\d+)__")
_PARSER = "html.parser"

QUOTE_ICON = "material-symbols:format-quote"

_FRAME_CLASSES = "relative border-none border-l-4 p-6 my-8 font-medium italic rounded-xl transition-all duration-300 ease-in-out overflow-visible min-h-16 transform hover:-translate-y-1"
_THEME_CLASSES = {
    "light": "border-l-blue-500 bg-gradient-to-br from-slate-50 to-slate-100 text-slate-700 shadow-lg shadow-blue-500/10",
    "dark": "border-l-blue-400 bg-gradient-to-br from-slate-800 to-slate-700 text-slate-200 shadow-lg shadow-blue-500/15",
}
_ICON_CLASSES = {
    "light": "text-blue-500",
    "dark": "text-blue-400",
}
_OVERLAY_CLASSES = {
    "light": "bg-gradient-to-l from-blue-500/3 to-transparent",
    "dark": "bg-gradient-to-l from-blue-500/5 to-transparent",
}
_FONT_SIZE_CLASSES = {
    "small": "text-sm",
    "medium": "text-base",
    "large": "text-xl",
}

Segment = MarkupSegment | QuotationBlock


def _top_level_quotations(soup: BeautifulSoup) -> list[Tag]:
    """Return blockquotes that are not nested inside another blockquote."""
    return [quote for quote in soup.find_all("blockquote") if quote.find_parent("blockquote") is None]


def _citation_of(quote: Tag) -> str | None:
    """Return the text of the quotation's own <cite>, if it has one."""
    cite = quote.find("cite")
    if cite is None:
        return None
    text = cite.get_text(" ", strip=True)
    return text or None


def _quotation_block(quote: Tag) -> QuotationBlock:
    return QuotationBlock(inner_html=quote.decode_contents(), citation=_citation_of(quote))


def split_quotations(html_fragment: str) -> list[Segment]:
    """
    Split markup into raw segments and root-level quotation blocks, in document order.

    Each <blockquote> that is a direct child of the fragment root is cut out and
    replaced by a positional marker; the remaining markup is then split on those
    markers. Whitespace-only segments between quotations are dropped. Quotations
    inside a container stay in that container's segment, so every segment is
    balanced markup; `render_segments` frames them in place.

    Args:
        html_fragment: The markup to display, original or translated.

    Returns:
        The ordered segments. Markup without root-level quotations comes back as one segment.

    """
    if not html_fragment or not html_fragment.strip():
        return []

    try:
        soup = BeautifulSoup(html_fragment, _PARSER)
    except (ParserRejectedMarkup, AssertionError) as e:
        logger.warning("Could not parse markup for quotation detection: %s", e)
        return [MarkupSegment(html_fragment)]

    quotations = [child for child in soup.contents if isinstance(child, Tag) and child.name == "blockquote"]
    if not quotations:
        return [MarkupSegment(html_fragment)]

    blocks: list[QuotationBlock] = []
    for index, quote in enumerate(quotations):
        blocks.append(_quotation_block(quote))
        quote.replace_with(NavigableString(_MARKER_TEMPLATE.format(index=index)))

    segments: list[Segment] = []
    cursor = 0
    marked = str(soup)
    for match in _MARKER_PATTERN.finditer(marked):
        if int(match.group(1)) >= len(blocks):
            continue
        before = marked[cursor : match.start()]
        if before.strip():
            segments.append(MarkupSegment(before))
        segments.append(blocks[int(match.group(1))])
        cursor = match.end()
    after = marked[cursor:]
    if after.strip():
        segments.append(MarkupSegment(after))
    logger.debug("Found %d quotation blocks in %d segments.", len(blocks), len(segments))
    return segments


def render_quotation(block: QuotationBlock, style: RenderStyle) -> str:
    """
    Render a quotation with its icon, themed gradient and decorative overlay.

    The quotation's inner markup is inserted verbatim, translated or not.
    """
    theme = style.theme
    citation_attr = f' data-citation="{html.escape(block.citation)}"' if block.citation else ""
    return (
        f'<blockquote class="{_FRAME_CLASSES} {_THEME_CLASSES[theme]}"{citation_attr}>'
        f'<span class="quote-icon absolute text-4xl opacity-20 pointer-events-none z-10 {_ICON_CLASSES[theme]}"'
        f' data-icon="{QUOTE_ICON}" style="left: 1rem; top: 0.5rem;" aria-hidden="true"></span>'
        f'<div class="relative z-20 pl-8">{block.inner_html}</div>'
        f'<div class="absolute top-0 right-0 w-16 h-full rounded-r-xl pointer-events-none z-0 {_OVERLAY_CLASSES[theme]}"></div>'
        "</blockquote>"
    )


def frame_nested_quotations(html_fragment: str, style: RenderStyle) -> str:
    """
    Frame the quotations inside a raw segment without moving them.

    Each outermost <blockquote> is swapped for its framed rendering within the parsed
    tree, which is then serialized once, so enclosing containers keep their children
    and attributes.
    """
    if "blockquote" not in html_fragment.lower():
        return html_fragment
    try:
        soup = BeautifulSoup(html_fragment, _PARSER)
    except (ParserRejectedMarkup, AssertionError) as e:
        logger.warning("Could not parse markup for quotation framing: %s", e)
        return html_fragment

    quotations = _top_level_quotations(soup)
    if not quotations:
        return html_fragment
    for quote in quotations:
        framed = BeautifulSoup(render_quotation(_quotation_block(quote), style), _PARSER).blockquote
        quote.replace_with(framed)
    return str(soup)


def render_segments(segments: list[Segment], style: RenderStyle) -> str:
    """Render quotations through the decorative transform and raw segments in place."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, QuotationBlock):
            parts.append(render_quotation(segment, style))
        else:
            parts.append(f"<div>{frame_nested_quotations(segment.html, style)}</div>")
    return "".join(parts)


def render_html(html_fragment: str, style: RenderStyle) -> str:
    """
    Produce the final display markup for a fragment.

    Runs on every render so the output always reflects the language on display.
    """
    dark_class = " dark" if style.is_dark else ""
    body = render_segments(split_quotations(html_fragment), style)
    return f'<div class="quill-content max-w-none {_FONT_SIZE_CLASSES[style.font_size]}{dark_class}">{body}</div>'
