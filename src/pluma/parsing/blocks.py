"""Block-level parsing for Pluma.

Consumes the character stream one structural unit at a time. Each
alternative below is tried in order under a checkpoint; the first one
that matches wins, and a failed alternative leaves the stream exactly
where it found it.

Order:
    1. raw HTML block        6. blockquote (recursive)
    2. horizontal rule       7. image-only line
    3. ATX heading           8. bullet list
    4. setext heading        9. numbered list
    5. indented code        10. paragraph (fallback, total)

Blockquotes strip their ``>`` prefixes and hand the rejoined text to
parse_document() with the same settings, so a quote may contain any
block, including another quote, with no depth bookkeeping.

"""

from __future__ import annotations

from collections.abc import Callable

from pluma.config import MarkdownSettings
from pluma.nodes import (
    Block,
    BlockQuote,
    BulletList,
    Empty,
    Heading,
    HtmlBlock,
    Image,
    IndentedCode,
    Inline,
    NumberList,
    Paragraph,
    ThematicBreak,
)
from pluma.parsing.inline import parse_phrase, scan_href
from pluma.parsing.result import NO_MATCH, Attempt, try_alternative
from pluma.stream import ChunkFeeder
from pluma.utils.logger import get_logger
from pluma.utils.text import is_blank, strip_closing_hashes

logger = get_logger(__name__)

type BlockRule = Callable[[ChunkFeeder, MarkdownSettings], Attempt[Block]]

RULE_PATTERNS = ("* * *", "***", "*****", "- - -")
MIN_DASH_RULE = 5
MIN_SETEXT_UNDERLINE = 2
MAX_HEADING_LEVEL = 6
CODE_INDENT = "    "
BULLET_MARKERS = ("* ", "- ", "+ ")
DIGITS = frozenset("0123456789")


def parse_block(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    """Parse one block at the cursor.

    Args:
        stream: Cursor at the start of a line
        settings: Settings shared with every nested parse

    Returns:
        The first matching alternative's block. Only NO_MATCH when the
        grammar has a gap, since the paragraph fallback accepts anything.
    """
    for rule in BLOCK_RULES:
        block = try_alternative(stream, rule, settings)
        if block is not NO_MATCH:
            return block
    return NO_MATCH


# =============================================================================
# Line helpers
# =============================================================================


def _end_of_line(stream: ChunkFeeder) -> bool:
    """Consume a newline, or accept end of input."""
    return stream.at_end() or stream.match("\n")


def _take_nonblank_lines(stream: ChunkFeeder) -> list[str]:
    """Consume lines up to and including the next blank line."""
    lines: list[str] = []
    while not stream.at_end():
        line = stream.take_line()
        if is_blank(line):
            break
        lines.append(line)
    return lines


def _take_items(
    stream: ChunkFeeder, marker: Callable[[ChunkFeeder], bool]
) -> list[tuple[Inline, ...]]:
    """Consume consecutive list lines; each remainder is one item."""
    items: list[tuple[Inline, ...]] = []
    while marker(stream):
        items.append(parse_phrase(stream.take_line()))
    return items


# =============================================================================
# Alternatives
# =============================================================================


def _raw_html(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    if not stream.startswith("<"):
        return NO_MATCH
    raw = "\n".join(_take_nonblank_lines(stream))
    html = settings.sanitize(raw)
    if html != raw:
        logger.debug("sanitizer rewrote raw HTML block (%d -> %d chars)", len(raw), len(html))
    return HtmlBlock(html=html, sanitized=settings.xss_protect_raw_html)


def _thematic_break(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    for pattern in RULE_PATTERNS:
        mark = stream.checkpoint()
        if stream.match(pattern) and _end_of_line(stream):
            return ThematicBreak()
        stream.restore(mark)

    dashes = stream.take_while(lambda ch: ch == "-")
    if len(dashes) >= MIN_DASH_RULE and _end_of_line(stream):
        return ThematicBreak()
    return NO_MATCH


def _atx_heading(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    hashes = stream.take_while(lambda ch: ch == "#")
    if not hashes:
        return NO_MATCH
    stream.take_while(lambda ch: ch in " \t")
    text = strip_closing_hashes(stream.take_line())
    level = min(len(hashes), MAX_HEADING_LEVEL)
    return Heading(level=level, children=parse_phrase(text), style="atx")


def _setext_heading(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    text = stream.advance_until(lambda ch: ch == "\n")
    if is_blank(text) or not stream.match("\n"):
        return NO_MATCH

    underline = stream.peek()
    if underline not in ("=", "-"):
        return NO_MATCH
    run = stream.take_while(lambda ch: ch == underline)
    if len(run) < MIN_SETEXT_UNDERLINE or not _end_of_line(stream):
        return NO_MATCH

    level = 1 if underline == "=" else 2
    return Heading(level=level, children=parse_phrase(text), style="setext")


def _indented_code(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    lines: list[str] = []
    while stream.match(CODE_INDENT):
        lines.append(stream.take_line())
    # Indentation alone is a blank line, not code
    if all(is_blank(line) for line in lines):
        return NO_MATCH
    return IndentedCode(lines=tuple(lines))


def _quote_prefix(stream: ChunkFeeder) -> bool:
    """Consume a ``> `` prefix or a bare ``>`` line."""
    if stream.match("> "):
        return True
    if stream.peek(2) in (">", ">\n"):
        stream.take()
        return True
    return False


def _block_quote(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    from pluma.parser import parse_document

    lines: list[str] = []
    while _quote_prefix(stream):
        lines.append(stream.take_line())
    if not lines:
        return NO_MATCH

    inner = ChunkFeeder.from_text("\n".join(lines))
    return BlockQuote(document=parse_document(inner, settings))


def _image_line(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    if not stream.match("!["):
        return NO_MATCH
    alt = stream.advance_until(lambda ch: ch in "]\n")
    if not stream.match("]("):
        return NO_MATCH
    src = scan_href(stream)
    if not src or not stream.match(")") or not _end_of_line(stream):
        return NO_MATCH
    return Image(alt=alt, url=src)


def _bullet_marker(stream: ChunkFeeder) -> bool:
    return any(stream.match(marker) for marker in BULLET_MARKERS)


def _number_marker(stream: ChunkFeeder) -> bool:
    mark = stream.checkpoint()
    digits = stream.take_while(lambda ch: ch in DIGITS)
    if digits and stream.take() in (".", ")") and stream.match(" "):
        return True
    stream.restore(mark)
    return False


def _bullet_list(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    items = _take_items(stream, _bullet_marker)
    if not items:
        return NO_MATCH
    return BulletList(items=tuple(items))


def _number_list(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    items = _take_items(stream, _number_marker)
    if not items:
        return NO_MATCH
    return NumberList(items=tuple(items))


def _paragraph(stream: ChunkFeeder, settings: MarkdownSettings) -> Attempt[Block]:
    lines = tuple(parse_phrase(line) for line in _take_nonblank_lines(stream))
    if not lines:
        return Empty()
    return Paragraph(lines=lines)


BLOCK_RULES: tuple[BlockRule, ...] = (
    _raw_html,
    _thematic_break,
    _atx_heading,
    _setext_heading,
    _indented_code,
    _block_quote,
    _image_line,
    _bullet_list,
    _number_list,
    _paragraph,
)


__all__ = [
    "BLOCK_RULES",
    "parse_block",
]
