"""HTML renderer built on HtmlBuilder.

Renders the typed AST to an HTML string in one pass. Text is escaped by
the builder; raw HTML blocks are emitted as stored (already sanitized
at parse time when the settings asked for it).

Thread Safety:
All per-render state lives in the HtmlBuilder created by render(), so a
single HtmlRenderer instance can be shared across threads.
"""

from __future__ import annotations

import html
from urllib.parse import quote as url_quote

from pluma.builder import HtmlBuilder
from pluma.errors import RenderError
from pluma.nodes import (
    Block,
    BlockQuote,
    BulletList,
    CodeSpan,
    Document,
    Emphasis,
    Empty,
    Heading,
    HtmlBlock,
    Image,
    IndentedCode,
    Inline,
    Link,
    LiteralRun,
    NumberList,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
)


def encode_url(url: str) -> str:
    """Percent-encode a destination for an href/src attribute.

    HTML entities are decoded first; characters that are already legal
    in URLs, including ``%`` escapes, are preserved. The result still
    needs attribute escaping, which the builder does.
    """
    decoded = html.unescape(url)
    return url_quote(decoded, safe="/:?#[]@!$&'()*+,;=-_.~%")


class HtmlRenderer:
    """Render AST to HTML.

    Usage:
        >>> from pluma import parse
        >>> HtmlRenderer().render(parse("# Hello **World**"))
        '<h1>Hello <strong>World</strong></h1>\\n'

    Thread Safety:
        Stateless between calls; safe to share.
    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render document AST to HTML string.

        Args:
            node: Document AST root

        Returns:
            HTML string, one line-terminated element per block
        """
        hb = HtmlBuilder()
        for child in node.children:
            self._render_block(child, hb)
        return hb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, hb: HtmlBuilder) -> None:
        """Render a block node."""
        match block:
            case Heading():
                with hb.element(f"h{block.level}"):
                    self._render_inlines(block.children, hb)
                hb.newline()
            case Paragraph():
                self._render_paragraph(block, hb)
            case IndentedCode():
                with hb.element("pre"), hb.element("code"):
                    hb.text(block.code)
                hb.newline()
            case BlockQuote():
                hb.open("blockquote").newline()
                for child in block.document.children:
                    self._render_block(child, hb)
                hb.close("blockquote").newline()
            case BulletList():
                self._render_items("ul", block.items, hb)
            case NumberList():
                self._render_items("ol", block.items, hb)
            case ThematicBreak():
                hb.void("hr").newline()
            case HtmlBlock():
                hb.raw(block.html).newline()
            case Image():
                self._render_image(block, hb)
                hb.newline()
            case Empty():
                pass
            case _:
                raise RenderError(f"cannot render block {type(block).__name__}")

    def _render_paragraph(self, para: Paragraph, hb: HtmlBuilder) -> None:
        """Render paragraph; physical lines are separated by newlines."""
        with hb.element("p"):
            for i, line in enumerate(para.lines):
                if i:
                    hb.newline()
                self._render_inlines(line, hb)
        hb.newline()

    def _render_items(
        self, tag: str, items: tuple[tuple[Inline, ...], ...], hb: HtmlBuilder
    ) -> None:
        """Render a list whose items are single inline lines."""
        hb.open(tag).newline()
        for item in items:
            with hb.element("li"):
                self._render_inlines(item, hb)
            hb.newline()
        hb.close(tag).newline()

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(self, inlines: tuple[Inline, ...], hb: HtmlBuilder) -> None:
        """Render a sequence of inline nodes."""
        for inline in inlines:
            self._render_inline(inline, hb)

    def _render_inline(self, inline: Inline, hb: HtmlBuilder) -> None:
        """Render an inline node."""
        match inline:
            case Text():
                hb.text(inline.content)
            case LiteralRun():
                hb.text(inline.content)
            case Strong():
                with hb.element("strong"):
                    self._render_inline(inline.child, hb)
            case Emphasis():
                with hb.element("em"):
                    self._render_inline(inline.child, hb)
            case CodeSpan():
                with hb.element("code"):
                    self._render_inline(inline.child, hb)
            case Link():
                attrs = {"href": encode_url(inline.url), "title": inline.title or None}
                with hb.element("a", attrs):
                    self._render_inline(inline.text, hb)
            case Image():
                self._render_image(inline, hb)
            case _:
                raise RenderError(f"cannot render inline {type(inline).__name__}")

    def _render_image(self, image: Image, hb: HtmlBuilder) -> None:
        hb.void("img", {"src": encode_url(image.url), "alt": image.alt})


__all__ = [
    "HtmlRenderer",
    "encode_url",
]
