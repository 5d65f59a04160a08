"""Raw HTML sanitization for Pluma.

Raw HTML blocks are emitted unescaped, so by default they pass through
sanitize_balance() first. The sanitizer re-serializes the fragment from
the standard library HTML tokenizer:

- Only allow-listed tags and attributes survive; other tags are dropped
  but their text is kept
- script, style and similar elements are dropped with their content
- Comments, doctypes and processing instructions are dropped
- href/src/cite values with javascript:, vbscript: or data: schemes
  are dropped
- Stray end tags are ignored and unclosed tags are closed, so the
  output is always balanced

Example:
    >>> sanitize_balance('<p onclick="x()">hi<script>alert(1)</script>')
    '<p>hi</p>'
"""

from __future__ import annotations

import re
from html.parser import HTMLParser

from pluma.builder import format_attrs, html_escape
from pluma.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_TAGS = frozenset(
    (
        "a", "abbr", "acronym", "address", "article", "aside", "b", "bdi", "bdo",
        "big", "blockquote", "br", "caption", "center", "cite", "code", "col",
        "colgroup", "dd", "del", "details", "dfn", "div", "dl", "dt", "em",
        "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "i", "img", "ins", "kbd", "li", "mark", "nav", "ol", "p",
        "pre", "q", "rp", "rt", "ruby", "s", "samp", "section", "small", "span",
        "strike", "strong", "sub", "summary", "sup", "table", "tbody", "td",
        "tfoot", "th", "thead", "time", "tr", "tt", "u", "ul", "var", "wbr",
    )
)  # fmt: skip

# Elements whose content is dropped along with the tags
DROP_CONTENT_TAGS = frozenset(
    ("script", "style", "iframe", "object", "embed", "applet", "noscript", "template", "xml")
)

VOID_TAGS = frozenset(("br", "col", "hr", "img", "wbr"))

ALLOWED_ATTRIBUTES = frozenset(
    (
        "abbr", "align", "alt", "cite", "class", "colspan", "datetime", "dir",
        "height", "href", "id", "lang", "name", "open", "rel", "rowspan", "scope",
        "span", "src", "start", "target", "title", "type", "valign", "width",
    )
)  # fmt: skip

URL_ATTRIBUTES = frozenset(("href", "src", "cite"))

_DANGEROUS_SCHEMES = ("javascript:", "vbscript:", "data:")

# Browsers ignore control characters and whitespace inside a scheme
_URL_NOISE = re.compile(r"[\x00-\x20\x7f]+")


def is_dangerous_url(url: str) -> bool:
    """Check if URL uses a dangerous scheme.

    Examples:
        >>> is_dangerous_url(" JaVa\\tScript:alert(1)")
        True
        >>> is_dangerous_url("https://example.com")
        False
    """
    lower = _URL_NOISE.sub("", url).lower()
    return lower.startswith(_DANGEROUS_SCHEMES)


class _BalancingSanitizer(HTMLParser):
    """Re-serializes a fragment, keeping only safe, balanced markup."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._parts: list[str] = []
        self._open: list[str] = []
        self._drop_depth = 0
        self.removed = 0

    # -------------------------------------------------------------------------
    # Tokenizer callbacks
    # -------------------------------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in DROP_CONTENT_TAGS:
            self._drop_depth += 1
            self.removed += 1
            return
        if self._keep(tag):
            self._emit_start(tag, attrs)
            if tag not in VOID_TAGS:
                self._open.append(tag)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in DROP_CONTENT_TAGS:
            self.removed += 1
            return
        if self._keep(tag):
            self._emit_start(tag, attrs)
            if tag not in VOID_TAGS:
                self._parts.append(f"</{tag}>")

    def handle_endtag(self, tag: str) -> None:
        if tag in DROP_CONTENT_TAGS:
            if self._drop_depth:
                self._drop_depth -= 1
            return
        if self._drop_depth or tag not in self._open:
            return
        # Close anything left open inside this element first
        while self._open:
            open_tag = self._open.pop()
            self._parts.append(f"</{open_tag}>")
            if open_tag == tag:
                break

    def handle_data(self, data: str) -> None:
        if not self._drop_depth:
            self._parts.append(html_escape(data))

    def handle_comment(self, data: str) -> None:
        self.removed += 1

    def handle_decl(self, decl: str) -> None:
        self.removed += 1

    def handle_pi(self, data: str) -> None:
        self.removed += 1

    def unknown_decl(self, data: str) -> None:
        self.removed += 1

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _keep(self, tag: str) -> bool:
        """True when a tag outside dropped content is allow-listed."""
        if self._drop_depth:
            return False
        if tag not in ALLOWED_TAGS:
            self.removed += 1
            return False
        return True

    def _emit_start(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        rendered = format_attrs(self._clean_attrs(attrs))
        self._parts.append(f"<{tag}{rendered} />" if tag in VOID_TAGS else f"<{tag}{rendered}>")

    def _clean_attrs(self, attrs: list[tuple[str, str | None]]) -> dict[str, str | None]:
        cleaned: dict[str, str | None] = {}
        for name, value in attrs:
            if name not in ALLOWED_ATTRIBUTES:
                self.removed += 1
                continue
            if name in URL_ATTRIBUTES and value is not None and is_dangerous_url(value):
                self.removed += 1
                continue
            # Boolean attributes keep an empty value so they still serialize
            cleaned[name] = "" if value is None else value
        return cleaned

    def result(self) -> str:
        """Flush the tokenizer, close open tags and return the markup."""
        self.close()
        while self._open:
            self._parts.append(f"</{self._open.pop()}>")
        return "".join(self._parts)


def sanitize_balance(fragment: str) -> str:
    """Strip unsafe constructs from an HTML fragment and balance its tags.

    Args:
        fragment: Raw HTML as written in the Markdown source

    Returns:
        Safe HTML fragment with every allowed tag properly closed.
    """
    if not fragment:
        return ""
    sanitizer = _BalancingSanitizer()
    sanitizer.feed(fragment)
    cleaned = sanitizer.result()
    if sanitizer.removed:
        logger.debug("sanitizer removed %d unsafe constructs", sanitizer.removed)
    return cleaned


__all__ = [
    "ALLOWED_ATTRIBUTES",
    "ALLOWED_TAGS",
    "DROP_CONTENT_TAGS",
    "is_dangerous_url",
    "sanitize_balance",
]
