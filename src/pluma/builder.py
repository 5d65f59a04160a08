"""HTML tree builder for O(n) markup accumulation.

Appends fragments to a list and joins once at the end, like a string
builder, while owning the escaping rules: text and attribute values
always go through html_escape(); only raw() bypasses it.

Thread Safety:
HtmlBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

import html
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

type Attributes = Mapping[str, str | None]


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    Escapes <, >, &, " but not single quotes, matching what the
    renderer needs for both text and double-quoted attributes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def format_attrs(attrs: Attributes | None) -> str:
    """Render attributes as `` name="value"`` pairs.

    Attributes whose value is None are omitted; order is preserved.
    """
    if not attrs:
        return ""
    return "".join(
        f' {name}="{html_escape(value)}"' for name, value in attrs.items() if value is not None
    )


class HtmlBuilder:
    """Accumulates escaped markup.

    Usage:
            >>> hb = HtmlBuilder()
            >>> with hb.element("a", {"href": "/x", "title": None}):
            ...     hb.text("1 < 2")
            >>> hb.build()
            '<a href="/x">1 &lt; 2</a>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._parts: list[str] = []

    def raw(self, s: str) -> HtmlBuilder:
        """Append markup verbatim (empty strings are skipped)."""
        if s:
            self._parts.append(s)
        return self

    def text(self, s: str) -> HtmlBuilder:
        """Append escaped text."""
        if s:
            self._parts.append(html_escape(s))
        return self

    def newline(self) -> HtmlBuilder:
        """Append a newline."""
        self._parts.append("\n")
        return self

    def open(self, tag: str, attrs: Attributes | None = None) -> HtmlBuilder:
        """Append an opening tag."""
        self._parts.append(f"<{tag}{format_attrs(attrs)}>")
        return self

    def close(self, tag: str) -> HtmlBuilder:
        """Append a closing tag."""
        self._parts.append(f"</{tag}>")
        return self

    def void(self, tag: str, attrs: Attributes | None = None) -> HtmlBuilder:
        """Append a self-closing element such as <hr /> or <img />."""
        self._parts.append(f"<{tag}{format_attrs(attrs)} />")
        return self

    @contextmanager
    def element(self, tag: str, attrs: Attributes | None = None) -> Iterator[HtmlBuilder]:
        """Wrap whatever the body appends in ``<tag>...</tag>``."""
        self.open(tag, attrs)
        yield self
        self.close(tag)

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if anything has been appended."""
        return bool(self._parts)


__all__ = [
    "Attributes",
    "HtmlBuilder",
    "format_attrs",
    "html_escape",
]
