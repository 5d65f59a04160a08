"""Typed AST nodes for Pluma.

All AST nodes are frozen dataclasses with slots for:
- Immutability: built bottom-up during parsing, never mutated afterwards
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: the renderer dispatches with match statements

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── IndentedCode
│   ├── BlockQuote
│   ├── BulletList
│   ├── NumberList
│   ├── ThematicBreak
│   ├── HtmlBlock
│   ├── Image (image-only line)
│   └── Empty
└── Inline (inline elements)
    ├── Text
    ├── Emphasis
    ├── Strong
    ├── CodeSpan
    ├── Link
    ├── Image
    └── LiteralRun

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content.

    The most common inline node. Escaped characters (``\\*``) also
    become Text holding the bare character.

    """

    content: str


@dataclass(frozen=True, slots=True)
class LiteralRun(Node):
    """A run of delimiter characters that matched nothing.

    Markdown: ``**`` with no closer, a lone ``[``, stray backticks
    HTML: the characters, escaped

    """

    char: str
    count: int = 1

    @property
    def content(self) -> str:
        """The run as literal text."""
        return self.char * self.count


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    Holds exactly one inline phrase; spans never overlap.

    """

    child: Inline


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    child: Inline


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    The interior is itself a parsed phrase, so `**x**` inside backticks
    renders bold.

    """

    child: Inline


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url "title")
    HTML: <a href="url" title="title">text</a>

    The bracketed text is kept verbatim as a single Text node.

    """

    text: Inline
    url: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image.

    Markdown: ![alt](url), alone on its line
    HTML: <img src="url" alt="alt" />

    """

    alt: str
    url: str


# PEP 695 type alias for inline elements
type Inline = Text | LiteralRun | Emphasis | Strong | CodeSpan | Link | Image


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX or setext heading.

    Markdown: # Heading or Heading\\n======
    HTML: <h1>Heading</h1>

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]
    style: Literal["atx", "setext"] = "atx"


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block.

    Markdown: consecutive non-blank lines
    HTML: <p>line\\nline</p>

    Each physical line is parsed as its own phrase; a line break marker
    separates them on output.

    """

    lines: tuple[tuple[Inline, ...], ...]


@dataclass(frozen=True, slots=True)
class IndentedCode(Node):
    """Indented code block (4 spaces).

    Markdown: ····code
    HTML: <pre><code>code</code></pre>

    Lines are verbatim with the indent removed; no inline parsing.

    """

    lines: tuple[str, ...]

    @property
    def code(self) -> str:
        """Code content with lines joined by newlines."""
        return "\n".join(self.lines)


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote.

    Markdown: > quoted text
    HTML: <blockquote>text</blockquote>

    The quoted lines are parsed as a complete nested document.

    """

    document: Document


@dataclass(frozen=True, slots=True)
class BulletList(Node):
    """Unordered list, one physical line per item.

    Markdown: * item, - item or + item
    HTML: <ul><li>item</li></ul>

    """

    items: tuple[tuple[Inline, ...], ...]


@dataclass(frozen=True, slots=True)
class NumberList(Node):
    """Ordered list, one physical line per item.

    Markdown: 1. item or 1) item
    HTML: <ol><li>item</li></ol>

    """

    items: tuple[tuple[Inline, ...], ...]


@dataclass(frozen=True, slots=True)
class ThematicBreak(Node):
    """Thematic break (horizontal rule).

    Markdown: * * *, ***, *****, - - - or five or more dashes
    HTML: <hr />

    """


@dataclass(frozen=True, slots=True)
class HtmlBlock(Node):
    """Raw HTML block.

    Markdown: lines starting with ``<`` up to a blank line
    HTML: emitted unescaped

    ``sanitized`` records whether the content went through the sanitizer.

    """

    html: str
    sanitized: bool = True


@dataclass(frozen=True, slots=True)
class Empty(Node):
    """Identity block; renders as nothing.

    Produced when the paragraph fallback meets a blank line.

    """


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node: blocks in input order."""

    children: tuple[Block, ...]


# PEP 695 type alias for block elements
type Block = (
    Heading
    | Paragraph
    | IndentedCode
    | BlockQuote
    | BulletList
    | NumberList
    | ThematicBreak
    | HtmlBlock
    | Image
    | Empty
)


__all__ = [
    "Block",
    "BlockQuote",
    "BulletList",
    "CodeSpan",
    "Document",
    "Emphasis",
    "Empty",
    "Heading",
    "HtmlBlock",
    "Image",
    "IndentedCode",
    "Inline",
    "LiteralRun",
    "Link",
    "Node",
    "NumberList",
    "Paragraph",
    "Strong",
    "Text",
    "ThematicBreak",
]
