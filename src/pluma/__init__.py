"""
Pluma: streaming Markdown to HTML for Python

A small, dependency-free Markdown parser with a typed AST. Input may be
one string or any iterable of text fragments; raw HTML blocks are
sanitized by default.

Quick Start:
    >>> from pluma import parse, render
    >>> doc = parse("# Hello, World!")
    >>> render(doc)
    '<h1>Hello, World!</h1>\\n'

    >>> # Fragments from a socket, a file, a generator...
    >>> from pluma import markdown
    >>> markdown(["**bo", "ld** text"])
    '<p><strong>bold</strong> text</p>\\n'

    >>> # Or use the high-level Markdown class
    >>> from pluma import Markdown, MarkdownSettings
    >>> md = Markdown(MarkdownSettings(xss_protect_raw_html=False))
    >>> md("<b>trusted</b>")
    '<b>trusted</b>\\n'

Installation:
    pip install pluma
"""

from collections.abc import Iterable

from pluma.config import DEFAULT_SETTINGS, MarkdownSettings
from pluma.errors import (
    GrammarError,
    ParseError,
    PlumaError,
    RenderError,
    StreamConsumedError,
)
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
from pluma.parser import Parser, parse_document
from pluma.parsing.inline import parse_phrase
from pluma.renderers.html import HtmlRenderer
from pluma.renderers.protocol import ASTRenderer
from pluma.sanitize import sanitize_balance
from pluma.stream import ChunkFeeder

__version__ = "0.1.0"


def parse(source: str, settings: MarkdownSettings | None = None) -> Document:
    """Parse Markdown source into a typed AST.

    Args:
        source: Markdown source text
        settings: Parse settings (defaults to DEFAULT_SETTINGS)

    Returns:
        Document AST root node

    Example:
        >>> doc = parse("# Hello **World**")
        >>> doc.children[0].level
        1
    """
    return Parser(source, settings).parse()


def parse_chunks(chunks: Iterable[str], settings: MarkdownSettings | None = None) -> Document:
    """Parse Markdown delivered as ordered text fragments.

    Fragments are pulled lazily and may split the text anywhere,
    including in the middle of a token or a ``\\r\\n`` pair.

    Args:
        chunks: Ordered fragments of one logical document
        settings: Parse settings (defaults to DEFAULT_SETTINGS)

    Returns:
        Document AST root node

    Example:
        >>> doc = parse_chunks(["* a\\n* ", "b\\n"])
        >>> len(doc.children[0].items)
        2
    """
    return Parser(chunks, settings).parse()


def render(doc: Document, *, renderer: ASTRenderer | None = None) -> str:
    """Render an AST Document to HTML.

    Args:
        doc: Document AST to render
        renderer: Alternative renderer (defaults to HtmlRenderer)

    Returns:
        Rendered string
    """
    return (renderer or HtmlRenderer()).render(doc)


def markdown(source: str | Iterable[str], settings: MarkdownSettings | None = None) -> str:
    """Parse and render in one call.

    Args:
        source: Markdown text, or fragments of it in order
        settings: Parse settings (defaults to DEFAULT_SETTINGS)

    Returns:
        HTML string
    """
    return HtmlRenderer().render(Parser(source, settings).parse())


class Markdown:
    """High-level Markdown processor combining parser and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("# Hello **World**")
        '<h1>Hello <strong>World</strong></h1>\\n'

        >>> # Access the AST
        >>> doc = md.parse("## Heading")
        >>> doc.children[0].level
        2

    Thread Safety:
        Holds only immutable settings and a stateless renderer. Safe to
        share between threads.

    """

    __slots__ = ("_renderer", "_settings")

    def __init__(
        self,
        settings: MarkdownSettings | None = None,
        *,
        renderer: ASTRenderer | None = None,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            settings: Parse settings (defaults to DEFAULT_SETTINGS)
            renderer: Renderer used by __call__ and render()
        """
        self._settings = settings or DEFAULT_SETTINGS
        self._renderer: ASTRenderer = renderer or HtmlRenderer()

    @property
    def settings(self) -> MarkdownSettings:
        """Settings applied to every parse."""
        return self._settings

    def __call__(self, source: str | Iterable[str]) -> str:
        """Parse and render Markdown in one call.

        Args:
            source: Markdown text, or fragments of it in order

        Returns:
            Rendered string
        """
        return self._renderer.render(Parser(source, self._settings).parse())

    def parse(self, source: str) -> Document:
        """Parse Markdown source into AST."""
        return Parser(source, self._settings).parse()

    def parse_chunks(self, chunks: Iterable[str]) -> Document:
        """Parse Markdown delivered as ordered text fragments."""
        return Parser(chunks, self._settings).parse()

    def parse_many(self, sources: Iterable[str]) -> list[Document]:
        """Parse several independent documents with the same settings.

        Example:
            >>> md = Markdown()
            >>> docs = md.parse_many(["# Doc 1", "# Doc 2", "# Doc 3"])
            >>> len(docs)
            3
        """
        return [Parser(source, self._settings).parse() for source in sources]

    def render(self, doc: Document) -> str:
        """Render AST with this processor's renderer."""
        return self._renderer.render(doc)


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "markdown",
    "parse",
    "parse_chunks",
    "parse_document",
    "parse_phrase",
    "render",
    # Block nodes
    "Block",
    "BlockQuote",
    "BulletList",
    "Document",
    "Empty",
    "Heading",
    "HtmlBlock",
    "IndentedCode",
    "NumberList",
    "Paragraph",
    "ThematicBreak",
    # Inline nodes
    "Inline",
    "CodeSpan",
    "Emphasis",
    "Image",
    "Link",
    "LiteralRun",
    "Strong",
    "Text",
    # Parser components
    "ChunkFeeder",
    "Parser",
    # Renderer
    "ASTRenderer",
    "HtmlRenderer",
    # Sanitizer
    "sanitize_balance",
    # Configuration
    "DEFAULT_SETTINGS",
    "MarkdownSettings",
    # Errors
    "GrammarError",
    "ParseError",
    "PlumaError",
    "RenderError",
    "StreamConsumedError",
    # High-level
    "Markdown",
]
