"""Document assembly for Pluma.

Drives the block grammar until the input stream is exhausted and
collects the blocks into one Document. The same parse_document() entry
point serves the top level and every nested blockquote.

Architecture:
    ChunkFeeder (stream.py) -> parse_block (parsing/blocks.py)
    -> parse_phrase (parsing/inline.py) for line content

Thread Safety:
- Parser instances are single-use; create one per document
- Settings are passed explicitly, never read from global state
- The resulting AST is immutable and safe to share across threads

"""

from __future__ import annotations

from collections.abc import Iterable

from pluma.config import DEFAULT_SETTINGS, MarkdownSettings
from pluma.errors import GrammarError, ParseError, StreamConsumedError
from pluma.nodes import Block, Document
from pluma.parsing.blocks import parse_block
from pluma.parsing.result import NO_MATCH
from pluma.stream import ChunkFeeder
from pluma.utils.logger import get_logger

logger = get_logger(__name__)


def parse_document(
    stream: ChunkFeeder, settings: MarkdownSettings = DEFAULT_SETTINGS
) -> Document:
    """Parse blocks until the stream is exhausted.

    Every produced block is kept, including Empty blocks from blank
    lines. Consumed input is released between blocks.

    Args:
        stream: Cursor over the document text
        settings: Settings for this document and all nested documents

    Returns:
        Document with blocks in input order

    Raises:
        GrammarError: If no block alternative consumed input.
    """
    blocks: list[Block] = []
    while not stream.at_end():
        start = stream.position
        block = parse_block(stream, settings)
        if block is NO_MATCH or stream.position == start:
            logger.warning("block grammar gap at offset %d", start)
            raise GrammarError("block", start)
        blocks.append(block)
        stream.release()
    return Document(children=tuple(blocks))


class Parser:
    """Single-use parser over a string or a sequence of text fragments.

    Usage:
        >>> parser = Parser(["# Hel", "lo\\n\\nWorld"])
        >>> doc = parser.parse()
        >>> doc.children[0]
        Heading(level=1, children=(Text(content='Hello'),), style='atx')

    Thread Safety:
        Parser instances are not thread-safe. The resulting AST is.

    """

    __slots__ = ("_stream", "_settings", "_consumed")

    def __init__(
        self,
        source: str | Iterable[str],
        settings: MarkdownSettings | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            source: Markdown text, or fragments of it in order
            settings: Parse settings (defaults to DEFAULT_SETTINGS)
        """
        if isinstance(source, str):
            self._stream = ChunkFeeder.from_text(source)
        else:
            self._stream = ChunkFeeder(source)
        self._settings = settings or DEFAULT_SETTINGS
        self._consumed = False

    def parse(self) -> Document:
        """Parse the whole input into a Document.

        Raises:
            StreamConsumedError: If called a second time.
            ParseError: If nesting exceeds the interpreter's recursion limit.
        """
        if self._consumed:
            raise StreamConsumedError("Parser.parse() called on an already consumed stream")
        self._consumed = True

        try:
            doc = parse_document(self._stream, self._settings)
        except RecursionError as e:
            raise ParseError("block nesting too deep", self._stream.position) from e

        logger.debug(
            "parsed %d blocks from %d characters", len(doc.children), self._stream.position
        )
        return doc


__all__ = [
    "Parser",
    "parse_document",
]
