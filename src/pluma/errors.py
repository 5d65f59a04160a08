"""Exception classes for Pluma.

The grammar itself is total: every input produces a document. These
exceptions cover misuse of the parsing API and internal invariant
violations, so callers can tell a programming error from markdown that
merely looks odd.
"""

from __future__ import annotations


class PlumaError(Exception):
    """Base exception for all Pluma errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(PlumaError):
    """Error during Markdown parsing.

    Raised when parsing cannot continue, e.g. nesting deeper than the
    interpreter's recursion limit or a backtrack to discarded input.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        """Initialize parse error with an optional position.

        Args:
            message: Error description
            offset: Character offset into the logical input stream
        """
        self.message = message
        self.offset = offset

        location = f"offset {offset}: " if offset is not None else ""
        super().__init__(f"{location}{message}")


class GrammarError(ParseError):
    """No grammar alternative matched while input remained.

    The block and inline grammars both end in total fallbacks, so this
    signals a bug in the grammar rather than bad input.
    """

    def __init__(self, rule: str, offset: int | None = None) -> None:
        """Initialize grammar error.

        Args:
            rule: Grammar layer that failed ("block" or "inline")
            offset: Character offset where no alternative matched
        """
        self.rule = rule
        super().__init__(f"no {rule} alternative matched", offset)


class StreamConsumedError(PlumaError):
    """Parser entry point invoked on input that was already consumed.

    Parser instances are single-use; create one per document.
    """

    pass


class RenderError(PlumaError):
    """Error during HTML rendering.

    Raised when the renderer encounters a node type it does not know.
    """

    pass
