"""Checkpointable character cursor over chunked input.

Text may arrive as many fragments (network reads, file lines, generator
output). ChunkFeeder pulls fragments lazily, strips carriage returns and
exposes one logical character stream. Fragment boundaries are invisible
to the grammar: a token may start in one fragment and end in the next.

Backtracking:
    Every grammar alternative records ``checkpoint()``, tries to match,
    and calls ``restore(mark)`` when it fails. Marks are plain absolute
    offsets, so saving and restoring is O(1).

Memory:
    ``release()`` discards consumed text that no checkpoint can reach
    any more. The document assembler calls it between top-level blocks,
    so the buffer tracks the largest block rather than the whole input.

Thread Safety:
    Instances are single-use and not thread-safe. Create one per parse.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from pluma.errors import ParseError

type CharPredicate = Callable[[str], bool]


class ChunkFeeder:
    """Pull-based cursor over an iterable of text fragments.

    Usage:
        >>> feeder = ChunkFeeder(["# Hel", "lo\\r\\n", "world"])
        >>> feeder.take_line()
        '# Hello'
        >>> mark = feeder.checkpoint()
        >>> feeder.take(3)
        'wor'
        >>> feeder.restore(mark)
        >>> feeder.peek_while(str.isalpha)
        'world'

    """

    __slots__ = (
        "_chunks",
        "_buffer",
        "_base",  # Absolute offset of _buffer[0]
        "_pos",  # Absolute offset of the cursor
        "_exhausted",
    )

    def __init__(self, chunks: Iterable[str]) -> None:
        """Initialize feeder.

        Args:
            chunks: Ordered text fragments. Consumed lazily, once.
        """
        self._chunks: Iterator[str] = iter(chunks)
        self._buffer = ""
        self._base = 0
        self._pos = 0
        self._exhausted = False

    @classmethod
    def from_text(cls, text: str) -> ChunkFeeder:
        """Create a feeder over a single string."""
        return cls((text,))

    # =========================================================================
    # Buffer management
    # =========================================================================

    def _pull(self) -> bool:
        """Append the next non-empty fragment to the buffer.

        Returns:
            False once the source iterable is exhausted.
        """
        while not self._exhausted:
            chunk = next(self._chunks, None)
            if chunk is None:
                self._exhausted = True
                return False
            chunk = chunk.replace("\r", "")
            if chunk:
                self._buffer += chunk
                return True
        return False

    def _available(self) -> int:
        """Characters buffered ahead of the cursor."""
        return self._base + len(self._buffer) - self._pos

    def _fill(self, n: int) -> int:
        """Pull until n characters are buffered ahead or input ends."""
        while self._available() < n and self._pull():
            pass
        return min(n, self._available())

    def _char_at(self, ahead: int) -> str:
        """Character ``ahead`` positions past the cursor, or "" at end."""
        if self._fill(ahead + 1) <= ahead:
            return ""
        return self._buffer[self._pos - self._base + ahead]

    # =========================================================================
    # Position
    # =========================================================================

    @property
    def position(self) -> int:
        """Absolute offset of the cursor in the logical stream."""
        return self._pos

    def checkpoint(self) -> int:
        """Record the current position for a later restore()."""
        return self._pos

    def restore(self, mark: int) -> None:
        """Move the cursor back to a recorded checkpoint.

        Raises:
            ParseError: If the mark points into released input.
        """
        if mark < self._base:
            raise ParseError("checkpoint refers to released input", offset=mark)
        self._pos = mark

    def release(self) -> None:
        """Discard buffered text before the cursor.

        Checkpoints taken before this call become invalid.
        """
        consumed = self._pos - self._base
        if consumed:
            self._buffer = self._buffer[consumed:]
            self._base = self._pos

    # =========================================================================
    # Lookahead (non-consuming)
    # =========================================================================

    def at_end(self) -> bool:
        """True when no characters remain."""
        return self._fill(1) == 0

    def at_line_end(self) -> bool:
        """True at a newline or at the end of input."""
        return self._char_at(0) in ("", "\n")

    def peek(self, n: int = 1) -> str:
        """Return up to n upcoming characters without consuming them."""
        available = self._fill(n)
        start = self._pos - self._base
        return self._buffer[start : start + available]

    def startswith(self, literal: str) -> bool:
        """True if the upcoming characters equal ``literal``."""
        return self.peek(len(literal)) == literal

    def peek_while(self, predicate: CharPredicate) -> str:
        """Return the longest upcoming run satisfying predicate."""
        mark = self._pos
        text = self.take_while(predicate)
        self._pos = mark
        return text

    # =========================================================================
    # Consumption
    # =========================================================================

    def take(self, n: int = 1) -> str:
        """Consume and return up to n characters."""
        text = self.peek(n)
        self._pos += len(text)
        return text

    def match(self, literal: str) -> bool:
        """Consume ``literal`` if it comes next.

        Returns:
            True when consumed; the cursor is unchanged otherwise.
        """
        if self.startswith(literal):
            self._pos += len(literal)
            return True
        return False

    def advance_until(self, predicate: CharPredicate) -> str:
        """Consume characters up to the first one satisfying predicate.

        Returns:
            The consumed text; the matching character is not consumed.
        """
        parts: list[str] = []
        while True:
            if self._available() <= 0 and not self._pull():
                break
            start = self._pos - self._base
            end = start
            buf = self._buffer
            buf_len = len(buf)
            while end < buf_len and not predicate(buf[end]):
                end += 1
            parts.append(buf[start:end])
            self._pos += end - start
            if end < buf_len:
                break
        return "".join(parts)

    def take_while(self, predicate: CharPredicate) -> str:
        """Consume the longest run satisfying predicate."""
        return self.advance_until(lambda ch: not predicate(ch))

    def take_line(self) -> str:
        """Consume to the end of the line.

        Returns:
            Line text without its newline. The newline, when present,
            is consumed as well.
        """
        line = self.advance_until(_is_newline)
        self.match("\n")
        return line


def _is_newline(ch: str) -> bool:
    return ch == "\n"


__all__ = [
    "CharPredicate",
    "ChunkFeeder",
]
