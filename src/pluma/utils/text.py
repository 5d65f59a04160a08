"""Text helpers shared by the block and inline grammars."""

from __future__ import annotations


def is_blank(line: str) -> bool:
    """Return True for an empty or whitespace-only line.

    Examples:
        >>> is_blank("")
        True
        >>> is_blank("  \\t")
        True
        >>> is_blank(" x ")
        False
    """
    return not line.strip()


def strip_closing_hashes(text: str) -> str:
    """Remove an ATX heading's closing sequence.

    Trailing whitespace, then trailing ``#`` characters, then the
    whitespace before them.

    Examples:
        >>> strip_closing_hashes("Title ##")
        'Title'
        >>> strip_closing_hashes("Title ##  ")
        'Title'
        >>> strip_closing_hashes("C# ")
        'C'
    """
    return text.rstrip().rstrip("#").rstrip()
