"""Result values for ordered-choice grammar alternatives.

An alternative either returns a node or NO_MATCH. NO_MATCH is an
ordinary value rather than an exception, so trying the next alternative
is a plain ``is`` check and failure never unwinds the stack.

Usage:
    result = try_alternative(stream, _atx_heading, settings)
    if result is NO_MATCH:
        result = try_alternative(stream, _paragraph, settings)
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Final, Literal

from pluma.stream import ChunkFeeder


class NoMatch(Enum):
    """Marker returned by an alternative that did not apply."""

    NO_MATCH = "NO_MATCH"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_MATCH"


NO_MATCH: Final = NoMatch.NO_MATCH

type Attempt[T] = T | Literal[NoMatch.NO_MATCH]


def try_alternative[T](
    stream: ChunkFeeder,
    rule: Callable[..., Attempt[T]],
    *args: Any,
) -> Attempt[T]:
    """Run one alternative, rewinding the stream if it does not match.

    Args:
        stream: Cursor positioned at the start of the alternative
        rule: Called as ``rule(stream, *args)``; consumes input and
            returns a node or NO_MATCH
        *args: Extra arguments for the rule (e.g. settings)

    Returns:
        The rule's result. On NO_MATCH the stream is back where it was.
    """
    mark = stream.checkpoint()
    result = rule(stream, *args)
    if result is NO_MATCH:
        stream.restore(mark)
    return result


__all__ = [
    "NO_MATCH",
    "Attempt",
    "NoMatch",
    "try_alternative",
]
