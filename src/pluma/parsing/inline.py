"""Inline phrase parsing for Pluma.

Parses one line of text into a tuple of inline nodes using an
ordered-choice grammar. At each position the alternatives that can
start with the current character are tried in priority order; the first
match wins and the stream is rewound after every failed attempt.

Grammar (first match wins):
    ``__x__`` Strong, ``_x_`` Emphasis, ``_`` run literal
    ``**x**`` Strong, ``*x*`` Emphasis, ``*`` run literal
    `` `x` `` CodeSpan, `` ` `` run literal
    ``\\c`` escape
    ``[text](href "title")`` Link, ``[`` run literal
    anything else up to the next special character: Text

Each delimited interior is exactly one phrase parsed with this same
grammar, so ``**_a_**`` nests as Strong(Emphasis(Text("a"))). Nesting is
bounded only by the interpreter's recursion limit.

The grammar is total: every special character has a literal fallback,
so parse_phrase never fails on real input.

"""

from __future__ import annotations

from collections.abc import Callable

from pluma.errors import GrammarError, ParseError
from pluma.nodes import CodeSpan, Emphasis, Inline, Link, LiteralRun, Strong, Text
from pluma.parsing.result import NO_MATCH, Attempt, try_alternative
from pluma.stream import ChunkFeeder
from pluma.utils.logger import get_logger

logger = get_logger(__name__)

# Start offset -> (result, end offset) for one phrase parse
type PhraseMemo = dict[int, tuple[Attempt[Inline], int]]

type PhraseRule = Callable[[ChunkFeeder, PhraseMemo], Attempt[Inline]]

# Characters that end a plain text run
INLINE_SPECIAL = frozenset("*_`\\[")

# Characters a backslash turns into literals
ESCAPABLE = frozenset("`*_\\")

# Characters that end an unescaped href
HREF_TERMINATORS = frozenset(" )\n")


def parse_phrase(text: str) -> tuple[Inline, ...]:
    """Parse a line of text into inline nodes.

    Args:
        text: One line (or line-derived span) of Markdown text

    Returns:
        Inline nodes in input order. Empty text yields an empty tuple.

    Raises:
        GrammarError: If no alternative matched (a grammar bug).
        ParseError: If nesting exceeds the interpreter's recursion limit.

    Example:
        >>> parse_phrase("**_a_**")
        (Strong(child=Emphasis(child=Text(content='a'))),)
    """
    if not text:
        return ()

    stream = ChunkFeeder.from_text(text)
    memo: PhraseMemo = {}
    phrases: list[Inline] = []
    try:
        while not stream.at_end():
            node = parse_one(stream, memo)
            if node is NO_MATCH:
                logger.warning("inline grammar gap at offset %d in %r", stream.position, text)
                raise GrammarError("inline", stream.position)
            phrases.append(node)
    except RecursionError as e:
        raise ParseError("inline nesting too deep", stream.position) from e
    return tuple(phrases)


def parse_one(stream: ChunkFeeder, memo: PhraseMemo | None = None) -> Attempt[Inline]:
    """Parse a single phrase at the cursor.

    A phrase depends only on the text from its start onward, so results
    are cached by start offset in ``memo``. Each offset is parsed at
    most once per line.

    Args:
        stream: Cursor at the start of the phrase
        memo: Cache shared by every parse_one call over the same text

    Returns:
        The first matching alternative's node, or NO_MATCH at end of input.
    """
    if memo is None:
        memo = {}
    start = stream.position
    cached = memo.get(start)
    if cached is not None:
        result, end = cached
        stream.restore(end)
        return result

    result = NO_MATCH
    for rule in _RULES_BY_CHAR.get(stream.peek(), _FALLBACK_RULES):
        result = try_alternative(stream, rule, memo)
        if result is not NO_MATCH:
            break
    memo[start] = (result, stream.position)
    return result


# =============================================================================
# Alternatives
# =============================================================================


def _delimited(delimiter: str, wrap: Callable[[Inline], Inline]) -> PhraseRule:
    """Build a rule for ``<delimiter> phrase <delimiter>``."""

    def rule(stream: ChunkFeeder, memo: PhraseMemo) -> Attempt[Inline]:
        if not stream.match(delimiter):
            return NO_MATCH
        child = parse_one(stream, memo)
        if child is NO_MATCH or not stream.match(delimiter):
            return NO_MATCH
        return wrap(child)

    return rule


def _literal_run(char: str) -> PhraseRule:
    """Build a rule consuming a run of ``char`` as literal text."""

    def rule(stream: ChunkFeeder, memo: PhraseMemo) -> Attempt[Inline]:
        run = stream.take_while(lambda ch: ch == char)
        if not run:
            return NO_MATCH
        return LiteralRun(char=char, count=len(run))

    return rule


def _escape(stream: ChunkFeeder, memo: PhraseMemo) -> Attempt[Inline]:
    if not stream.match("\\"):
        return NO_MATCH
    ch = stream.peek()
    if ch and ch in ESCAPABLE:
        stream.take()
        return Text(content=ch)
    # Lone backslash; the next character is scanned normally
    return Text(content="\\")


def scan_href(stream: ChunkFeeder) -> str:
    """Consume link/image destination characters.

    A backslash escapes the following character. An unescaped space,
    ``)`` or newline ends the destination.

    Returns:
        The destination with escapes resolved; may be empty.
    """
    chars: list[str] = []
    while True:
        ch = stream.peek()
        if not ch or ch in HREF_TERMINATORS:
            break
        stream.take()
        if ch == "\\":
            escaped = stream.take()
            chars.append(escaped or ch)
        else:
            chars.append(ch)
    return "".join(chars)


def _link_title(stream: ChunkFeeder) -> Attempt[str]:
    """Parse `` "title"`` including the leading space."""
    if not stream.match(' "'):
        return NO_MATCH
    chars: list[str] = []
    while True:
        ch = stream.take()
        if not ch:
            return NO_MATCH
        if ch == '"':
            return "".join(chars)
        if ch == "\\":
            chars.append(stream.take() or ch)
        else:
            chars.append(ch)


def _link(stream: ChunkFeeder, memo: PhraseMemo) -> Attempt[Inline]:
    if not stream.match("["):
        return NO_MATCH
    text = stream.advance_until(lambda ch: ch == "]")
    if not stream.match("]("):
        return NO_MATCH
    href = scan_href(stream)
    if not href:
        return NO_MATCH
    title = try_alternative(stream, _link_title)
    if not stream.match(")"):
        return NO_MATCH
    return Link(
        text=Text(content=text),
        url=href,
        title=None if title is NO_MATCH else title,
    )


def _plain_text(stream: ChunkFeeder, memo: PhraseMemo) -> Attempt[Inline]:
    content = stream.advance_until(lambda ch: ch in INLINE_SPECIAL)
    if not content:
        return NO_MATCH
    return Text(content=content)


_RULES_BY_CHAR: dict[str, tuple[PhraseRule, ...]] = {
    "_": (
        _delimited("__", Strong),
        _delimited("_", Emphasis),
        _literal_run("_"),
    ),
    "*": (
        _delimited("**", Strong),
        _delimited("*", Emphasis),
        _literal_run("*"),
    ),
    "`": (
        _delimited("`", CodeSpan),
        _literal_run("`"),
    ),
    "\\": (_escape,),
    "[": (
        _link,
        _literal_run("["),
    ),
}

_FALLBACK_RULES: tuple[PhraseRule, ...] = (_plain_text,)


__all__ = [
    "ESCAPABLE",
    "INLINE_SPECIAL",
    "PhraseMemo",
    "parse_one",
    "parse_phrase",
    "scan_href",
]
