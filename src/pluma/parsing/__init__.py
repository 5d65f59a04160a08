"""Grammar for Pluma.

Two layers, both ordered-choice with checkpoint/restore backtracking:

- blocks: block structure (headings, lists, quotes, code, paragraphs)
- inline: phrase structure within one line (emphasis, code, links)

Alternatives signal failure with the NO_MATCH value from result.
"""

from pluma.parsing.blocks import BLOCK_RULES, parse_block
from pluma.parsing.inline import parse_one, parse_phrase
from pluma.parsing.result import NO_MATCH, Attempt, NoMatch, try_alternative

__all__ = [
    "BLOCK_RULES",
    "NO_MATCH",
    "Attempt",
    "NoMatch",
    "parse_block",
    "parse_one",
    "parse_phrase",
    "try_alternative",
]
