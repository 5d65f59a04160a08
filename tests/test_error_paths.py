"""Error-path tests.

The grammar accepts every input, so errors come from API misuse,
resource limits and grammar invariants. Invariant violations are
provoked by patching the rule tables.
"""

import logging

import pytest

from pluma import Parser, parse
from pluma.errors import (
    GrammarError,
    ParseError,
    PlumaError,
    RenderError,
    StreamConsumedError,
)
from pluma.nodes import Empty
from pluma.parsing import blocks, inline
from pluma.parsing.inline import parse_phrase
from pluma.stream import ChunkFeeder

# =========================================================================
# Exception construction and formatting
# =========================================================================


class TestParseErrorFormatting:
    def test_message_only(self) -> None:
        err = ParseError("unexpected")
        assert str(err) == "unexpected"
        assert err.message == "unexpected"
        assert err.offset is None

    def test_with_offset(self) -> None:
        err = ParseError("bad", offset=7)
        assert str(err) == "offset 7: bad"
        assert err.offset == 7

    def test_offset_zero_is_reported(self) -> None:
        assert str(ParseError("bad", 0)) == "offset 0: bad"

    def test_grammar_error(self) -> None:
        err = GrammarError("block", 3)
        assert err.rule == "block"
        assert str(err) == "offset 3: no block alternative matched"
        assert isinstance(err, ParseError)

    @pytest.mark.parametrize("exc", [ParseError, GrammarError, StreamConsumedError, RenderError])
    def test_hierarchy(self, exc: type[Exception]) -> None:
        assert issubclass(exc, PlumaError)


# =========================================================================
# Grammar invariants
# =========================================================================


class TestGrammarGaps:
    def test_no_block_alternative(self, monkeypatch: pytest.MonkeyPatch, caplog) -> None:
        monkeypatch.setattr(blocks, "BLOCK_RULES", ())
        with caplog.at_level(logging.WARNING, logger="pluma"):
            with pytest.raises(GrammarError, match="no block alternative matched") as info:
                parse("text")
        assert info.value.offset == 0
        assert any("grammar gap" in record.getMessage() for record in caplog.records)

    def test_block_without_progress(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(blocks, "BLOCK_RULES", (lambda stream, settings: Empty(),))
        with pytest.raises(GrammarError) as info:
            parse("text")
        assert info.value.rule == "block"

    def test_no_inline_alternative(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(inline, "_FALLBACK_RULES", ())
        with pytest.raises(GrammarError, match="no inline alternative matched"):
            parse_phrase("abc")

    def test_gap_after_progress_reports_offset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(inline, "_FALLBACK_RULES", ())
        with pytest.raises(GrammarError) as info:
            parse_phrase("**x")
        assert info.value.offset == 2


# =========================================================================
# Resource limits and misuse
# =========================================================================


class TestLimits:
    def test_deep_blockquote_nesting(self) -> None:
        with pytest.raises(ParseError, match="too deep"):
            parse("> " * 5000 + "x")

    def test_moderate_nesting_is_fine(self) -> None:
        doc = parse("> " * 20 + "x")
        assert len(doc.children) == 1


class TestMisuse:
    def test_parser_is_single_use(self) -> None:
        parser = Parser("# once")
        parser.parse()
        with pytest.raises(StreamConsumedError):
            parser.parse()

    def test_chunk_iterator_consumed_once(self) -> None:
        parser = Parser(iter(["a", "b"]))
        assert parser.parse().children
        with pytest.raises(StreamConsumedError):
            parser.parse()

    def test_restore_into_released_input(self) -> None:
        feeder = ChunkFeeder.from_text("abcdef")
        mark = feeder.checkpoint()
        feeder.take(3)
        feeder.release()
        with pytest.raises(ParseError, match="released input"):
            feeder.restore(mark)
