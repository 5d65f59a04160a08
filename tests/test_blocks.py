"""Tests for the block grammar and document assembly."""

import pytest

from pluma import MarkdownSettings, parse, parse_chunks
from pluma.config import DEFAULT_SETTINGS
from pluma.nodes import (
    BlockQuote,
    BulletList,
    Document,
    Empty,
    Heading,
    HtmlBlock,
    Image,
    IndentedCode,
    Link,
    LiteralRun,
    NumberList,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
)
from pluma.parsing.blocks import parse_block
from pluma.parsing.result import NO_MATCH
from pluma.stream import ChunkFeeder


def _para(*lines: str) -> Paragraph:
    return Paragraph(lines=tuple((Text(line),) for line in lines))


class TestHeadings:
    """ATX and setext headings."""

    @pytest.mark.parametrize(
        ("hashes", "level"),
        [(1, 1), (2, 2), (3, 3), (4, 4), (5, 5), (6, 6), (7, 6), (12, 6)],
    )
    def test_atx_level_mapping(self, hashes: int, level: int) -> None:
        doc = parse("#" * hashes + " Title")
        assert doc.children == (Heading(level=level, children=(Text("Title"),)),)

    def test_closing_hashes_stripped(self) -> None:
        (heading,) = parse("## Title ##  ").children
        assert heading == Heading(level=2, children=(Text("Title"),))

    def test_space_after_hashes_optional(self) -> None:
        (heading,) = parse("#Title").children
        assert heading == Heading(level=1, children=(Text("Title"),))

    def test_heading_text_is_inline_parsed(self) -> None:
        (heading,) = parse("# A **b**").children
        assert isinstance(heading, Heading)
        assert heading.children == (Text("A "), Strong(Text("b")))

    def test_heading_consumes_its_line(self) -> None:
        doc = parse("# H\ntext")
        assert doc.children == (
            Heading(level=1, children=(Text("H"),)),
            _para("text"),
        )

    def test_setext_level_one(self) -> None:
        (heading,) = parse("Title\n=====").children
        assert heading == Heading(level=1, children=(Text("Title"),), style="setext")

    def test_setext_level_two(self) -> None:
        (heading,) = parse("Title\n---\n").children
        assert heading == Heading(level=2, children=(Text("Title"),), style="setext")

    def test_setext_two_characters_enough(self) -> None:
        (heading,) = parse("Title\n==").children
        assert isinstance(heading, Heading)
        assert heading.level == 1

    def test_setext_single_character_is_paragraph(self) -> None:
        assert parse("Title\n=").children == (_para("Title", "="),)

    def test_setext_with_long_dash_underline(self) -> None:
        (heading,) = parse("Title\n-----").children
        assert isinstance(heading, Heading)
        assert heading.level == 2

    def test_setext_underline_must_be_alone(self) -> None:
        assert parse("Title\n=== x").children == (_para("Title", "=== x"),)


class TestThematicBreaks:
    """Horizontal rules."""

    @pytest.mark.parametrize("source", ["* * *", "***", "*****", "- - -", "-----", "----------"])
    def test_rule_patterns(self, source: str) -> None:
        assert parse(source).children == (ThematicBreak(),)
        assert parse(source + "\n").children == (ThematicBreak(),)

    def test_four_dashes_not_a_rule(self) -> None:
        assert parse("----").children == (_para("----"),)

    def test_rule_must_end_the_line(self) -> None:
        doc = parse("----- x")
        assert not any(isinstance(block, ThematicBreak) for block in doc.children)

    def test_rule_then_text(self) -> None:
        assert parse("***\nafter").children == (ThematicBreak(), _para("after"))

    def test_spaced_dashes_beat_bullet_list(self) -> None:
        assert parse("- - -").children == (ThematicBreak(),)


class TestIndentedCode:
    """Four-space indented code blocks."""

    def test_lines_stripped_of_indent(self) -> None:
        (code,) = parse("    first\n    second").children
        assert code == IndentedCode(lines=("first", "second"))
        assert code.code == "first\nsecond"

    def test_extra_indent_preserved(self) -> None:
        (code,) = parse("    a\n      b").children
        assert code == IndentedCode(lines=("a", "  b"))

    def test_content_is_verbatim(self) -> None:
        (code,) = parse("    **not bold** <tag>").children
        assert code == IndentedCode(lines=("**not bold** <tag>",))

    def test_ends_at_unindented_line(self) -> None:
        assert parse("    x\nnot code").children == (
            IndentedCode(lines=("x",)),
            _para("not code"),
        )

    def test_indentation_alone_is_blank(self) -> None:
        assert parse("    \n").children == (Empty(),)


class TestBlockQuotes:
    """Recursive blockquotes."""

    def test_quote_is_parsed_as_document(self) -> None:
        doc = parse("> # Title\n> text\n")
        assert doc.children == (
            BlockQuote(
                document=Document(
                    children=(
                        Heading(level=1, children=(Text("Title"),)),
                        _para("text"),
                    )
                )
            ),
        )

    def test_nested_quote(self) -> None:
        (quote,) = parse("> > deep").children
        assert quote == BlockQuote(
            document=Document(children=(BlockQuote(document=Document(children=(_para("deep"),))),))
        )

    def test_bare_marker_line_separates_paragraphs(self) -> None:
        (quote,) = parse("> a\n>\n> b").children
        assert isinstance(quote, BlockQuote)
        assert quote.document.children == (_para("a"), _para("b"))

    def test_any_block_inside_quote(self) -> None:
        (quote,) = parse("> * one\n> * two\n>\n>     code").children
        assert isinstance(quote, BlockQuote)
        assert quote.document.children == (
            BulletList(items=((Text("one"),), (Text("two"),))),
            Empty(),
            IndentedCode(lines=("code",)),
        )

    def test_marker_without_space_is_not_a_quote(self) -> None:
        assert parse(">text").children == (_para(">text"),)

    def test_quote_inherits_sanitization(self) -> None:
        (quote,) = parse("> <script>alert(1)</script>").children
        assert isinstance(quote, BlockQuote)
        (html,) = quote.document.children
        assert html == HtmlBlock(html="", sanitized=True)

    def test_quote_inherits_disabled_sanitization(self) -> None:
        settings = MarkdownSettings(xss_protect_raw_html=False)
        (quote,) = parse("> > <script>x</script>", settings).children
        assert isinstance(quote, BlockQuote)
        (inner,) = quote.document.children
        assert isinstance(inner, BlockQuote)
        assert inner.document.children == (HtmlBlock(html="<script>x</script>", sanitized=False),)


class TestImages:
    """Image-only lines."""

    def test_image_line(self) -> None:
        assert parse("![alt text](pic.png)").children == (Image(alt="alt text", url="pic.png"),)

    def test_escaped_href(self) -> None:
        (image,) = parse("![a](my\\ pic\\).png)\n").children
        assert image == Image(alt="a", url="my pic).png")

    def test_trailing_text_falls_back_to_paragraph(self) -> None:
        (para,) = parse("![a](b) caption").children
        assert para == Paragraph(
            lines=((Text("!"), Link(text=Text("a"), url="b"), Text(" caption")),)
        )


class TestLists:
    """Bullet and numbered lists."""

    def test_bullet_items(self) -> None:
        assert parse("* a\n* b\n").children == (
            BulletList(items=((Text("a"),), (Text("b"),))),
        )

    def test_mixed_bullet_markers(self) -> None:
        (lst,) = parse("- x\n+ y\n* z").children
        assert isinstance(lst, BulletList)
        assert len(lst.items) == 3

    def test_items_are_inline_parsed(self) -> None:
        (lst,) = parse("* **bold** item").children
        assert lst == BulletList(items=((Strong(Text("bold")), Text(" item")),))

    def test_blank_line_splits_lists(self) -> None:
        assert parse("* a\n\n* b").children == (
            BulletList(items=((Text("a"),),)),
            Empty(),
            BulletList(items=((Text("b"),),)),
        )

    def test_numbered_items(self) -> None:
        (lst,) = parse("1. one\n2) two\n10. ten").children
        assert lst == NumberList(items=((Text("one"),), (Text("two"),), (Text("ten"),)))

    def test_number_needs_space(self) -> None:
        assert parse("1.no").children == (_para("1.no"),)

    def test_item_content_is_not_block_parsed(self) -> None:
        (lst,) = parse("* # not a heading").children
        assert lst == BulletList(items=((Text("# not a heading"),),))


class TestRawHtml:
    """Raw HTML blocks."""

    def test_sanitized_by_default(self) -> None:
        (block,) = parse("<script>alert(1)</script>").children
        assert isinstance(block, HtmlBlock)
        assert block.sanitized
        assert "script" not in block.html
        assert "alert" not in block.html

    def test_unsanitized_when_disabled(self) -> None:
        settings = MarkdownSettings(xss_protect_raw_html=False)
        (block,) = parse("<script>alert(1)</script>", settings).children
        assert block == HtmlBlock(html="<script>alert(1)</script>", sanitized=False)

    def test_runs_until_blank_line(self) -> None:
        settings = MarkdownSettings(xss_protect_raw_html=False)
        doc = parse("<div>\nline\n\nafter", settings)
        assert doc.children == (
            HtmlBlock(html="<div>\nline", sanitized=False),
            _para("after"),
        )

    def test_sanitizer_balances_tags(self) -> None:
        (block,) = parse("<div><b>open").children
        assert block == HtmlBlock(html="<div><b>open</b></div>")


class TestParagraphs:
    """Paragraph fallback and blank lines."""

    def test_lines_parsed_separately(self) -> None:
        assert parse("a\nb\n\nc").children == (_para("a", "b"), _para("c"))

    def test_paragraph_absorbs_following_lines(self) -> None:
        (para,) = parse("para\n* item").children
        assert isinstance(para, Paragraph)
        assert para.lines[1] == (LiteralRun("*", 1), Text(" item"))

    def test_long_underscore_run_in_paragraph(self) -> None:
        assert parse("x " + "_" * 200).children == (
            Paragraph(lines=((Text("x "), LiteralRun("_", 200)),)),
        )

    @pytest.mark.parametrize("source", ["\n", "\n\n\n", "   \n\t\n", " "])
    def test_blank_lines_yield_only_empty(self, source: str) -> None:
        doc = parse(source)
        assert doc.children
        assert all(block == Empty() for block in doc.children)

    def test_empty_input(self) -> None:
        assert parse("").children == ()


class TestParseBlock:
    """Direct use of the block dispatcher."""

    def test_blank_line_gives_empty_and_consumes_it(self) -> None:
        stream = ChunkFeeder.from_text("\nrest")
        assert parse_block(stream, DEFAULT_SETTINGS) == Empty()
        assert stream.peek(4) == "rest"

    def test_failed_alternatives_consume_nothing(self) -> None:
        # Setext, rule and list alternatives all look at this input first
        stream = ChunkFeeder.from_text("- item\nnext")
        block = parse_block(stream, DEFAULT_SETTINGS)
        assert block is not NO_MATCH
        assert block == BulletList(items=((Text("item"),),))
        assert stream.take_line() == "next"


SAMPLE = """\
# Pluma

Some *emphasis*, **strong** and `code`.
A [link](http://example.com "Example") too.

> quoted **text**
> > nested

* one
* two

1. first
2. second

    code block
    more code

![logo](logo.png)

Title
=====

-----
<div>raw</div>
"""


class TestChunkedInput:
    """Chunk boundaries never change the document."""

    @pytest.mark.parametrize("size", [1, 2, 3, 7, 64])
    def test_chunked_equals_whole(self, size: int) -> None:
        chunks = [SAMPLE[i : i + size] for i in range(0, len(SAMPLE), size)]
        assert parse_chunks(chunks) == parse(SAMPLE)

    def test_crlf_split_across_chunks(self) -> None:
        crlf = SAMPLE.replace("\n", "\r\n")
        chunks = [crlf[i : i + 5] for i in range(0, len(crlf), 5)]
        assert parse_chunks(chunks) == parse(SAMPLE)

    def test_sample_structure(self) -> None:
        kinds = [type(block).__name__ for block in parse(SAMPLE).children]
        assert kinds == [
            "Heading",
            "Empty",
            "Paragraph",
            "BlockQuote",
            "Empty",
            "BulletList",
            "Empty",
            "NumberList",
            "Empty",
            "IndentedCode",
            "Empty",
            "Image",
            "Empty",
            "Heading",
            "Empty",
            "ThematicBreak",
            "HtmlBlock",
        ]
