"""Tests for BlocksToMarkdownRenderer."""

import pytest

from mdblocks.config import MdBlocksConfig
from mdblocks.converter.blocks_to_md import BlocksToMarkdownRenderer, fence_for
from mdblocks.models import (
    Bold,
    Code,
    Diagram,
    Document,
    Header,
    Italic,
    Link,
    ListBlock,
    ListItem,
    ListStyle,
    Paragraph,
    Text,
    UnknownBlock,
    rich,
)


def _render(*blocks, **config):
    renderer = BlocksToMarkdownRenderer(MdBlocksConfig(**config))
    return renderer.render(Document(blocks=tuple(blocks))).markdown


def _item(text, *children):
    return ListItem(content=rich(text), items=tuple(children))


class TestHeaders:

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_levels(self, level):
        assert _render(Header(level, rich("T"))) == "#" * level + " T"

    def test_inline_formatting(self):
        assert _render(Header(1, rich("a ", Bold((Text("b"),))))) == "# a **b**"

    def test_trailing_hash_escaped(self):
        assert _render(Header(1, rich("C#"))) == "# C\\#"

    def test_only_hashes(self):
        assert _render(Header(2, rich("##"))) == "## \\##"

    def test_newlines_flattened(self):
        assert _render(Header(2, rich("a\nb"))) == "## a b"


class TestParagraphs:

    def test_plain(self):
        assert _render(Paragraph(rich("Hello"))) == "Hello"

    def test_asterisk_escaped(self):
        assert _render(Paragraph(rich("a * b"))) == "a \\* b"

    def test_leading_hash_escaped(self):
        assert _render(Paragraph(rich("# not a heading"))) == "\\# not a heading"

    def test_leading_dash_escaped(self):
        assert _render(Paragraph(rich("- not a list"))) == "\\- not a list"

    def test_leading_number_escaped(self):
        assert _render(Paragraph(rich("1. not a list"))) == "1\\. not a list"

    def test_escaping_applies_per_line(self):
        assert _render(Paragraph(rich("a\n> b"))) == "a\n\\> b"

    def test_empty_paragraph_skipped(self):
        assert _render(Paragraph(rich("a")), Paragraph(()), Paragraph(rich("b"))) == "a\n\nb"

    def test_blocks_separated_by_blank_line(self):
        assert _render(Header(1, rich("T")), Paragraph(rich("x"))) == "# T\n\nx"


class TestCode:

    def test_plain_fence(self):
        assert _render(Code("print(1)")) == "```\nprint(1)\n```"

    def test_fence_longer_than_body_backticks(self):
        assert _render(Code("a ``` b")) == "````\na ``` b\n````"

    def test_code_is_not_escaped(self):
        assert _render(Code("*x* # y")) == "```\n*x* # y\n```"

    def test_fence_for(self):
        assert fence_for("") == "```"
        assert fence_for("````") == "`````"


class TestDiagrams:

    def test_mermaid_fence(self):
        assert _render(Diagram("flowchart\n  A --> B")) == "```mermaid\nflowchart\n  A --> B\n```"

    def test_custom_language(self):
        assert _render(Diagram("graph"), diagram_language="dot") == "```dot\ngraph\n```"


class TestLists:

    def test_nested_unordered(self):
        block = ListBlock(ListStyle.UNORDERED, (_item("a", _item("b")), _item("c")))
        assert _render(block) == "- a\n  - b\n- c"

    def test_nested_ordered_indents_to_marker_width(self):
        block = ListBlock(ListStyle.ORDERED, (_item("a", _item("b")), _item("c")))
        assert _render(block) == "1. a\n   1. b\n2. c"

    def test_numbering_restarts_per_level(self):
        block = ListBlock(ListStyle.ORDERED, (_item("a", _item("x"), _item("y")),))
        assert _render(block) == "1. a\n   1. x\n   2. y"

    def test_multiline_item_continuation(self):
        block = ListBlock(ListStyle.UNORDERED, (_item("a\nb"),))
        assert _render(block) == "- a\n  b"

    def test_empty_item(self):
        block = ListBlock(ListStyle.UNORDERED, (ListItem(()), _item("x")))
        assert _render(block) == "-\n- x"

    def test_item_text_escaped(self):
        block = ListBlock(ListStyle.UNORDERED, (_item("# h"),))
        assert _render(block) == "- \\# h"

    def test_consecutive_lists_alternate_bullets(self):
        first = ListBlock(ListStyle.UNORDERED, (_item("a"),))
        second = ListBlock(ListStyle.UNORDERED, (_item("b"),))
        assert _render(first, second) == "- a\n\n* b"

    def test_three_consecutive_lists_keep_alternating(self):
        lists = [ListBlock(ListStyle.UNORDERED, (_item(name),)) for name in "abc"]
        assert _render(*lists) == "- a\n\n* b\n\n- c"

    def test_consecutive_ordered_lists_alternate_delimiters(self):
        first = ListBlock(ListStyle.ORDERED, (_item("a"),))
        second = ListBlock(ListStyle.ORDERED, (_item("b"),))
        assert _render(first, second) == "1. a\n\n1) b"

    def test_different_styles_do_not_alternate(self):
        first = ListBlock(ListStyle.UNORDERED, (_item("a"),))
        second = ListBlock(ListStyle.ORDERED, (_item("b"),))
        assert _render(first, second) == "- a\n\n1. b"


class TestInline:

    def test_bold(self):
        assert _render(Paragraph(rich(Bold((Text("b"),))))) == "**b**"

    def test_italic(self):
        assert _render(Paragraph(rich(Italic((Text("i"),))))) == "*i*"

    def test_bold_wrapping_italic(self):
        assert _render(Paragraph(rich(Bold((Italic((Text("x"),)),))))) == "**_x_**"

    def test_link(self):
        assert _render(Paragraph(rich(Link("https://e.com", (Text("t"),))))) == "[t](https://e.com)"

    def test_link_url_with_space(self):
        md = _render(Paragraph(rich(Link("a b.html", (Text("t"),)))))
        assert md == "[t](<a b.html>)"

    def test_edge_whitespace_outside_delimiters(self):
        assert _render(Paragraph(rich("a", Bold((Text(" x "),)), "b"))) == "a **x** b"


class TestUnknownBlocks:

    def test_unknown_block_skipped_with_warning(self):
        renderer = BlocksToMarkdownRenderer()
        document = Document(blocks=(
            Paragraph(rich("x")),
            UnknownBlock("table", {"rows": []}),
            Paragraph(rich("y")),
        ))
        result = renderer.render(document)
        assert result.markdown == "x\n\ny"
        assert len(result.warnings) == 1
        assert result.warnings[0].code == "UNKNOWN_BLOCK"
        assert result.warnings[0].context == {"block_type": "table"}

    def test_unknown_block_does_not_break_list_alternation(self):
        first = ListBlock(ListStyle.UNORDERED, (_item("a"),))
        second = ListBlock(ListStyle.UNORDERED, (_item("b"),))
        md = _render(first, UnknownBlock("quote"), second)
        assert md == "- a\n\n* b"

    def test_render_block(self, renderer):
        assert renderer.render_block(Header(3, rich("x"))) == "### x"
        assert renderer.render_block(UnknownBlock("quote")) == ""

    def test_empty_document(self, renderer):
        result = renderer.render(Document())
        assert result.markdown == ""
        assert result.warnings == []
