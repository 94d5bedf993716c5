"""Tests for editorjs.py (host output data <-> Document)."""

import pytest

from mdblocks.editorjs import (
    BLOCK_TYPES,
    document_from_output_data,
    document_to_output_data,
)
from mdblocks.errors import MdBlocksDocumentError
from mdblocks.models import (
    Bold,
    Code,
    Diagram,
    Document,
    Header,
    Link,
    ListBlock,
    ListItem,
    ListStyle,
    Paragraph,
    Text,
    UnknownBlock,
    rich,
)


def _payload(*blocks, **extra):
    return {"time": 1, "blocks": list(blocks), "version": "2.28.2", **extra}


class TestToOutputData:

    def test_metadata(self):
        data = document_to_output_data(Document(blocks=(), time=42, version="1.2.3"))
        assert data == {"time": 42, "blocks": [], "version": "1.2.3"}

    def test_header(self):
        data = document_to_output_data(Document(blocks=(Header(2, rich("a ", Bold((Text("b"),)))),)))
        assert data["blocks"] == [{"type": "header", "data": {"level": 2, "text": "a <b>b</b>"}}]

    def test_paragraph_with_link(self):
        block = Paragraph(rich(Link("https://e.com", (Text("t"),))))
        data = document_to_output_data(Document(blocks=(block,)))
        assert data["blocks"][0] == {
            "type": "paragraph",
            "data": {"text": '<a href="https://e.com">t</a>'},
        }

    def test_nested_list(self):
        block = ListBlock(
            ListStyle.ORDERED,
            (ListItem(rich("a"), (ListItem(rich("b")),)),),
        )
        data = document_to_output_data(Document(blocks=(block,)))
        assert data["blocks"][0] == {
            "type": "list",
            "data": {
                "style": "ordered",
                "items": [{"content": "a", "items": [{"content": "b", "items": []}]}],
            },
        }

    def test_code_and_diagram(self):
        data = document_to_output_data(Document(blocks=(Code("x <y>"), Diagram("graph"))))
        assert data["blocks"] == [
            {"type": "code", "data": {"code": "x <y>"}},
            {"type": "mermaid", "data": {"mermaid": "graph"}},
        ]

    def test_unknown_block_passes_through(self):
        data = document_to_output_data(Document(blocks=(UnknownBlock("quote", {"text": "q"}),)))
        assert data["blocks"] == [{"type": "quote", "data": {"text": "q"}}]


class TestFromOutputData:

    def test_all_kinds(self):
        document = document_from_output_data(_payload(
            {"type": "header", "data": {"level": 1, "text": "Hello <b>world</b>"}},
            {"type": "paragraph", "data": {"text": "x<br>y"}},
            {"type": "list", "data": {"style": "unordered", "items": [
                {"content": "a", "items": [{"content": "b", "items": []}]},
            ]}},
            {"type": "code", "data": {"code": "print(1)"}},
            {"type": "mermaid", "data": {"mermaid": "flowchart\n  A --> B"}},
        ))
        assert document.blocks == (
            Header(1, rich("Hello ", Bold((Text("world"),)))),
            Paragraph(rich("x\ny")),
            ListBlock(ListStyle.UNORDERED, (ListItem(rich("a"), (ListItem(rich("b")),)),)),
            Code("print(1)"),
            Diagram("flowchart\n  A --> B"),
        )

    def test_metadata_kept(self):
        document = document_from_output_data({"time": 99, "blocks": [], "version": "3.0"})
        assert document.time == 99
        assert document.version == "3.0"

    def test_missing_blocks_is_empty(self):
        assert document_from_output_data({}).blocks == ()

    def test_unknown_type_kept(self):
        document = document_from_output_data(_payload({"type": "table", "data": {"content": []}}))
        (block,) = document.blocks
        assert block == UnknownBlock("table")
        assert block.data == {"content": []}

    @pytest.mark.parametrize("block_type", sorted(BLOCK_TYPES))
    def test_registered_types_are_known(self, block_type):
        (block,) = document_from_output_data(_payload({"type": block_type})).blocks
        assert not isinstance(block, UnknownBlock)

    def test_emitted_types_are_registered(self):
        document = Document(blocks=(
            Header(1, rich("h")),
            Paragraph(rich("p")),
            ListBlock(ListStyle.UNORDERED, (ListItem(rich("i")),)),
            Code("c"),
            Diagram("d"),
        ))
        emitted = {raw["type"] for raw in document_to_output_data(document)["blocks"]}
        assert emitted == BLOCK_TYPES

    def test_string_list_items(self):
        document = document_from_output_data(_payload(
            {"type": "list", "data": {"style": "ordered", "items": ["one", "<i>two</i>"]}},
        ))
        (block,) = document.blocks
        assert block.style == ListStyle.ORDERED
        assert len(block.items) == 2
        assert block.items[0] == ListItem(rich("one"))

    def test_missing_data_uses_defaults(self):
        document = document_from_output_data(_payload({"type": "paragraph"}))
        assert document.blocks == (Paragraph(()),)

    def test_reverse_direction(self):
        document = Document(blocks=(
            Header(3, rich("T")),
            ListBlock(ListStyle.ORDERED, (ListItem(rich("a & b")),)),
            Diagram("graph"),
        ))
        assert document_from_output_data(document_to_output_data(document)) == document


class TestMalformedOutputData:

    def test_not_a_dict(self):
        with pytest.raises(MdBlocksDocumentError, match="must be a dict"):
            document_from_output_data([])

    def test_blocks_not_a_list(self):
        with pytest.raises(MdBlocksDocumentError) as exc_info:
            document_from_output_data({"blocks": "nope"})
        assert exc_info.value.context == {"field": "blocks"}

    def test_block_without_type(self):
        with pytest.raises(MdBlocksDocumentError) as exc_info:
            document_from_output_data(_payload({"type": "paragraph", "data": {}}, {"data": {}}))
        assert exc_info.value.context == {"index": 1}

    def test_data_not_a_dict(self):
        with pytest.raises(MdBlocksDocumentError) as exc_info:
            document_from_output_data(_payload({"type": "code", "data": "x"}))
        assert exc_info.value.context["field"] == "data"

    def test_header_level_out_of_range(self):
        with pytest.raises(MdBlocksDocumentError) as exc_info:
            document_from_output_data(_payload({"type": "header", "data": {"level": 9, "text": "x"}}))
        assert exc_info.value.context == {"index": 0, "block_type": "header"}
        assert isinstance(exc_info.value.cause, ValueError)

    def test_bad_list_style(self):
        with pytest.raises(MdBlocksDocumentError):
            document_from_output_data(_payload({"type": "list", "data": {"style": "checklist"}}))

    def test_non_string_text(self):
        with pytest.raises(MdBlocksDocumentError):
            document_from_output_data(_payload({"type": "paragraph", "data": {"text": 5}}))

    def test_bad_list_item(self):
        with pytest.raises(MdBlocksDocumentError):
            document_from_output_data(_payload({"type": "list", "data": {"items": [3]}}))
