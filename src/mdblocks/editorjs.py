"""Editor output data <-> :class:`Document`.

The editor host exchanges documents as JSON-compatible dicts::

    {
        "time": 1760000000000,
        "blocks": [
            {"type": "header", "data": {"level": 1, "text": "Hello <b>world</b>"}},
            {"type": "list", "data": {"style": "unordered",
                                      "items": [{"content": "a", "items": []}]}},
            {"type": "mermaid", "data": {"mermaid": "flowchart\\n  A --> B"}},
        ],
        "version": "2.28.2",
    }

Rich text fields use the editor's tag form (see
:func:`~mdblocks.converter.rich_text.rich_text_from_html`).  Blocks whose
``type`` is not one of the five supported kinds are kept as
:class:`UnknownBlock` so the renderer can report them.
"""

from __future__ import annotations

from typing import Any

from mdblocks.converter.rich_text import rich_text_from_html, rich_text_to_html
from mdblocks.errors import MdBlocksDocumentError
from mdblocks.models import (
    Block,
    Code,
    Diagram,
    Document,
    Header,
    ListBlock,
    ListItem,
    ListStyle,
    Paragraph,
    RichText,
    UnknownBlock,
)

HEADER = "header"
PARAGRAPH = "paragraph"
LIST = "list"
CODE = "code"
DIAGRAM = "mermaid"

BLOCK_TYPES: frozenset[str] = frozenset({HEADER, PARAGRAPH, LIST, CODE, DIAGRAM})
"""Host block type names recognised by the converter."""


# ---------------------------------------------------------------------------
# Document -> output data
# ---------------------------------------------------------------------------

def document_to_output_data(document: Document) -> dict[str, Any]:
    """Serialise *document* to the editor's output-data dict."""
    return {
        "time": document.time,
        "blocks": [_block_to_dict(block) for block in document.blocks],
        "version": document.version,
    }


def _block_to_dict(block: Block) -> dict[str, Any]:
    if isinstance(block, Header):
        return {"type": HEADER, "data": {"level": block.level, "text": rich_text_to_html(block.text)}}
    if isinstance(block, Paragraph):
        return {"type": PARAGRAPH, "data": {"text": rich_text_to_html(block.text)}}
    if isinstance(block, ListBlock):
        return {
            "type": LIST,
            "data": {
                "style": block.style.value,
                "items": [_item_to_dict(item) for item in block.items],
            },
        }
    if isinstance(block, Code):
        return {"type": CODE, "data": {"code": block.code}}
    if isinstance(block, Diagram):
        return {"type": DIAGRAM, "data": {"mermaid": block.source}}
    return {"type": block.type, "data": dict(block.data)}


def _item_to_dict(item: ListItem) -> dict[str, Any]:
    return {
        "content": rich_text_to_html(item.content),
        "items": [_item_to_dict(child) for child in item.items],
    }


# ---------------------------------------------------------------------------
# Output data -> Document
# ---------------------------------------------------------------------------

def document_from_output_data(payload: Any) -> Document:
    """Build a :class:`Document` from the editor's output-data dict.

    Raises
    ------
    MdBlocksDocumentError
        If *payload* is not output data: not a mapping, ``blocks`` is not
        a list, a block has no string ``type``, or a supported block has
        malformed ``data``.
    """
    if not isinstance(payload, dict):
        raise MdBlocksDocumentError(
            f"Output data must be a dict, got {type(payload).__name__}",
        )
    raw_blocks = payload.get("blocks", [])
    if not isinstance(raw_blocks, list):
        raise MdBlocksDocumentError(
            "Output data 'blocks' must be a list",
            context={"field": "blocks"},
        )

    blocks = tuple(_block_from_dict(raw, index) for index, raw in enumerate(raw_blocks))

    kwargs: dict[str, Any] = {}
    if isinstance(payload.get("time"), int):
        kwargs["time"] = payload["time"]
    if isinstance(payload.get("version"), str):
        kwargs["version"] = payload["version"]
    return Document(blocks=blocks, **kwargs)


def _block_from_dict(raw: Any, index: int) -> Block:
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        raise MdBlocksDocumentError(
            "Each block must be a dict with a string 'type'",
            context={"index": index},
        )
    block_type = raw["type"]
    data = raw.get("data") or {}
    if not isinstance(data, dict):
        raise MdBlocksDocumentError(
            f"Block data must be a dict for type '{block_type}'",
            context={"index": index, "block_type": block_type, "field": "data"},
        )

    if block_type not in BLOCK_TYPES:
        return UnknownBlock(type=block_type, data=dict(data))

    try:
        if block_type == HEADER:
            return Header(level=int(data.get("level", 1)), text=_rich(data, "text"))
        if block_type == PARAGRAPH:
            return Paragraph(text=_rich(data, "text"))
        if block_type == LIST:
            return ListBlock(
                style=ListStyle(data.get("style", ListStyle.UNORDERED.value)),
                items=tuple(_item_from_dict(item) for item in data.get("items", [])),
            )
        if block_type == CODE:
            return Code(code=_string(data, "code"))
        return Diagram(source=_string(data, "mermaid"))
    except (TypeError, ValueError) as exc:
        raise MdBlocksDocumentError(
            f"Malformed data for block type '{block_type}': {exc}",
            context={"index": index, "block_type": block_type},
            cause=exc,
        ) from exc


def _item_from_dict(raw: Any) -> ListItem:
    # Older list tools store items as bare strings
    if isinstance(raw, str):
        return ListItem(content=rich_text_from_html(raw))
    if not isinstance(raw, dict):
        raise TypeError(f"list item must be a dict or string, got {type(raw).__name__}")
    return ListItem(
        content=_rich(raw, "content"),
        items=tuple(_item_from_dict(child) for child in raw.get("items", [])),
    )


def _string(data: dict, key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _rich(data: dict, key: str) -> RichText:
    return rich_text_from_html(_string(data, key))
