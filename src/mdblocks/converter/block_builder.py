"""Convert normalized AST tokens to document blocks.

Top-level token handling:

- heading -> Header (level from ``attrs.level``)
- paragraph -> Paragraph
- block_code -> Diagram when the info string equals the diagram marker,
  otherwise Code
- list -> ListBlock with nested ListItems
- anything else -> skipped with an ``UNSUPPORTED_BLOCK`` warning
"""

from __future__ import annotations

import re
from collections.abc import Callable as _Callable

from mdblocks.config import MdBlocksConfig
from mdblocks.errors import ErrorCode
from mdblocks.models import (
    Block,
    Code,
    ConversionWarning,
    Diagram,
    Header,
    ListBlock,
    ListItem,
    Link,
    ListStyle,
    Paragraph,
    RichText,
    Text,
    normalize_rich_text,
    plain_text,
)

from .diagnostics import add_warning
from .rich_text import build_rich_text

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_blocks(
    tokens: list[dict],
    config: MdBlocksConfig,
) -> tuple[list[Block], list[ConversionWarning]]:
    """Convert normalized AST tokens to blocks.

    Parameters
    ----------
    tokens:
        List of canonical AST tokens from :class:`ASTNormalizer`.
    config:
        Converter configuration.

    Returns
    -------
    tuple[list[Block], list[ConversionWarning]]
        (blocks, warnings)
    """
    ctx = _BuildContext(config)
    for token in tokens:
        _process_token(token, ctx)
    return ctx.blocks, ctx.warnings


class _BuildContext:
    """Mutable accumulator for the block building pass."""

    __slots__ = ("blocks", "config", "warnings")

    def __init__(self, config: MdBlocksConfig) -> None:
        self.config = config
        self.blocks: list[Block] = []
        self.warnings: list[ConversionWarning] = []

    def add_warning(self, code: str, message: str, **context: object) -> None:
        add_warning(self.warnings, code, message, **context)


# ---------------------------------------------------------------------------
# Token dispatch
# ---------------------------------------------------------------------------

def _process_token(token: dict, ctx: _BuildContext) -> None:
    token_type = token.get("type", "")
    handler = _BLOCK_HANDLERS.get(token_type)
    if handler is not None:
        block = handler(token, ctx)
        if block is not None:
            ctx.blocks.append(block)
        return
    ctx.add_warning(
        ErrorCode.UNSUPPORTED_BLOCK,
        f"Unsupported block token '{token_type}' was skipped.",
        token_type=token_type,
    )


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

def _build_heading(token: dict, ctx: _BuildContext) -> Block:
    level = token.get("attrs", {}).get("level", 1)
    text = _tidy(build_rich_text(token.get("children", []), ctx.warnings))
    # Setext headings may span lines; a header holds one line
    return Header(level=level, text=normalize_rich_text(_map_text(text, lambda s: s.replace("\n", " "))))


def _build_paragraph(token: dict, ctx: _BuildContext) -> Block | None:
    text = _tidy(build_rich_text(token.get("children", []), ctx.warnings))
    # Nothing left once unsupported inline content is dropped
    if not text:
        return None
    return Paragraph(text=text)


# ---------------------------------------------------------------------------
# Whitespace tidying
# ---------------------------------------------------------------------------

_LINE_BREAK_RE = re.compile(r"[ \t]*(?:\n[ \t]*)+")


def _tidy(spans: RichText) -> RichText:
    """Drop whitespace that Markdown cannot carry.

    Dropping an unsupported inline token can leave blanks at the edges of
    the content, around line breaks, or as empty lines.  Markdown trims
    all of these when read, so they are trimmed here too.
    """
    spans = _hoist_edges(spans)
    spans = normalize_rich_text(_map_text(spans, lambda s: _LINE_BREAK_RE.sub("\n", s)))
    spans = _strip_edge(_strip_edge(spans, leading=True), leading=False)
    return normalize_rich_text(spans)


def _hoist_edges(spans: RichText) -> RichText:
    """Move whitespace at the edges of bold and italic runs outside them."""
    out: list = []
    for span in spans:
        if isinstance(span, Text):
            out.append(span)
            continue
        children = _hoist_edges(span.children)
        if isinstance(span, Link):
            out.append(Link(span.url, children))
            continue
        stripped = _strip_edge(_strip_edge(children, leading=True), leading=False)
        text = plain_text(children)
        if not stripped:
            out.append(Text(text))
            continue
        head = plain_text(_strip_edge(children, leading=True))
        tail = plain_text(_strip_edge(children, leading=False))
        out.append(Text(text[:len(text) - len(head)]))
        out.append(type(span)(stripped))
        out.append(Text(text[len(tail):]))
    return tuple(out)


def _map_text(spans: RichText, fn: _Callable[[str], str]) -> RichText:
    out: list = []
    for span in spans:
        if isinstance(span, Text):
            out.append(Text(fn(span.text)))
        elif isinstance(span, Link):
            out.append(Link(span.url, _map_text(span.children, fn)))
        else:
            out.append(type(span)(_map_text(span.children, fn)))
    return tuple(out)


def _strip_edge(spans: RichText, *, leading: bool) -> RichText:
    out = list(spans)
    index = 0 if leading else -1
    while out:
        span = out[index]
        if isinstance(span, Text):
            text = span.text.lstrip() if leading else span.text.rstrip()
            if text:
                out[index] = Text(text)
                break
        elif isinstance(span, Link):
            # Label whitespace sits inside the brackets and survives parsing
            break
        else:
            children = _strip_edge(span.children, leading=leading)
            if children:
                out[index] = type(span)(children)
                break
        out.pop(index)
    return tuple(out)


def _build_code_block(token: dict, ctx: _BuildContext) -> Block:
    raw = token.get("raw", "")
    info = token.get("attrs", {}).get("info") or ""
    # Only the first word of the info string is the language tag
    language = info.split()[0] if info.strip() else ""
    if language == ctx.config.diagram_language:
        return Diagram(source=raw)
    return Code(code=raw)


def _build_list(token: dict, ctx: _BuildContext) -> Block:
    """Build a list block.

    The ordered flag of the outermost list decides the style for every
    level; nested lists contribute only their items.
    """
    ordered = token.get("attrs", {}).get("ordered", False)
    style = ListStyle.ORDERED if ordered else ListStyle.UNORDERED
    items = _build_list_items(token, ctx)
    return ListBlock(style=style, items=items)


def _build_list_items(token: dict, ctx: _BuildContext) -> tuple[ListItem, ...]:
    return tuple(
        _build_list_item(child, ctx)
        for child in token.get("children", [])
        if child.get("type") == "list_item"
    )


def _build_list_item(token: dict, ctx: _BuildContext) -> ListItem:
    """Build one list item.

    Non-list children are decoded and joined with line breaks into the
    item's content.  Each nested list's items become this item's
    sub-items, one level deeper.
    """
    lines: list[RichText] = []
    nested: list[ListItem] = []

    for child in token.get("children", []):
        child_type = child.get("type", "")
        if child_type == "list":
            nested.extend(_build_list_items(child, ctx))
        elif child_type in _INLINE_CONTAINERS:
            lines.append(build_rich_text(child.get("children", []), ctx.warnings))
        else:
            ctx.add_warning(
                ErrorCode.UNSUPPORTED_BLOCK,
                f"Block token '{child_type}' inside a list item was skipped.",
                token_type=child_type,
            )

    content: list = []
    for i, line in enumerate(lines):
        if i:
            content.append(Text("\n"))
        content.extend(line)

    return ListItem(content=_tidy(tuple(content)), items=tuple(nested))


# ---------------------------------------------------------------------------
# Block handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = _Callable[[dict, _BuildContext], Block | None]

# Block tokens whose children are inline content
_INLINE_CONTAINERS: frozenset[str] = frozenset({"heading", "paragraph"})

_BLOCK_HANDLERS: dict[str, _BlockHandler] = {
    "heading": _build_heading,
    "paragraph": _build_paragraph,
    "block_code": _build_code_block,
    "list": _build_list,
}
