"""Block document to Markdown renderer.

Converts a :class:`~mdblocks.models.Document` into Markdown text.  Blocks
are separated by a blank line; lines inside one block (list lines, code
lines) are separated by a single newline.

Usage::

    from mdblocks.config import MdBlocksConfig
    from mdblocks.converter.blocks_to_md import BlocksToMarkdownRenderer

    renderer = BlocksToMarkdownRenderer(MdBlocksConfig())
    md = renderer.render(document).markdown
"""

from __future__ import annotations

import re
from collections.abc import Callable as _Callable, Iterable

from mdblocks.config import MdBlocksConfig
from mdblocks.errors import ErrorCode
from mdblocks.models import (
    Block,
    Code,
    ConversionWarning,
    Diagram,
    Document,
    Header,
    ListBlock,
    ListItem,
    ListStyle,
    Paragraph,
    RenderResult,
    UnknownBlock,
)
from mdblocks.observability import get_logger

from .diagnostics import add_warning
from .inline_renderer import escape_block_start, render_rich_text

_log = get_logger("mdblocks.converter")

_BACKTICK_RUN_RE = re.compile(r"`+")
_TRAILING_HASHES_RE = re.compile(r"(#+)$")

# Two lists of the same style in a row would merge into one list when
# parsed, so consecutive lists alternate between these delimiters.
_BULLETS: dict[ListStyle, tuple[str, str]] = {
    ListStyle.UNORDERED: ("-", "*"),
    ListStyle.ORDERED: (".", ")"),
}


def fence_for(body: str) -> str:
    """Return a backtick fence longer than any backtick run in *body*."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(body)), default=0)
    return "`" * max(3, longest + 1)


class BlocksToMarkdownRenderer:
    """Render block documents to Markdown.

    The renderer holds configuration only; warnings are collected per
    :meth:`render` call and returned on the :class:`RenderResult`.

    Parameters
    ----------
    config:
        Converter configuration.  ``diagram_language`` tags the fence of
        every diagram block.
    """

    def __init__(self, config: MdBlocksConfig | None = None) -> None:
        self._config = config or MdBlocksConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, document: Document) -> RenderResult:
        """Render *document* to Markdown.

        Blocks of an unknown kind are skipped and reported in
        ``warnings``; they never abort rendering.
        """
        warnings: list[ConversionWarning] = []
        markdown = self.render_blocks(document.blocks, warnings)
        _log.debug(
            "document rendered",
            extra={"extra_fields": {
                "op": "to_markdown",
                "blocks": len(document.blocks),
                "warnings": len(warnings),
            }},
        )
        return RenderResult(markdown=markdown, warnings=warnings)

    def render_blocks(
        self,
        blocks: Iterable[Block],
        warnings: list[ConversionWarning] | None = None,
    ) -> str:
        """Render a sequence of blocks joined by blank lines."""
        parts: list[str] = []
        previous: Block | None = None
        alternate = False

        for block in blocks:
            if isinstance(block, ListBlock):
                if isinstance(previous, ListBlock) and previous.style == block.style:
                    alternate = not alternate
                else:
                    alternate = False
                text = self._render_list(block, alternate=alternate)
            else:
                renderer = _BLOCK_RENDERERS.get(type(block))
                if renderer is None:
                    block_type = block.type if isinstance(block, UnknownBlock) else type(block).__name__
                    add_warning(
                        warnings,
                        ErrorCode.UNKNOWN_BLOCK,
                        f"Unknown block type '{block_type}' was skipped.",
                        block_type=block_type,
                    )
                    continue
                text = renderer(self, block)
            previous = block
            if text:
                parts.append(text)

        return "\n\n".join(parts)

    def render_block(self, block: Block) -> str:
        """Render a single block, or ``""`` for an unknown kind."""
        return self.render_blocks([block])

    # ------------------------------------------------------------------
    # Block type renderers
    # ------------------------------------------------------------------

    def _render_header(self, block: Header) -> str:
        # A heading is a single line
        text = render_rich_text(block.text).replace("\n", " ")
        # A trailing run of "#" would be read as a closing sequence
        text = _TRAILING_HASHES_RE.sub(r"\\\1", text)
        return f"{'#' * block.level} {text}"

    def _render_paragraph(self, block: Paragraph) -> str:
        return escape_block_start(render_rich_text(block.text))

    def _render_code(self, block: Code) -> str:
        fence = fence_for(block.code)
        return f"{fence}\n{block.code}\n{fence}"

    def _render_diagram(self, block: Diagram) -> str:
        fence = fence_for(block.source)
        return f"{fence}{self._config.diagram_language}\n{block.source}\n{fence}"

    def _render_list(self, block: ListBlock, *, alternate: bool = False) -> str:
        delimiter = _BULLETS[block.style][1 if alternate else 0]
        lines: list[str] = []
        self._render_list_items(block.items, block.style, delimiter, "", lines)
        return "\n".join(lines)

    def _render_list_items(
        self,
        items: tuple[ListItem, ...],
        style: ListStyle,
        delimiter: str,
        indent: str,
        lines: list[str],
    ) -> None:
        """Append the lines for *items* and, recursively, their sub-items.

        Sub-items are indented to the content column of their parent,
        which is two spaces per level for bullet markers.
        """
        for number, item in enumerate(items, start=1):
            marker = f"{number}{delimiter} " if style == ListStyle.ORDERED else f"{delimiter} "
            content = escape_block_start(render_rich_text(item.content))
            first, *rest = content.split("\n")
            lines.append(f"{indent}{marker}{first}" if first else f"{indent}{marker.rstrip()}")

            child_indent = indent + " " * len(marker)
            for line in rest:
                lines.append(f"{child_indent}{line}" if line else "")

            if item.items:
                self._render_list_items(item.items, style, delimiter, child_indent, lines)


# ------------------------------------------------------------------
# Block renderer dispatch table
# ------------------------------------------------------------------

_BlockRenderer = _Callable[["BlocksToMarkdownRenderer", Block], str]

_BLOCK_RENDERERS: dict[type, _BlockRenderer] = {
    Header: BlocksToMarkdownRenderer._render_header,
    Paragraph: BlocksToMarkdownRenderer._render_paragraph,
    Code: BlocksToMarkdownRenderer._render_code,
    Diagram: BlocksToMarkdownRenderer._render_diagram,
    # ListBlock is handled in render_blocks, which tracks the previous block
}
