"""Markdown ↔ block document conversion pipeline.

Public API:

- :class:`MarkdownToBlocksConverter`: Markdown → block document.
- :class:`BlocksToMarkdownRenderer`: block document → Markdown.
- :class:`ASTNormalizer`: parse and normalize Markdown to canonical AST.
- :func:`build_blocks`: convert normalized AST to blocks.
- :func:`build_rich_text`: convert inline AST tokens to rich text.
- :func:`render_rich_text`: convert rich text to inline Markdown.
"""

from mdblocks.converter.ast_normalizer import ASTNormalizer
from mdblocks.converter.block_builder import build_blocks
from mdblocks.converter.blocks_to_md import BlocksToMarkdownRenderer
from mdblocks.converter.inline_renderer import markdown_escape, render_rich_text
from mdblocks.converter.md_to_blocks import MarkdownToBlocksConverter
from mdblocks.converter.rich_text import (
    build_rich_text,
    rich_text_from_html,
    rich_text_to_html,
)

__all__ = [
    "ASTNormalizer",
    "BlocksToMarkdownRenderer",
    "MarkdownToBlocksConverter",
    "build_blocks",
    "build_rich_text",
    "markdown_escape",
    "render_rich_text",
    "rich_text_from_html",
    "rich_text_to_html",
]
