"""mdblocks: convert between Markdown and editor block documents.

Quick start::

    from mdblocks import from_markdown, to_markdown

    result = from_markdown("# Title\\n\\n- a\\n  - b")
    result.document.blocks     # (Header(...), ListBlock(...))
    to_markdown(result.document).markdown

Both directions are best-effort: constructs outside the supported subset
are dropped and reported in ``result.warnings`` instead of raising.
"""

from __future__ import annotations

from mdblocks.bridge import BOOTSTRAP_MARKDOWN, EditorBridge
from mdblocks.config import MdBlocksConfig
from mdblocks.converter.blocks_to_md import BlocksToMarkdownRenderer
from mdblocks.converter.md_to_blocks import MarkdownToBlocksConverter
from mdblocks.editorjs import document_from_output_data, document_to_output_data
from mdblocks.errors import ErrorCode, MdBlocksDocumentError, MdBlocksError
from mdblocks.models import (
    Block,
    Bold,
    Code,
    ConversionResult,
    ConversionWarning,
    Diagram,
    Document,
    Header,
    Italic,
    Link,
    ListBlock,
    ListItem,
    ListStyle,
    Paragraph,
    RenderResult,
    RichText,
    Text,
    UnknownBlock,
    plain_text,
    rich,
)

__all__ = [
    "BOOTSTRAP_MARKDOWN",
    "Block",
    "BlocksToMarkdownRenderer",
    "Bold",
    "Code",
    "ConversionResult",
    "ConversionWarning",
    "Diagram",
    "Document",
    "EditorBridge",
    "ErrorCode",
    "Header",
    "Italic",
    "Link",
    "ListBlock",
    "ListItem",
    "ListStyle",
    "MarkdownToBlocksConverter",
    "MdBlocksConfig",
    "MdBlocksDocumentError",
    "MdBlocksError",
    "Paragraph",
    "RenderResult",
    "RichText",
    "Text",
    "UnknownBlock",
    "from_markdown",
    "plain_text",
    "rich",
    "to_markdown",
]

__version__ = "0.1.0"


def from_markdown(markdown: str, config: MdBlocksConfig | None = None) -> ConversionResult:
    """Convert Markdown text to a block document."""
    return MarkdownToBlocksConverter(config).convert(markdown)


def to_markdown(document: Document, config: MdBlocksConfig | None = None) -> RenderResult:
    """Render a block document to Markdown text."""
    return BlocksToMarkdownRenderer(config).render(document)
