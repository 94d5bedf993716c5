"""Full Markdown-to-blocks conversion pipeline.

:class:`MarkdownToBlocksConverter` orchestrates the three-stage pipeline:

1. **Parse**: Mistune parses raw Markdown into an AST.
2. **Normalize**: :class:`ASTNormalizer` maps token types to canonical names.
3. **Build**: :func:`build_blocks` converts normalized tokens into
   document blocks, collecting :class:`ConversionWarning` along the way.

The result is a :class:`ConversionResult` containing a fresh
:class:`Document` and any non-fatal warnings.
"""

from __future__ import annotations

import json
import sys

from mdblocks.config import MdBlocksConfig
from mdblocks.converter.ast_normalizer import ASTNormalizer
from mdblocks.converter.block_builder import build_blocks
from mdblocks.models import ConversionResult, Document
from mdblocks.observability import get_logger

_log = get_logger("mdblocks.converter")


class MarkdownToBlocksConverter:
    """Convert Markdown text to a block document.

    Parameters
    ----------
    config:
        Converter configuration (diagram marker, format version, debug
        switches).

    Examples
    --------
    >>> converter = MarkdownToBlocksConverter(MdBlocksConfig())
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> len(result.document.blocks)
    2
    >>> type(result.document.blocks[0]).__name__
    'Header'
    """

    def __init__(self, config: MdBlocksConfig | None = None) -> None:
        self._config = config or MdBlocksConfig()
        self._normalizer = ASTNormalizer()

    def convert(self, markdown: str) -> ConversionResult:
        """Full pipeline: parse -> normalize -> build blocks.

        Never raises for unsupported constructs; each one is dropped and
        reported in ``warnings``.
        """
        tokens = self._normalizer.parse(markdown)

        if self._config.debug_dump_ast:
            print(
                "[mdblocks] Normalized AST:",
                json.dumps(tokens, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        blocks, warnings = build_blocks(tokens, self._config)

        _log.debug(
            "markdown converted",
            extra={"extra_fields": {
                "op": "from_markdown",
                "blocks": len(blocks),
                "warnings": len(warnings),
            }},
        )

        return ConversionResult(
            document=Document(blocks=tuple(blocks), version=self._config.format_version),
            warnings=warnings,
        )
