"""Editor host save/load contract.

:class:`EditorBridge` sits between an editor host and a persistence
sink:

* At startup the host is initialised with ``bridge.load(markdown)``,
  which converts Markdown (by default :data:`BOOTSTRAP_MARKDOWN`) into
  editor output data.
* On every content change the host calls ``await bridge.save(snapshot)``
  with an async callable that returns the current output data.  The
  snapshot is rendered to Markdown and handed to the sink.

Scheduling (debouncing, cancellation) belongs to the host; the bridge
performs one conversion per call and keeps no document state.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from mdblocks.config import MdBlocksConfig
from mdblocks.converter.blocks_to_md import BlocksToMarkdownRenderer
from mdblocks.converter.md_to_blocks import MarkdownToBlocksConverter
from mdblocks.editorjs import document_from_output_data, document_to_output_data
from mdblocks.models import ConversionWarning
from mdblocks.observability import get_logger

_log = get_logger("mdblocks.bridge")

BOOTSTRAP_MARKDOWN = "\n".join([
    "# Hello world!",
    "This is a **test**.",
    "",
    "```mermaid",
    "flowchart",
    "  md[Markdown]",
    '  ejs["EditorJS Data"]',
    "",
    '  md -->|"fromMarkdown()"| ejs',
    '  ejs -->|"toMarkdown()"| md',
    "",
    '  ejs <-->|"edit"| EditorJS',
    "```",
])
"""Start document shown when the host has nothing saved yet."""

Snapshot = Callable[[], Awaitable[dict[str, Any]]]
Sink = Callable[[str], Any]


class EditorBridge:
    """Connect an editor host to a Markdown sink.

    Parameters
    ----------
    config:
        Converter configuration shared by both directions.
    sink:
        Called with the rendered Markdown after every :meth:`save`.  May
        be a plain function or a coroutine function.
    """

    def __init__(
        self,
        config: MdBlocksConfig | None = None,
        sink: Sink | None = None,
    ) -> None:
        self._config = config or MdBlocksConfig()
        self._sink = sink
        self._converter = MarkdownToBlocksConverter(self._config)
        self._renderer = BlocksToMarkdownRenderer(self._config)
        self.warnings: list[ConversionWarning] = []

    def load(self, markdown: str = BOOTSTRAP_MARKDOWN) -> dict[str, Any]:
        """Convert *markdown* into output data for initialising the host.

        Warnings from the conversion replace :attr:`warnings`.
        """
        result = self._converter.convert(markdown)
        self.warnings = result.warnings
        data = document_to_output_data(result.document)
        self._dump(data)
        _log.debug(
            "editor loaded",
            extra={"extra_fields": {"op": "load", "blocks": len(data["blocks"])}},
        )
        return data

    async def save(self, snapshot: Snapshot) -> str:
        """Render the host's current document and pass it to the sink.

        Raises
        ------
        MdBlocksDocumentError
            If the snapshot is not editor output data.
        """
        data = await snapshot()
        self._dump(data)
        document = document_from_output_data(data)
        result = self._renderer.render(document)
        self.warnings = result.warnings

        if self._sink is not None:
            outcome = self._sink(result.markdown)
            if isinstance(outcome, Awaitable):
                await outcome

        _log.debug(
            "editor saved",
            extra={"extra_fields": {
                "op": "save",
                "blocks": len(document.blocks),
                "chars": len(result.markdown),
            }},
        )
        return result.markdown

    def _dump(self, data: dict[str, Any]) -> None:
        if self._config.debug_dump_payload:
            print(
                "[mdblocks] Editor output data:",
                json.dumps(data, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )
