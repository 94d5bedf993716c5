"""Converter configuration for mdblocks.

:class:`MdBlocksConfig` is a plain dataclass that captures every tuneable
knob of the converter pair.  The same instance is passed to both
:class:`MarkdownToBlocksConverter` and :class:`BlocksToMarkdownRenderer`
so that the two directions agree on the diagram marker.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DIAGRAM_LANGUAGE = "mermaid"
"""Fenced-code info string that marks a diagram block."""

DEFAULT_FORMAT_VERSION = "2.28.2"
"""Editor output-data version stamped on every converted document."""


@dataclass
class MdBlocksConfig:
    """Complete configuration for the converters.

    Parameters
    ----------
    diagram_language:
        Fenced-code language tag reserved for diagram source.  Matched
        exactly (case-sensitive) when parsing and emitted verbatim when
        rendering.
    format_version:
        Version string written into converted documents for the editor
        host.  Opaque to the converter.
    debug_dump_ast:
        Write the normalized Mistune AST to *stderr* on each conversion.
    debug_dump_payload:
        Write the editor output data to *stderr* on each load and save.
    """

    diagram_language: str = DEFAULT_DIAGRAM_LANGUAGE

    format_version: str = DEFAULT_FORMAT_VERSION

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.diagram_language or self.diagram_language != self.diagram_language.strip():
            raise ValueError(
                f"diagram_language must be a non-empty tag without surrounding "
                f"whitespace, got {self.diagram_language!r}"
            )
        if any(ch.isspace() for ch in self.diagram_language):
            raise ValueError(
                f"diagram_language must be a single word, got {self.diagram_language!r}"
            )
        if not self.format_version:
            raise ValueError("format_version must be a non-empty string")
