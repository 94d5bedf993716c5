"""Public data models for mdblocks.

This module contains the block-document model, the inline span tree used
for rich text, and the result and warning types returned by the
converters.  All types are plain dataclasses; the document model is
frozen so that a converted document can be shared without copying.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from mdblocks.config import DEFAULT_FORMAT_VERSION

# ---------------------------------------------------------------------------
# Inline spans (rich text)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Text:
    """A run of unformatted text."""

    text: str


@dataclass(frozen=True)
class Bold:
    """Strong emphasis around a sequence of spans."""

    children: tuple[Span, ...] = ()


@dataclass(frozen=True)
class Italic:
    """Emphasis around a sequence of spans."""

    children: tuple[Span, ...] = ()


@dataclass(frozen=True)
class Link:
    """A hyperlink whose label is a sequence of spans."""

    url: str
    children: tuple[Span, ...] = ()


Span = Union[Text, Bold, Italic, Link]

RichText = tuple[Span, ...]
"""Inline content of a single block field.  Bold and italic may nest."""


def rich(*parts: Span | str) -> RichText:
    """Build normalized rich text, accepting bare strings for text runs.

    >>> rich("a ", Bold((Text("b"),)))
    (Text(text='a '), Bold(children=(Text(text='b'),)))
    """
    return normalize_rich_text(
        tuple(Text(p) if isinstance(p, str) else p for p in parts)
    )


def normalize_rich_text(spans: tuple[Span, ...], _inside: frozenset[type] = frozenset()) -> RichText:
    """Return a canonical form of *spans*.

    Adjacent runs of the same kind are merged (links only when they share
    a url), empty text and empty styled runs are dropped, and a style
    nested inside itself (bold in bold, italic in italic, link in link)
    is collapsed into its children.
    """
    out: list[Span] = []

    def emit(span: Span) -> None:
        if isinstance(span, Text):
            if not span.text:
                return
            if out and isinstance(out[-1], Text):
                out[-1] = Text(out[-1].text + span.text)
                return
        elif out and type(out[-1]) is type(span) and getattr(out[-1], "url", None) == getattr(span, "url", None):
            prev = out[-1]
            merged = normalize_rich_text(prev.children + span.children, _inside | {type(span)})
            out[-1] = Link(span.url, merged) if isinstance(span, Link) else type(span)(merged)
            return
        out.append(span)

    for span in spans:
        if isinstance(span, Text):
            emit(span)
            continue
        kind = type(span)
        children = normalize_rich_text(span.children, _inside | {kind})
        if kind in _inside:
            for child in children:
                emit(child)
            continue
        if not children:
            continue
        if isinstance(span, Link):
            emit(Link(span.url, children))
        else:
            emit(kind(children))
    return tuple(out)


def plain_text(spans: RichText) -> str:
    """Concatenate the text of every span, ignoring formatting."""
    parts: list[str] = []
    for span in spans:
        if isinstance(span, Text):
            parts.append(span.text)
        else:
            parts.append(plain_text(span.children))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

class ListStyle(str, Enum):
    """Marker style of a list.  Nested items inherit the top-level style."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


@dataclass(frozen=True)
class Header:
    """A heading of level 1-6."""

    level: int
    text: RichText = ()

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"header level must be between 1 and 6, got {self.level}")


@dataclass(frozen=True)
class Paragraph:
    text: RichText = ()


@dataclass(frozen=True)
class ListItem:
    """One line of list text plus any nested sub-items."""

    content: RichText = ()
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class ListBlock:
    style: ListStyle = ListStyle.UNORDERED
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class Code:
    """A fenced code block.  The language tag is not retained."""

    code: str


@dataclass(frozen=True)
class Diagram:
    """A fenced code block tagged with the diagram language marker."""

    source: str


@dataclass(frozen=True)
class UnknownBlock:
    """A host block whose type is outside the supported set.

    Kept only so the renderer can report it; it never renders.
    """

    type: str
    data: dict = field(default_factory=dict, compare=False, hash=False)


Block = Union[Header, Paragraph, ListBlock, Code, Diagram, UnknownBlock]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Document:
    """An ordered sequence of blocks plus host metadata.

    ``time`` and ``version`` exist only for the consuming editor host and
    take no part in equality.
    """

    blocks: tuple[Block, ...] = ()
    time: int = field(default_factory=_now_ms, compare=False)
    version: str = field(default=DEFAULT_FORMAT_VERSION, compare=False)


# ---------------------------------------------------------------------------
# Conversion results
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A construct that was skipped during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"UNSUPPORTED_BLOCK"``).
    message:
        A human-readable description of the issue.
    context:
        Structured data identifying the skipped construct.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of the Markdown-to-blocks direction.

    Attributes
    ----------
    document:
        The converted block document.
    warnings:
        One entry per construct that could not be represented.
    """

    document: Document
    warnings: list[ConversionWarning] = field(default_factory=list)


@dataclass
class RenderResult:
    """Output of the blocks-to-Markdown direction."""

    markdown: str
    warnings: list[ConversionWarning] = field(default_factory=list)
