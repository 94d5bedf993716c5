"""Build rich text span trees from normalized inline AST tokens.

Two inputs produce :data:`~mdblocks.models.RichText`:

* Markdown inline tokens from :class:`ASTNormalizer` (:func:`build_rich_text`).
* The tag form the editor host stores in block content fields, e.g.
  ``'a <b>bold</b> and <a href="https://x.y">link</a>'``
  (:func:`rich_text_from_html`).

:func:`rich_text_to_html` produces that tag form again.
"""

from __future__ import annotations

import html
from html.parser import HTMLParser

from mdblocks.errors import ErrorCode
from mdblocks.models import (
    Bold,
    ConversionWarning,
    Italic,
    Link,
    RichText,
    Span,
    Text,
    normalize_rich_text,
)

from .diagnostics import add_warning

# ---------------------------------------------------------------------------
# Markdown inline tokens -> RichText
# ---------------------------------------------------------------------------

def build_rich_text(
    children: list[dict],
    warnings: list[ConversionWarning] | None = None,
) -> RichText:
    """Convert inline AST tokens to a normalized span tree.

    Parameters
    ----------
    children:
        Inline tokens (``text``, ``strong``, ``emphasis``, ``link``,
        ``softbreak``).
    warnings:
        Optional list to which a warning is appended for every inline
        token that has no rich text equivalent.  Such tokens contribute
        nothing to the result.

    Returns
    -------
    RichText
        The decoded spans.
    """
    return normalize_rich_text(tuple(_build_spans(children, warnings)))


def _build_spans(
    children: list[dict],
    warnings: list[ConversionWarning] | None,
) -> list[Span]:
    spans: list[Span] = []
    for token in children:
        token_type = token.get("type", "")
        if token_type == "text":
            spans.append(Text(token.get("raw", "")))
        elif token_type == "softbreak":
            spans.append(Text("\n"))
        elif token_type == "strong":
            spans.append(Bold(tuple(_build_spans(token.get("children", []), warnings))))
        elif token_type == "emphasis":
            spans.append(Italic(tuple(_build_spans(token.get("children", []), warnings))))
        elif token_type == "link":
            url = token.get("attrs", {}).get("url", "")
            spans.append(Link(url, tuple(_build_spans(token.get("children", []), warnings))))
        else:
            add_warning(
                warnings,
                ErrorCode.UNSUPPORTED_INLINE,
                f"Unsupported inline token '{token_type}' was skipped.",
                token_type=token_type,
            )
    return spans


# ---------------------------------------------------------------------------
# Tag form <-> RichText
# ---------------------------------------------------------------------------

_BOLD_TAGS = frozenset({"b", "strong"})
_ITALIC_TAGS = frozenset({"i", "em"})


class _TagParser(HTMLParser):
    """Collect spans from the editor's inline markup.

    Unknown tags are unwrapped (their text is kept); ``<br>`` becomes a
    newline.  Unbalanced closing tags are ignored and unclosed tags are
    closed at end of input.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        # Each frame: (tag, href, collected spans)
        self._stack: list[tuple[str, str, list[Span]]] = [("", "", [])]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "br":
            self.handle_data("\n")
            return
        if tag in _BOLD_TAGS or tag in _ITALIC_TAGS or tag == "a":
            href = dict(attrs).get("href") or ""
            self._stack.append((tag, href, []))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "br":
            self.handle_data("\n")

    def handle_endtag(self, tag: str) -> None:
        if not any(frame[0] == tag for frame in self._stack[1:]):
            return
        while True:
            closed = self._stack[-1][0]
            self._pop()
            if closed == tag:
                break

    def handle_data(self, data: str) -> None:
        self._stack[-1][2].append(Text(data))

    def _pop(self) -> None:
        tag, href, spans = self._stack.pop()
        if tag in _BOLD_TAGS:
            span: Span = Bold(tuple(spans))
        elif tag in _ITALIC_TAGS:
            span = Italic(tuple(spans))
        else:
            span = Link(href, tuple(spans))
        self._stack[-1][2].append(span)

    def result(self) -> RichText:
        while len(self._stack) > 1:
            self._pop()
        return normalize_rich_text(tuple(self._stack[0][2]))


def rich_text_from_html(markup: str) -> RichText:
    """Parse the editor's tag form into a span tree.

    >>> rich_text_from_html("x <b>y</b>")
    (Text(text='x '), Bold(children=(Text(text='y'),)))
    """
    parser = _TagParser()
    parser.feed(markup)
    parser.close()
    return parser.result()


def rich_text_to_html(spans: RichText) -> str:
    """Render a span tree in the editor's tag form."""
    parts: list[str] = []
    for span in spans:
        if isinstance(span, Text):
            parts.append(html.escape(span.text, quote=False).replace("\n", "<br>"))
        elif isinstance(span, Bold):
            parts.append(f"<b>{rich_text_to_html(span.children)}</b>")
        elif isinstance(span, Italic):
            parts.append(f"<i>{rich_text_to_html(span.children)}</i>")
        else:
            href = html.escape(span.url, quote=True)
            parts.append(f'<a href="{href}">{rich_text_to_html(span.children)}</a>')
    return "".join(parts)
