"""Inline rendering: rich text span trees to Markdown strings.

The walk is structural: leaf text is escaped, then wrapped in the
delimiters of its enclosing spans.  Because escaping only ever touches
leaf text, delimiters added by the walk are never escaped and escaped
characters are never escaped twice.

Delimiters::

    Bold   -> **text**
    Italic -> *text*   (_text_ when it is the only child of a Bold)
    Link   -> [text](url)
              <url>   when the label is the url itself

The parser auto-links bare ``http(s)://`` urls, so a leaf that contains
one has the colon escaped and stays plain text.
"""

from __future__ import annotations

import re

from mistune.util import escape_url

from mdblocks.models import Bold, Italic, Link, RichText, Text

# Characters that would otherwise open emphasis, strikethrough, code spans,
# links or inline HTML when the text is parsed again.
_ESCAPE_RE = re.compile(r"([\\`*_~\[\]<])")

# Scheme of a bare url the ``url`` plugin would turn into a link.
_BARE_URL_RE = re.compile(r"(https?):(?=//)")

# CommonMark autolink body, as matched between ``<`` and ``>``.
_AUTOLINK_RE = re.compile(r"[A-Za-z][A-Za-z0-9.+-]{1,31}:[^<>\x00-\x20]*")

# Line-leading markers that would start a heading, block quote, list or
# setext underline.
_BLOCK_START_RE = re.compile(r"^([ \t]*)(?:([#>+\-=])|(\d{1,9})([.)]))", re.MULTILINE)

_URL_NEEDS_BRACKETS_RE = re.compile(r"[\s()]")


def markdown_escape(text: str) -> str:
    """Backslash-escape characters with inline Markdown meaning.

    >>> markdown_escape("2 * 3 = a_b")
    '2 \\\\* 3 = a\\\\_b'
    >>> markdown_escape("see https://x.com")
    'see https\\\\://x.com'
    """
    return _BARE_URL_RE.sub(r"\1\\:", _ESCAPE_RE.sub(r"\\\1", text))


def escape_block_start(text: str) -> str:
    """Escape markers at the start of each line that would begin a block.

    Applied to rendered paragraph and list text, where a line such as
    ``# not a heading`` must stay literal.
    """
    def _sub(m: re.Match[str]) -> str:
        indent = m.group(1)
        if m.group(2):
            return f"{indent}\\{m.group(2)}"
        return f"{indent}{m.group(3)}\\{m.group(4)}"

    return _BLOCK_START_RE.sub(_sub, text)


def _format_url(url: str) -> str:
    url = url.replace("<", "%3C").replace(">", "%3E")
    if _URL_NEEDS_BRACKETS_RE.search(url):
        return f"<{url}>"
    return url


def _autolink(link: Link) -> str | None:
    """Return ``<url>`` when *link* is exactly what an autolink parses to."""
    if len(link.children) != 1 or not isinstance(link.children[0], Text):
        return None
    label = link.children[0].text
    if not _AUTOLINK_RE.fullmatch(label) or escape_url(label) != link.url:
        return None
    return f"<{label}>"


def _wrap(delimiter: str, inner: str) -> str:
    """Wrap *inner* in *delimiter*, keeping edge whitespace outside.

    ``** x **`` is not emphasis in Markdown, so surrounding whitespace is
    moved outside the delimiters.  A run of only whitespace is returned
    unwrapped.
    """
    core = inner.strip()
    if not core:
        return inner
    lead = inner[:len(inner) - len(inner.lstrip())]
    trail = inner[len(inner.rstrip()):]
    return f"{lead}{delimiter}{core}{delimiter}{trail}"


def render_rich_text(spans: RichText, *, _parent: type | None = None) -> str:
    """Render a span tree to an inline Markdown string.

    Parameters
    ----------
    spans:
        Rich text to render.

    Returns
    -------
    str
        Markdown that parses back to the same spans.
    """
    parts: list[str] = []
    only_child = len(spans) == 1

    for span in spans:
        if isinstance(span, Text):
            parts.append(markdown_escape(span.text))
        elif isinstance(span, Bold):
            parts.append(_wrap("**", render_rich_text(span.children, _parent=Bold)))
        elif isinstance(span, Italic):
            # "***x***" parses as italic-of-bold, so a bold whose whole
            # content is italic uses the underscore form.
            delimiter = "_" if _parent is Bold and only_child else "*"
            parts.append(_wrap(delimiter, render_rich_text(span.children, _parent=Italic)))
        elif isinstance(span, Link):
            autolink = _autolink(span)
            if autolink is not None:
                parts.append(autolink)
                continue
            label = render_rich_text(span.children, _parent=Link)
            parts.append(f"[{label}]({_format_url(span.url)})")

    return "".join(parts)
