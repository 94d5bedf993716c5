"""Parse Markdown and normalize to canonical AST tokens.

This module wraps mistune v3's AST renderer with the GitHub-flavoured
plugins enabled and normalises the raw token stream into a small set of
canonical types.  Only the node kinds and fields the block builder
relies on are shaped here; everything else passes through under its
mistune name so the builder can report it by kind.

Canonical block tokens:
    heading (``attrs.level``), paragraph, list (``attrs.ordered``),
    list_item, block_code (``raw``, ``attrs.info``)

Canonical inline tokens:
    text (``raw``), strong, emphasis, link (``attrs.url``), softbreak
"""

from __future__ import annotations

import mistune

# ---------------------------------------------------------------------------
# Mistune-to-canonical type mapping
# ---------------------------------------------------------------------------

_TYPE_MAP: dict[str, str] = {
    # Tight list items wrap their text in block_text
    "block_text": "paragraph",
    # Checked state is not part of the block model
    "task_list_item": "list_item",
}

# Types that are silently skipped during normalization
_SKIP_TYPES: frozenset[str] = frozenset({
    "blank_line",
})

# Tokens whose payload lives in "raw" rather than in children
_RAW_TYPES: frozenset[str] = frozenset({
    "text",
    "block_code",
    "codespan",
    "block_html",
    "inline_html",
})

_PLUGINS: list[str] = [
    "table",
    "strikethrough",
    "task_lists",
    "url",
]


class ASTNormalizer:
    """Parse Markdown and normalize to canonical AST tokens."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(renderer="ast", plugins=_PLUGINS)

    def parse(self, markdown: str) -> list[dict]:
        """Parse markdown and return normalized AST token list."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return []
        return self._normalize_tokens(raw_tokens)

    def _normalize_tokens(self, tokens: list[dict]) -> list[dict]:
        result: list[dict] = []
        for token in tokens:
            normalized = self._normalize_token(token)
            if normalized is not None:
                result.append(normalized)
        return result

    def _normalize_token(self, token: dict) -> dict | None:
        """Normalize a single token, returning None if it should be skipped."""
        raw_type = token.get("type", "")
        if raw_type in _SKIP_TYPES:
            return None

        canonical_type = _TYPE_MAP.get(raw_type, raw_type)
        result: dict = {"type": canonical_type}

        attrs = token.get("attrs")
        if attrs:
            result["attrs"] = dict(attrs)

        if canonical_type in _RAW_TYPES:
            raw = token.get("raw", "")
            # mistune keeps the newline that precedes the closing fence
            if canonical_type == "block_code" and raw.endswith("\n"):
                raw = raw[:-1]
            result["raw"] = raw
            return result

        children = token.get("children")
        if children:
            result["children"] = self._normalize_tokens(children)

        return result
