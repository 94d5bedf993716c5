"""Shared test fixtures for the mdblocks test suite."""

from __future__ import annotations

import logging

import pytest

from mdblocks.config import MdBlocksConfig
from mdblocks.converter.blocks_to_md import BlocksToMarkdownRenderer
from mdblocks.converter.md_to_blocks import MarkdownToBlocksConverter


@pytest.fixture
def config() -> MdBlocksConfig:
    """Default converter configuration."""
    return MdBlocksConfig()


@pytest.fixture
def converter(config: MdBlocksConfig) -> MarkdownToBlocksConverter:
    """Markdown-to-blocks converter using the default config."""
    return MarkdownToBlocksConverter(config)


@pytest.fixture
def renderer(config: MdBlocksConfig) -> BlocksToMarkdownRenderer:
    """Blocks-to-Markdown renderer using the default config."""
    return BlocksToMarkdownRenderer(config)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def converter_log():
    """Capture records emitted on the ``mdblocks.converter`` logger."""
    logger = logging.getLogger("mdblocks.converter")
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
