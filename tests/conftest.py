"""Pytest configuration and fixtures for test suite."""

import io
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from endnotexml.config import ImportConfig  # noqa: E402
from endnotexml.models import EndnoteRecord  # noqa: E402
from endnotexml.parse.base import ParseResult  # noqa: E402
from endnotexml.parse.endnote_xml import parse_endnote_xml  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "synthetic"


def style(text: str) -> str:
    """Wrap text in an EndNote style run."""
    return f'<style face="normal" font="default" size="100%">{text}</style>'


def record(*children: str) -> str:
    """Build a ``<record>`` element from child element markup."""
    return "<record>" + "".join(children) + "</record>"


def document(*records: str) -> str:
    """Build a complete EndNote XML export from record markup."""
    return (
        '<?xml version="1.0" encoding="UTF-8" ?>\n'
        "<xml><records>\n" + "\n".join(records) + "\n</records></xml>\n"
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to synthetic fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def parse_xml() -> Callable[..., ParseResult]:
    """Parse inline document markup with the EndNote XML parser."""

    def _parse(content: str, config: ImportConfig | None = None) -> ParseResult:
        return parse_endnote_xml(io.BytesIO(content.encode("utf-8")), config)

    return _parse


@pytest.fixture
def parse_one(parse_xml: Callable[..., ParseResult]) -> Callable[..., EndnoteRecord]:
    """Parse a single record built from child markup and return it."""

    def _parse(*children: str, config: ImportConfig | None = None) -> EndnoteRecord:
        records, _, errors = parse_xml(document(record(*children)), config)
        assert errors == []
        assert len(records) == 1
        return records[0]

    return _parse
