"""Streaming importer for EndNote XML bibliographic exports.

This package provides:
- Data models (endnotexml.models): records, entry types, field identifiers
- Parsing (endnotexml.parse): format probe, streaming parser, ingestion
- Configuration (endnotexml.config): import options
- Audit (endnotexml.audit): structured JSONL event logging
- CLI (endnotexml.cli): command-line interface
- Public API (endnotexml.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from endnotexml.api import (
    ParseError,
    is_endnote_xml,
    parse_bytes,
    parse_file,
    parse_folder,
    write_jsonl,
)
from endnotexml.config import ImportConfig
from endnotexml.models import EndnoteRecord, EntryType, StandardField

__all__ = [
    "__version__",
    "__license__",
    "EndnoteRecord",
    "EntryType",
    "StandardField",
    "ImportConfig",
    "parse_file",
    "parse_folder",
    "parse_bytes",
    "is_endnote_xml",
    "write_jsonl",
    "ParseError",
]
