"""EndNote XML parsing.

Main entry points:
- parse_endnote_xml: Parse a stream or file into records (errors reported)
- read_records: Same, raising EndnoteXmlError on structural failure
- probe_stream / is_recognized_format: Cheap format recognition
- ingest_file / ingest_folder: File-level ingestion with reports
"""

from endnotexml.parse.base import (
    EndnoteXmlError,
    ParseResult,
    is_recognized_format,
    probe_stream,
)
from endnotexml.parse.endnote_xml import parse_endnote_xml, read_records
from endnotexml.parse.ingestion import ingest_file, ingest_folder

__all__ = [
    "EndnoteXmlError",
    "ParseResult",
    "is_recognized_format",
    "probe_stream",
    "parse_endnote_xml",
    "read_records",
    "ingest_file",
    "ingest_folder",
]
