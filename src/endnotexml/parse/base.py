"""Base types and utilities for the EndNote XML parser."""

from typing import BinaryIO, NamedTuple

from endnotexml.config import DEFAULT_PROBE_LINE_LIMIT
from endnotexml.models import EndnoteRecord

FORMAT_NAME = "endnote_xml"
FORMAT_UNKNOWN = "unknown"

SUPPORTED_EXTENSIONS: dict[str, str] = {
    ".xml": FORMAT_NAME,
}

RECORDS_MARKER = "<records>"


class EndnoteXmlError(Exception):
    """Terminal structural failure while reading an EndNote XML document.

    Raised for malformed markup and for read failures of the underlying
    stream. The original exception is available as ``__cause__``.
    """


class ParseResult(NamedTuple):
    """Result of parsing an EndNote XML document.

    Supports tuple unpacking: ``records, warnings, errors = parse_endnote_xml(...)``.
    On a structural failure ``records`` is empty and ``errors`` holds the
    single terminal error message.

    Attributes
    ----------
    records : list[EndnoteRecord]
        Parsed records, in document order.
    warnings : list[str]
        Warning messages.
    errors : list[str]
        Error messages.
    """

    records: list[EndnoteRecord]
    warnings: list[str]
    errors: list[str]


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Only used to decode the probe window; the XML parser honours the
    document's own encoding declaration.

    Parameters
    ----------
    file_bytes : bytes
        File content (or a leading chunk of it) as bytes.

    Returns
    -------
    str
        Detected encoding (utf-8-sig, utf-8 or latin-1).
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def is_recognized_format(lines: list[str], limit: int = DEFAULT_PROBE_LINE_LIMIT) -> bool:
    """Check whether leading lines look like an EndNote XML export.

    Parameters
    ----------
    lines : list[str]
        Leading lines of the candidate input.
    limit : int, optional
        Number of lines inspected, by default 50.

    Returns
    -------
    bool
        True if ``<records>`` (any case) occurs in one of the first
        ``limit`` lines.
    """
    return any(RECORDS_MARKER in line.lower() for line in lines[:limit])


def read_head_lines(data: bytes, limit: int = DEFAULT_PROBE_LINE_LIMIT) -> list[str]:
    """Decode the first ``limit`` lines of raw input."""
    encoding = detect_encoding(data[:4096])
    head = data.split(b"\n", limit)[:limit]
    return [line.decode(encoding, errors="replace") for line in head]


def probe_stream(stream: BinaryIO, limit: int = DEFAULT_PROBE_LINE_LIMIT) -> bool:
    """Run the format probe over a binary stream.

    At most ``limit`` lines are read. The stream position is restored
    afterwards when the stream is seekable, so the same stream can then be
    handed to the full parse.

    Parameters
    ----------
    stream : BinaryIO
        Binary input stream.
    limit : int, optional
        Number of lines inspected, by default 50.

    Returns
    -------
    bool
        Result of ``is_recognized_format`` over the lines read.
    """
    seekable = stream.seekable()
    start = stream.tell() if seekable else None

    chunks: list[bytes] = []
    for _ in range(limit):
        line = stream.readline()
        if not line:
            break
        chunks.append(line)

    if start is not None:
        stream.seek(start)

    return is_recognized_format(read_head_lines(b"".join(chunks), limit), limit)
