"""File and folder ingestion around the EndNote XML parser."""

import io
from dataclasses import dataclass, replace
from pathlib import Path

from endnotexml.audit import AuditLogger
from endnotexml.config import ImportConfig
from endnotexml.models import EndnoteRecord
from endnotexml.parse.base import (
    FORMAT_NAME,
    FORMAT_UNKNOWN,
    SUPPORTED_EXTENSIONS,
    EndnoteXmlError,
    detect_encoding,
    is_recognized_format,
    read_head_lines,
)
from endnotexml.parse.endnote_xml import read_records
from endnotexml.utils import calculate_file_digest, get_file_mtime, get_iso_timestamp

INGESTION_VERSION = "1.0.0"


@dataclass(frozen=True)
class FileIngestionResult:
    """Immutable result of ingesting a single file.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    filepath : str
        Full path to the file.
    file_size : int
        Size of file in bytes.
    file_mtime : str
        ISO8601 timestamp of file modification time.
    format_detected : str
        Format detected (endnote_xml|unknown).
    source_ext : str
        File extension.
    encoding_used : str
        Encoding used to decode the probe window.
    records_parsed : int
        Number of records successfully parsed.
    warnings : tuple[str, ...]
        Warning messages.
    errors : tuple[str, ...]
        Error messages.
    file_digest : str
        SHA-256 digest of file bytes.
    """

    filename: str
    filepath: str
    file_size: int
    file_mtime: str
    format_detected: str
    source_ext: str
    encoding_used: str
    records_parsed: int
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    file_digest: str = ""


@dataclass(frozen=True)
class IngestionReport:
    """Immutable report for multi-file ingestion run.

    Attributes
    ----------
    tool_version : str
        Version of ingestion tool.
    run_timestamp : str
        ISO8601 timestamp (UTC) of ingestion run.
    total_files : int
        Total files processed.
    total_records : int
        Total records parsed across all files.
    total_errors : int
        Total errors across all files.
    total_warnings : int
        Total warnings across all files.
    file_results : tuple[FileIngestionResult, ...]
        Per-file ingestion results.
    """

    tool_version: str
    run_timestamp: str
    total_files: int
    total_records: int
    total_errors: int
    total_warnings: int
    file_results: tuple[FileIngestionResult, ...]


def ingest_file(
    file_path: Path,
    config: ImportConfig | None = None,
    logger: AuditLogger | None = None,
) -> tuple[list[EndnoteRecord], FileIngestionResult]:
    """Ingest a single file.

    The file is read once; the probe window and the parser both work on
    the same bytes. Every failure is reported in the result's ``errors``
    and, when a logger is given, as an audit event.

    Parameters
    ----------
    file_path : Path
        Path to file to ingest.
    config : ImportConfig | None, optional
        Import configuration, by default ``ImportConfig()``.
    logger : AuditLogger | None, optional
        Audit logger receiving per-file events. If None, no logging.

    Returns
    -------
    tuple[list[EndnoteRecord], FileIngestionResult]
        - List of parsed records (empty on any error)
        - File ingestion result with metadata and stats
    """
    if config is None:
        config = ImportConfig()

    base = FileIngestionResult(
        filename=file_path.name,
        filepath=str(file_path),
        file_size=0,
        file_mtime="",
        format_detected=FORMAT_UNKNOWN,
        source_ext=file_path.suffix.lower(),
        encoding_used="",
        records_parsed=0,
    )

    try:
        file_bytes = file_path.read_bytes()
    except OSError as e:
        if logger is not None:
            logger.error(type(e).__name__, str(e), file=file_path.name)
        return [], replace(base, errors=(f"Failed to read file: {e}",))

    base = replace(
        base,
        file_size=len(file_bytes),
        file_mtime=get_file_mtime(file_path),
        encoding_used=detect_encoding(file_bytes[:4096]),
        file_digest=calculate_file_digest(file_bytes),
    )

    head = read_head_lines(file_bytes, config.probe_line_limit)
    if not is_recognized_format(head, config.probe_line_limit):
        if logger is not None:
            logger.file_skipped(file_path.name, "format_not_recognized")
        message = f"Not an EndNote XML export: no <records> in first {len(head)} lines"
        return [], replace(base, errors=(message,))

    base = replace(base, format_detected=FORMAT_NAME)

    try:
        records, warnings, _ = read_records(io.BytesIO(file_bytes), config)
    except EndnoteXmlError as e:
        if logger is not None:
            cause = e.__cause__ if e.__cause__ is not None else e
            logger.parse_failed(file_path.name, type(cause).__name__, str(e))
        return [], replace(base, errors=(str(e),))

    if logger is not None:
        logger.file_ingested(file_path.name, FORMAT_NAME, len(records), len(warnings))

    return records, replace(base, records_parsed=len(records), warnings=tuple(warnings))


def ingest_folder(
    folder_path: Path,
    recursive: bool = False,
    glob_pattern: str = "*",
    config: ImportConfig | None = None,
    logger: AuditLogger | None = None,
) -> tuple[list[EndnoteRecord], IngestionReport]:
    """Ingest all supported files in a folder.

    Parameters
    ----------
    folder_path : Path
        Path to folder containing EndNote XML exports.
    recursive : bool, optional
        Whether to search recursively in subdirectories, by default False.
    glob_pattern : str, optional
        Glob pattern to filter files, by default "*".
    config : ImportConfig | None, optional
        Import configuration shared by all files.
    logger : AuditLogger | None, optional
        Audit logger receiving per-file events.

    Returns
    -------
    tuple[list[EndnoteRecord], IngestionReport]
        - List of all parsed records
        - Ingestion report with per-file stats and summary
    """
    all_records: list[EndnoteRecord] = []
    file_results: list[FileIngestionResult] = []

    # Find files
    if recursive:
        files = folder_path.rglob(glob_pattern)
    else:
        files = folder_path.glob(glob_pattern)

    # Filter to supported extensions, in stable order
    supported_files = sorted(
        f for f in files if f.is_file() and f.suffix.lower() in SUPPORTED_EXTENSIONS
    )

    for file_path in supported_files:
        records, result = ingest_file(file_path, config=config, logger=logger)
        all_records.extend(records)
        file_results.append(result)

    report = IngestionReport(
        tool_version=INGESTION_VERSION,
        run_timestamp=get_iso_timestamp(),
        total_files=len(file_results),
        total_records=sum(r.records_parsed for r in file_results),
        total_errors=sum(len(r.errors) for r in file_results),
        total_warnings=sum(len(r.warnings) for r in file_results),
        file_results=tuple(file_results),
    )

    return all_records, report
