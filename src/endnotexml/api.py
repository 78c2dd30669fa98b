"""Public API for importing EndNote XML exports.

Typical use::

    >>> from endnotexml import parse_file, write_jsonl
    >>> records = parse_file("library.xml")
    >>> write_jsonl(records, "library.jsonl")
    3

Files go through the format probe before parsing; ``parse_bytes`` skips it
for callers that already know they hold an EndNote XML document.
"""

import io
import json
from collections.abc import Iterable, Sequence
from pathlib import Path

from endnotexml.config import ImportConfig
from endnotexml.models import EndnoteRecord
from endnotexml.parse.base import probe_stream
from endnotexml.parse.endnote_xml import parse_endnote_xml
from endnotexml.parse.ingestion import ingest_file, ingest_folder

__all__ = [
    "parse_file",
    "parse_folder",
    "parse_bytes",
    "is_endnote_xml",
    "write_jsonl",
    "ParseError",
]

# failing files quoted in a folder ParseError message
MAX_REPORTED_FILES = 3


class ParseError(Exception):
    """Raised in strict mode when a document cannot be imported.

    Attributes
    ----------
    file : str | None
        Offending file, None for in-memory input or multi-file failures.
    errors : tuple[str, ...]
        Individual error messages behind this exception.
    """

    def __init__(
        self,
        message: str,
        file: str | None = None,
        errors: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.file = file
        self.errors = tuple(errors) if errors else (message,)


def parse_file(
    path: str | Path,
    *,
    strict: bool = True,
    config: ImportConfig | None = None,
) -> list[EndnoteRecord]:
    """Parse a single EndNote XML file.

    Parameters
    ----------
    path : str | Path
        File to parse.
    strict : bool, optional
        Raise ``ParseError`` when the file is not recognized or malformed.
        Otherwise such files yield an empty list. By default True.
    config : ImportConfig | None, optional
        Import configuration, by default ``ImportConfig()``.

    Returns
    -------
    list[EndnoteRecord]
        Parsed records, in document order.

    Raises
    ------
    ParseError
        If parsing fails and strict=True.
    FileNotFoundError
        If the file does not exist.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    records, result = ingest_file(file_path, config=config)

    if strict and result.errors:
        raise ParseError(
            f"Failed to parse {result.filename}: {'; '.join(result.errors)}",
            file=result.filepath,
            errors=result.errors,
        )

    return records


def parse_folder(
    path: str | Path,
    *,
    pattern: str | None = None,
    recursive: bool = False,
    strict: bool = False,
    config: ImportConfig | None = None,
) -> list[EndnoteRecord]:
    """Parse every ``.xml`` file in a folder.

    Files that are not EndNote XML exports, or fail to parse, contribute no
    records unless ``strict`` is set.

    Parameters
    ----------
    path : str | Path
        Folder containing exports.
    pattern : str | None, optional
        Glob pattern restricting the files (e.g. ``"library*.xml"``).
    recursive : bool, optional
        Descend into subdirectories, by default False.
    strict : bool, optional
        Raise if any file fails, by default False.
    config : ImportConfig | None, optional
        Import configuration shared by all files.

    Returns
    -------
    list[EndnoteRecord]
        Records of all files, file by file in sorted path order.

    Raises
    ------
    ParseError
        If any file fails and strict=True.
    FileNotFoundError
        If the folder does not exist.
    ValueError
        If ``path`` is not a directory.
    """
    folder_path = Path(path)
    if not folder_path.exists():
        raise FileNotFoundError(f"Folder not found: {path}")
    if not folder_path.is_dir():
        raise ValueError(f"Path is not a directory: {path}")

    records, report = ingest_folder(
        folder_path, recursive=recursive, glob_pattern=pattern or "*", config=config
    )

    failed = [r for r in report.file_results if r.errors]
    if strict and failed:
        quoted = "; ".join(
            f"{r.filename}: {', '.join(r.errors)}" for r in failed[:MAX_REPORTED_FILES]
        )
        if len(failed) > MAX_REPORTED_FILES:
            quoted += f"; and {len(failed) - MAX_REPORTED_FILES} more"
        raise ParseError(
            f"Failed to parse {len(failed)} file(s): {quoted}",
            errors=[f"{r.filename}: {e}" for r in failed for e in r.errors],
        )

    return records


def parse_bytes(
    data: bytes,
    *,
    config: ImportConfig | None = None,
) -> list[EndnoteRecord]:
    """Parse an in-memory EndNote XML document.

    No format probe is applied. The encoding is taken from the XML
    declaration (UTF-8 when absent).

    Raises
    ------
    ParseError
        If the document is malformed.
    """
    records, _, errors = parse_endnote_xml(io.BytesIO(data), config)

    if errors:
        raise ParseError(errors[0], errors=errors)

    return records


def is_endnote_xml(path: str | Path, *, config: ImportConfig | None = None) -> bool:
    """Check whether a file looks like an EndNote XML export.

    Only the first ``config.probe_line_limit`` lines are read.
    """
    if config is None:
        config = ImportConfig()

    with Path(path).open("rb") as f:
        return probe_stream(f, config.probe_line_limit)


def write_jsonl(
    records: Iterable[EndnoteRecord],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> int:
    """Write records as JSONL, one ``EndnoteRecord.to_dict()`` per line.

    Output is UTF-8 with ``\\n`` line endings; with ``sort_keys`` the bytes
    are identical for identical records.

    Parameters
    ----------
    records : Iterable[EndnoteRecord]
        Records to write, consumed once.
    path : str | Path
        Output file, overwritten if present.
    sort_keys : bool, optional
        Sort object keys, by default True.

    Returns
    -------
    int
        Number of lines written.
    """
    count = 0
    with Path(path).open("w", encoding="utf-8", newline="\n") as f:
        for record in records:
            f.write(json.dumps(record.to_dict(), ensure_ascii=False, sort_keys=sort_keys))
            f.write("\n")
            count += 1

    return count
