"""UTC timestamps stamped on import results.

All timestamps are ISO8601 in UTC with a ``Z`` suffix:

- ``LogEvent.ts`` and ``IngestionReport.run_timestamp`` keep microseconds
  so events of one run stay ordered.
- ``FileIngestionResult.file_mtime`` is truncated to seconds, the
  resolution file systems report reliably.
- run ids built by ``generate_run_id`` start with a run timestamp.
"""

from datetime import UTC, datetime
from pathlib import Path

__all__ = ["format_utc", "get_iso_timestamp", "get_file_mtime"]


def format_utc(moment: datetime) -> str:
    """Render an aware datetime as ISO8601 UTC with a ``Z`` suffix."""
    return moment.astimezone(UTC).isoformat().replace("+00:00", "Z")


def get_iso_timestamp() -> str:
    """Current time, e.g. ``"2026-02-03T12:34:56.123456Z"``."""
    return format_utc(datetime.now(UTC))


def get_file_mtime(file_path: Path) -> str:
    """Modification time of an export file.

    Parameters
    ----------
    file_path : Path
        Ingested file.

    Returns
    -------
    str
        Timestamp truncated to seconds (e.g. ``"2024-01-30T12:00:00Z"``),
        or ``""`` when the file cannot be stat'ed.
    """
    try:
        mtime = datetime.fromtimestamp(file_path.stat().st_mtime, UTC)
    except (OSError, ValueError):
        return ""
    return format_utc(mtime.replace(microsecond=0))
