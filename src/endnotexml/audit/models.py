"""Data model for structured audit events."""

from dataclasses import dataclass, field
from typing import Any

__all__ = ["LogEvent"]


@dataclass
class LogEvent:
    """One line of the JSONL audit log.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp (UTC).
    run_id : str
        Identifier of the run that emitted the event.
    level : str
        Severity ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type (e.g. "file_ingested").
    data : dict[str, Any]
        Event-specific payload.
    file : str | None
        Input file name when the event concerns one file.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any] = field(default_factory=dict)
    file: str | None = None
