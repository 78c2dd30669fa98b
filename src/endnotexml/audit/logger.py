"""Structured audit logger for import runs.

Events are appended to a JSONL file, one object per line, through a single
file handle kept open for the whole run.
"""

import json
from collections import Counter
from dataclasses import asdict
from pathlib import Path
from typing import Any

from endnotexml.audit.models import LogEvent
from endnotexml.utils import get_iso_timestamp

__all__ = ["AuditLogger"]

# file-level outcome events, tallied into the run summary
FILE_OUTCOMES = ("file_ingested", "file_skipped", "parse_failed")


class AuditLogger:
    """JSONL audit logger for one import run.

    Every event is flushed as soon as it is written. File-level outcomes
    are counted so that ``run_finished`` can summarize them.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event.
    log_path : Path
        Destination JSONL file (appended to, never truncated).
    outcomes : Counter[str]
        Number of ``file_ingested`` / ``file_skipped`` / ``parse_failed``
        events written so far.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        self.run_id = run_id
        self.log_path = log_path
        self.outcomes: Counter[str] = Counter()

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Flush and close the log file; safe to call more than once."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        file: str | None = None,
    ) -> None:
        """Append one event to the log.

        Parameters
        ----------
        event_type : str
            Event name (e.g. ``"file_ingested"``).
        data : dict[str, Any] | None, optional
            Event payload, by default empty.
        level : str, optional
            One of "DEBUG", "INFO", "WARN", "ERROR".
        file : str | None, optional
            Name of the input file the event is about.
        """
        if event_type in FILE_OUTCOMES:
            self.outcomes[event_type] += 1

        entry = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data if data is not None else {},
            file=file,
        )
        json.dump(asdict(entry), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log the command line and import configuration of the run."""
        self.event("run_started", data={"command": command, "parameters": parameters})

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        records_processed: int | None = None,
    ) -> None:
        """Log the end of the run with its file outcome summary.

        Parameters
        ----------
        status : str
            "success" or "failed".
        duration_seconds : float
            Wall-clock duration of the run.
        records_processed : int | None, optional
            Number of records written, omitted when the run failed early.
        """
        data: dict[str, Any] = {
            "status": status,
            "duration_seconds": duration_seconds,
            "files": {name: self.outcomes[name] for name in FILE_OUTCOMES},
        }
        if records_processed is not None:
            data["records_processed"] = records_processed

        self.event("run_finished", data=data)

    def file_ingested(
        self,
        file: str,
        format_detected: str,
        records: int,
        warnings: int = 0,
    ) -> None:
        """Log a successfully parsed file."""
        self.event(
            "file_ingested",
            data={"format": format_detected, "records": records, "warnings": warnings},
            file=file,
        )

    def file_skipped(self, file: str, reason_code: str) -> None:
        """Log a file that was not recognized as EndNote XML."""
        self.event("file_skipped", data={"reason_code": reason_code}, level="WARN", file=file)

    def parse_failed(self, file: str, exception_class: str, message: str) -> None:
        """Log a structural parse failure.

        Parameters
        ----------
        file : str
            Input file name.
        exception_class : str
            Class name of the underlying cause (e.g. ``XMLSyntaxError``).
        message : str
            Terminal error message of the parse.
        """
        self.event(
            "parse_failed",
            data={"exception_class": exception_class, "message": message},
            level="ERROR",
            file=file,
        )

    def error(
        self,
        exception_class: str,
        message: str,
        file: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Log an unexpected error not covered by the file outcome events."""
        data: dict[str, Any] = {"exception_class": exception_class, "message": message}
        if traceback is not None:
            data["traceback"] = traceback

        self.event("error", data=data, level="ERROR", file=file)
