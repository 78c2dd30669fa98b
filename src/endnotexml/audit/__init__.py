"""Structured audit logging for import runs.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: Run identifier factory
"""

from endnotexml.audit.helpers import generate_run_id
from endnotexml.audit.logger import AuditLogger
from endnotexml.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
]
