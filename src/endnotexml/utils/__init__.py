"""Common utility functions for endnotexml.

Hashing and timestamp helpers shared by ingestion and audit logging.
"""

from endnotexml.utils.hashing import calculate_file_digest, format_sha256
from endnotexml.utils.timestamps import format_utc, get_file_mtime, get_iso_timestamp

__all__ = [
    "format_utc",
    "get_iso_timestamp",
    "get_file_mtime",
    "calculate_file_digest",
    "format_sha256",
]
