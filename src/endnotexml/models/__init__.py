"""Shared data types for endnotexml.

This package contains the record dataclass, the entry type and field
identifier enumerations, and the reference-type mapping table.
"""

from endnotexml.models.entry_types import (
    DEFAULT_ENTRY_TYPE,
    REF_TYPE_MAPPINGS,
    convert_ref_type,
)
from endnotexml.models.records import (
    ENDNOTE_LABEL,
    RECORD_JSON_SCHEMA,
    SCHEMA_VERSION,
    EndnoteRecord,
    EntryType,
    StandardField,
)

__all__ = [
    # Schema version
    "SCHEMA_VERSION",
    "RECORD_JSON_SCHEMA",
    # Record models
    "EndnoteRecord",
    "EntryType",
    "StandardField",
    "ENDNOTE_LABEL",
    # Entry types
    "DEFAULT_ENTRY_TYPE",
    "REF_TYPE_MAPPINGS",
    "convert_ref_type",
]
