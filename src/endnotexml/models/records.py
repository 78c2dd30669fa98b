"""Record data models for endnotexml.

This module defines the output schema of the importer: the entry type
enumeration, the well-known field identifiers, and the immutable record
emitted once per EndNote ``<record>`` element.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

# Schema version constant
SCHEMA_VERSION = "1.0.0"


class EntryType(StrEnum):
    """Canonical entry types a record can resolve to.

    Attributes
    ----------
    ARTICLE : str
        Journal article (default for unmapped reference types).
    BOOK : str
        Whole book.
    INBOOK : str
        Section or chapter of a book.
    MISC : str
        Artwork, generic and other loosely typed works.
    ELECTRONIC : str
        Electronic article.
    REPORT : str
        Technical or institutional report.
    """

    ARTICLE = "article"
    BOOK = "book"
    INBOOK = "inbook"
    MISC = "misc"
    ELECTRONIC = "electronic"
    REPORT = "report"


class StandardField(StrEnum):
    """Well-known field identifiers.

    Members compare equal to their string values, so free-form identifiers
    (plain strings such as ``"endnote-label"``) live in the same field map.
    """

    AUTHOR = "author"
    TITLE = "title"
    JOURNAL = "journal"
    YEAR = "year"
    PAGES = "pages"
    VOLUME = "volume"
    NUMBER = "number"
    NOTE = "note"
    ABSTRACT = "abstract"
    ISBN = "isbn"
    DOI = "doi"
    PUBLISHER = "publisher"
    URL = "url"
    FILE = "file"
    KEYWORDS = "keywords"


ENDNOTE_LABEL = "endnote-label"

RECORD_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "EndnoteRecord",
    "type": "object",
    "required": ["schema_version", "entry_type", "fields", "keywords"],
    "additionalProperties": False,
    "properties": {
        "schema_version": {"type": "string"},
        "entry_type": {"enum": [t.value for t in EntryType]},
        "fields": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "keywords": {"type": "array", "items": {"type": "string"}},
    },
}


@dataclass(frozen=True)
class EndnoteRecord:
    """Immutable bibliographic record built from one ``<record>`` element.

    Attributes
    ----------
    entry_type : EntryType
        Canonical entry type resolved from ``ref-type``.
    fields : Mapping[str, str]
        Read-only field identifier -> value mapping. Absent fields are
        absent keys, never ``None`` values.
    keywords : tuple[str, ...]
        Keywords in encounter order, duplicates preserved.
    """

    entry_type: EntryType = EntryType.ARTICLE
    fields: Mapping[str, str] = field(default_factory=dict)
    keywords: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the field mapping."""
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "keywords", tuple(self.keywords))

    def get(self, field_id: str) -> str | None:
        """Return a field value, or None when the field is absent."""
        return self.fields.get(field_id)

    @property
    def keywords_field(self) -> str | None:
        """Keyword list as realized with the import's separator."""
        return self.fields.get(StandardField.KEYWORDS)

    def to_dict(self) -> dict[str, Any]:
        """Convert record to dictionary for JSON serialization.

        Returns
        -------
        dict[str, Any]
            Dictionary representation matching ``RECORD_JSON_SCHEMA``.
        """
        return {
            "schema_version": SCHEMA_VERSION,
            "entry_type": self.entry_type.value,
            "fields": {str(k): v for k, v in self.fields.items()},
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EndnoteRecord":
        """Reconstruct a record from a dictionary.

        Parameters
        ----------
        data : dict[str, Any]
            Dictionary (e.g. from JSON) produced by ``to_dict``.

        Returns
        -------
        EndnoteRecord
            Reconstructed record.
        """
        return cls(
            entry_type=EntryType(data.get("entry_type", EntryType.ARTICLE.value)),
            fields=data.get("fields", {}),
            keywords=tuple(data.get("keywords", ())),
        )
