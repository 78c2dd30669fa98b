"""EndNote reference-type name to entry type mapping.

Lookup is case-insensitive and whitespace-trimmed. Names missing from the
table resolve to ``EntryType.ARTICLE``.
"""

from endnotexml.models.records import EntryType

# ref-type name (lowercase) -> entry type
REF_TYPE_MAPPINGS: dict[str, EntryType] = {
    "artwork": EntryType.MISC,
    "generic": EntryType.MISC,
    "electronic article": EntryType.ELECTRONIC,
    "book section": EntryType.INBOOK,
    "book": EntryType.BOOK,
    "report": EntryType.REPORT,
}

DEFAULT_ENTRY_TYPE = EntryType.ARTICLE


def convert_ref_type(ref_name: str | None) -> EntryType:
    """Resolve an EndNote ``ref-type`` name to an entry type.

    Parameters
    ----------
    ref_name : str | None
        Value of the ``name`` attribute, if any.

    Returns
    -------
    EntryType
        Mapped entry type, or ``DEFAULT_ENTRY_TYPE`` if unmapped.
    """
    if ref_name is None:
        return DEFAULT_ENTRY_TYPE
    return REF_TYPE_MAPPINGS.get(ref_name.strip().lower(), DEFAULT_ENTRY_TYPE)
