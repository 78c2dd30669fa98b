"""Field value normalization policies.

EndNote exports are inconsistent about surrounding whitespace and embedded
line breaks. Each target field has a fixed policy; fields without an entry
are stored verbatim.
"""

import re
from enum import StrEnum

from endnotexml.models import StandardField

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
MULTI_SPACE_RE = re.compile(r" +")


class TextPolicy(StrEnum):
    """How a raw style text is turned into a field value.

    Attributes
    ----------
    VERBATIM : str
        Stored exactly as read.
    TRIM : str
        Leading and trailing whitespace removed.
    CLEAN : str
        Line breaks become spaces, trimmed, space runs collapsed.
    """

    VERBATIM = "verbatim"
    TRIM = "trim"
    CLEAN = "clean"


FIELD_POLICIES: dict[str, TextPolicy] = {
    StandardField.ABSTRACT: TextPolicy.TRIM,
    StandardField.DOI: TextPolicy.TRIM,
    StandardField.NOTE: TextPolicy.TRIM,
    StandardField.ISBN: TextPolicy.CLEAN,
    StandardField.JOURNAL: TextPolicy.CLEAN,
}


def clean_text(text: str) -> str:
    """Unify line breaks to spaces, trim, and collapse repeated spaces.

    Parameters
    ----------
    text : str
        Raw text.

    Returns
    -------
    str
        Cleaned single-line text.
    """
    text = LINE_BREAK_RE.sub(" ", text).strip()
    return MULTI_SPACE_RE.sub(" ", text)


def apply_policy(policy: TextPolicy, text: str) -> str:
    """Apply a normalization policy to raw text."""
    if policy is TextPolicy.TRIM:
        return text.strip()
    if policy is TextPolicy.CLEAN:
        return clean_text(text)
    return text


def normalize_field_value(field_id: str, text: str) -> str:
    """Normalize a raw value according to the target field's policy.

    Parameters
    ----------
    field_id : str
        Target field identifier.
    text : str
        Raw style text.

    Returns
    -------
    str
        Normalized value.
    """
    return apply_policy(FIELD_POLICIES.get(field_id, TextPolicy.VERBATIM), text)
