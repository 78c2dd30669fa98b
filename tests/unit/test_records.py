"""Unit tests for record models and entry type mapping."""

import dataclasses
import json

import jsonschema
import pytest

from endnotexml.models import (
    RECORD_JSON_SCHEMA,
    REF_TYPE_MAPPINGS,
    EndnoteRecord,
    EntryType,
    StandardField,
    convert_ref_type,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("book", EntryType.BOOK),
        ("Book", EntryType.BOOK),
        ("  book\t", EntryType.BOOK),
        ("ELECTRONIC ARTICLE", EntryType.ELECTRONIC),
        ("Book Section", EntryType.INBOOK),
        ("report", EntryType.REPORT),
        ("artwork", EntryType.MISC),
        ("Generic", EntryType.MISC),
        ("Journal Article", EntryType.ARTICLE),
        ("Thesis", EntryType.ARTICLE),
        ("", EntryType.ARTICLE),
        (None, EntryType.ARTICLE),
    ],
)
def test_convert_ref_type(name: str | None, expected: EntryType) -> None:
    """Test lookup is case-insensitive, trimmed and defaults to Article."""
    assert convert_ref_type(name) == expected


@pytest.mark.unit
def test_ref_type_table_keys_are_lowercase() -> None:
    """Test table keys are normalized so trimmed lowercase lookup can hit them."""
    assert all(key == key.strip().lower() for key in REF_TYPE_MAPPINGS)


@pytest.mark.unit
def test_record_is_immutable() -> None:
    """Test records cannot be mutated after construction."""
    source = {"title": "T"}
    rec = EndnoteRecord(EntryType.BOOK, source, ("k",))

    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.entry_type = EntryType.ARTICLE  # type: ignore[misc]

    with pytest.raises(TypeError):
        rec.fields["title"] = "changed"  # type: ignore[index]

    source["title"] = "changed"
    assert rec.fields["title"] == "T"


@pytest.mark.unit
def test_record_defaults() -> None:
    """Test a bare record is an empty article."""
    rec = EndnoteRecord()
    assert rec.entry_type == EntryType.ARTICLE
    assert rec.fields == {}
    assert rec.keywords == ()
    assert rec.keywords_field is None
    assert rec.get("title") is None


@pytest.mark.unit
def test_record_to_dict_matches_schema() -> None:
    """Test dict form validates against the published JSON schema."""
    rec = EndnoteRecord(
        EntryType.INBOOK,
        {StandardField.TITLE: "T", "endnote-label": "L", StandardField.KEYWORDS: "a, b"},
        ("a", "b"),
    )
    data = rec.to_dict()

    jsonschema.validate(instance=data, schema=RECORD_JSON_SCHEMA)
    assert data["entry_type"] == "inbook"
    assert data["fields"] == {"title": "T", "endnote-label": "L", "keywords": "a, b"}
    assert json.loads(json.dumps(data)) == data


@pytest.mark.unit
def test_schema_rejects_non_string_field_values() -> None:
    """Test the schema forbids null field values."""
    data = EndnoteRecord(fields={"title": "T"}).to_dict()
    data["fields"]["year"] = None

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=data, schema=RECORD_JSON_SCHEMA)


@pytest.mark.unit
def test_record_from_dict_restores_record() -> None:
    """Test from_dict reverses to_dict."""
    rec = EndnoteRecord(EntryType.REPORT, {"title": "T", "year": "2001"}, ("x", "x"))
    restored = EndnoteRecord.from_dict(rec.to_dict())

    assert restored == rec
    assert restored.entry_type is EntryType.REPORT
