"""EndNote XML export parser.

Documents look like ``<xml><records><record>...</record></records></xml>``.
Each ``<record>`` is parsed in a single forward pass over lxml ``iterparse``
events; fields are read from ``<style>`` runs nested at various depths.
Reference: EndNote XML DTD (``RSXML.dtd``) shipped with EndNote.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from lxml import etree

from endnotexml.config import ImportConfig
from endnotexml.models import EndnoteRecord, StandardField
from endnotexml.parse.base import EndnoteXmlError, ParseResult
from endnotexml.parse.events import END, START, Event, EventCursor, local_name
from endnotexml.parse.fields import RecordContext, dispatch_field

PARSER_NAME = "endnote_xml_parser"
PARSER_VERSION = "1.0.0"

RECORD_TAG = "record"


def build_record(ctx: RecordContext, config: ImportConfig) -> EndnoteRecord:
    """Materialize an immutable record from a closed record context.

    Parameters
    ----------
    ctx : RecordContext
        Accumulated type, fields and keywords.
    config : ImportConfig
        Supplies the keyword separator.

    Returns
    -------
    EndnoteRecord
        Record with the keyword list realized as the ``keywords`` field.
    """
    fields = dict(ctx.fields)
    if ctx.keywords:
        fields[StandardField.KEYWORDS] = config.join_keywords(ctx.keywords)

    return EndnoteRecord(
        entry_type=ctx.entry_type,
        fields=fields,
        keywords=tuple(ctx.keywords),
    )


def parse_record(
    cursor: EventCursor,
    record: etree._Element,
    config: ImportConfig,
) -> EndnoteRecord | None:
    """Parse one ``<record>`` element.

    Parameters
    ----------
    cursor : EventCursor
        Cursor positioned right after the start event of ``record``.
    record : etree._Element
        The record element.
    config : ImportConfig
        Import configuration.

    Returns
    -------
    EndnoteRecord | None
        The record, or None if the events ran out before it closed.
    """
    ctx = RecordContext()

    for kind, element in cursor.scope(record):
        if kind == START:
            dispatch_field(cursor, element, ctx)

    if cursor.exhausted:
        return None

    return build_record(ctx, config)


def scan_records(
    events: Iterable[Event],
    config: ImportConfig,
    warnings: list[str],
) -> list[EndnoteRecord]:
    """Walk a document's events and parse every ``<record>``.

    Parameters
    ----------
    events : Iterable[Event]
        ``(event, element)`` pairs with ``start`` and ``end`` events.
    config : ImportConfig
        Import configuration.
    warnings : list[str]
        Receives a message when a trailing record is dropped.

    Returns
    -------
    list[EndnoteRecord]
        Records in document order.
    """
    records: list[EndnoteRecord] = []
    cursor = EventCursor(events)

    for kind, element in cursor:
        if kind != START or local_name(element) != RECORD_TAG:
            continue

        rec = parse_record(cursor, element, config)
        if rec is None:
            warnings.append(f"Input ended inside record {len(records)}; record dropped")
            break

        records.append(rec)
        _release(element)

    return records


def _release(element: etree._Element) -> None:
    # Free the parsed subtree and already processed siblings.
    element.clear(keep_tail=True)
    parent = element.getparent()
    if parent is not None:
        while element.getprevious() is not None:
            del parent[0]


def iter_events(source: str | Path | BinaryIO, config: ImportConfig) -> Iterable[Event]:
    """Create a hardened lxml event stream over ``source``."""
    if isinstance(source, Path):
        source = str(source)

    return etree.iterparse(
        source,
        events=(START, END),
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=config.huge_tree,
    )


def read_records(
    source: str | Path | BinaryIO,
    config: ImportConfig | None = None,
) -> ParseResult:
    """Parse an EndNote XML document, raising on structural failure.

    Parameters
    ----------
    source : str | Path | BinaryIO
        File path or binary stream.
    config : ImportConfig | None, optional
        Import configuration, by default ``ImportConfig()``.

    Returns
    -------
    ParseResult
        Records and warnings; ``errors`` is always empty.

    Raises
    ------
    EndnoteXmlError
        On malformed markup or a failing/closed input stream.
    """
    if config is None:
        config = ImportConfig()

    warnings: list[str] = []

    try:
        records = scan_records(iter_events(source, config), config, warnings)
    # ValueError: reading from a stream closed by the caller
    except (etree.LxmlError, OSError, ValueError) as e:
        raise EndnoteXmlError(f"Could not parse document: {e}") from e

    return ParseResult(records, warnings, [])


def parse_endnote_xml(
    source: str | Path | BinaryIO,
    config: ImportConfig | None = None,
) -> ParseResult:
    """Parse an EndNote XML document and return records or a terminal error.

    Never returns a partial record list together with an error: on a
    structural failure ``records`` is empty and ``errors`` holds exactly
    one message.

    Parameters
    ----------
    source : str | Path | BinaryIO
        File path or binary stream.
    config : ImportConfig | None, optional
        Import configuration, by default ``ImportConfig()``.

    Returns
    -------
    ParseResult
        Records, warnings, and errors.
    """
    try:
        return read_records(source, config)
    except EndnoteXmlError as e:
        return ParseResult([], [], [str(e)])
