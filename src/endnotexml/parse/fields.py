"""Field sub-parsers and the record-level dispatch table.

Each sub-parser is called right after the start event of the element it
owns, consumes that element's subtree through the cursor, and writes its
result into the record's ``RecordContext``.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from lxml import etree

from endnotexml.models import (
    DEFAULT_ENTRY_TYPE,
    ENDNOTE_LABEL,
    EntryType,
    StandardField,
    convert_ref_type,
)
from endnotexml.parse.events import (
    END,
    START,
    STYLE_TAG,
    EventCursor,
    first_style_text,
    is_start,
    iter_style_texts,
    local_name,
    read_style_text,
)
from endnotexml.parse.text import clean_text, normalize_field_value

AUTHOR_SEPARATOR = " and "


@dataclass
class RecordContext:
    """Accumulation state of one record while it is being parsed.

    Attributes
    ----------
    entry_type : EntryType
        Entry type resolved so far.
    fields : dict[str, str]
        Field identifier -> value; later writes win.
    keywords : list[str]
        Keywords in encounter order.
    """

    entry_type: EntryType = DEFAULT_ENTRY_TYPE
    fields: dict[str, str] = field(default_factory=dict)
    keywords: list[str] = field(default_factory=list)

    def put(self, field_id: str, value: str | None) -> None:
        """Set a field unless the value is None."""
        if value is not None:
            self.fields[field_id] = value


Handler = Callable[[EventCursor, etree._Element, RecordContext], None]


def parse_ref_type(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> None:
    """Resolve the entry type from the ``name`` attribute of ``ref-type``."""
    ctx.entry_type = convert_ref_type(element.get("name"))
    cursor.skip(element)


def parse_authors(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> None:
    """Collect ``author`` names inside ``contributors`` into the author field.

    The field is set even when no author is found (empty string).
    """
    names: list[str] = []
    for event in cursor.scope(element):
        if is_start(event, "author"):
            name = first_style_text(cursor, event[1])
            if name is not None:
                names.append(name)
    ctx.fields[StandardField.AUTHOR] = AUTHOR_SEPARATOR.join(names)


def parse_style_field(
    cursor: EventCursor,
    element: etree._Element,
    ctx: RecordContext,
    *,
    field_id: str,
) -> None:
    """Store the style text found inside ``element`` as ``field_id``.

    Every style run with text overwrites the previous one. The value is
    normalized with the target field's policy.

    Parameters
    ----------
    cursor : EventCursor
        Cursor positioned right after the start event of ``element``.
    element : etree._Element
        Enclosing element (e.g. ``pages``, ``abstract``).
    ctx : RecordContext
        Record being built.
    field_id : str
        Target field identifier.
    """
    for text in iter_style_texts(cursor, element):
        ctx.put(field_id, normalize_field_value(field_id, text))


def parse_titles(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> None:
    """Handle ``titles``: ``title`` and ``secondary-title`` (journal).

    A title may be split over several style runs; they are concatenated
    and then cleaned.
    """
    for kind, child in cursor.scope(element):
        if kind != START:
            continue
        name = local_name(child)
        if name == "title":
            runs = list(iter_style_texts(cursor, child))
            if runs:
                ctx.put(StandardField.TITLE, clean_text("".join(runs)))
        elif name == "secondary-title":
            parse_style_field(cursor, child, ctx, field_id=StandardField.JOURNAL)


def parse_dates(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> None:
    """Take the year from the style runs seen before ``year`` closes.

    Style runs may sit at any depth below ``dates``; the last one before the
    first ``year`` end tag wins. Without a ``year`` end tag (e.g. only
    ``pub-dates``) the year stays unset, and runs after it are ignored.
    """
    candidate: str | None = None
    year_closed = False
    for kind, child in cursor.scope(element):
        if year_closed:
            continue
        if kind == START and local_name(child) == STYLE_TAG:
            text = read_style_text(cursor, child)
            if text is not None:
                candidate = text
        elif kind == END and local_name(child) == "year":
            year_closed = True
            ctx.put(StandardField.YEAR, candidate)


def parse_urls(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> None:
    """Handle ``urls``: ``related-urls`` set url, ``pdf-urls`` set file."""
    for kind, child in cursor.scope(element):
        if kind != START:
            continue
        name = local_name(child)
        if name == "related-urls":
            # first run per element; a later related-urls overwrites
            ctx.put(StandardField.URL, first_style_text(cursor, child))
        elif name == "pdf-urls":
            _parse_pdf_urls(cursor, child, ctx)


def _parse_pdf_urls(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> None:
    for event in cursor.scope(element):
        if is_start(event, "url"):
            _parse_pdf_url(cursor, event[1], ctx)


def _parse_pdf_url(cursor: EventCursor, url: etree._Element, ctx: RecordContext) -> None:
    # A pdf url is either wrapped in <style> or given as bare character data.
    styled = False
    for event in cursor.scope(url):
        if is_start(event, STYLE_TAG):
            styled = True
            ctx.put(StandardField.FILE, read_style_text(cursor, event[1]))

    if not styled:
        ctx.put(StandardField.FILE, url.text)


def parse_keywords(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> None:
    """Append each ``keyword``'s style text to the keyword list."""
    for event in cursor.scope(element):
        if is_start(event, "keyword"):
            keyword = first_style_text(cursor, event[1])
            if keyword is not None:
                ctx.keywords.append(keyword)


def _style_field(field_id: str) -> Handler:
    return partial(parse_style_field, field_id=field_id)


# record child element -> handler; anything else is ignored
FIELD_HANDLERS: dict[str, Handler] = {
    "ref-type": parse_ref_type,
    "contributors": parse_authors,
    "titles": parse_titles,
    "pages": _style_field(StandardField.PAGES),
    "volume": _style_field(StandardField.VOLUME),
    "number": _style_field(StandardField.NUMBER),
    "notes": _style_field(StandardField.NOTE),
    "abstract": _style_field(StandardField.ABSTRACT),
    "isbn": _style_field(StandardField.ISBN),
    "publisher": _style_field(StandardField.PUBLISHER),
    "electronic-resource-num": _style_field(StandardField.DOI),
    "label": _style_field(ENDNOTE_LABEL),
    "dates": parse_dates,
    "urls": parse_urls,
    "keywords": parse_keywords,
}


def dispatch_field(cursor: EventCursor, element: etree._Element, ctx: RecordContext) -> bool:
    """Route a start event inside a record to its sub-parser.

    Parameters
    ----------
    cursor : EventCursor
        Cursor positioned right after the start event of ``element``.
    element : etree._Element
        Element that just started.
    ctx : RecordContext
        Record being built.

    Returns
    -------
    bool
        True if a handler consumed the element, False if it was ignored
        (its descendants are then still seen by the caller).
    """
    handler = FIELD_HANDLERS.get(local_name(element))
    if handler is None:
        return False
    handler(cursor, element, ctx)
    return True
