"""Forward-only XML event cursor and style-text extraction.

The parser consumes ``(event, element)`` pairs as produced by
``lxml.etree.iterparse(events=("start", "end"))``. Every sub-parser owns
one element subtree and walks it through ``EventCursor.scope``, which ends
on the end event of that very element (identity, not name), so same-named
elements elsewhere in the tree never close a scope early.
"""

from collections.abc import Iterable, Iterator

from lxml import etree

START = "start"
END = "end"

STYLE_TAG = "style"

Event = tuple[str, etree._Element]


def local_name(element: etree._Element) -> str:
    """Return the namespace-free tag name of an element."""
    return etree.QName(element).localname


def is_start(event: Event, name: str) -> bool:
    """Check for a start event of an element with the given local name."""
    kind, element = event
    return kind == START and local_name(element) == name


def is_end(event: Event, name: str) -> bool:
    """Check for an end event of an element with the given local name."""
    kind, element = event
    return kind == END and local_name(element) == name


class EventCursor:
    """Single-pass cursor over XML start/end events.

    Attributes
    ----------
    exhausted : bool
        Set once the underlying event source ran out inside an open scope.
    """

    def __init__(self, events: Iterable[Event]) -> None:
        self._events = iter(events)
        self.exhausted = False

    def __iter__(self) -> Iterator[Event]:
        return self._events

    def scope(self, element: etree._Element) -> Iterator[Event]:
        """Yield the events inside ``element``.

        Must be called right after the start event of ``element`` was
        consumed. Iteration stops after the matching end event, which is
        consumed but not yielded. Sub-parsers invoked while iterating pull
        from the same underlying source, so nested scopes compose.

        Parameters
        ----------
        element : etree._Element
            Element whose start event was just consumed.

        Yields
        ------
        Event
            Start and end events of the element's descendants.
        """
        for kind, current in self._events:
            if kind == END and current is element:
                return
            yield kind, current
        self.exhausted = True

    def skip(self, element: etree._Element) -> None:
        """Consume the rest of ``element`` without looking at it."""
        for _ in self.scope(element):
            pass


def read_style_text(cursor: EventCursor, style: etree._Element) -> str | None:
    """Extract the character content of a style run.

    The text is the character data directly following the ``<style>`` start
    tag. Anything nested inside the style element is consumed and ignored.

    Parameters
    ----------
    cursor : EventCursor
        Cursor positioned right after the start event of ``style``.
    style : etree._Element
        The ``<style>`` element.

    Returns
    -------
    str | None
        Text of the run, or None when the run has no leading text.
    """
    cursor.skip(style)
    return style.text


def first_style_text(cursor: EventCursor, element: etree._Element) -> str | None:
    """Return the first style text found inside ``element``.

    Empty runs are skipped. The whole element is consumed; runs after the
    first text are ignored.
    """
    text: str | None = None
    for event in cursor.scope(element):
        if text is None and is_start(event, STYLE_TAG):
            text = read_style_text(cursor, event[1])
    return text


def iter_style_texts(cursor: EventCursor, element: etree._Element) -> Iterator[str]:
    """Yield the text of every non-empty style run inside ``element``."""
    for event in cursor.scope(element):
        if is_start(event, STYLE_TAG):
            text = read_style_text(cursor, event[1])
            if text is not None:
                yield text
