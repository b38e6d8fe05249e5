"""Locate the item fragment inside a page."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from kakomon.settings import DEFAULT_MARKERS

logger = logging.getLogger(__name__)

# Generic container tag the markers are attached to
CONTAINER_TAG = "div"


def parse_document(html: str) -> BeautifulSoup:
    """Parse *html* leniently into a traversable tree.

    ``class`` is kept as the literal attribute string instead of being split
    into a list, so markers are compared against the exact source value.
    """
    return BeautifulSoup(html or "", "lxml", multi_valued_attributes=None)


def has_exact_class(tag: Tag, value: str) -> bool:
    """Return True if the ``class`` attribute of *tag* is exactly *value*."""
    return tag.get("class") == value


def find_item_fragment(
    document: str | BeautifulSoup,
    marker: str = DEFAULT_MARKERS.fragment,
) -> Tag | None:
    """Return the first container whose ``class`` is exactly *marker*.

    *document* is either raw HTML or a tree from :func:`parse_document`.
    The search stops at the first match in document order.

    A tree must come from :func:`parse_document`.  A ``BeautifulSoup``
    built with default settings splits ``class`` into a list, which never
    equals *marker*, so nothing is found in it.
    """
    soup = parse_document(document) if isinstance(document, str) else document
    found = soup.find(
        lambda tag: tag.name == CONTAINER_TAG and has_exact_class(tag, marker),
    )
    if not isinstance(found, Tag):
        logger.debug("No <%s class=%r> fragment in document", CONTAINER_TAG, marker)
        return None
    return found
