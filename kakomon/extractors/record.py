"""Item record extraction from a located fragment.

The fragment is scanned three times, each scan covering every descendant
that matches its selector:

1. ``<a href>``            -> resolved URL lines
2. ``<div class=...>``      -> statement line, title text, numbered choices
3. ``<img src>``            -> resolved URL lines

Lines are collected per scan and concatenated in that fixed order, so a link
that appears after the statement in the markup still comes first in the
output.  An element matched by more than one scan contributes to each.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from bs4 import Tag
from bs4.element import (
    CData,
    NavigableString,
    RubyParenthesisString,
    RubyTextString,
    Script,
    Stylesheet,
    TemplateString,
)

from kakomon.extractors.fragment import CONTAINER_TAG
from kakomon.extractors.urlnorm import UnresolvableURLError, resolve_url
from kakomon.items import ItemRecord
from kakomon.settings import CHOICE_SELECTOR, DEFAULT_MARKERS, Markers

logger = logging.getLogger(__name__)

# Every text node kind except comments and doctypes
_TEXT_TYPES = (
    NavigableString,
    CData,
    Script,
    Stylesheet,
    TemplateString,
    RubyTextString,
    RubyParenthesisString,
)


class ContainerScan(NamedTuple):
    """Output of :func:`scan_containers`."""

    lines: list[str]
    title_parts: list[str]


def element_text(tag: Tag) -> str:
    """All descendant text of *tag* joined with no separator, comments excluded."""
    return tag.get_text("", types=_TEXT_TYPES)


def _resolved_lines(
    fragment: Tag,
    tag_name: str,
    attr: str,
    base_url: str,
) -> list[str]:
    lines: list[str] = []
    for el in fragment.find_all(tag_name):
        if not isinstance(el, Tag):
            continue
        ref = el.get(attr)
        if ref is None:
            logger.debug("Skipping <%s> without %s", tag_name, attr)
            continue
        try:
            url = resolve_url(base_url, str(ref))
        except UnresolvableURLError as exc:
            logger.warning("Skipping <%s %s=%r>: %s", tag_name, attr, ref, exc)
            continue
        lines.append(url + "\n")
    return lines


def scan_links(fragment: Tag, base_url: str) -> list[str]:
    """One line per ``<a href>`` in *fragment*, resolved against *base_url*."""
    return _resolved_lines(fragment, "a", "href", base_url)


def scan_images(fragment: Tag, base_url: str) -> list[str]:
    """One line per ``<img src>`` in *fragment*, resolved against *base_url*."""
    return _resolved_lines(fragment, "img", "src", base_url)


def number_choices(container: Tag) -> list[str]:
    """Number the list items of a choices container, starting at 1."""
    return [
        f"{idx}. {element_text(li)}\n"
        for idx, li in enumerate(container.select(CHOICE_SELECTOR), start=1)
    ]


def scan_containers(fragment: Tag, markers: Markers = DEFAULT_MARKERS) -> ContainerScan:
    """Classify every container in *fragment* by its exact ``class`` value."""
    lines: list[str] = []
    title_parts: list[str] = []

    for div in fragment.find_all(CONTAINER_TAG):
        if not isinstance(div, Tag):
            continue
        cls = div.get("class")
        if cls is None:
            continue
        if cls == markers.statement:
            lines.append(element_text(div) + "\n")
        elif cls == markers.title:
            title_parts.append(element_text(div))
        elif cls == markers.choices:
            lines.extend(number_choices(div))

    return ContainerScan(lines=lines, title_parts=title_parts)


def extract_record(
    fragment: Tag,
    base_url: str,
    markers: Markers = DEFAULT_MARKERS,
) -> ItemRecord:
    """Build an :class:`~kakomon.items.ItemRecord` from *fragment*.

    Args:
        fragment: Container returned by
                  :func:`~kakomon.extractors.fragment.find_item_fragment`.
        base_url: Absolute URL of the page, used to resolve relative links
                  and image sources.
        markers:  Class names identifying statement, title and choices.

    Returns:
        The record.  Fields are empty strings when the corresponding parts
        are missing from the fragment.
    """
    segments: list[str] = []
    segments.extend(scan_links(fragment, base_url))
    containers = scan_containers(fragment, markers)
    segments.extend(containers.lines)
    segments.extend(scan_images(fragment, base_url))

    return ItemRecord(title="".join(containers.title_parts), text="".join(segments))
