"""Extraction sub-package: fragment lookup, record extraction, URL resolution."""

from .fragment import find_item_fragment, parse_document
from .record import extract_record, scan_containers, scan_images, scan_links
from .urlnorm import UnresolvableURLError, resolve_url

__all__ = [
    "UnresolvableURLError",
    "extract_record",
    "find_item_fragment",
    "parse_document",
    "resolve_url",
    "scan_containers",
    "scan_images",
    "scan_links",
]
