"""kakomon.query - single-page fetch and item extraction API.

Uses only the stdlib (``urllib``) for HTTP.  Each call makes exactly one
request; there is no retry.

Basic usage::

    from kakomon.query import fetch

    record = fetch("https://www.ap-siken.com/")
    if record is not None:
        print(record.title)
        print(record.text)

Low-level access::

    from kakomon.query import fetch_html, extract

    html = fetch_html("https://www.ap-siken.com/")
    record = extract(html, url="https://www.ap-siken.com/")
"""

from __future__ import annotations

import gzip
import logging
import urllib.error
import urllib.request
import zlib
from urllib.parse import urlparse

from kakomon.extractors.fragment import find_item_fragment, parse_document
from kakomon.extractors.record import extract_record
from kakomon.items import ItemRecord, Page
from kakomon.settings import DEFAULT_MARKERS, DOWNLOAD_TIMEOUT, USER_AGENT, Markers

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# HTTP fetch
# ---------------------------------------------------------------------------

def fetch_html(
    url: str,
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
    user_agent: str | None = None,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Args:
        url:        Fully-qualified HTTP/HTTPS URL.
        timeout:    Request timeout in seconds.
        user_agent: Override the default User-Agent string.

    Raises:
        FetchError: On HTTP errors, connection failures, or invalid URLs.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or USER_AGENT,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw: bytes = resp.read()
            html = _decode_response_body(raw, resp.headers, url)
    except urllib.error.HTTPError as exc:
        raise FetchError(
            f"HTTP {exc.code} fetching {url}: {exc.reason}", url=url, status=exc.code,
        ) from exc
    except urllib.error.URLError as exc:
        raise FetchError(f"URL error fetching {url}: {exc.reason}", url=url) from exc
    except OSError as exc:
        raise FetchError(f"Network error fetching {url}: {exc}", url=url) from exc

    logger.debug("Fetched %s (%d chars)", url, len(html))
    return html


def fetch_page(
    url: str,
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
    user_agent: str | None = None,
) -> Page:
    """Fetch *url* and wrap the body in a :class:`~kakomon.items.Page`."""
    return Page(url=url, html=fetch_html(url, timeout=timeout, user_agent=user_agent))


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract(html: str, url: str, markers: Markers = DEFAULT_MARKERS) -> ItemRecord | None:
    """Extract the item record from pre-fetched *html* - no network calls.

    Args:
        html:    Raw HTML of the page.
        url:     Absolute URL the page was fetched from; relative links and
                 image sources are resolved against it.
        markers: Class names identifying the fragment and its parts.

    Returns:
        The :class:`~kakomon.items.ItemRecord`, or ``None`` when the page has
        no fragment.
    """
    fragment = find_item_fragment(parse_document(html), marker=markers.fragment)
    if fragment is None:
        return None
    return extract_record(fragment, url, markers)


def extract_page(page: Page, markers: Markers = DEFAULT_MARKERS) -> ItemRecord | None:
    return extract(page.html, page.url, markers)


def fetch(
    url: str,
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
    user_agent: str | None = None,
    markers: Markers = DEFAULT_MARKERS,
) -> ItemRecord | None:
    """Fetch *url* and extract its item record.

    Raises:
        FetchError: When the page cannot be fetched.
    """
    page = fetch_page(url, timeout=timeout, user_agent=user_agent)
    return extract_page(page, markers)
