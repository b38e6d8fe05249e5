"""Resolution of link and image references against the page they appear on."""

from __future__ import annotations

import re
from urllib.parse import SplitResult, quote, urljoin, urlsplit, urlunsplit

_DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443, "ftp": 21, "ws": 80, "wss": 443}

# Schemes whose string form always carries a path, "/" at minimum
_HIERARCHICAL_SCHEMES: frozenset[str] = frozenset(
    {"http", "https", "ftp", "ws", "wss", "file"},
)

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")

# Characters left untouched when percent-encoding each component.  "%" is
# kept so existing escapes survive a second pass.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~[]|^\\"
_QUERY_SAFE = _PATH_SAFE + "?{}`"
_FRAGMENT_SAFE = _QUERY_SAFE + "#"


class UnresolvableURLError(ValueError):
    """Raised when a reference cannot be turned into a URL at all."""

    def __init__(self, message: str, href: str = "") -> None:
        super().__init__(message)
        self.href = href


def resolve_url(base: str, href: str) -> str:
    """Return *href* as an absolute URL string.

    An *href* that already carries a scheme is returned in normalized form
    and *base* is ignored.  Anything else is joined against *base* following
    RFC 3986 reference resolution.

    Raises:
        UnresolvableURLError: *href* is empty, contains control characters,
            or is rejected by the URL splitter.
    """
    reference = href.strip()
    if not reference:
        raise UnresolvableURLError("empty URL reference", href=href)
    if _CONTROL_CHARS_RE.search(reference):
        raise UnresolvableURLError(
            f"control character in URL reference {reference!r}", href=href,
        )

    try:
        parsed = urlsplit(reference)
        if parsed.scheme:
            return _normalize(parsed)
        return _normalize(urlsplit(urljoin(base, reference)))
    except ValueError as exc:
        raise UnresolvableURLError(
            f"cannot resolve {reference!r} against {base!r}: {exc}", href=href,
        ) from exc


def _normalize(parsed: SplitResult) -> str:
    """Canonical string form of an absolute URL.

    - Lowercase scheme and host
    - Remove default ports
    - Give hierarchical URLs with an authority at least a "/" path
    - Percent-encode spaces and non-ASCII characters
    """
    scheme = parsed.scheme.lower()
    netloc = _normalize_netloc(scheme, parsed.netloc)

    path = parsed.path
    if not path and netloc and scheme in _HIERARCHICAL_SCHEMES:
        path = "/"

    return urlunsplit(
        SplitResult(
            scheme=scheme,
            netloc=netloc,
            path=quote(path, safe=_PATH_SAFE),
            query=quote(parsed.query, safe=_QUERY_SAFE),
            fragment=quote(parsed.fragment, safe=_FRAGMENT_SAFE),
        ),
    )


def _normalize_netloc(scheme: str, netloc: str) -> str:
    userinfo, at, hostport = netloc.rpartition("@")
    hostport = hostport.lower()

    # Strip default port from netloc
    if ":" in hostport:
        host, _, port_str = hostport.rpartition(":")
        try:
            port = int(port_str)
            if _DEFAULT_PORTS.get(scheme) == port:
                hostport = host
        except ValueError:
            pass

    if not hostport.isascii():
        try:
            hostport = hostport.encode("idna").decode("ascii")
        except UnicodeError:
            hostport = quote(hostport, safe="[]:")

    return f"{userinfo}{at}{hostport}"
