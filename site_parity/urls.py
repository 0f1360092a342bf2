# File: site_parity/urls.py
"""site_parity.urls: resolution, canonicalization and classification of link URLs.

Resolution rules, checked in order:

1. ``mailto:``/``tel:`` (also ``javascript:``/``data:``) → :class:`NonNavigableReference`;
2. ``scheme://...`` → already absolute;
3. ``//host/...`` → base scheme prepended;
4. ``/path`` → rooted at the base origin;
5. anything else → joined to the origin root (``ResolutionMode.ROOT``), so
   ``img.png`` on ``/blog/post`` becomes ``/img.png``. ``ResolutionMode.DOCUMENT``
   switches to standard RFC 3986 resolution (``/blog/img.png``).

The canonical form drops query string and fragment, so ``?utm=...`` and
``#section`` variants of one resource share a single identity.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Final, Sequence
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from site_parity.errors import InvalidReference, NonNavigableReference
from site_parity.models import LinkOrigin

__all__: Sequence[str] = (
    "ResolutionMode",
    "resolve",
    "canonicalize",
    "normalize",
    "classify",
    "host_of",
    "ensure_scheme",
)

_SCHEME_RE: Final = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")
_NON_NAVIGABLE: Final[tuple[str, ...]] = ("mailto:", "tel:", "javascript:", "data:")
_DEFAULT_PORTS: Final[dict[str, int]] = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_FORBIDDEN_HOST_CHARS: Final = frozenset(" \t\n<>\"{}|\\^`%")
_PATH_SAFE: Final = "/%:@!$&'()*+,;=-._~"


class ResolutionMode(str, Enum):
    ROOT = "root"
    DOCUMENT = "document"


def _origin(base_url: str) -> tuple[str, str]:
    try:
        parts = urlsplit(base_url)
    except ValueError as exc:
        raise InvalidReference(f"Invalid base URL: {base_url}") from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidReference(f"Base URL is not absolute: {base_url}")
    # userinfo is not part of the origin
    return parts.scheme, parts.netloc.rpartition("@")[2]


def resolve(base_url: str, reference: str, mode: ResolutionMode = ResolutionMode.ROOT) -> str:
    """Turn *reference* into an absolute (not yet canonical) URL."""
    ref = reference.strip()
    if ref.lower().startswith(_NON_NAVIGABLE):
        raise NonNavigableReference(ref)
    if _SCHEME_RE.match(ref):
        return ref
    scheme, netloc = _origin(base_url)
    if ref.startswith("//"):
        return f"{scheme}:{ref}"
    if mode is ResolutionMode.DOCUMENT:
        return urljoin(base_url, ref)
    if ref.startswith("/"):
        return f"{scheme}://{netloc}{ref}"
    return f"{scheme}://{netloc}/{ref}"


def _remove_dot_segments(path: str) -> str:
    """RFC 3986 remove_dot_segments; empty segments (``//``) are kept."""
    segments = path.split("/")
    output: list[str] = []
    for segment in segments:
        if segment == ".":
            continue
        if segment == "..":
            # output[0] is the empty segment before the leading slash
            if len(output) > 1:
                output.pop()
            continue
        output.append(segment)
    if segments[-1] in (".", ".."):
        output.append("")
    return "/".join(output)


def canonicalize(url: str) -> str:
    """Canonical form of an absolute *url*: no query, no fragment.

    Scheme and host are lower-cased, the default port is dropped, an empty
    path becomes ``/``, dot segments are removed and characters that are not
    allowed in a path are percent-encoded.

    Raises:
        InvalidReference: *url* has no host or an unparsable authority.
    """
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError as exc:
        raise InvalidReference(f"Invalid URL: {url}") from exc

    scheme = parts.scheme.lower()
    host = parts.hostname
    if not scheme or not host:
        raise InvalidReference(f"Invalid URL: {url}")
    if _FORBIDDEN_HOST_CHARS.intersection(host):
        raise InvalidReference(f"Invalid host in URL: {url}")

    netloc = f"[{host}]" if ":" in host else host
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        netloc = f"{netloc}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    path = _remove_dot_segments(parts.path) or "/"
    return urlunsplit((scheme, netloc, quote(path, safe=_PATH_SAFE), "", ""))


def normalize(base_url: str, reference: str, mode: ResolutionMode = ResolutionMode.ROOT) -> str:
    """Resolve *reference* against *base_url* and canonicalize it."""
    return canonicalize(resolve(base_url, reference, mode))


def host_of(url: str) -> str:
    """Host as parsed from *url* (lower-cased by the URL parser), or ``""``."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def classify(url: str, base_url: str) -> LinkOrigin:
    """INTERNAL iff *url* and *base_url* have exactly the same host.

    Scheme, port and path are ignored; subdomains are different hosts.
    """
    host = host_of(url)
    if host and host == host_of(base_url):
        return LinkOrigin.INTERNAL
    return LinkOrigin.EXTERNAL


def ensure_scheme(url: str) -> str:
    """User input without a ``scheme://`` prefix is assumed to be ``https://``."""
    url = url.strip()
    return url if _SCHEME_RE.match(url) else f"https://{url}"
