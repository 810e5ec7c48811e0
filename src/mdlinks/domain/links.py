"""Link classification — internal vs. external URLs.

Pure functions, no infrastructure dependencies. URLs are classified as-is
and stored verbatim; nothing here normalizes or fetches anything.
"""

from __future__ import annotations

import re
from enum import StrEnum
from urllib.parse import urlsplit

# Cheap prefix test: only http(s) links can be external.
_HTTP_SCHEME_PATTERN = re.compile(r"^(?:http|https)://")

# General absolute-URL recognizer: any RFC 3986 scheme followed by a colon.
_ABSOLUTE_URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*?:")

# C:\path and C:/path look like a one-letter scheme.
_WINDOWS_PATH_PATTERN = re.compile(r"^[a-zA-Z]:[\\/]")


class LinkKind(StrEnum):
    """Where a link points, relative to the document set."""

    INTERNAL = "internal"
    EXTERNAL = "external"


def is_absolute_url(url: str) -> bool:
    """Check whether *url* carries a scheme and can be split safely.

    Windows drive paths and URLs that :func:`urllib.parse.urlsplit` rejects
    (e.g. an unterminated IPv6 host) are not absolute.
    """
    if _WINDOWS_PATH_PATTERN.match(url):
        return False
    if not _ABSOLUTE_URL_PATTERN.match(url):
        return False
    try:
        urlsplit(url)
    except ValueError:
        return False
    return True


def is_external_link(url: str) -> bool:
    """Check whether *url* is an absolute ``http://`` or ``https://`` URL."""
    if not _HTTP_SCHEME_PATTERN.match(url):
        return False
    return is_absolute_url(url)


def classify_url(url: str) -> LinkKind:
    """Classify *url* as internal or external.

    Anything that is not an absolute http(s) URL is internal, including
    the empty string, ``mailto:`` links, fragments and malformed input.

    Examples:
        >>> classify_url("https://example.com")
        <LinkKind.EXTERNAL: 'external'>
        >>> classify_url("/docs/intro")
        <LinkKind.INTERNAL: 'internal'>
    """
    return LinkKind.EXTERNAL if is_external_link(url) else LinkKind.INTERNAL
