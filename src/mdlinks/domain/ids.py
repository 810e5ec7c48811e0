"""Document identifiers — the keys results are stored under.

Two strategies:
- Frontmatter: the ``slug`` key, one trailing ``/`` removed.
- Path: the file path without its document extension (``.md``, ``.mdx``,
  ``.mdast.json``) and the working directory.

Documents without any path get a synthetic name (``file-1``, ``file-2``...)
from a process-wide, monotonically increasing counter.
"""

from __future__ import annotations

import itertools
import re
import threading
from collections.abc import Mapping
from typing import Any

from mdlinks.domain.frontmatter import frontmatter_slug

_DOCUMENT_EXTENSION = re.compile(r"\.(?:mdx?|mdast\.json)$")
_TRAILING_SLASH = re.compile(r"/$")
_LEADING_SLASH = re.compile(r"^/")

SYNTHETIC_PREFIX = "file-"


def slug_from_frontmatter(frontmatter: Mapping[str, Any]) -> str | None:
    """Return the frontmatter slug, or None if missing, non-string or empty.

    Examples:
        >>> slug_from_frontmatter({"slug": "guides/setup/"})
        'guides/setup'
        >>> slug_from_frontmatter({"slug": "/"}) is None
        True
    """
    slug = frontmatter_slug(frontmatter)
    if slug is None:
        return None
    return _TRAILING_SLASH.sub("", slug) or None


def slug_from_path(path: str, cwd: str) -> str:
    """Derive a slug from a file path relative to *cwd*.

    Examples:
        >>> slug_from_path("/site/docs/intro.mdx", "/site")
        'docs/intro'
        >>> slug_from_path("/site/docs/intro.mdast.json", "/site")
        'docs/intro'
        >>> slug_from_path("file-3", "/site")
        'file-3'
    """
    slug = _DOCUMENT_EXTENSION.sub("", path)
    if cwd:
        slug = slug.removeprefix(cwd)
    return _LEADING_SLASH.sub("", slug)


class SyntheticNames:
    """Thread-safe generator of ``file-N`` names for path-less documents."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> str:
        """Claim the next name."""
        with self._lock:
            return f"{SYNTHETIC_PREFIX}{next(self._counter)}"


# Shared by every extractor that is not given its own counter.
SYNTHETIC_NAMES = SyntheticNames()
