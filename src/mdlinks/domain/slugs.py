"""GitHub-compatible heading slugs.

Duplicate heading text within one document gets ``-1``, ``-2``... suffixes,
exactly as GitHub renders anchors. A slugger is stateful and belongs to a
single document; create a fresh one per document.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import Protocol

# Letters, marks and numbers survive; so do these three.
_KEPT_PUNCTUATION = frozenset(" -_")
_KEPT_CATEGORIES = ("L", "M", "N")


class Slugger(Protocol):
    """Anything that turns heading text into a per-document unique slug."""

    def slug(self, text: str) -> str: ...


def heading_to_slug(text: str) -> str:
    """Convert heading text to a GitHub anchor slug (no uniqueness).

    Lowercases, drops punctuation and symbols, and turns each space into a
    hyphen. Runs of hyphens are kept, as GitHub does.

    Examples:
        >>> heading_to_slug("Heading 1")
        'heading-1'
        >>> heading_to_slug("What's new?")
        'whats-new'
    """
    kept = [
        char
        for char in text.lower()
        if char in _KEPT_PUNCTUATION or unicodedata.category(char).startswith(_KEPT_CATEGORIES)
    ]
    return "".join(kept).replace(" ", "-")


@dataclass
class GithubSlugger:
    """Stateful slugger tracking occurrences within one document."""

    _occurrences: dict[str, int] = field(default_factory=dict)

    def slug(self, text: str) -> str:
        """Return a unique slug for *text* within this document.

        A generated suffix is itself reserved, so ``"a"``, ``"a"``,
        ``"a-1"`` yields ``a``, ``a-1``, ``a-1-1``.
        """
        original = heading_to_slug(text)
        result = original
        while result in self._occurrences:
            self._occurrences[original] += 1
            result = f"{original}-{self._occurrences[original]}"
        self._occurrences[result] = 0
        return result

    def reset(self) -> None:
        """Forget every slug seen so far."""
        self._occurrences.clear()
