"""ResultStore — accumulated extraction results keyed by document slug.

INVARIANT: Every slug in ``headings`` is also in ``internal_links``; the
external mapping only holds slugs with at least one external link. The
three mappings for one slug change together, under one lock.

The store lives as long as the host keeps it. It is never a hidden module
global: hosts construct one and pass it to each extractor they configure.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class LinkData(BaseModel):
    """Snapshot of a :class:`ResultStore`.

    Serializes with camelCase keys (``internalLinks``, ``externalLinks``)
    when dumped ``by_alias``.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    headings: dict[str, list[str]] = Field(default_factory=dict)
    internal_links: dict[str, list[str]] = Field(default_factory=dict)
    external_links: dict[str, list[str]] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.headings or self.internal_links or self.external_links)


class ResultStore:
    """Thread-safe mapping of document slug to extracted headings and links.

    Usage::

        store = ResultStore()
        extractor = LinkExtractor(options, store=store)
        for tree, file in documents:
            extractor(tree, file)
        data = store.snapshot()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._headings: dict[str, list[str]] = {}
        self._internal_links: dict[str, list[str]] = {}
        self._external_links: dict[str, list[str]] = {}
        self._sources: dict[str, str | None] = {}

    def record(
        self,
        slug: str,
        headings: Sequence[str],
        internal_links: Sequence[str],
        external_links: Sequence[str],
        *,
        source: str | None = None,
    ) -> None:
        """Store the results of one document, replacing any previous entry.

        An empty *external_links* leaves no external entry for *slug*.
        When *slug* was already recorded from a different *source*, the
        entry is overwritten and a warning is logged.
        """
        with self._lock:
            if slug in self._sources and self._sources[slug] != source:
                logger.warning(
                    "Duplicate document slug %r: %s overwrites %s",
                    slug,
                    source,
                    self._sources[slug],
                )
            self._sources[slug] = source
            self._headings[slug] = list(headings)
            self._internal_links[slug] = list(internal_links)
            if external_links:
                self._external_links[slug] = list(external_links)
            else:
                self._external_links.pop(slug, None)

    def snapshot(self) -> LinkData:
        """Return an independent copy of all three mappings."""
        with self._lock:
            return LinkData(
                headings=copy.deepcopy(self._headings),
                internal_links=copy.deepcopy(self._internal_links),
                external_links=copy.deepcopy(self._external_links),
            )

    def reset(self) -> None:
        """Clear all three mappings."""
        with self._lock:
            self._headings.clear()
            self._internal_links.clear()
            self._external_links.clear()
            self._sources.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._headings)

    def __contains__(self, slug: object) -> bool:
        with self._lock:
            return slug in self._headings
