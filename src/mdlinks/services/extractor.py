"""LinkExtractor — walks one document tree and records its links.

One extractor corresponds to one configured processing run. Calling it
with a tree and its file context processes that document to completion:

1. Skip drafts when ``astro_ignore_draft`` is set.
2. Derive the document slug (frontmatter or path); skip with a warning
   when ``astro_use_slug`` is set and no slug is available.
3. Build the definition table.
4. Walk the tree once, dispatching every extractable node.
5. Record the three result lists in the :class:`ResultStore`.

INVARIANT: Per-document data problems never raise. Drafts, missing slugs,
unresolved references and broken embedded HTML only omit results.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from mdlinks.config.models import ExtractorOptions
from mdlinks.domain.definitions import build_definitions
from mdlinks.domain.document import FileContext
from mdlinks.domain.frontmatter import is_draft
from mdlinks.domain.ids import (
    SYNTHETIC_NAMES,
    SyntheticNames,
    slug_from_frontmatter,
    slug_from_path,
)
from mdlinks.domain.nodes import Root, walk
from mdlinks.domain.processors import DocumentLinks, NodeProcessor
from mdlinks.domain.slugs import GithubSlugger, Slugger
from mdlinks.services.store import LinkData, ResultStore

logger = logging.getLogger(__name__)


class LinkExtractor:
    """Extract headings and links from document trees into a store.

    Args:
        options: Extraction options; defaults to all switches off.
        store: Where results accumulate. A private store is created when
            omitted. Pass the same store to several extractors to aggregate
            a corpus across runs.
        names: Counter for synthetic ``file-N`` names; the process-wide
            counter by default.
        slugger_factory: Builds the per-document heading slugger.
    """

    def __init__(
        self,
        options: ExtractorOptions | None = None,
        *,
        store: ResultStore | None = None,
        names: SyntheticNames | None = None,
        slugger_factory: Callable[[], Slugger] = GithubSlugger,
    ) -> None:
        self.options = options or ExtractorOptions()
        self.store = store if store is not None else ResultStore()
        self._names = names or SYNTHETIC_NAMES
        self._slugger_factory = slugger_factory

        if self.options.reset_data_on_run:
            self.store.reset()

    def __call__(self, tree: Root, file: FileContext) -> DocumentLinks | None:
        """Process one document. Returns its results, or None if skipped."""
        if self.options.astro_ignore_draft and is_draft(file.frontmatter):
            logger.debug("Skipping draft: %s", file.resolved_path)
            return None

        slug = self._document_slug(file)
        if slug is None:
            return None

        links = self.extract(tree)
        self.store.record(
            slug,
            links.headings,
            links.internal_links,
            links.external_links,
            source=file.resolved_path,
        )
        logger.debug(
            "Extracted %s: %d headings, %d internal, %d external",
            slug,
            len(links.headings),
            len(links.internal_links),
            len(links.external_links),
        )
        return links

    def extract(self, tree: Root) -> DocumentLinks:
        """Run both passes over *tree* without touching the store."""
        slugger = self._slugger_factory() if self.options.create_headings_slug else None
        processor = NodeProcessor(build_definitions(tree), slugger=slugger)
        for node in walk(tree):
            processor.process(node)
        return processor.links

    def process_markdown(self, text: str, file: FileContext) -> DocumentLinks | None:
        """Parse markdown *text* and process it as one document."""
        from mdlinks.infrastructure.markdown import parse_markdown

        return self(parse_markdown(text), file)

    def get_data(self) -> LinkData:
        """Snapshot of everything recorded so far."""
        return self.store.snapshot()

    def reset_data(self) -> None:
        """Clear everything recorded so far."""
        self.store.reset()

    def _document_slug(self, file: FileContext) -> str | None:
        if self.options.astro_use_slug:
            slug = slug_from_frontmatter(file.frontmatter)
            if slug is None:
                logger.warning("No slug found for file: %s", file.resolved_path)
            return slug

        path = file.resolved_path or self._names.next()
        return slug_from_path(path, file.cwd)
