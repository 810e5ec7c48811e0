"""ScanService — run the extractor over documents on disk.

This is the host pipeline the CLI uses: discover documents, load each one
(markdown through marko, ``.mdast.json`` through the mdast adapter), and
feed every tree to one :class:`LinkExtractor` for the whole run. Files that
cannot be read, are not valid mdast, or whose frontmatter is not valid YAML
become warnings; the scan itself never fails on document content.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field
from ruamel.yaml.error import YAMLError

from mdlinks.domain.document import FileContext
from mdlinks.domain.nodes import Root
from mdlinks.infrastructure.filesystem import (
    find_documents,
    is_mdast,
    read_document,
    read_mdast_document,
)
from mdlinks.infrastructure.markdown import parse_markdown
from mdlinks.infrastructure.mdast import MdastFormatError
from mdlinks.services.extractor import LinkExtractor
from mdlinks.services.store import LinkData, ResultStore

if TYPE_CHECKING:
    from mdlinks.config.settings import MdlSettings

logger = logging.getLogger(__name__)


class ScanReport(BaseModel):
    """Outcome of one scan.

    Attributes:
        documents: Files discovered.
        processed: Documents recorded in the store.
        skipped: Documents that were drafts, lacked a slug, or failed to load.
        data: Snapshot of the store after the scan.
        warnings: Human-readable problems, one per failed file.
    """

    model_config = {"frozen": True}

    documents: int = 0
    processed: int = 0
    skipped: int = 0
    data: LinkData = Field(default_factory=LinkData)
    warnings: list[str] = Field(default_factory=list)


class ScanService:
    """Scan documents with the extractor options from *settings*."""

    def __init__(self, settings: MdlSettings, *, store: ResultStore | None = None) -> None:
        self._settings = settings
        self._store = store if store is not None else ResultStore()

    def scan(self, paths: Iterable[Path]) -> ScanReport:
        extractor = LinkExtractor(self._settings.extractor, store=self._store)
        files = find_documents(paths)
        warnings: list[str] = []
        processed = 0

        for path in files:
            try:
                frontmatter, tree = _load(path)
            except (OSError, UnicodeDecodeError, MdastFormatError, YAMLError) as exc:
                logger.debug("Could not load %s", path, exc_info=True)
                warnings.append(f"Could not load {path}: {exc}")
                continue

            file = FileContext.from_path(path, cwd=self._settings.root, frontmatter=frontmatter)
            if extractor(tree, file) is not None:
                processed += 1

        return ScanReport(
            documents=len(files),
            processed=processed,
            skipped=len(files) - processed,
            data=extractor.get_data(),
            warnings=warnings,
        )


def _load(path: Path) -> tuple[dict[str, Any], Root]:
    if is_mdast(path):
        return read_mdast_document(path)
    frontmatter, body = read_document(path)
    return frontmatter, parse_markdown(body)
