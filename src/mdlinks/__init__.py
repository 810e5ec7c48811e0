"""mdlinks — heading and link extraction for markdown and MDX documents."""

from __future__ import annotations

from mdlinks.config.models import ExtractorOptions
from mdlinks.domain.document import FileContext
from mdlinks.domain.processors import DocumentLinks
from mdlinks.services.extractor import LinkExtractor
from mdlinks.services.store import LinkData, ResultStore

__version__ = "0.1.0"

__all__ = [
    "DocumentLinks",
    "ExtractorOptions",
    "FileContext",
    "LinkData",
    "LinkExtractor",
    "ResultStore",
    "__version__",
]
