"""Embedded HTML inspection — ids and anchor hrefs inside raw markup nodes.

Raw ``html`` nodes are opaque strings in the document tree. This module
parses one fragment with BeautifulSoup and reports, in document order, the
``id`` of every element and the ``href`` of every ``<a>``.

INVARIANT: A fragment that fails to parse yields nothing. Errors never
escape into the enclosing document traversal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

_PARSER = "html.parser"


@dataclass(frozen=True)
class HtmlTarget:
    """An ``id`` or anchor ``href`` found in an HTML fragment."""

    attribute: str  # "id" or "href"
    value: str


def _parse_fragment(markup: str) -> list[Tag] | None:
    try:
        soup = BeautifulSoup(markup, _PARSER)
        return list(soup.find_all(True))
    except Exception:
        logger.debug("Could not parse embedded HTML fragment: %.80r", markup, exc_info=True)
        return None


def scan_html(markup: str) -> Iterator[HtmlTarget]:
    """Yield the ids and anchor hrefs of *markup*, element by element.

    Per element the ``id`` comes before the ``href``. Only string attribute
    values count; multi-valued attributes are skipped.
    """
    elements = _parse_fragment(markup)
    if not elements:
        return

    for element in elements:
        element_id = element.get("id")
        if isinstance(element_id, str):
            yield HtmlTarget(attribute="id", value=element_id)

        if element.name != "a":
            continue
        href = element.get("href")
        if isinstance(href, str):
            yield HtmlTarget(attribute="href", value=href)
