"""Node processors — one handler per extractable node kind.

A :class:`NodeProcessor` is created per document with that document's
definition table and (optionally) a heading slugger. Each handler appends
to the processor's :class:`DocumentLinks`; nothing is ever overwritten
or reordered.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from mdlinks.domain.html import scan_html
from mdlinks.domain.links import LinkKind, classify_url
from mdlinks.domain.nodes import (
    Attribute,
    Heading,
    Html,
    JsxAttribute,
    Link,
    LinkReference,
    MdxJsxFlowElement,
    MdxJsxTextElement,
    Node,
    to_string,
)

if TYPE_CHECKING:
    from mdlinks.domain.slugs import Slugger

# JSX flow elements whose ``href`` is a link.
LINK_ELEMENTS = frozenset({"a", "LinkCard", "LinkButton"})


@dataclass
class DocumentLinks:
    """Headings, internal links and external links of one document."""

    headings: list[str] = field(default_factory=list)
    internal_links: list[str] = field(default_factory=list)
    external_links: list[str] = field(default_factory=list)

    def add_heading(self, heading_id: str) -> None:
        self.headings.append(heading_id)

    def add_link(self, url: str) -> None:
        """Classify *url* and append it to the matching list."""
        if classify_url(url) is LinkKind.EXTERNAL:
            self.external_links.append(url)
        else:
            self.internal_links.append(url)


def _string_attributes(attributes: tuple[Attribute, ...], name: str) -> list[str]:
    """Return the string values of every attribute called *name*."""
    return [
        attribute.value
        for attribute in attributes
        if isinstance(attribute, JsxAttribute)
        and attribute.name == name
        and isinstance(attribute.value, str)
    ]


class NodeProcessor:
    """Route extractable nodes of one document to their handlers.

    Args:
        definitions: Reference identifier to URL, from the definitions pass.
        slugger: Heading slug generator, or None when heading slugs are
            disabled (headings without an explicit id are then dropped).
    """

    # Exactly one handler per kind in EXTRACTABLE_KINDS.
    _HANDLERS: ClassVar[dict[type[Node], str]] = {
        Heading: "_heading",
        Html: "_html",
        Link: "_link",
        LinkReference: "_link_reference",
        MdxJsxFlowElement: "_flow_element",
        MdxJsxTextElement: "_text_element",
    }

    def __init__(
        self,
        definitions: Mapping[str, str],
        *,
        slugger: Slugger | None = None,
    ) -> None:
        self._definitions = definitions
        self._links = DocumentLinks()
        self._slugger = slugger

    @property
    def links(self) -> DocumentLinks:
        """Everything the handlers have collected so far."""
        return self._links

    def process(self, node: Node) -> None:
        """Dispatch *node* to its handler; other kinds are ignored."""
        handler_name = self._HANDLERS.get(type(node))
        if handler_name is None:
            return
        handler: Callable[[Any], None] = getattr(self, handler_name)
        handler(node)

    # --- Handlers ---

    def _heading(self, node: Heading) -> None:
        # An explicit id is authoritative, even when slugs are enabled.
        if node.id:
            self._links.add_heading(node.id)
            return

        content = to_string(node)
        if not content:
            return
        if self._slugger is not None:
            self._links.add_heading(self._slugger.slug(content))

    def _link(self, node: Link) -> None:
        self._links.add_link(node.url)

    def _link_reference(self, node: LinkReference) -> None:
        url = self._definitions.get(node.identifier)
        if url:
            self._links.add_link(url)

    def _flow_element(self, node: MdxJsxFlowElement) -> None:
        self._element_ids(node.attributes)
        if node.name not in LINK_ELEMENTS:
            return
        for href in _string_attributes(node.attributes, "href"):
            self._links.add_link(href)

    def _text_element(self, node: MdxJsxTextElement) -> None:
        self._element_ids(node.attributes)

    def _html(self, node: Html) -> None:
        for target in scan_html(node.value):
            if target.attribute == "id":
                self._links.add_heading(target.value)
            else:
                self._links.add_link(target.value)

    def _element_ids(self, attributes: tuple[Attribute, ...]) -> None:
        for element_id in _string_attributes(attributes, "id"):
            self._links.add_heading(element_id)
