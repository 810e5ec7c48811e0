"""Markdown parsing — marko AST converted to the mdlinks document tree.

marko parses CommonMark and resolves reference links itself, so
``[text][id]`` arrives as a :class:`~mdlinks.domain.nodes.Link`. The parser
is set up so a repeated definition label replaces the earlier one, matching
:func:`~mdlinks.domain.definitions.build_definitions`. Link reference
definitions are kept as :class:`~mdlinks.domain.nodes.Definition` nodes;
references to missing definitions stay plain text.

Destinations and titles are unescaped the CommonMark way: backslash
escapes removed and character references decoded.

MDX syntax is not understood by marko: JSX elements on their own line come
through as raw HTML blocks. Use :mod:`mdlinks.infrastructure.mdast` for
trees produced by an MDX-aware parser.
"""

from __future__ import annotations

import html

from marko import Markdown, block, inline
from marko.element import Element
from marko.helpers import MarkoExtension
from marko.source import Source

from mdlinks.domain.nodes import (
    Container,
    Definition,
    Heading,
    Html,
    Image,
    Link,
    Literal,
    Node,
    Root,
    Text,
    to_string,
)


class LinkRefDef(block.LinkRefDef):
    """Link reference definition where the last one for a label wins."""

    override = True

    @classmethod
    def parse(cls, source: Source) -> LinkRefDef:
        element = super().parse(source)
        source.root.link_ref_defs[element.label] = (element.dest, element.title)
        return element


# Singleton parser; marko keeps per-parse state on its Source objects.
_markdown_parser = Markdown(extensions=[MarkoExtension(elements=[LinkRefDef])])

# marko element type -> mdast node kind, for generic containers.
_CONTAINER_KINDS: dict[str, str] = {
    "Paragraph": "paragraph",
    "Quote": "blockquote",
    "List": "list",
    "ListItem": "listItem",
    "Emphasis": "emphasis",
    "StrongEmphasis": "strong",
    "ThematicBreak": "thematicBreak",
}


def parse_markdown(text: str) -> Root:
    """Parse CommonMark *text* into a :class:`Root`."""
    document = _markdown_parser.parse(text)
    return Root(children=_convert_children(document.children))


def _convert_children(children: object) -> tuple[Node, ...]:
    if isinstance(children, str):
        return (Text(value=children),) if children else ()
    if not isinstance(children, list):
        return ()
    nodes: list[Node] = []
    for child in children:
        node = _convert(child)
        if node is not None:
            nodes.append(node)
    return tuple(nodes)


def _raw_text(element: Element) -> str:
    children = getattr(element, "children", "")
    if isinstance(children, str):
        return children
    return "".join(_raw_text(child) for child in children)


def _convert(element: Element) -> Node | None:
    """Convert one marko element; None for elements with no mdast counterpart."""
    if isinstance(element, block.BlankLine):
        return None
    if isinstance(element, (block.Heading, block.SetextHeading)):
        return Heading(depth=element.level, children=_convert_children(element.children))
    if isinstance(element, block.LinkRefDef):
        return _definition(element)
    if isinstance(element, block.HTMLBlock):
        return Html(value=element.body.rstrip("\n"))
    if isinstance(element, (block.FencedCode, block.CodeBlock)):
        return Literal(kind="code", value=_raw_text(element).rstrip("\n"))
    if isinstance(element, inline.AutoLink):
        return Link(url=element.dest, children=_convert_children(element.children))
    if isinstance(element, inline.Link):
        # marko has already stripped backslash escapes.
        return Link(
            url=html.unescape(element.dest),
            title=html.unescape(element.title) if element.title else None,
            children=_convert_children(element.children),
        )
    if isinstance(element, inline.Image):
        alt = to_string(Root(children=_convert_children(element.children)))
        return Image(
            url=html.unescape(element.dest),
            alt=alt or None,
            title=html.unescape(element.title) if element.title else None,
        )
    if isinstance(element, inline.InlineHTML):
        return Html(value=element.children)
    if isinstance(element, inline.CodeSpan):
        return Literal(kind="inlineCode", value=element.children)
    if isinstance(element, inline.LineBreak):
        return Text(value="\n") if element.soft else Container(kind="break")
    if isinstance(element, (inline.RawText, inline.Literal)):
        return Text(value=element.children)

    element_type = element.get_type()
    kind = _CONTAINER_KINDS.get(element_type, element.get_type(snake_case=True))
    return Container(kind=kind, children=_convert_children(getattr(element, "children", [])))


def _definition(element: block.LinkRefDef) -> Definition:
    # LinkRefDef keeps the raw source groups: <dest> and "title" with delimiters.
    dest = element.dest
    if dest.startswith("<") and dest.endswith(">"):
        dest = dest[1:-1]
    title = element.title[1:-1] if element.title else None
    return Definition(
        identifier=element.label,
        label=element.label,
        url=_unescape(dest),
        title=_unescape(title) if title else None,
    )


def _unescape(raw: str) -> str:
    return html.unescape(inline.Literal.strip_backslash(raw))
