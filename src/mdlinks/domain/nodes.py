"""Document tree model — the typed nodes every extractor pass walks.

The tree mirrors mdast (the markdown AST used by remark/MDX tooling) but is
closed: a fixed set of frozen node classes plus two generic carriers
(:class:`Container`, :class:`Literal`) for kinds the extractor never inspects.
Parsers live in :mod:`mdlinks.infrastructure`; this module only defines the
shape and the traversal helpers.

INVARIANT: Trees are immutable. Extraction never mutates a node.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar

# ---------------------------------------------------------------------------
# JSX attributes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AttributeExpression:
    """An attribute value written as an expression: ``href={url}``."""

    value: str


@dataclass(frozen=True)
class JsxAttribute:
    """A named attribute on a JSX element.

    ``value`` is a plain string, an :class:`AttributeExpression`, or ``None``
    for a bare boolean attribute (``<Card hidden />``).
    """

    name: str
    value: str | AttributeExpression | None = None


@dataclass(frozen=True)
class JsxExpressionAttribute:
    """A spread or expression attribute: ``<Card {...props} />``."""

    value: str


Attribute = JsxAttribute | JsxExpressionAttribute


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class Node:
    """Base class of every tree node."""

    type: ClassVar[str] = ""


@dataclass(frozen=True, kw_only=True)
class Parent(Node):
    """A node with ordered children."""

    children: tuple[Node, ...] = ()


@dataclass(frozen=True, kw_only=True)
class Root(Parent):
    type: ClassVar[str] = "root"


@dataclass(frozen=True, kw_only=True)
class Heading(Parent):
    """Section heading.

    ``id`` carries an explicit, rendering-supplied identifier
    (``data.hProperties.id`` in mdast). When set it is authoritative.
    """

    type: ClassVar[str] = "heading"

    depth: int = 1
    id: str | None = None


@dataclass(frozen=True, kw_only=True)
class Link(Parent):
    type: ClassVar[str] = "link"

    url: str
    title: str | None = None


@dataclass(frozen=True, kw_only=True)
class LinkReference(Parent):
    """A link whose URL lives in a :class:`Definition` (``[text][id]``)."""

    type: ClassVar[str] = "linkReference"

    identifier: str
    label: str | None = None
    reference_type: str = "full"


@dataclass(frozen=True, kw_only=True)
class Definition(Node):
    """Link reference definition: ``[id]: https://example.com "Title"``."""

    type: ClassVar[str] = "definition"

    identifier: str
    url: str
    label: str | None = None
    title: str | None = None


@dataclass(frozen=True, kw_only=True)
class Html(Node):
    """Raw embedded markup, kept as an opaque string."""

    type: ClassVar[str] = "html"

    value: str


@dataclass(frozen=True, kw_only=True)
class MdxJsxFlowElement(Parent):
    """Block-level JSX element (``<LinkCard href="/x" />`` on its own line)."""

    type: ClassVar[str] = "mdxJsxFlowElement"

    name: str | None = None
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True, kw_only=True)
class MdxJsxTextElement(Parent):
    """Inline JSX element inside a paragraph."""

    type: ClassVar[str] = "mdxJsxTextElement"

    name: str | None = None
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True, kw_only=True)
class Text(Node):
    type: ClassVar[str] = "text"

    value: str


@dataclass(frozen=True, kw_only=True)
class Image(Node):
    type: ClassVar[str] = "image"

    url: str
    alt: str | None = None
    title: str | None = None


@dataclass(frozen=True, kw_only=True)
class Container(Parent):
    """Any other parent kind (paragraph, emphasis, list, blockquote...)."""

    kind: str


@dataclass(frozen=True, kw_only=True)
class Literal(Node):
    """Any other literal kind (inlineCode, code, yaml...)."""

    kind: str
    value: str = ""


# Kinds dispatched during the classification pass.
EXTRACTABLE_KINDS: tuple[type[Node], ...] = (
    Heading,
    Html,
    Link,
    LinkReference,
    MdxJsxFlowElement,
    MdxJsxTextElement,
)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def kind_of(node: Node) -> str:
    """Return the mdast type name of *node*."""
    if isinstance(node, (Container, Literal)):
        return node.kind
    return node.type


def walk(node: Node) -> Iterator[Node]:
    """Yield *node* and all its descendants in document (pre-)order.

    Iterative, so deeply nested trees cannot hit the recursion limit.
    """
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Parent):
            stack.extend(reversed(current.children))


def to_string(node: Node) -> str:
    """Flatten the text content of *node*.

    Literal values and image alt text are concatenated in document order;
    everything else contributes only through its children.
    """
    parts: list[str] = []
    for current in walk(node):
        if isinstance(current, (Text, Html, Literal)):
            parts.append(current.value)
        elif isinstance(current, Image) and current.alt:
            parts.append(current.alt)
    return "".join(parts)
