"""mdast JSON input — trees serialized by remark/MDX tooling.

Converts a unist/mdast JSON document (``{"type": "root", "children": [...]}``)
into :mod:`mdlinks.domain.nodes`. This is the path for MDX content: JSX
elements, expression attributes and explicit heading ids
(``data.hProperties.id``) survive the conversion intact.

Malformed input is a caller error and raises :class:`MdastFormatError`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from mdlinks.domain.nodes import (
    Attribute,
    AttributeExpression,
    Container,
    Definition,
    Heading,
    Html,
    Image,
    JsxAttribute,
    JsxExpressionAttribute,
    Link,
    LinkReference,
    Literal,
    MdxJsxFlowElement,
    MdxJsxTextElement,
    Node,
    Root,
    Text,
    kind_of,
)


class MdastFormatError(ValueError):
    """Raised when a JSON document is not a well-formed mdast tree."""


def load_mdast(path: Path) -> Root:
    """Read and convert an mdast JSON file.

    Raises:
        MdastFormatError: If the file is not JSON or not an mdast root.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise MdastFormatError(msg) from exc
    node = from_mdast(data)
    if not isinstance(node, Root):
        msg = f"Expected an mdast root in {path}, got {kind_of(node)!r}"
        raise MdastFormatError(msg)
    return node


def from_mdast(data: Any) -> Node:
    """Convert one mdast JSON node (and its subtree).

    Raises:
        MdastFormatError: If a node is not an object or has no ``type``.
    """
    if not isinstance(data, Mapping):
        msg = f"mdast node must be an object, got {type(data).__name__}"
        raise MdastFormatError(msg)
    node_type = data.get("type")
    if not isinstance(node_type, str) or not node_type:
        msg = "mdast node is missing its 'type'"
        raise MdastFormatError(msg)

    if node_type == "root":
        return Root(children=_children(data))
    if node_type == "heading":
        return Heading(
            depth=_depth(data),
            id=_explicit_id(data),
            children=_children(data),
        )
    if node_type == "link":
        return Link(
            url=_string(data, "url"),
            title=_optional_string(data, "title"),
            children=_children(data),
        )
    if node_type == "linkReference":
        return LinkReference(
            identifier=_string(data, "identifier"),
            label=_optional_string(data, "label"),
            reference_type=_optional_string(data, "referenceType") or "full",
            children=_children(data),
        )
    if node_type == "definition":
        return Definition(
            identifier=_string(data, "identifier"),
            url=_string(data, "url"),
            label=_optional_string(data, "label"),
            title=_optional_string(data, "title"),
        )
    if node_type == "html":
        return Html(value=_string(data, "value"))
    if node_type == "mdxJsxFlowElement":
        return MdxJsxFlowElement(
            name=_optional_string(data, "name"),
            attributes=_attributes(data.get("attributes")),
            children=_children(data),
        )
    if node_type == "mdxJsxTextElement":
        return MdxJsxTextElement(
            name=_optional_string(data, "name"),
            attributes=_attributes(data.get("attributes")),
            children=_children(data),
        )
    if node_type == "text":
        return Text(value=_string(data, "value"))
    if node_type == "image":
        return Image(
            url=_string(data, "url"),
            alt=_optional_string(data, "alt"),
            title=_optional_string(data, "title"),
        )
    if "children" in data:
        return Container(kind=node_type, children=_children(data))
    return Literal(kind=node_type, value=_optional_string(data, "value") or "")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _children(data: Mapping[str, Any]) -> tuple[Node, ...]:
    children = data.get("children") or []
    if not isinstance(children, Sequence) or isinstance(children, str):
        msg = f"mdast {data['type']!r} children must be a list"
        raise MdastFormatError(msg)
    return tuple(from_mdast(child) for child in children)


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"mdast {data['type']!r} field {key!r} must be a string"
        raise MdastFormatError(msg)
    return value


def _optional_string(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _depth(data: Mapping[str, Any]) -> int:
    depth = data.get("depth", 1)
    if not isinstance(depth, int) or isinstance(depth, bool):
        msg = "mdast heading depth must be an integer"
        raise MdastFormatError(msg)
    return depth


def _explicit_id(data: Mapping[str, Any]) -> str | None:
    """``data.hProperties.id``, stringified; falsy ids count as absent."""
    node_data = data.get("data")
    if not isinstance(node_data, Mapping):
        return None
    properties = node_data.get("hProperties")
    if not isinstance(properties, Mapping):
        return None
    heading_id = properties.get("id")
    if not heading_id:
        return None
    return str(heading_id)


def _attributes(raw: Any) -> tuple[Attribute, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        msg = "mdast JSX attributes must be a list"
        raise MdastFormatError(msg)
    return tuple(_attribute(item) for item in raw)


def _attribute(raw: Any) -> Attribute:
    if not isinstance(raw, Mapping):
        msg = f"mdast JSX attribute must be an object, got {type(raw).__name__}"
        raise MdastFormatError(msg)
    if raw.get("type") == "mdxJsxExpressionAttribute":
        return JsxExpressionAttribute(value=str(raw.get("value") or ""))

    name = raw.get("name")
    if not isinstance(name, str):
        msg = "mdast JSX attribute is missing its 'name'"
        raise MdastFormatError(msg)
    value = raw.get("value")
    if isinstance(value, Mapping):
        expression = AttributeExpression(value=str(value.get("value") or ""))
        return JsxAttribute(name=name, value=expression)
    if value is None or isinstance(value, str):
        return JsxAttribute(name=name, value=value)
    # Non-string literals are kept as expressions, never coerced to text.
    return JsxAttribute(name=name, value=AttributeExpression(value=json.dumps(value)))
