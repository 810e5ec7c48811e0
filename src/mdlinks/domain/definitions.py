"""Definition table — reference identifier to URL, per document."""

from __future__ import annotations

from mdlinks.domain.nodes import Definition, Node, walk


def build_definitions(tree: Node) -> dict[str, str]:
    """Collect every :class:`Definition` in *tree* into ``{identifier: url}``.

    Duplicate identifiers resolve to the last definition in document order.
    Must run before link references are resolved.
    """
    definitions: dict[str, str] = {}
    for node in walk(tree):
        if isinstance(node, Definition):
            definitions[node.identifier] = node.url
    return definitions
