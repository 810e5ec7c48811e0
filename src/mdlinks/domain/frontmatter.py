"""Frontmatter parsing and the two keys the extractor reads.

Only ``draft`` and ``slug`` matter to extraction; every other key is
carried through untouched. Parsing uses ruamel.yaml so quoting and
scalar types match what static-site frontmatter loaders produce.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ruamel.yaml import YAML

_FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh YAML loader.

    A new instance per call keeps ruamel.yaml's internal state from leaking
    across documents after a failed load.
    """
    return YAML()


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split YAML frontmatter from the markdown body.

    Expects ``---`` on the first line; the next ``---`` line closes the
    block. Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. Without valid
        delimiters, returns ``({}, content)``.

    Raises:
        ruamel.yaml.YAMLError: If the frontmatter block is not valid YAML.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    return load_frontmatter(yaml_block), body


def load_frontmatter(yaml_block: str) -> dict[str, Any]:
    """Load a frontmatter YAML block (without delimiters) into a dict.

    A block that is empty or not a mapping loads as ``{}``.

    Raises:
        ruamel.yaml.YAMLError: If the block is not valid YAML.
    """
    loaded = _new_yaml().load(yaml_block)
    return dict(loaded) if isinstance(loaded, Mapping) else {}


def is_draft(frontmatter: Mapping[str, Any]) -> bool:
    """Whether the frontmatter marks the document as a draft."""
    return bool(frontmatter.get("draft"))


def frontmatter_slug(frontmatter: Mapping[str, Any]) -> str | None:
    """The ``slug`` key, only when it is a string."""
    slug = frontmatter.get("slug")
    return str(slug) if isinstance(slug, str) else None
