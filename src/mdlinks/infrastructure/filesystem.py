"""Filesystem operations — document discovery and reading.

Two document formats are read from disk:

- markdown (``.md``, ``.mdx``): frontmatter split off, body parsed by marko
- mdast JSON (``.mdast.json``): a tree exported by remark/MDX tooling, with
  frontmatter in its ``yaml`` node

MDX syntax only survives the mdast route. When ``page.mdast.json`` sits
next to ``page.mdx`` (or ``page.md``), the sidecar stands in for the
markdown file.

Pure parsing utilities live in :mod:`mdlinks.domain.frontmatter`
(infrastructure -> domain, never the reverse).
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from mdlinks.domain.frontmatter import load_frontmatter, parse_frontmatter
from mdlinks.domain.nodes import Literal, Root
from mdlinks.infrastructure.mdast import load_mdast

MARKDOWN_SUFFIXES = frozenset({".md", ".mdx"})
MDAST_SUFFIX = ".mdast.json"

# Directories never searched for documents.
_SKIP_DIRS = frozenset({".git", "node_modules", "__pycache__"})


def is_mdast(path: Path) -> bool:
    return path.name.endswith(MDAST_SUFFIX)


def _is_document(path: Path) -> bool:
    return path.suffix in MARKDOWN_SUFFIXES or is_mdast(path)


def _stem(path: Path) -> Path:
    """``docs/page.mdx`` and ``docs/page.mdast.json`` both give ``docs/page``."""
    if is_mdast(path):
        return path.with_name(path.name.removesuffix(MDAST_SUFFIX))
    return path.with_suffix("")


def read_document(path: Path) -> tuple[dict[str, Any], str]:
    """Read a markdown file, returning ``(frontmatter, body)``."""
    content = path.read_text(encoding="utf-8")
    return parse_frontmatter(content)


def read_mdast_document(path: Path) -> tuple[dict[str, Any], Root]:
    """Read an mdast JSON file, returning ``(frontmatter, tree)``.

    Frontmatter comes from the first top-level ``yaml`` node, as written
    by remark-frontmatter; trees without one have no frontmatter.

    Raises:
        MdastFormatError: If the file is not an mdast JSON tree.
        ruamel.yaml.YAMLError: If the ``yaml`` node is not valid YAML.
    """
    tree = load_mdast(path)
    for child in tree.children:
        if isinstance(child, Literal) and child.kind == "yaml":
            return load_frontmatter(child.value), tree
    return {}, tree


def _is_skipped(path: Path, root: Path) -> bool:
    relative = path.relative_to(root).parts[:-1]
    return any(part in _SKIP_DIRS or part.startswith(".") for part in relative)


def find_documents(paths: Iterable[Path]) -> list[Path]:
    """Discover markdown and mdast JSON documents under *paths*.

    Files are taken as given when they are documents. Directories are
    walked recursively, skipping ``.git``, ``node_modules`` and any
    dot-directory. Markdown files with an mdast sidecar are left out.
    The result is sorted and free of duplicates.
    """
    found: set[Path] = set()
    for base in paths:
        if base.is_file():
            if _is_document(base):
                found.add(base.resolve())
            continue
        if not base.is_dir():
            continue
        for path in base.rglob("*"):
            if not path.is_file() or not _is_document(path):
                continue
            if _is_skipped(path, base):
                continue
            found.add(path.resolve())

    sidecars = {_stem(path) for path in found if is_mdast(path)}
    return sorted(path for path in found if is_mdast(path) or _stem(path) not in sidecars)
