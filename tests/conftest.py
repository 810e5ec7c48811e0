"""Shared pytest fixtures and test helpers for mdlinks tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator, Mapping
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from mdlinks.config.models import ExtractorOptions
from mdlinks.domain.document import FileContext
from mdlinks.domain.ids import SyntheticNames
from mdlinks.services.extractor import LinkExtractor
from mdlinks.services.store import ResultStore

SITE_ROOT = "/site"

# remark + remark-frontmatter + remark-mdx output for an Astro Starlight page:
#
#   ---
#   slug: components/
#   ---
#   ## Cards {#cards}
#   <LinkCard title="Docs" href="https://docs.astro.build" />
#   See <span id="inline-anchor">here</span>.
#   <LinkButton href="/guides/" {...props} />
MDX_CARDS_TREE: dict[str, Any] = {
    "type": "root",
    "children": [
        {"type": "yaml", "value": "slug: components/"},
        {
            "type": "heading",
            "depth": 2,
            "data": {"hProperties": {"id": "cards"}},
            "children": [{"type": "text", "value": "Cards"}],
        },
        {
            "type": "mdxJsxFlowElement",
            "name": "LinkCard",
            "attributes": [
                {"type": "mdxJsxAttribute", "name": "title", "value": "Docs"},
                {"type": "mdxJsxAttribute", "name": "href", "value": "https://docs.astro.build"},
            ],
            "children": [],
        },
        {
            "type": "paragraph",
            "children": [
                {"type": "text", "value": "See "},
                {
                    "type": "mdxJsxTextElement",
                    "name": "span",
                    "attributes": [
                        {"type": "mdxJsxAttribute", "name": "id", "value": "inline-anchor"},
                    ],
                    "children": [{"type": "text", "value": "here"}],
                },
                {"type": "text", "value": "."},
            ],
        },
        {
            "type": "mdxJsxFlowElement",
            "name": "LinkButton",
            "attributes": [
                {"type": "mdxJsxAttribute", "name": "href", "value": "/guides/"},
                {"type": "mdxJsxExpressionAttribute", "value": "...props"},
            ],
            "children": [],
        },
    ],
}


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """Undo handlers installed by CLI invocations (they point at captured streams)."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store() -> ResultStore:
    """An empty result store."""
    return ResultStore()


@pytest.fixture
def make_extractor(store: ResultStore) -> Any:
    """Factory for extractors sharing the ``store`` fixture.

    Each extractor gets a private synthetic-name counter, so path-less
    documents are named ``file-1``, ``file-2``... per test.
    """
    names = SyntheticNames()

    def _make(**options: bool) -> LinkExtractor:
        return LinkExtractor(ExtractorOptions(**options), store=store, names=names)

    return _make


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Temporary site directory with a small markdown corpus.

    This is the single source of truth for the on-disk corpus used by
    scan service and CLI tests.
    """
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "intro.md").write_text(
        "---\ntitle: Intro\nslug: getting-started/\n---\n"
        "# Welcome\n\nSee [setup](/docs/setup) and [marko](https://marko-py.readthedocs.io).\n",
        encoding="utf-8",
    )
    (docs / "setup.md").write_text(
        "# Setup\n\n## Install\n\n## Install\n\nBack to [intro](./intro.md).\n",
        encoding="utf-8",
    )
    (docs / "draft.md").write_text(
        "---\ndraft: true\nslug: wip\n---\n# Work in progress\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def _isolated_root(content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the corpus root so the CLI scans an isolated site.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.delenv("MDLINKS_CONFIG", raising=False)
    monkeypatch.chdir(content_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def site_file(
    relative: str | None,
    *,
    frontmatter: Mapping[str, Any] | None = None,
) -> FileContext:
    """A file context for ``/site/<relative>`` (or a path-less document)."""
    path = f"{SITE_ROOT}/{relative}" if relative else None
    return FileContext(
        path=path,
        history=(path,) if path else (),
        cwd=SITE_ROOT,
        frontmatter=dict(frontmatter or {}),
    )


def write_mdast(path: Path, tree: Mapping[str, Any] = MDX_CARDS_TREE) -> Path:
    """Write *tree* as an mdast JSON document, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(tree), encoding="utf-8")
    return path
