"""Tests for LinkExtractor — one processing run over document trees."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from mdlinks.config.models import ExtractorOptions
from mdlinks.domain.document import FileContext
from mdlinks.domain.nodes import (
    Container,
    Definition,
    Heading,
    Html,
    JsxAttribute,
    Link,
    LinkReference,
    MdxJsxFlowElement,
    Root,
    Text,
)
from mdlinks.services.extractor import LinkExtractor
from mdlinks.services.store import ResultStore
from tests.conftest import site_file


def _heading(text: str, *, heading_id: str | None = None) -> Heading:
    return Heading(depth=2, id=heading_id, children=(Text(value=text),))


def _paragraph(*children: Any) -> Container:
    return Container(kind="paragraph", children=tuple(children))


# ---------------------------------------------------------------------------
# Store invariants
# ---------------------------------------------------------------------------


class TestStoreInvariants:
    def test_headings_and_internal_keys_match(self, make_extractor: Any) -> None:
        extractor = make_extractor(create_headings_slug=True)
        extractor(Root(children=(_heading("Only heading"),)), site_file("a.md"))
        extractor(Root(children=(_paragraph(Link(url="https://x.example")),)), site_file("b.md"))
        data = extractor.get_data()
        assert data.headings.keys() == data.internal_links.keys() == {"a", "b"}

    def test_internal_and_external_split(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        tree = Root(
            children=(
                _paragraph(
                    Link(url="/internal", children=(Text(value="in"),)),
                    Link(url="https://example.com", children=(Text(value="out"),)),
                ),
            )
        )
        extractor(tree, site_file("docs/page.md"))
        data = extractor.get_data()
        assert data.internal_links == {"docs/page": ["/internal"]}
        assert data.external_links == {"docs/page": ["https://example.com"]}

    def test_no_external_key_without_external_links(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor(Root(children=(_paragraph(Link(url="/only-internal")),)), site_file("p.md"))
        assert "p" not in extractor.get_data().external_links


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


class TestHeadings:
    def test_duplicate_heading_text(self, make_extractor: Any) -> None:
        extractor = make_extractor(create_headings_slug=True)
        tree = Root(children=(_heading("Heading 1"), _heading("Heading 1")))
        extractor(tree, site_file("page.md"))
        assert extractor.get_data().headings == {"page": ["heading-1", "heading-1-1"]}

    def test_explicit_id_always_wins(self, make_extractor: Any) -> None:
        for slugs in (True, False):
            extractor = make_extractor(create_headings_slug=slugs)
            extractor(
                Root(children=(_heading("Title", heading_id="custom-id"),)),
                site_file("page.md"),
            )
            assert extractor.get_data().headings == {"page": ["custom-id"]}

    def test_headings_dropped_without_slugs(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor(Root(children=(_heading("Title"),)), site_file("page.md"))
        assert extractor.get_data().headings == {"page": []}

    def test_slugger_is_per_document(self, make_extractor: Any) -> None:
        extractor = make_extractor(create_headings_slug=True)
        extractor(Root(children=(_heading("Intro"),)), site_file("a.md"))
        extractor(Root(children=(_heading("Intro"),)), site_file("b.md"))
        data = extractor.get_data()
        assert data.headings == {"a": ["intro"], "b": ["intro"]}


# ---------------------------------------------------------------------------
# Drafts and slugs
# ---------------------------------------------------------------------------


class TestDrafts:
    def test_draft_skipped_when_ignored(self, make_extractor: Any) -> None:
        extractor = make_extractor(astro_ignore_draft=True)
        result = extractor(
            Root(children=(_paragraph(Link(url="/x")),)),
            site_file("draft.md", frontmatter={"draft": True}),
        )
        assert result is None
        assert extractor.get_data().is_empty()

    def test_draft_processed_by_default(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor(Root(), site_file("draft.md", frontmatter={"draft": True}))
        assert "draft" in extractor.store


class TestDocumentSlug:
    def test_frontmatter_slug(self, make_extractor: Any) -> None:
        extractor = make_extractor(astro_use_slug=True)
        extractor(Root(), site_file("docs/page.md", frontmatter={"slug": "custom-slug"}))
        assert list(extractor.get_data().headings) == ["custom-slug"]

    def test_frontmatter_slug_trailing_slash(self, make_extractor: Any) -> None:
        extractor = make_extractor(astro_use_slug=True)
        extractor(Root(), site_file("x.md", frontmatter={"slug": "guides/setup/"}))
        assert "guides/setup" in extractor.store

    def test_missing_slug_warns_and_skips(
        self, make_extractor: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        extractor = make_extractor(astro_use_slug=True)
        with caplog.at_level(logging.WARNING, logger="mdlinks.services.extractor"):
            result = extractor(Root(), site_file("docs/page.md"))
        assert result is None
        assert extractor.get_data().is_empty()
        assert "No slug found for file: /site/docs/page.md" in caplog.text

    def test_path_slug(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor(Root(), site_file("docs/guide/intro.mdx"))
        assert "docs/guide/intro" in extractor.store

    def test_history_path_wins(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        moved = FileContext(
            path="/site/renamed.md",
            history=("/site/original.md", "/site/renamed.md"),
            cwd="/site",
        )
        extractor(Root(), moved)
        assert "original" in extractor.store

    def test_pathless_documents_get_synthetic_names(self, make_extractor: Any) -> None:
        extractor = make_extractor(create_headings_slug=True)
        extractor(Root(children=(_heading("First"),)), site_file(None))
        extractor(Root(children=(_heading("Second"),)), site_file(None))
        assert extractor.get_data().headings == {"file-1": ["first"], "file-2": ["second"]}


# ---------------------------------------------------------------------------
# References, JSX and HTML through the full walk
# ---------------------------------------------------------------------------


class TestFullWalk:
    def test_definitions_resolve_references_anywhere(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        tree = Root(
            children=(
                _paragraph(LinkReference(identifier="later"), LinkReference(identifier="nope")),
                Definition(identifier="later", url="https://later.example"),
            )
        )
        extractor(tree, site_file("refs.md"))
        data = extractor.get_data()
        assert data.external_links == {"refs": ["https://later.example"]}
        assert data.internal_links == {"refs": []}

    def test_document_order_across_kinds(self, make_extractor: Any) -> None:
        extractor = make_extractor(create_headings_slug=True)
        tree = Root(
            children=(
                _heading("Start"),
                MdxJsxFlowElement(
                    name="LinkCard",
                    attributes=(
                        JsxAttribute(name="id", value="card"),
                        JsxAttribute(name="href", value="/card-target"),
                    ),
                ),
                Html(value='<a id="raw" href="/raw-target">raw</a>'),
                _paragraph(Link(url="/inline-target")),
            )
        )
        links = extractor(tree, site_file("order.md"))
        assert links is not None
        assert links.headings == ["start", "card", "raw"]
        assert links.internal_links == ["/card-target", "/raw-target", "/inline-target"]

    def test_extract_does_not_touch_store(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        links = extractor.extract(Root(children=(_paragraph(Link(url="/x")),)))
        assert links.internal_links == ["/x"]
        assert extractor.get_data().is_empty()


# ---------------------------------------------------------------------------
# Runs and reset
# ---------------------------------------------------------------------------


class TestRuns:
    def test_reset_data(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor(Root(children=(_paragraph(Link(url="https://x.example")),)), site_file("a.md"))
        extractor.reset_data()
        data = extractor.get_data()
        assert data.headings == {}
        assert data.internal_links == {}
        assert data.external_links == {}

    def test_store_accumulates_across_runs(self, store: ResultStore) -> None:
        LinkExtractor(store=store)(Root(), site_file("a.md"))
        LinkExtractor(store=store)(Root(), site_file("b.md"))
        assert len(store) == 2

    def test_reset_on_run(self, store: ResultStore) -> None:
        LinkExtractor(store=store)(Root(), site_file("a.md"))
        LinkExtractor(ExtractorOptions(reset_data_on_run=True), store=store)
        assert len(store) == 0

    def test_private_store_by_default(self) -> None:
        first, second = LinkExtractor(), LinkExtractor()
        first(Root(), site_file("a.md"))
        assert second.get_data().is_empty()

    def test_snapshot_unaffected_by_later_documents(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor(Root(), site_file("a.md"))
        before = extractor.get_data()
        extractor(Root(), site_file("b.md"))
        assert list(before.headings) == ["a"]


class TestProcessMarkdown:
    def test_markdown_text(self, make_extractor: Any) -> None:
        extractor = make_extractor(create_headings_slug=True)
        extractor.process_markdown(
            "# Heading 1\n\n# Heading 1\n\n[in](/internal) and [out](https://example.com)\n",
            site_file("page.md"),
        )
        data = extractor.get_data()
        assert data.headings == {"page": ["heading-1", "heading-1-1"]}
        assert data.internal_links == {"page": ["/internal"]}
        assert data.external_links == {"page": ["https://example.com"]}

    def test_repeated_definition_last_wins(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor.process_markdown(
            "[go][x]\n\n[x]: /first\n[x]: /second\n",
            site_file("refs.md"),
        )
        assert extractor.get_data().internal_links == {"refs": ["/second"]}

    def test_markdown_and_tree_agree_on_last_definition(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        tree = Root(
            children=(
                _paragraph(LinkReference(identifier="x")),
                Definition(identifier="x", url="/first"),
                Definition(identifier="x", url="/second"),
            )
        )
        extractor(tree, site_file("tree.md"))
        extractor.process_markdown("[go][x]\n\n[x]: /first\n[x]: /second\n", site_file("text.md"))
        data = extractor.get_data()
        assert data.internal_links["tree"] == data.internal_links["text"] == ["/second"]

    def test_character_references_decoded(self, make_extractor: Any) -> None:
        extractor = make_extractor()
        extractor.process_markdown(
            "[c](/x?a=1&amp;b=2) and [d][e]\n\n[e]: https://example.com/?q=1&amp;r=2\n",
            site_file("entities.md"),
        )
        data = extractor.get_data()
        assert data.internal_links == {"entities": ["/x?a=1&b=2"]}
        assert data.external_links == {"entities": ["https://example.com/?q=1&r=2"]}
