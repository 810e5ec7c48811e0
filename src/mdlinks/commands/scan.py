"""Command: scan markdown and mdast JSON documents and report headings and links."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdlinks.commands._base import MdlCommand

if TYPE_CHECKING:
    from mdlinks.commands._context import AppContext


@click.command(
    cls=MdlCommand,
    examples=[
        ("mdlinks scan docs/", "Scan one directory"),
        ("mdlinks scan src/content --ignore-draft --use-slug", "Astro content, keyed by slug"),
        ("mdlinks scan build/mdast/", "Scan mdast JSON exported from MDX"),
        ("mdlinks --json scan README.md docs/ --heading-slugs", "JSON with heading slugs"),
    ],
)
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@click.option("--ignore-draft", is_flag=True, help="Skip documents with draft frontmatter.")
@click.option("--use-slug", is_flag=True, help="Key documents by their frontmatter slug.")
@click.option(
    "--heading-slugs",
    is_flag=True,
    help="Generate slugs for headings without an explicit id.",
)
@click.pass_obj
def scan(
    app: AppContext,
    paths: tuple[Path, ...],
    ignore_draft: bool,
    use_slug: bool,
    heading_slugs: bool,
) -> None:
    """Extract headings, internal links and external links from PATHS.

    PATHS are .md, .mdx and .mdast.json files or directories to search
    (default: the current directory). MDX components such as LinkCard are
    only seen in .mdast.json trees exported by remark.
    """
    from mdlinks.services.scan import ScanService

    settings = app.settings.with_extractor(
        astro_ignore_draft=ignore_draft,
        astro_use_slug=use_slug,
        create_headings_slug=heading_slugs,
    )
    report = ScanService(settings).scan(paths or (Path.cwd(),))
    app.emit(report)
