"""Rich renderers for scan reports.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from mdlinks.domain.links import LinkKind
from mdlinks.output.console import create_console, get_output, link_style

if TYPE_CHECKING:
    from rich.console import Console

    from mdlinks.services.scan import ScanReport
    from mdlinks.services.store import LinkData


def render_report(report: ScanReport, *, verbose: bool = False) -> str:
    """Render a scan report to a styled string.

    The summary table lists one row per document slug. With *verbose*,
    every heading and link is listed under its document.
    """
    console = create_console()
    _summary_line(console, report)
    if report.data.headings:
        console.print(_documents_table(report.data))
    if verbose:
        _render_details(console, report.data)
    return get_output(console).rstrip("\n")


def render_quiet(report: ScanReport) -> str:
    """One document slug per line."""
    return "\n".join(sorted(report.data.headings))


# ── Helpers ───────────────────────────────────────────────────────────


def _summary_line(console: Console, report: ScanReport) -> None:
    # The warnings themselves go to stderr.
    label = Text("WARN", style="mdl.warning") if report.warnings else Text("OK", style="mdl.ok")
    summary = Text(
        f" scanned {report.documents} documents: "
        f"{report.processed} recorded, {report.skipped} skipped"
    )
    console.print(label, summary)


def _documents_table(data: LinkData) -> Table:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Document", style="mdl.slug")
    table.add_column("Headings", justify="right", style="mdl.heading")
    table.add_column("Internal", justify="right", style=link_style(LinkKind.INTERNAL))
    table.add_column("External", justify="right", style=link_style(LinkKind.EXTERNAL))

    for slug in sorted(data.headings):
        table.add_row(
            slug,
            str(len(data.headings[slug])),
            str(len(data.internal_links.get(slug, []))),
            str(len(data.external_links.get(slug, []))),
        )
    return table


def _render_details(console: Console, data: LinkData) -> None:
    sections = (
        ("headings", data.headings, "mdl.heading"),
        ("internal", data.internal_links, link_style(LinkKind.INTERNAL)),
        ("external", data.external_links, link_style(LinkKind.EXTERNAL)),
    )
    for slug in sorted(data.headings):
        console.print()
        console.print(Text(slug, style="mdl.slug"))
        for name, mapping, style in sections:
            for value in mapping.get(slug, []):
                label = Text(f"  {name}: ", style="mdl.key")
                console.print(label, Text(value, style=style), sep="")
