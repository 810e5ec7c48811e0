"""Rich/JSON output helpers.

The CLI renders scan reports for humans (Rich tables) or machines
(--json). JSON output is the extracted data itself, keyed the way
JavaScript pipelines expect (``headings``, ``internalLinks``,
``externalLinks``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdlinks.config.models import OutputSettings

if TYPE_CHECKING:
    from mdlinks.services.scan import ScanReport


def format_report(report: ScanReport, *, settings: OutputSettings | None = None) -> str:
    """Format a scan report for display.

    Args:
        report: The scan report to format.
        settings: Output switches; human-readable output when omitted.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return report.data.model_dump_json(by_alias=True, indent=2)
    if settings.quiet:
        from mdlinks.output.renderers import render_quiet

        return render_quiet(report)

    from mdlinks.output.renderers import render_report

    return render_report(report, verbose=settings.verbose)
