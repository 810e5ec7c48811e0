"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Configures logging and centralizes report emission
(stdout/stderr routing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdlinks.output.formatters import format_report

if TYPE_CHECKING:
    from mdlinks.config.settings import MdlSettings
    from mdlinks.services.scan import ScanReport


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: MdlSettings) -> None:
        self.settings = settings

        from mdlinks.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, report: ScanReport) -> None:
        """Write *report* to stdout; warnings go to stderr.

        Warnings stay out of stdout so piped JSON remains parseable.
        """
        click.echo(format_report(report, settings=self.settings.output))
        for warning in report.warnings:
            click.echo(f"WARNING: {warning}", err=True)
