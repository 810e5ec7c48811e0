"""Click base command with an ``--examples`` flag.

Examples are declared as ``(command line, what it does)`` pairs and printed
as an aligned block, so ``--help`` stays short and the examples stay
readable as the option set grows.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

Example = tuple[str, str]


def format_examples(examples: Sequence[Example]) -> str:
    """Align example command lines and their descriptions.

    >>> print(format_examples([("mdlinks scan", "Scan the cwd"), ("mdlinks scan a/", "Scan a/")]))
      mdlinks scan     # Scan the cwd
      mdlinks scan a/  # Scan a/
    """
    width = max((len(command) for command, _ in examples), default=0)
    return "\n".join(
        f"  {command.ljust(width)}  # {description}" for command, description in examples
    )


class MdlCommand(click.Command):
    """Click Command that adds an eager ``--examples`` flag when given examples."""

    def __init__(
        self, *args: Any, examples: Sequence[Example] | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples or ())
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(self.examples))
        ctx.exit(0)
