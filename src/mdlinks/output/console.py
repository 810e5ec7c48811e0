"""Rich Console factory and the mdlinks theme.

Consoles render into a StringIO buffer so formatters can return plain
strings. Rich drops color codes by itself when the output is not a TTY.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from mdlinks.domain.links import LinkKind

MDL_THEME = Theme(
    {
        "mdl.ok": "bold green",
        "mdl.warning": "bold yellow",
        "mdl.slug": "bold blue",
        "mdl.heading": "green",
        "mdl.link.internal": "cyan",
        "mdl.link.external": "magenta underline",
        "mdl.key": "dim",
    }
)

_LINK_STYLES: dict[LinkKind, str] = {
    LinkKind.INTERNAL: "mdl.link.internal",
    LinkKind.EXTERNAL: "mdl.link.external",
}


def link_style(kind: LinkKind) -> str:
    """Theme style for links of *kind*."""
    return _LINK_STYLES[kind]


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Fixed width; long slugs wrap in the documents table otherwise.
    """
    return Console(
        file=StringIO(),
        theme=MDL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
