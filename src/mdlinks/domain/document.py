"""File context — what the extractor knows about the document it walks."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class FileContext:
    """Path, working directory and frontmatter of one document.

    Attributes:
        path: Current path of the file, if any.
        history: Every path the file has had, oldest first. The first entry
            wins over ``path``.
        cwd: Working directory stripped from the path when deriving slugs.
        frontmatter: Parsed frontmatter; may be empty.
    """

    path: str | None = None
    history: tuple[str, ...] = ()
    cwd: str = field(default_factory=os.getcwd)
    frontmatter: Mapping[str, Any] = field(default_factory=dict)

    @property
    def resolved_path(self) -> str | None:
        """The original path of the file, or None if it never had one."""
        if self.history and self.history[0]:
            return self.history[0]
        return self.path or None

    @classmethod
    def from_path(
        cls,
        path: Path,
        *,
        cwd: Path | None = None,
        frontmatter: Mapping[str, Any] | None = None,
    ) -> FileContext:
        """Build a context for a file on disk (path resolved to absolute)."""
        resolved = str(path.resolve())
        return cls(
            path=resolved,
            history=(resolved,),
            cwd=str((cwd or Path.cwd()).resolve()),
            frontmatter=dict(frontmatter or {}),
        )
