"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mdlinks.toml only contains
overrides. Option names are accepted both in snake_case and in the
camelCase spelling used by JavaScript pipelines (``astroUseSlug``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# --- Output switches (derived from CLI flags) ---


class OutputSettings(BaseModel):
    """How results are written to stdout."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


# --- mdlinks.toml sections ---


class ExtractorOptions(BaseModel):
    """[extractor] section — per-run extraction behaviour.

    Unknown keys and non-boolean values are configuration errors and raise
    :class:`pydantic.ValidationError`.

    Attributes:
        astro_ignore_draft: Skip documents whose frontmatter sets ``draft``.
        astro_use_slug: Key results by the frontmatter ``slug`` instead of
            the file path; documents without one are skipped with a warning.
        create_headings_slug: Generate slugs for headings that carry no
            explicit id. When off, such headings are not recorded.
        reset_data_on_run: Clear accumulated results whenever an extractor
            is configured for a new run.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    astro_ignore_draft: bool = False
    astro_use_slug: bool = False
    create_headings_slug: bool = False
    reset_data_on_run: bool = False
