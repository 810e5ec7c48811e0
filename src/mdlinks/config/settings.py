"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``MDLINKS_*`` prefix (``MDLINKS_EXTRACTOR__ASTRO_USE_SLUG``)
  3. TOML file    — ``mdlinks.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`mdlinks.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mdlinks.config.discovery import find_config
from mdlinks.config.models import ExtractorOptions, OutputSettings


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``mdlinks.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class MdlSettings(BaseSettings):
    """Unified settings for the mdlinks CLI.

    Merges CLI flags, environment variables, the TOML ``[extractor]``
    section, and code-baked defaults into a single frozen object.

    Attributes:
        root: Directory slugs are made relative to (parent of
            ``mdlinks.toml``, or CWD if no config found).
        config_path: The config file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MDLINKS_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    extractor: ExtractorOptions = Field(default_factory=ExtractorOptions)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> MdlSettings:
        """Construct settings from a CLI invocation.

        Discovers ``mdlinks.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's parent directory, and merges
        CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    @property
    def output(self) -> OutputSettings:
        """The output switches as their own model."""
        return OutputSettings(
            json_output=self.json_output,
            quiet=self.quiet,
            verbose=self.verbose,
        )

    def with_extractor(self, **overrides: bool) -> MdlSettings:
        """Return a copy with extractor options switched on.

        Only truthy overrides apply, so unset CLI flags never turn off an
        option enabled in the config file.
        """
        updates = {key: True for key, value in overrides.items() if value}
        if not updates:
            return self
        options = ExtractorOptions.model_validate({**self.extractor.model_dump(), **updates})
        return self.model_copy(update={"extractor": options})
