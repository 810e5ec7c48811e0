"""Tests for the scan command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mdlinks.cli import cli
from tests.conftest import write_mdast


@pytest.mark.usefixtures("_isolated_root")
class TestScanCommand:
    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "scan", "docs"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert sorted(data["headings"]) == ["docs/draft", "docs/intro", "docs/setup"]
        assert data["internalLinks"]["docs/intro"] == ["/docs/setup"]
        assert data["externalLinks"] == {"docs/intro": ["https://marko-py.readthedocs.io"]}

    def test_defaults_to_cwd(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "scan"])
        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["docs/draft", "docs/intro", "docs/setup"]

    def test_ignore_draft_and_use_slug(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "scan", "--ignore-draft", "--use-slug"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "getting-started"
        assert "No slug found for file" in result.stderr

    def test_heading_slugs(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "scan", "--heading-slugs"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["headings"]["docs/setup"] == ["setup", "install", "install-1"]

    def test_options_from_config_file(self, cli_runner: CliRunner, content_root: Path) -> None:
        (content_root / "mdlinks.toml").write_text("[extractor]\nastroIgnoreDraft = true\n")
        result = cli_runner.invoke(cli, ["-q", "scan"])
        assert result.exit_code == 0, result.output
        assert "docs/draft" not in result.stdout.splitlines()

    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["scan", "docs"])
        assert result.exit_code == 0, result.output
        assert "scanned 3 documents: 3 recorded, 0 skipped" in result.stdout
        assert "docs/intro" in result.stdout

    def test_load_failures_go_to_stderr(self, cli_runner: CliRunner, content_root: Path) -> None:
        (content_root / "docs" / "broken.md").write_text("---\ntitle: [oops\n---\n")
        result = cli_runner.invoke(cli, ["--json", "scan", "docs"])
        assert result.exit_code == 0
        json.loads(result.stdout)
        assert "WARNING: Could not load" in result.stderr

    def test_mdx_link_card_from_mdast(self, cli_runner: CliRunner, content_root: Path) -> None:
        write_mdast(content_root / "mdx" / "components.mdast.json")
        result = cli_runner.invoke(cli, ["--json", "scan", "mdx"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["headings"] == {"mdx/components": ["cards", "inline-anchor"]}
        assert data["internalLinks"] == {"mdx/components": ["/guides/"]}
        assert data["externalLinks"] == {"mdx/components": ["https://docs.astro.build"]}

    def test_missing_path(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["scan", "nowhere"])
        assert result.exit_code == 2

    def test_invalid_config(self, cli_runner: CliRunner, content_root: Path) -> None:
        (content_root / "mdlinks.toml").write_text("[extractor]\nunknownOption = true\n")
        result = cli_runner.invoke(cli, ["scan"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestScanExamples:
    def test_examples_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["scan", "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output
        assert "mdlinks scan docs/" in result.output

    def test_help_lists_flags(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["scan", "--help"])
        assert result.exit_code == 0
        for flag in ("--ignore-draft", "--use-slug", "--heading-slugs", "--examples"):
            assert flag in result.output
