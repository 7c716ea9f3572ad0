"""
Tests for CLI commands — output, JSON mode, and exit codes.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from rampante.core.observability.logging_config import LEVEL_ENV_VAR
from rampante.main import cli


@pytest.fixture(autouse=True)
def _silence_logs(monkeypatch):
    """Keep log records out of the captured output so JSON parses."""
    monkeypatch.setenv(LEVEL_ENV_VAR, "CRITICAL")


def _invoke(project: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--root", str(project), *args])


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Rampante" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.2" in result.output

    def test_unknown_command_is_usage_error(self):
        result = CliRunner().invoke(cli, ["frobnicate"])
        assert result.exit_code == 1

    def test_missing_argument_is_usage_error(self):
        result = CliRunner().invoke(cli, ["install"])
        assert result.exit_code == 1

    def test_missing_config_file(self, project: Path):
        result = _invoke(project, "--config", str(project / "nope.yml"), "stacks", "list")
        assert result.exit_code == 3


class TestInstallCommand:
    def test_install(self, project: Path, home: Path):
        result = _invoke(project, "install", "claude")
        assert result.exit_code == 0, result.output
        assert "created" in result.output
        assert (project / ".claude" / "commands" / "rampante.md").is_file()

    def test_install_twice(self, project: Path, home: Path):
        _invoke(project, "install", "codex")
        result = _invoke(project, "install", "codex", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["skipped"] == data["total"]

    def test_force(self, project: Path, home: Path):
        _invoke(project, "install", "gemini")
        result = _invoke(project, "install", "gemini", "--force", "--json")
        data = json.loads(result.output)
        assert data["recreated"] == data["total"]

    def test_dry_run(self, project: Path, home: Path):
        result = _invoke(project, "install", "codex", "--dry-run")
        assert result.exit_code == 0
        assert "would create" in result.output
        assert list(project.iterdir()) == []
        assert list(home.iterdir()) == []

    def test_unsupported_target(self, project: Path, home: Path):
        result = _invoke(project, "install", "cursor")
        assert result.exit_code == 1
        assert "not supported" in result.output
        assert "codex, claude, gemini" in result.output

    def test_failed_asset_exit_code(self, project: Path, home: Path):
        (project / "scripts").write_text("not a directory")
        result = _invoke(project, "install", "claude", "--json")
        assert result.exit_code == 2
        data = json.loads(result.output)
        assert data["status"] == "partial"
        assert data["failed"] == 2


class TestRunCommand:
    def test_dry_run_markdown(self, project: Path):
        result = _invoke(project, "run", "--dry-run", "Build", "a", "dark", "mode", "toggle")
        assert result.exit_code == 0, result.output
        assert result.output.startswith("# DRY RUN: /rampante")
        assert "- Commands: [/specify, /plan, /tasks]" in result.output
        assert "```text\nBuild a dark mode toggle\n```" in result.output

    def test_dry_run_single_argument(self, project: Path):
        result = _invoke(project, "run", "--dry-run Build X")
        assert result.exit_code == 0
        assert "Build X" in result.output

    def test_dry_run_empty(self, project: Path):
        result = _invoke(project, "run", "--dry-run")
        assert result.exit_code == 0
        assert "- Commands: []" in result.output
        assert "No downstream prompts generated due to empty content." in result.output

    def test_dry_run_json(self, project: Path):
        result = _invoke(project, "run", "--json", "--dry-run", "idea")
        data = json.loads(result.output)
        assert data["commands"] == ["/specify", "/plan", "/tasks"]

    def test_invalid_placement(self, project: Path):
        result = _invoke(project, "run", "Build", "X", "--dry-run")
        assert result.exit_code == 2
        assert "DRY RUN" not in result.output
        assert "first token" in result.output

    def test_normal_mode_selects(self, project: Path, catalog_dir: Path):
        result = _invoke(project, "run", "build", "a", "web", "app")
        assert result.exit_code == 0
        assert "WEB_APP" in result.output
        assert "matched tag: web" in result.output

    def test_missing_prompt(self, project: Path):
        result = _invoke(project, "run")
        assert result.exit_code == 1


class TestSelectCommand:
    def test_select(self, project: Path, catalog_dir: Path):
        result = _invoke(project, "select", "a rapid prototype", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["selected_stack"] == "CLI"
        assert data["fallback"] is True

    def test_stack_override_unknown(self, project: Path, catalog_dir: Path):
        result = _invoke(project, "select", "x", "--stack", "NOPE")
        assert result.exit_code == 1
        assert "Available stacks" in result.output

    def test_missing_catalog(self, project: Path):
        result = _invoke(project, "select", "x")
        assert result.exit_code == 3

    def test_malformed_catalog(self, project: Path):
        stacks_dir = project / "recommended-stacks"
        stacks_dir.mkdir()
        (stacks_dir / "DEFINITIONS.md").write_text("### A\n### A\n")
        result = _invoke(project, "select", "x")
        assert result.exit_code == 4


class TestStacksCommand:
    def test_list(self, project: Path, catalog_dir: Path):
        result = _invoke(project, "stacks", "list")
        assert result.exit_code == 0
        assert result.output.index("CLI") < result.output.index("WEB_APP") < result.output.index("API")

    def test_list_json(self, project: Path, catalog_dir: Path):
        result = _invoke(project, "stacks", "list", "--json")
        names = [s["name"] for s in json.loads(result.output)["stacks"]]
        assert names == ["CLI", "WEB_APP", "API"]


class TestCommandUpdate:
    def test_requires_install(self, project: Path):
        result = _invoke(project, "command", "update")
        assert result.exit_code == 3

    def test_after_install(self, project: Path, home: Path):
        _invoke(project, "install", "claude")
        result = _invoke(project, "command", "update", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["backup"] is not None
        assert Path(data["backup"]).is_file()


class TestVerifyCommand:
    def test_incomplete(self, project: Path, home: Path):
        result = _invoke(project, "verify", "claude")
        assert result.exit_code == 3

    def test_complete(self, project: Path, home: Path):
        _invoke(project, "install", "codex")
        result = _invoke(project, "verify", "codex", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output)["ok"] is True
