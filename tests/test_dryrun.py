"""
Tests for the dry-run request processor — flag placement, prompts, output.
"""

import pytest

from rampante.core.errors import EXIT_PERMISSION, InvalidFlagPlacement
from rampante.core.models.dryrun import DownstreamTarget, FlagState
from rampante.core.models.settings import PreviewSettings
from rampante.core.services.dryrun import (
    EMPTY_NOTE,
    build_request,
    classify,
    extract_content,
    format_markdown,
    process,
)


class TestClassify:
    @pytest.mark.parametrize("raw,expected", [
        ("--dry-run Build X", FlagState.PREVIEW),
        ("   --dry-run   Build X", FlagState.PREVIEW),
        ("--dry-run", FlagState.PREVIEW),
        ("Build X --dry-run", FlagState.INVALID_FLAG_PLACEMENT),
        ("Build --dry-run X", FlagState.INVALID_FLAG_PLACEMENT),
        ("--dry-runBuild X", FlagState.INVALID_FLAG_PLACEMENT),
        ("--DRY-RUN Build X", FlagState.NORMAL),
        ("--dryrun Build X", FlagState.NORMAL),
        ("Build X", FlagState.NORMAL),
        ("", FlagState.NORMAL),
    ])
    def test_states(self, raw, expected):
        assert classify(raw) == expected

    def test_custom_flag(self):
        assert classify("--preview idea", flag="--preview") == FlagState.PREVIEW
        assert classify("--dry-run idea", flag="--preview") == FlagState.NORMAL


class TestRequest:
    def test_extract_content(self):
        assert extract_content("--dry-run   Build a thing  ") == "Build a thing"

    def test_inner_whitespace_is_kept(self):
        assert extract_content("--dry-run Build\n\ta  thing") == "Build\n\ta  thing"

    def test_targets_in_configured_order(self):
        request = build_request("--dry-run Build X")
        assert request.target_commands == ("/specify", "/plan", "/tasks")

    def test_empty_content_has_no_targets(self):
        request = build_request("--dry-run    ")
        assert request.prompt_content == ""
        assert request.is_empty


class TestProcess:
    def test_example(self):
        outcome = process("--dry-run Build a dark mode toggle")

        assert outcome.state == FlagState.PREVIEW
        assert [p.command for p in outcome.prompts] == ["/specify", "/plan", "/tasks"]
        assert [p.order for p in outcome.prompts] == [1, 2, 3]

        specify, plan, tasks = outcome.prompts
        assert specify.text == "Build a dark mode toggle"
        assert specify.notes is None
        assert plan.text == "/specs/[feature-name]/spec.md"
        assert plan.notes == "Depends on spec.md being created by /specify"
        assert tasks.text == "/specs/[feature-name]/plan.md"
        assert "Build a dark mode toggle" not in plan.text + tasks.text

    def test_empty_content_is_success(self):
        outcome = process("--dry-run")
        assert outcome.state == FlagState.PREVIEW
        assert outcome.prompts == []
        assert outcome.note == EMPTY_NOTE

    def test_invalid_placement_raises(self):
        with pytest.raises(InvalidFlagPlacement) as exc_info:
            process("Build X --dry-run")
        assert exc_info.value.exit_code == EXIT_PERMISSION

    def test_normal(self):
        outcome = process("Build X")
        assert outcome.state == FlagState.NORMAL
        assert outcome.request is None

    def test_configured_targets(self):
        preview = PreviewSettings(targets=[
            DownstreamTarget(command="/specify", artifact="spec.md"),
            DownstreamTarget(command="/clarify", artifact="clarifications.md"),
        ])
        outcome = process("--dry-run idea", preview)
        assert [p.command for p in outcome.prompts] == ["/specify", "/clarify"]
        assert outcome.prompts[1].text == "/specs/[feature-name]/spec.md"

    def test_to_dict(self):
        data = process("--dry-run idea").to_dict()
        assert data["state"] == "preview"
        assert data["prompt_content"] == "idea"
        assert data["commands"] == ["/specify", "/plan", "/tasks"]
        assert "notes" not in data["prompts"][0]


class TestFormatMarkdown:
    def test_full_document(self):
        text = format_markdown(process("--dry-run Build X"))
        assert text.splitlines()[:4] == [
            "# DRY RUN: /rampante",
            "",
            "## Summary",
            "- Commands: [/specify, /plan, /tasks]",
        ]
        assert "## /specify\n\n```text\nBuild X\n```" in text
        assert "## /plan\n\n*Note: Depends on spec.md being created by /specify*\n\n```text\n" in text
        assert not text.endswith("\n")

    def test_empty_document(self):
        text = format_markdown(process("--dry-run"))
        assert text == (
            "# DRY RUN: /rampante\n"
            "\n"
            "## Summary\n"
            "- Commands: []\n"
            "\n"
            "No downstream prompts generated due to empty content."
        )
