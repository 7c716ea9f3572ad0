"""
Built-in host adapters.

    codex   ~/.codex/prompts/rampante.md        + ~/.codex/config.toml block
    claude  <project>/.claude/commands/rampante.md
    gemini  <project>/.gemini/commands/rampante.toml

"~" is the RunContext home, which honours RAMPANTE_HOME.
"""

from __future__ import annotations

from pathlib import Path

from rampante.adapters.base import HostAdapter
from rampante.core.context import RunContext
from rampante.core.models.settings import Settings
from rampante.core.services.config_writer import CONTEXT7_MARKER, render_context7_block


class CodexHost(HostAdapter):
    description = "OpenAI Codex CLI"

    @property
    def name(self) -> str:
        return "codex"

    def command_target(self, ctx: RunContext) -> Path:
        return ctx.home / ".codex" / "prompts" / self.command_file

    def config_target(self, ctx: RunContext) -> Path | None:
        return ctx.home / ".codex" / "config.toml"

    def config_block(self, settings: Settings) -> tuple[str, str] | None:
        return CONTEXT7_MARKER, render_context7_block(settings.context7)


class ClaudeHost(HostAdapter):
    description = "Claude Code"

    @property
    def name(self) -> str:
        return "claude"

    def command_target(self, ctx: RunContext) -> Path:
        return ctx.project_root / ".claude" / "commands" / self.command_file


class GeminiHost(HostAdapter):
    description = "Gemini CLI"
    command_file = "rampante.toml"

    @property
    def name(self) -> str:
        return "gemini"

    def command_target(self, ctx: RunContext) -> Path:
        return ctx.project_root / ".gemini" / "commands" / self.command_file
