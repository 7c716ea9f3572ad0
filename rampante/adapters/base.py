"""
Host adapter base — the contract between the installer and a host CLI.

A host is an AI coding CLI that discovers slash commands from a
directory (Codex, Claude Code, Gemini CLI).  The installer only talks
to hosts through this interface, never hard-codes their paths.

To add a host:
    1. Subclass HostAdapter
    2. Implement name and command_target
    3. Register it in the HostRegistry
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rampante.core.context import RunContext
from rampante.core.models.settings import Settings

CANONICAL_DIR = Path("rampante") / "command"


class HostAdapter(ABC):
    """Where one host CLI expects the /rampante command and its config."""

    description: str = ""
    command_file: str = "rampante.md"

    @property
    @abstractmethod
    def name(self) -> str:
        """The target identifier used on the command line (e.g., 'codex')."""

    @abstractmethod
    def command_target(self, ctx: RunContext) -> Path:
        """Absolute path of the registered command file."""

    def canonical_source(self, ctx: RunContext) -> Path:
        """The project-local canonical artifact this host's copy comes from."""
        return ctx.project_root / CANONICAL_DIR / self.command_file

    def config_target(self, ctx: RunContext) -> Path | None:
        """Host config file that needs a block, or None."""
        return None

    def config_block(self, settings: Settings) -> tuple[str, str] | None:
        """(marker, block) to merge into ``config_target``, or None."""
        return None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
