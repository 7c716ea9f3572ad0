"""
Settings model — optional rampante.yml.

Every field has a default, so a project with no rampante.yml behaves
exactly like one with an empty file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from rampante.core.models.dryrun import DownstreamTarget


def _default_targets() -> list[DownstreamTarget]:
    return [
        DownstreamTarget(command="/specify", artifact="spec.md"),
        DownstreamTarget(command="/plan", artifact="plan.md"),
        DownstreamTarget(command="/tasks", artifact="tasks.md"),
    ]


class PreviewSettings(BaseModel):
    """Dry-run flag and the fixed, ordered downstream targets."""

    flag: str = "--dry-run"
    targets: list[DownstreamTarget] = Field(default_factory=_default_targets)

    @field_validator("flag")
    @classmethod
    def _flag_is_one_token(cls, v: str) -> str:
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("preview flag must be a single non-empty token")
        return v


class TechnologySettings(BaseModel):
    """Which stack-document sections feed the technology list.

    The preferred section wins outright whenever it yields at least one
    entry; the fallback is consulted only when it yields none.
    """

    preferred_section: str = "documentation"
    fallback_section: str = "core technologies"


class Context7Settings(BaseModel):
    """Parameters of the MCP server block written to host configs."""

    command: str = "npx"
    package: str = "@upstash/context7-mcp"
    api_key: str = "YOUR_API_KEY"

    @property
    def args(self) -> list[str]:
        return ["-y", self.package, "--api-key", self.api_key]


class Settings(BaseModel):
    catalog_dir: str = "recommended-stacks"
    preview: PreviewSettings = Field(default_factory=PreviewSettings)
    technologies: TechnologySettings = Field(default_factory=TechnologySettings)
    context7: Context7Settings = Field(default_factory=Context7Settings)
