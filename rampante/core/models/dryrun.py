"""
Dry-run models — a /rampante invocation and the prompts it would send.

Nothing here is persisted; these objects live only long enough to be
formatted for output.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FlagState(str, Enum):
    """Where the raw invocation lands. Single transition, then terminal."""

    NORMAL = "normal"
    PREVIEW = "preview"
    INVALID_FLAG_PLACEMENT = "invalid-flag-placement"


class DownstreamTarget(BaseModel):
    """A downstream command and the artifact it produces."""

    model_config = ConfigDict(frozen=True)

    command: str
    artifact: str


class DryRunRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_input: str
    prompt_content: str
    target_commands: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.target_commands


class GeneratedPrompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: str
    order: int = Field(ge=1)
    text: str
    notes: str | None = None


class DryRunOutcome(BaseModel):
    """What the processor hands back to the CLI."""

    state: FlagState
    request: DryRunRequest | None = None
    prompts: list[GeneratedPrompt] = Field(default_factory=list)
    note: str | None = None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "prompt_content": self.request.prompt_content if self.request else None,
            "commands": [p.command for p in self.prompts],
            "prompts": [p.model_dump(exclude_none=True) for p in self.prompts],
            "note": self.note,
        }
