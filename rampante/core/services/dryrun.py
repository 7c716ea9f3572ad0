"""
Dry-run request processor — classify a raw /rampante invocation and,
in preview mode, build the prompts the downstream commands would get.

Pure functions: no filesystem, no network, no subprocess.

    "--dry-run Build X"   → PREVIEW, prompts for /specify, /plan, /tasks
    "--dry-run"           → PREVIEW, no prompts, explanatory note
    "Build X --dry-run"   → INVALID_FLAG_PLACEMENT
    "Build X"             → NORMAL (handled by the caller)
"""

from __future__ import annotations

import logging

from rampante.core.errors import InvalidFlagPlacement
from rampante.core.models.dryrun import (
    DownstreamTarget,
    DryRunOutcome,
    DryRunRequest,
    FlagState,
    GeneratedPrompt,
)
from rampante.core.models.settings import PreviewSettings

logger = logging.getLogger(__name__)

EMPTY_NOTE = "No downstream prompts generated due to empty content."
ARTIFACT_REFERENCE = "/specs/[feature-name]/{artifact}"


def classify(raw_input: str, flag: str = "--dry-run") -> FlagState:
    """Single transition from the raw input to a terminal state.

    The flag must be the first whitespace-delimited token, matched
    exactly.  Appearing anywhere else is an error, not normal mode.
    """
    tokens = raw_input.split()
    if tokens and tokens[0] == flag:
        return FlagState.PREVIEW
    if flag in raw_input:
        return FlagState.INVALID_FLAG_PLACEMENT
    return FlagState.NORMAL


def extract_content(raw_input: str, flag: str = "--dry-run") -> str:
    """Strip the leading flag token and surrounding whitespace."""
    stripped = raw_input.lstrip()
    if stripped.startswith(flag):
        stripped = stripped[len(flag):]
    return stripped.strip()


def build_request(
    raw_input: str,
    preview: PreviewSettings | None = None,
) -> DryRunRequest:
    preview = preview or PreviewSettings()
    content = extract_content(raw_input, preview.flag)
    commands = tuple(t.command for t in preview.targets) if content else ()
    return DryRunRequest(
        raw_input=raw_input,
        prompt_content=content,
        target_commands=commands,
    )


def build_prompts(
    request: DryRunRequest,
    targets: list[DownstreamTarget],
) -> list[GeneratedPrompt]:
    """One prompt per target, in configured order.

    The first target receives the user's content verbatim; each later
    target receives a reference to the artifact its predecessor would
    have written.
    """
    if request.is_empty:
        return []

    prompts: list[GeneratedPrompt] = []
    previous: DownstreamTarget | None = None
    for order, target in enumerate(targets, start=1):
        if previous is None:
            text, notes = request.prompt_content, None
        else:
            text = ARTIFACT_REFERENCE.format(artifact=previous.artifact)
            notes = f"Depends on {previous.artifact} being created by {previous.command}"
        prompts.append(GeneratedPrompt(command=target.command, order=order, text=text, notes=notes))
        previous = target
    return prompts


def process(raw_input: str, preview: PreviewSettings | None = None) -> DryRunOutcome:
    """Classify *raw_input* and build its preview.

    Raises:
        InvalidFlagPlacement: the flag is present but not the first token.
    """
    preview = preview or PreviewSettings()
    state = classify(raw_input, preview.flag)
    logger.debug("Invocation classified as %s", state.value)

    if state == FlagState.INVALID_FLAG_PLACEMENT:
        raise InvalidFlagPlacement(
            f"Flag {preview.flag} must be the first token of the prompt",
            remediation=f"Put {preview.flag} first, e.g. '{preview.flag} Build a todo app'.",
        )
    if state == FlagState.NORMAL:
        return DryRunOutcome(state=state)

    request = build_request(raw_input, preview)
    if request.is_empty:
        logger.info("Dry run with empty content; no prompts generated")
        return DryRunOutcome(state=state, request=request, note=EMPTY_NOTE)

    prompts = build_prompts(request, preview.targets)
    logger.info("Dry run generated %d prompts", len(prompts))
    return DryRunOutcome(state=state, request=request, prompts=prompts)


def format_markdown(outcome: DryRunOutcome) -> str:
    """Render a preview outcome as the ``# DRY RUN: /rampante`` document."""
    prompts = sorted(outcome.prompts, key=lambda p: p.order)
    lines = ["# DRY RUN: /rampante", "", "## Summary"]

    if not prompts:
        lines += ["- Commands: []", "", outcome.note or EMPTY_NOTE]
    else:
        lines.append(f"- Commands: [{', '.join(p.command for p in prompts)}]")
    lines.append("")

    for prompt in prompts:
        lines += [f"## {prompt.command}", ""]
        if prompt.notes:
            lines += [f"*Note: {prompt.notes}*", ""]
        lines += ["```text", prompt.text, "```", ""]

    while lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines)
