"""
Preview use case — handle one raw /rampante invocation.

``--dry-run <idea>`` yields the would-be downstream prompts and touches
nothing.  Any other invocation is normal mode: the stack is selected
and reported, and the downstream commands are left to the host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rampante.core.context import RunContext
from rampante.core.models.dryrun import DryRunOutcome, FlagState
from rampante.core.models.settings import Settings
from rampante.core.services.dryrun import process
from rampante.core.use_cases.select import SelectResult, select_for_prompt

logger = logging.getLogger(__name__)


@dataclass
class InvocationResult:
    outcome: DryRunOutcome
    selection: SelectResult | None = None

    @property
    def is_preview(self) -> bool:
        return self.outcome.state == FlagState.PREVIEW

    def to_dict(self) -> dict:
        if self.is_preview:
            return self.outcome.to_dict()
        return {
            "state": self.outcome.state.value,
            "selection": self.selection.to_dict() if self.selection else None,
        }


def handle_invocation(
    ctx: RunContext,
    raw_input: str,
    settings: Settings | None = None,
) -> InvocationResult:
    """Classify *raw_input* and act on it.

    Raises:
        InvalidFlagPlacement: the preview flag is not the first token.
    """
    settings = settings or Settings()
    outcome = process(raw_input, settings.preview)

    if outcome.state == FlagState.PREVIEW:
        return InvocationResult(outcome=outcome)

    logger.debug("Normal mode invocation; selecting stack")
    selection = select_for_prompt(ctx, raw_input.strip(), settings)
    return InvocationResult(outcome=outcome, selection=selection)
