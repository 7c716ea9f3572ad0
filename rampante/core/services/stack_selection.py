"""
Stack selection — YOLO pick of one catalog stack for a free-text prompt.

Pure logic — no I/O, no randomness, no dependence on hash ordering.

Scan order is (priority ascending, declaration order ascending).  The
first stack with any tag occurring in the prompt as a whole word wins;
scan order is the tie-break.  A tag "occurs" when it is bounded on both
sides by a non-alphanumeric character or the string edge, so ``api``
does not match inside ``rapid``.  With no match at all, the stack with
the lowest (priority, declaration order) is the fallback.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from rampante.core.errors import UsageError, ValidationError
from rampante.core.models.stack import CatalogIndex, SelectionResult, StackDefinition

logger = logging.getLogger(__name__)

FALLBACK_REASON = "no tag match; fallback to lowest priority"


@lru_cache(maxsize=512)
def _tag_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(r"(?<![a-z0-9])" + re.escape(tag) + r"(?![a-z0-9])")


def tag_in_prompt(tag: str, normalized_prompt: str) -> bool:
    """Word-boundary-aware membership test; *normalized_prompt* is lowercase."""
    if not tag:
        return False
    return _tag_pattern(tag).search(normalized_prompt) is not None


def first_matching_tag(stack: StackDefinition, normalized_prompt: str) -> str | None:
    """Return the first of the stack's tags (declared order) found in the prompt."""
    for tag in stack.tags:
        if tag_in_prompt(tag, normalized_prompt):
            return tag
    return None


def _result(stack: StackDefinition, **kwargs) -> SelectionResult:
    return SelectionResult(
        selected_stack=stack.name,
        priority=stack.priority,
        doc_path=stack.doc_path,
        tags=stack.tags,
        **kwargs,
    )


def _by_name(catalog: CatalogIndex, stack_name: str) -> StackDefinition:
    stack = catalog.get(stack_name)
    if stack is None:
        wanted = stack_name.casefold()
        stack = next((s for s in catalog.stacks if s.name.casefold() == wanted), None)
    if stack is None:
        raise UsageError(
            f"Specified stack '{stack_name}' not found. "
            f"Available stacks: {', '.join(catalog.names)}",
            remediation="Run 'rampante stacks list' to see valid names.",
        )
    return stack


def select_stack(
    catalog: CatalogIndex,
    prompt: str,
    stack_name: str | None = None,
) -> SelectionResult:
    """Select exactly one stack for *prompt*.

    Args:
        catalog: Parsed catalog.
        prompt: Free-text project description.
        stack_name: Optional manual override (exact, then case-insensitive).

    Raises:
        ValidationError: the catalog is empty.
        UsageError: ``stack_name`` does not exist.
    """
    if not catalog.stacks:
        raise ValidationError(
            "No stacks available in the catalog",
            remediation="Add at least one '### NAME' record to DEFINITIONS.md.",
        )

    if stack_name:
        stack = _by_name(catalog, stack_name)
        logger.debug("Manual stack override: %s", stack.name)
        return _result(stack, reason=f"manually specified stack: {stack.name}")

    normalized = prompt.lower()
    ordered = catalog.in_scan_order()

    for stack in ordered:
        tag = first_matching_tag(stack, normalized)
        if tag is not None:
            logger.debug("Selected %s on tag %r", stack.name, tag)
            return _result(stack, matched_tag=tag, reason=f"matched tag: {tag}")

    fallback = ordered[0]
    logger.debug("No tag match; falling back to %s", fallback.name)
    return _result(fallback, fallback=True, reason=FALLBACK_REASON)
