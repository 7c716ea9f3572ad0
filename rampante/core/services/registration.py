"""
Registration — copy the canonical command file to where a host CLI looks.

Same decision table as any idempotent asset: skip when the host copy
exists, replace it under ``force``, create it when missing.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rampante.core.context import RunContext
from rampante.core.errors import DependencyMissing, PermissionDenied
from rampante.core.models.asset import AssetStatus, PathState
from rampante.core.persistence.files import (
    atomic_write_bytes,
    decide_write,
    probe_path,
    read_bytes,
)

logger = logging.getLogger(__name__)


def register(
    ctx: RunContext,
    source: Path,
    target: Path,
    force: bool = False,
) -> AssetStatus:
    """Copy *source* to *target*.

    Raises:
        DependencyMissing: the canonical artifact is absent.
        PermissionDenied: either path cannot be read/written.
    """
    source_state = probe_path(source)
    if source_state == PathState.DENIED:
        raise PermissionDenied(f"Cannot read canonical command file {source}")
    if source_state == PathState.MISSING:
        raise DependencyMissing(
            f"Canonical command file not found at {source}",
            remediation="Run asset installation first: 'rampante install <target>'.",
        )

    try:
        status = decide_write(probe_path(target), force)
    except PermissionDenied as e:
        raise PermissionDenied(f"Cannot inspect registration target {target}") from e

    if status == AssetStatus.SKIPPED_EXISTS:
        logger.info("Command already registered at %s", target)
        return status

    atomic_write_bytes(ctx, target, read_bytes(source))
    logger.info("Registered %s → %s (%s)", source.name, target, status.value)
    return status


def is_registered(target: Path) -> bool:
    return probe_path(target) == PathState.EXISTS
