"""
Update command use case — replace the canonical command with the simplified template.

Pre-flight, in order:
    1. ``<root>/scripts/`` exists                   else DependencyMissing
    2. the template exists                          else DependencyMissing
    3. the template does not call select-stack.sh   else ValidationError

Then the live ``rampante/command/rampante.md`` is backed up (if present)
and overwritten atomically.  A failed backup aborts before the write.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rampante.adapters.base import CANONICAL_DIR
from rampante.core.context import RunContext
from rampante.core.data import SIMPLIFIED_TEMPLATE, asset_path
from rampante.core.errors import DependencyMissing, ValidationError
from rampante.core.models.asset import PathState
from rampante.core.persistence.files import atomic_write_bytes, probe_path, read_bytes
from rampante.core.services.backup import backup_if_exists

logger = logging.getLogger(__name__)

FORBIDDEN_REFERENCE = "select-stack.sh"
TEMPLATE_NAME = "rampante-command-simplified.md"


@dataclass
class CommandUpdate:
    command_path: Path
    template_path: Path
    backup_path: Path | None = None
    planned: bool = False

    def to_dict(self) -> dict:
        return {
            "command": str(self.command_path),
            "template": str(self.template_path),
            "backup": str(self.backup_path) if self.backup_path else None,
            "planned": self.planned,
        }


def resolve_template(project_root: Path) -> Path:
    """Project-local template if present, else the bundled one."""
    local = project_root / "templates" / TEMPLATE_NAME
    if probe_path(local) == PathState.EXISTS:
        return local
    return asset_path(SIMPLIFIED_TEMPLATE)


def _check_no_reference(content: bytes, where: Path) -> None:
    if FORBIDDEN_REFERENCE.encode("utf-8") in content:
        raise ValidationError(
            f"{where} must not reference {FORBIDDEN_REFERENCE}",
            remediation=f"Remove every mention of {FORBIDDEN_REFERENCE} from the template.",
        )


def update_command(
    ctx: RunContext,
    clock: Callable[[], float] = time.time,
) -> CommandUpdate:
    """Back up and replace the canonical command file.

    In preview mode the pre-flight checks still run, nothing is written.
    """
    root = ctx.project_root
    scripts_dir = root / "scripts"
    if not scripts_dir.is_dir():
        raise DependencyMissing(
            f"Missing required directory: {scripts_dir}",
            remediation="Run 'rampante install <target>' first to install the scripts.",
        )

    template = resolve_template(root)
    if probe_path(template) != PathState.EXISTS:
        raise DependencyMissing(f"Template not found: {template}")

    content = read_bytes(template)
    _check_no_reference(content, template)

    command_path = root / CANONICAL_DIR / "rampante.md"
    if ctx.is_preview:
        logger.info("Would update %s from %s", command_path, template)
        return CommandUpdate(command_path=command_path, template_path=template, planned=True)

    record = backup_if_exists(ctx, command_path, clock=clock)
    atomic_write_bytes(ctx, command_path, content)
    _check_no_reference(read_bytes(command_path), command_path)

    logger.info("Updated %s from %s", command_path, template)
    return CommandUpdate(
        command_path=command_path,
        template_path=template,
        backup_path=record.backup_path if record else None,
    )
