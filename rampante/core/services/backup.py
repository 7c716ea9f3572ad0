"""
Backup manager — timestamped copy of a file right before it is overwritten.

Backups sit next to the original and keep its extension::

    rampante.md  →  rampante.1718000000.md
                    rampante.1718000000-1.md   (same second, second backup)

The backup name is reserved with an exclusive create, so two backups in
the same second (or two racing processes) always land on distinct
names.  If the copy fails for any reason the error propagates and the
original is left untouched — callers must not go on to overwrite.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from collections.abc import Callable
from pathlib import Path

from rampante.core.context import RunContext, guard_side_effect
from rampante.core.errors import PermissionDenied, ValidationError, wrap_os_error
from rampante.core.models.asset import BackupRecord, PathState
from rampante.core.persistence.files import probe_path, read_bytes

logger = logging.getLogger(__name__)

_MAX_SUFFIX = 1000


def backup_name(path: Path, epoch: int, suffix: int | None = None) -> Path:
    """``<stem>.<epoch>[-<suffix>]<ext>`` next to *path*."""
    stamp = str(epoch) if suffix is None else f"{epoch}-{suffix}"
    return path.with_name(f"{path.stem}.{stamp}{path.suffix}")


def _reserve(path: Path, epoch: int, mode: int) -> tuple[Path, int, int | None]:
    """Exclusively create the first free backup name; return (path, fd, suffix)."""
    for n in range(_MAX_SUFFIX):
        suffix = n or None
        candidate = backup_name(path, epoch, suffix)
        try:
            fd = os.open(candidate, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
        except FileExistsError:
            continue
        except OSError as e:
            raise wrap_os_error(e, candidate, "create backup") from e
        return candidate, fd, suffix

    raise PermissionDenied(
        f"No free backup name for {path} after {_MAX_SUFFIX} attempts",
        remediation=f"Clean up old backups next to {path}.",
    )


def backup_if_exists(
    ctx: RunContext,
    path: Path,
    clock: Callable[[], float] = time.time,
) -> BackupRecord | None:
    """Copy *path* to a collision-safe timestamped sibling.

    Returns:
        The BackupRecord, or None when *path* does not exist.

    Raises:
        PermissionDenied: the original cannot be read or the backup
            cannot be written.  No partial backup is left behind.
    """
    state = probe_path(path)
    if state == PathState.MISSING:
        logger.debug("Nothing to back up at %s", path)
        return None
    if state == PathState.DENIED:
        raise PermissionDenied(f"Cannot inspect {path} for backup")
    if not path.is_file():
        raise ValidationError(f"Cannot back up {path}: not a regular file")

    guard_side_effect(ctx, "backup", path)

    data = read_bytes(path)
    mode = stat.S_IMODE(path.stat().st_mode)
    epoch = int(clock())

    candidate, fd, suffix = _reserve(path, epoch, mode)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
    except OSError as e:
        candidate.unlink(missing_ok=True)
        raise wrap_os_error(e, candidate, "write backup") from e

    logger.info("Backed up %s → %s", path, candidate.name)
    return BackupRecord(
        original_path=path,
        backup_path=candidate,
        epoch_seconds=epoch,
        collision_suffix=suffix,
    )
