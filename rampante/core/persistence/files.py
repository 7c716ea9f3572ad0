"""
File persistence — the only place that writes bytes to disk.

Writes are atomic (write to a temp file in the target directory, then
rename) so a killed process never leaves a half-written target.  Every
mutating helper takes the RunContext and refuses to act in preview mode.

``probe_path`` is the single existence check per asset: callers decide
once from its tri-state answer instead of sprinkling ``exists()`` calls.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from rampante.core.context import RunContext, guard_side_effect
from rampante.core.errors import PermissionDenied, wrap_os_error
from rampante.core.models.asset import AssetStatus, PathState

logger = logging.getLogger(__name__)


def probe_path(path: Path) -> PathState:
    """Classify *path* as exists / missing / permission-denied."""
    try:
        path.lstat()
    except FileNotFoundError:
        return PathState.MISSING
    except NotADirectoryError:
        return PathState.MISSING
    except PermissionError:
        return PathState.DENIED
    return PathState.EXISTS


def _target_mode(path: Path) -> int:
    """Keep an existing file's mode; new files get 0o666 minus the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except OSError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def ensure_dir(ctx: RunContext, path: Path) -> None:
    """Create *path* and its parents if absent."""
    guard_side_effect(ctx, "mkdir", path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise wrap_os_error(e, path, "create directory") from e


def atomic_write_bytes(
    ctx: RunContext,
    path: Path,
    data: bytes,
    mode: int | None = None,
) -> None:
    """Write *data* to *path* atomically, creating parent directories.

    Args:
        ctx: Run context; preview mode raises ``SideEffectBlocked``.
        path: Target file.
        data: Full new content.
        mode: Permission bits applied before the rename.  Defaults to
            the existing file's mode, or the umask default for new files.
    """
    guard_side_effect(ctx, "write", path)
    # Write through symlinks so a linked config keeps its link.
    path = path.resolve()
    ensure_dir(ctx, path.parent)
    if mode is None:
        mode = _target_mode(path)

    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
    except OSError as e:
        raise wrap_os_error(e, path, "write") from e

    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        tmp.chmod(mode)
        tmp.replace(path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise wrap_os_error(e, path, "write") from e

    logger.debug("Wrote %d bytes to %s", len(data), path)


def atomic_write_text(ctx: RunContext, path: Path, text: str, mode: int | None = None) -> None:
    atomic_write_bytes(ctx, path, text.encode("utf-8"), mode=mode)


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise wrap_os_error(e, path, "read") from e


def decide_write(state: PathState, force: bool) -> AssetStatus:
    """Map one probe result to the write decision for an idempotent asset.

    Raises:
        PermissionDenied: the target could not be inspected.
    """
    if state == PathState.DENIED:
        raise PermissionDenied("Target path cannot be inspected")
    if state == PathState.MISSING:
        return AssetStatus.CREATED
    return AssetStatus.RECREATED if force else AssetStatus.SKIPPED_EXISTS
