"""
Asset models — the statically enumerated files rampante manages.

``ManagedAssetSpec`` is the installer's input, ``AssetOutcome`` its
per-asset output.  The installer never raises for a single asset: a
failure becomes an ``AssetOutcome`` with status ``failed``, in the same
spirit as an adapter Receipt.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


class AssetKind(str, Enum):
    """How an asset is materialized."""

    FILE = "file"                   # plain write of bundled content
    CONFIG_BLOCK = "config_block"   # marker-guarded append to a user file
    REGISTRATION = "registration"   # copy of a canonical artifact to a host


class AssetStatus(str, Enum):
    CREATED = "created"
    SKIPPED_EXISTS = "skipped-exists"
    RECREATED = "recreated"
    FAILED = "failed"


class PathState(str, Enum):
    """Tri-state answer of the single existence probe per asset."""

    EXISTS = "exists"
    MISSING = "missing"
    DENIED = "permission-denied"


class ManagedAssetSpec(BaseModel):
    """One managed asset.

    ``policy``:
        idempotent      skipped when present, recreated under ``force``.
        always-managed  only a marker-delimited block of the target is
                        ours; presence means "marker found" and ``force``
                        rewrites just that block (user bytes survive).

    ``source`` is a bundled asset name for FILE, the canonical artifact
    path for REGISTRATION, and the block text for CONFIG_BLOCK.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    target: Path
    kind: AssetKind = AssetKind.FILE
    policy: Literal["idempotent", "always-managed"] = "idempotent"
    source: str = ""
    marker: str = ""                # CONFIG_BLOCK only
    executable: bool = False
    backup_before_overwrite: bool = False


class AssetOutcome(BaseModel):
    """Result of installing (or planning) one asset."""

    name: str
    target: str
    status: AssetStatus
    detail: str = ""
    backup_path: str | None = None
    error: str | None = None
    exit_code: int = 0
    planned: bool = False

    @property
    def ok(self) -> bool:
        return self.status != AssetStatus.FAILED

    @property
    def failed(self) -> bool:
        return self.status == AssetStatus.FAILED


class BackupRecord(BaseModel):
    """A timestamped copy taken immediately before an overwrite."""

    model_config = ConfigDict(frozen=True)

    original_path: Path
    backup_path: Path
    epoch_seconds: int
    collision_suffix: int | None = None
