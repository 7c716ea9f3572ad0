"""
Asset installer — materialize the enumerated managed assets.

The set of assets is static (``managed_assets``): the canonical command
files, the stack catalog, the helper scripts, the host config block and
the host registration.  For each one the installer probes the target
once and acts on that single answer:

    missing                  → created
    present, force=False     → skipped-exists (no write)
    present, force=True      → recreated (backup first when requested)
    cannot inspect / write   → failed, remaining assets still attempted

Config blocks are always-managed: the file belongs to the user, so only
the block between its marker and the next table header is ours.  The
"exists" test for such an asset is the marker, and ``force`` rewrites
the block in place rather than the whole file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rampante.adapters.base import CANONICAL_DIR, HostAdapter
from rampante.core.context import RunContext
from rampante.core.data import SCRIPTS, STACK_DOCUMENTS, read_asset
from rampante.core.errors import EXIT_OK, RampanteError, wrap_os_error
from rampante.core.models.asset import (
    AssetKind,
    AssetOutcome,
    AssetStatus,
    ManagedAssetSpec,
    PathState,
)
from rampante.core.models.settings import Settings
from rampante.core.persistence.files import atomic_write_bytes, decide_write, probe_path
from rampante.core.services.backup import backup_if_exists
from rampante.core.services.config_writer import (
    BlockOutcome,
    decide_block,
    ensure_block,
    has_block,
)
from rampante.core.services.registration import register

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755

_PLAN_VERBS = {
    AssetStatus.CREATED: "would create",
    AssetStatus.SKIPPED_EXISTS: "would skip",
    AssetStatus.RECREATED: "would recreate",
}


# ── Report ──────────────────────────────────────────────────────────


@dataclass
class InstallReport:
    """Result of one installer run."""

    target: str = ""
    preview: bool = False
    outcomes: list[AssetOutcome] = field(default_factory=list)

    def _count(self, status: AssetStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def created(self) -> int:
        return self._count(AssetStatus.CREATED)

    @property
    def skipped(self) -> int:
        return self._count(AssetStatus.SKIPPED_EXISTS)

    @property
    def recreated(self) -> int:
        return self._count(AssetStatus.RECREATED)

    @property
    def failed(self) -> int:
        return self._count(AssetStatus.FAILED)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.failed < self.total:
            return "partial"
        return "failed"

    @property
    def exit_code(self) -> int:
        """Exit code of the first failed asset, 0 when everything succeeded."""
        for outcome in self.outcomes:
            if outcome.failed:
                return outcome.exit_code
        return EXIT_OK

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "preview": self.preview,
            "status": self.status,
            "total": self.total,
            "created": self.created,
            "skipped": self.skipped,
            "recreated": self.recreated,
            "failed": self.failed,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }


# ── Asset enumeration ───────────────────────────────────────────────


def managed_assets(ctx: RunContext, host: HostAdapter, settings: Settings) -> list[ManagedAssetSpec]:
    """The explicit, ordered list of assets installed for *host*.

    Order matters: the canonical command files come before the
    registration that copies one of them.
    """
    root = ctx.project_root
    assets: list[ManagedAssetSpec] = []

    for command_file in ("rampante.md", "rampante.toml"):
        assets.append(ManagedAssetSpec(
            name=f"command/{command_file}",
            target=root / CANONICAL_DIR / command_file,
            source=f"command/{command_file}",
            backup_before_overwrite=True,
        ))

    catalog_dir = root / settings.catalog_dir
    for document in ("DEFINITIONS.md", *STACK_DOCUMENTS):
        assets.append(ManagedAssetSpec(
            name=f"recommended-stacks/{document}",
            target=catalog_dir / document,
            source=f"recommended-stacks/{document}",
        ))

    for script in SCRIPTS:
        assets.append(ManagedAssetSpec(
            name=f"scripts/{script}",
            target=root / "scripts" / script,
            source=f"scripts/{script}",
            executable=True,
        ))

    config_target = host.config_target(ctx)
    block = host.config_block(settings)
    if config_target is not None and block is not None:
        marker, text = block
        assets.append(ManagedAssetSpec(
            name=f"{host.name}/config",
            target=config_target,
            kind=AssetKind.CONFIG_BLOCK,
            policy="always-managed",
            source=text,
            marker=marker,
        ))

    assets.append(ManagedAssetSpec(
        name=f"{host.name}/registration",
        target=host.command_target(ctx),
        kind=AssetKind.REGISTRATION,
        source=str(host.canonical_source(ctx)),
    ))
    return assets


# ── Per-asset actions ───────────────────────────────────────────────


def _install_file(ctx: RunContext, asset: ManagedAssetSpec, force: bool) -> AssetOutcome:
    status = decide_write(probe_path(asset.target), force)
    outcome = AssetOutcome(name=asset.name, target=str(asset.target), status=status)
    if status == AssetStatus.SKIPPED_EXISTS:
        return outcome

    data = read_asset(asset.source)

    if status == AssetStatus.RECREATED and asset.backup_before_overwrite:
        # A failed backup raises here, so the original is never overwritten.
        record = backup_if_exists(ctx, asset.target)
        if record is not None:
            outcome.backup_path = str(record.backup_path)

    mode = EXECUTABLE_MODE if asset.executable else None
    atomic_write_bytes(ctx, asset.target, data, mode=mode)
    return outcome


_BLOCK_STATUS = {
    BlockOutcome.ALREADY_PRESENT: AssetStatus.SKIPPED_EXISTS,
    BlockOutcome.APPENDED: AssetStatus.CREATED,
    BlockOutcome.CREATED_WITH_BLOCK: AssetStatus.CREATED,
    BlockOutcome.REPLACED: AssetStatus.RECREATED,
}


def _install_config_block(ctx: RunContext, asset: ManagedAssetSpec, force: bool) -> AssetOutcome:
    result = ensure_block(ctx, asset.target, asset.marker, asset.source, replace=force)
    return AssetOutcome(
        name=asset.name,
        target=str(asset.target),
        status=_BLOCK_STATUS[result],
        detail=result.value,
    )


def _install_registration(ctx: RunContext, asset: ManagedAssetSpec, force: bool) -> AssetOutcome:
    status = register(ctx, Path(asset.source), asset.target, force=force)
    return AssetOutcome(name=asset.name, target=str(asset.target), status=status)


def _install_one(ctx: RunContext, asset: ManagedAssetSpec, force: bool) -> AssetOutcome:
    if asset.kind == AssetKind.CONFIG_BLOCK:
        return _install_config_block(ctx, asset, force)
    if asset.kind == AssetKind.REGISTRATION:
        return _install_registration(ctx, asset, force)
    return _install_file(ctx, asset, force)


_BLOCK_PLAN = {
    BlockOutcome.ALREADY_PRESENT: "would skip (block present)",
    BlockOutcome.APPENDED: "would append block",
    BlockOutcome.CREATED_WITH_BLOCK: "would create with block",
    BlockOutcome.REPLACED: "would replace block",
}


def _plan_one(asset: ManagedAssetSpec, force: bool) -> AssetOutcome:
    """Preview: what ``_install_one`` would do, without touching disk."""
    state = probe_path(asset.target)

    if asset.kind == AssetKind.CONFIG_BLOCK:
        present = state == PathState.EXISTS and has_block(asset.target, asset.marker)
        block = decide_block(state, present, force)
        status, detail = _BLOCK_STATUS[block], _BLOCK_PLAN[block]
    else:
        status = decide_write(state, force)
        detail = _PLAN_VERBS[status]
        if status == AssetStatus.RECREATED and asset.backup_before_overwrite:
            detail += " (after backup)"

    return AssetOutcome(
        name=asset.name,
        target=str(asset.target),
        status=status,
        detail=detail,
        planned=True,
    )


def _failed(asset: ManagedAssetSpec, err: RampanteError, planned: bool) -> AssetOutcome:
    logger.error("Asset %s failed: %s", asset.name, err.message)
    return AssetOutcome(
        name=asset.name,
        target=str(asset.target),
        status=AssetStatus.FAILED,
        error=err.message,
        exit_code=err.exit_code,
        planned=planned,
    )


# ── Entry point ─────────────────────────────────────────────────────


def install(
    ctx: RunContext,
    assets: list[ManagedAssetSpec],
    force: bool = False,
    target: str = "",
) -> InstallReport:
    """Install *assets* in order, one outcome per asset.

    A failing asset is recorded and the loop continues.  In preview mode
    nothing is written; each outcome is the planned action.
    """
    report = InstallReport(target=target, preview=ctx.is_preview)

    for asset in assets:
        try:
            if ctx.is_preview:
                outcome = _plan_one(asset, force)
            else:
                outcome = _install_one(ctx, asset, force)
        except RampanteError as e:
            outcome = _failed(asset, e, ctx.is_preview)
        except OSError as e:
            outcome = _failed(asset, wrap_os_error(e, asset.target, "install"), ctx.is_preview)

        logger.info("%s → %s", asset.name, outcome.status.value)
        report.outcomes.append(outcome)

    logger.info(
        "Install %s: %d created, %d skipped, %d recreated, %d failed",
        report.status, report.created, report.skipped, report.recreated, report.failed,
    )
    return report
