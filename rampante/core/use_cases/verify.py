"""
Verify use case — read-only check that a host installation is complete.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rampante.adapters.base import CANONICAL_DIR
from rampante.adapters.registry import HostRegistry, default_registry
from rampante.core.context import RunContext
from rampante.core.data import SCRIPTS
from rampante.core.models.asset import PathState
from rampante.core.models.settings import Settings
from rampante.core.persistence.files import probe_path
from rampante.core.services.config_writer import has_block
from rampante.core.services.registration import is_registered


@dataclass
class Check:
    name: str
    path: str
    ok: bool
    detail: str = ""


@dataclass
class VerifyResult:
    target: str
    checks: list[Check] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(c.ok for c in self.checks)

    @property
    def missing(self) -> list[Check]:
        return [c for c in self.checks if not c.ok]

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "ok": self.ok,
            "checks": [
                {"name": c.name, "path": c.path, "ok": c.ok, "detail": c.detail}
                for c in self.checks
            ],
        }


def _state_detail(state: PathState) -> str:
    return "" if state == PathState.EXISTS else state.value


def verify_target(
    ctx: RunContext,
    target: str,
    settings: Settings | None = None,
    registry: HostRegistry | None = None,
) -> VerifyResult:
    """Report which parts of *target*'s installation are present.

    Raises:
        UsageError: *target* is not a supported host.
    """
    settings = settings or Settings()
    host = (registry or default_registry()).get(target)
    result = VerifyResult(target=host.name)

    canonical = ctx.project_root / CANONICAL_DIR / host.command_file
    state = probe_path(canonical)
    result.checks.append(Check(
        "canonical command", str(canonical), state == PathState.EXISTS, _state_detail(state),
    ))

    registered = host.command_target(ctx)
    result.checks.append(Check(
        "registered command", str(registered), is_registered(registered),
    ))

    config_target = host.config_target(ctx)
    block = host.config_block(settings)
    if config_target is not None and block is not None:
        marker, _ = block
        present = has_block(config_target, marker)
        result.checks.append(Check(
            "config block", str(config_target), present, "" if present else f"{marker} not found",
        ))

    for script in SCRIPTS:
        path = ctx.project_root / "scripts" / script
        state = probe_path(path)
        result.checks.append(Check(
            f"script {script}", str(path), state == PathState.EXISTS, _state_detail(state),
        ))

    return result
