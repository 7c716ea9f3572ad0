"""
Install use case — install everything a host needs to run /rampante.
"""

from __future__ import annotations

import logging

from rampante.adapters.registry import HostRegistry, default_registry
from rampante.core.context import RunContext
from rampante.core.models.settings import Settings
from rampante.core.services.installer import InstallReport, install, managed_assets

logger = logging.getLogger(__name__)


def install_target(
    ctx: RunContext,
    target: str,
    settings: Settings | None = None,
    force: bool = False,
    registry: HostRegistry | None = None,
) -> InstallReport:
    """Install assets for *target* (codex, claude, gemini).

    In a preview context the report is a plan and nothing is written.

    Raises:
        UsageError: *target* is not a supported host.
    """
    settings = settings or Settings()
    host = (registry or default_registry()).get(target)
    assets = managed_assets(ctx, host, settings)
    logger.debug("Installing %d assets for %s (force=%s)", len(assets), host.name, force)
    return install(ctx, assets, force=force, target=host.name)
