"""
Bundled assets shipped with the package.

Everything ``rampante install`` writes into a project comes from
``rampante/core/data/assets/``::

    command/rampante.md                       canonical command (markdown hosts)
    command/rampante.toml                     canonical command (gemini)
    templates/rampante-command-simplified.md  used by 'rampante command update'
    recommended-stacks/DEFINITIONS.md         stack catalog
    recommended-stacks/<STACK>.md             one document per stack
    scripts/*.sh                              helper scripts (installed 0755)

Usage::

    from rampante.core.data import read_asset

    body = read_asset("command/rampante.md")   # bytes
"""

from __future__ import annotations

import logging
from pathlib import Path

from rampante.core.errors import DependencyMissing

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).parent / "assets"

STACK_DOCUMENTS = (
    "CLI_TOOL.md",
    "FULL_STACK_NODE.md",
    "MOBILE_REACT_NATIVE.md",
    "PYTHON_API.md",
    "REACT_SPA.md",
    "SERVERLESS_FUNCTIONS.md",
    "SIMPLE_WEB_APP.md",
    "STATIC_SITE.md",
)

SCRIPTS = (
    "select-stack.sh",
    "generate-project-overview.sh",
)

SIMPLIFIED_TEMPLATE = "templates/rampante-command-simplified.md"


def asset_path(relative_path: str) -> Path:
    """Absolute path of a bundled asset (not checked for existence)."""
    return ASSETS_DIR / relative_path


def read_asset(relative_path: str) -> bytes:
    """Read a bundled asset.

    Raises:
        DependencyMissing: the asset is not part of this installation.
    """
    path = asset_path(relative_path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise DependencyMissing(
            f"Bundled asset not found: {relative_path}",
            remediation="Reinstall the rampante package.",
        ) from e
    logger.debug("Loaded bundled asset %s (%d bytes)", relative_path, len(data))
    return data
