"""
Domain models — Pydantic types for rampante.

All models are re-exported here for convenient access:

    from rampante.core.models import StackDefinition, CatalogIndex, SelectionResult
"""

from rampante.core.models.asset import (
    AssetKind,
    AssetOutcome,
    AssetStatus,
    BackupRecord,
    ManagedAssetSpec,
    PathState,
)
from rampante.core.models.dryrun import (
    DownstreamTarget,
    DryRunOutcome,
    DryRunRequest,
    FlagState,
    GeneratedPrompt,
)
from rampante.core.models.settings import (
    Context7Settings,
    PreviewSettings,
    Settings,
    TechnologySettings,
)
from rampante.core.models.stack import (
    PRIORITY_SENTINEL,
    CatalogIndex,
    SelectionResult,
    StackDefinition,
)

__all__ = [
    # asset.py
    "AssetKind",
    "AssetOutcome",
    "AssetStatus",
    "BackupRecord",
    "ManagedAssetSpec",
    "PathState",
    # dryrun.py
    "DownstreamTarget",
    "DryRunOutcome",
    "DryRunRequest",
    "FlagState",
    "GeneratedPrompt",
    # settings.py
    "Context7Settings",
    "PreviewSettings",
    "Settings",
    "TechnologySettings",
    # stack.py
    "PRIORITY_SENTINEL",
    "CatalogIndex",
    "SelectionResult",
    "StackDefinition",
]
