"""
Select use case — load the catalog and pick a stack for a prompt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rampante.core.config.catalog_loader import load_catalog, load_technologies
from rampante.core.context import RunContext
from rampante.core.models.settings import Settings
from rampante.core.models.stack import CatalogIndex, SelectionResult
from rampante.core.services.stack_selection import select_stack

logger = logging.getLogger(__name__)


@dataclass
class SelectResult:
    """A selection plus the technologies listed in the stack's document."""

    selection: SelectionResult
    catalog_dir: Path
    technologies: list[str] = field(default_factory=list)

    @property
    def doc_file(self) -> Path:
        return self.catalog_dir / self.selection.doc_path

    def to_dict(self) -> dict:
        data = self.selection.model_dump(mode="json")
        data["doc_file"] = str(self.doc_file)
        data["technologies"] = self.technologies
        return data


@dataclass
class StackListResult:
    catalog: CatalogIndex
    catalog_dir: Path

    def to_dict(self) -> dict:
        return {
            "catalog_dir": str(self.catalog_dir),
            "stacks": [
                {
                    "name": s.name,
                    "priority": s.priority,
                    "tags": list(s.tags),
                    "description": s.description,
                }
                for s in self.catalog.in_scan_order()
            ],
        }


def catalog_dir_for(ctx: RunContext, settings: Settings) -> Path:
    return ctx.project_root / settings.catalog_dir


def select_for_prompt(
    ctx: RunContext,
    prompt: str,
    settings: Settings | None = None,
    stack_name: str | None = None,
) -> SelectResult:
    """Pick a stack for *prompt* and read its technology list.

    Raises:
        DependencyMissing: the catalog or the selected stack's document
            is absent.
        ValidationError: the catalog is malformed or empty.
        UsageError: *stack_name* is not in the catalog.
    """
    settings = settings or Settings()
    catalog_dir = catalog_dir_for(ctx, settings)
    catalog = load_catalog(catalog_dir)
    selection = select_stack(catalog, prompt, stack_name=stack_name)
    stack = catalog.get(selection.selected_stack)
    technologies = load_technologies(catalog_dir, stack, settings.technologies)
    logger.info("Selected %s (%s)", selection.selected_stack, selection.reason)
    return SelectResult(selection=selection, catalog_dir=catalog_dir, technologies=technologies)


def list_stacks(ctx: RunContext, settings: Settings | None = None) -> StackListResult:
    settings = settings or Settings()
    catalog_dir = catalog_dir_for(ctx, settings)
    return StackListResult(catalog=load_catalog(catalog_dir), catalog_dir=catalog_dir)
