"""
Stack models — the catalog of technology bundles and selection results.

A catalog is parsed once per invocation from DEFINITIONS.md and thrown
away after selection.  Records are frozen: nothing downstream may edit
a loaded stack.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Priority given to records whose priority field is absent or unparsable.
PRIORITY_SENTINEL = 1_000_000


class StackDefinition(BaseModel):
    """One stack record from the catalog.

    ``declaration_order`` is assigned by the parser (0-based, stable) and
    is the second tie-break key after ``priority``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    priority: int = PRIORITY_SENTINEL
    tags: tuple[str, ...] = ()      # normalized, unique, declared order
    declaration_order: int = 0
    doc_path: str = ""              # relative to the catalog directory
    description: str = ""
    use_cases: tuple[str, ...] = ()

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.priority, self.declaration_order)


class CatalogIndex(BaseModel):
    """Ordered stacks; insertion order == declaration order."""

    model_config = ConfigDict(frozen=True)

    stacks: tuple[StackDefinition, ...] = ()

    @model_validator(mode="after")
    def _unique_names(self) -> CatalogIndex:
        seen: set[str] = set()
        for stack in self.stacks:
            if stack.name in seen:
                raise ValueError(f"duplicate stack name: {stack.name}")
            seen.add(stack.name)
        return self

    @property
    def size(self) -> int:
        return len(self.stacks)

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.stacks]

    def get(self, name: str) -> StackDefinition | None:
        """Look up a stack by exact name."""
        for stack in self.stacks:
            if stack.name == name:
                return stack
        return None

    def in_scan_order(self) -> list[StackDefinition]:
        """Stacks sorted by (priority, declaration_order)."""
        return sorted(self.stacks, key=lambda s: s.sort_key)


class SelectionResult(BaseModel):
    """Outcome of one Selection Engine call."""

    model_config = ConfigDict(frozen=True)

    selected_stack: str
    priority: int
    matched_tag: str | None = None
    fallback: bool = False
    reason: str = ""
    doc_path: str = ""
    tags: tuple[str, ...] = Field(default_factory=tuple)
