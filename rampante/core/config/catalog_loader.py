"""
Catalog loader — parses recommended-stacks/DEFINITIONS.md into a CatalogIndex.

Expected record shape (unknown fields are ignored)::

    ### SIMPLE_WEB_APP

    - **Description**: A straightforward web application
    - **Tags**: web, frontend, backend, simple, crud
    - **Priority**: 1
    - **Use Cases**:
      - Basic CRUD applications

Each ``### NAME`` header opens a record; records keep the order in
which they are declared.  Per-stack documents (``<NAME>.md``) sit next
to DEFINITIONS.md and provide the technology list.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from rampante.core.errors import DependencyMissing, ValidationError, wrap_os_error
from rampante.core.models.settings import TechnologySettings
from rampante.core.models.stack import PRIORITY_SENTINEL, CatalogIndex, StackDefinition

logger = logging.getLogger(__name__)

DEFINITIONS_FILE = "DEFINITIONS.md"

_HEADER_RE = re.compile(r"^###(?!#)\s*(?P<name>.*)$")
_FIELD_RE = re.compile(r"^[-*]\s+\*{0,2}(?P<key>[A-Za-z][A-Za-z ]*?)\*{0,2}\s*:\s*(?P<value>.*)$")
_USE_CASE_RE = re.compile(r"^\s+[-*]\s+(?P<item>.+)$")
_INT_RE = re.compile(r"^-?\d+")
_TAG_STRIP_RE = re.compile(r"[^a-z0-9+-]")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")


def normalize_tag(raw: str) -> str:
    """Case-fold and strip everything outside ``[a-z0-9+-]``."""
    return _TAG_STRIP_RE.sub("", raw.casefold())


def _parse_tags(value: str) -> tuple[str, ...]:
    tags: list[str] = []
    for piece in value.split(","):
        tag = normalize_tag(piece)
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def _parse_priority(value: str, stack_name: str) -> int:
    match = _INT_RE.match(value.strip())
    if match is None:
        logger.debug("Stack %s has unparsable priority %r", stack_name, value)
        return PRIORITY_SENTINEL
    return int(match.group(0))


def parse_catalog(document: str) -> CatalogIndex:
    """Parse a catalog document.

    Raises:
        ValidationError: a record header has no name, or two records
            share a name.
    """
    records: list[dict] = []
    current: dict | None = None
    in_use_cases = False

    for lineno, line in enumerate(document.splitlines(), start=1):
        stripped = line.strip()

        header = _HEADER_RE.match(stripped)
        if header:
            name = header.group("name").strip()
            if not name:
                raise ValidationError(
                    f"Catalog record at line {lineno} is missing a name",
                    remediation="Give every '### ' header a stack name.",
                )
            current = {"name": name, "declaration_order": len(records), "use_cases": []}
            records.append(current)
            in_use_cases = False
            continue

        if current is None:
            continue

        if in_use_cases:
            item = _USE_CASE_RE.match(line)
            if item:
                current["use_cases"].append(item.group("item").strip())
                continue
            if stripped:
                in_use_cases = False

        field = _FIELD_RE.match(stripped)
        if not field:
            continue

        key = field.group("key").strip().casefold()
        value = field.group("value").strip()
        if key == "tags":
            current["tags"] = _parse_tags(value)
        elif key == "priority":
            current["priority"] = _parse_priority(value, current["name"])
        elif key == "description":
            current["description"] = value
        elif key == "use cases":
            in_use_cases = True

    seen: set[str] = set()
    stacks: list[StackDefinition] = []
    for rec in records:
        if rec["name"] in seen:
            raise ValidationError(
                f"Duplicate stack name in catalog: {rec['name']}",
                remediation="Rename or remove one of the duplicate records.",
            )
        seen.add(rec["name"])
        stacks.append(
            StackDefinition(
                name=rec["name"],
                priority=rec.get("priority", PRIORITY_SENTINEL),
                tags=rec.get("tags", ()),
                declaration_order=rec["declaration_order"],
                doc_path=f"{rec['name']}.md",
                description=rec.get("description", ""),
                use_cases=tuple(rec["use_cases"]),
            )
        )

    logger.debug("Parsed %d stacks: %s", len(stacks), [s.name for s in stacks])
    return CatalogIndex(stacks=tuple(stacks))


def load_catalog(catalog_dir: Path) -> CatalogIndex:
    """Read and parse ``<catalog_dir>/DEFINITIONS.md``.

    Raises:
        DependencyMissing: the definitions file does not exist.
    """
    path = catalog_dir / DEFINITIONS_FILE
    if not path.is_file():
        raise DependencyMissing(f"{DEFINITIONS_FILE} not found at {path}")
    try:
        document = path.read_text(encoding="utf-8")
    except OSError as e:
        raise wrap_os_error(e, path, "read") from e

    catalog = parse_catalog(document)
    logger.info("Loaded %d stacks from %s", catalog.size, path)
    return catalog


# ── Technology extraction ───────────────────────────────────────────


def extract_technologies(
    document: str,
    sections: TechnologySettings | None = None,
) -> list[str]:
    """Collect the **bold** entries of a stack document.

    Entries under the preferred section (any ``## `` heading containing
    ``sections.preferred_section``) win; entries under the fallback
    section are used only when the preferred one yields nothing.  Output
    is deduplicated and sorted.
    """
    sections = sections or TechnologySettings()
    preferred_key = sections.preferred_section.casefold()
    fallback_key = sections.fallback_section.casefold()

    preferred: list[str] = []
    fallback: list[str] = []
    bucket: list[str] | None = None

    for line in document.splitlines():
        stripped = line.strip()
        if stripped.startswith("## "):
            heading = stripped[3:].strip().casefold()
            if preferred_key in heading:
                bucket = preferred
            elif fallback_key in heading:
                bucket = fallback
            else:
                bucket = None
            continue
        if stripped.startswith("# "):
            bucket = None
            continue
        if bucket is None:
            continue
        for match in _BOLD_RE.findall(line):
            tech = match.strip()
            if tech:
                bucket.append(tech)

    chosen = preferred or fallback
    return sorted(set(chosen), key=lambda t: (t.casefold(), t))


def load_technologies(
    catalog_dir: Path,
    stack: StackDefinition,
    sections: TechnologySettings | None = None,
) -> list[str]:
    """Read the stack's document and extract its technology list."""
    path = catalog_dir / stack.doc_path
    if not path.is_file():
        raise DependencyMissing(
            f"Missing stack file: {path}",
            remediation=f"Add {stack.doc_path} to {catalog_dir} or reinstall with --force.",
        )
    try:
        document = path.read_text(encoding="utf-8")
    except OSError as e:
        raise wrap_os_error(e, path, "read") from e
    return extract_technologies(document, sections)
