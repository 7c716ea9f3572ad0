"""
Tests for catalog loading — DEFINITIONS.md parsing and technology extraction.
"""

import textwrap
from pathlib import Path

import pytest

from rampante.core.config.catalog_loader import (
    extract_technologies,
    load_catalog,
    load_technologies,
    normalize_tag,
    parse_catalog,
)
from rampante.core.errors import DependencyMissing, ValidationError
from rampante.core.models.settings import TechnologySettings
from rampante.core.models.stack import PRIORITY_SENTINEL


class TestParseCatalog:
    def test_records_in_declaration_order(self):
        catalog = parse_catalog(textwrap.dedent("""\
            ### B
            - **Tags**: b
            - **Priority**: 1

            ### A
            - **Tags**: a
            - **Priority**: 1
        """))
        assert catalog.names == ["B", "A"]
        assert [s.declaration_order for s in catalog.stacks] == [0, 1]

    def test_fields(self):
        catalog = parse_catalog(textwrap.dedent("""\
            ### SIMPLE_WEB_APP

            - **Description**: A straightforward web application
            - **Tags**: Web, Frontend , web, C++
            - **Priority**: 3
            - **Use Cases**:
              - Basic CRUD applications
              - Prototypes
        """))
        stack = catalog.get("SIMPLE_WEB_APP")
        assert stack is not None
        assert stack.description == "A straightforward web application"
        assert stack.tags == ("web", "frontend", "c++")
        assert stack.priority == 3
        assert stack.use_cases == ("Basic CRUD applications", "Prototypes")
        assert stack.doc_path == "SIMPLE_WEB_APP.md"

    def test_plain_field_syntax(self):
        catalog = parse_catalog("### X\n- Tags: one, two\n- Priority: 7\n")
        stack = catalog.get("X")
        assert stack.tags == ("one", "two")
        assert stack.priority == 7

    def test_missing_priority_uses_sentinel(self):
        catalog = parse_catalog("### X\n- **Tags**: x\n")
        assert catalog.get("X").priority == PRIORITY_SENTINEL

    def test_unparsable_priority_uses_sentinel(self):
        catalog = parse_catalog("### X\n- **Priority**: high\n")
        assert catalog.get("X").priority == PRIORITY_SENTINEL

    def test_missing_tags_is_empty(self):
        catalog = parse_catalog("### X\n- **Priority**: 1\n")
        assert catalog.get("X").tags == ()

    def test_deeper_headings_are_not_records(self):
        catalog = parse_catalog("### X\n#### Notes\n- **Priority**: 1\n")
        assert catalog.names == ["X"]

    def test_text_before_first_record_is_ignored(self):
        catalog = parse_catalog("# Title\n- **Tags**: stray\n### X\n")
        assert catalog.names == ["X"]
        assert catalog.get("X").tags == ()

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValidationError, match="line 2"):
            parse_catalog("# Title\n###   \n")

    def test_duplicate_name_is_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate"):
            parse_catalog("### X\n### X\n")

    def test_empty_document(self):
        assert parse_catalog("").size == 0


class TestNormalizeTag:
    @pytest.mark.parametrize("raw,expected", [
        ("Web", "web"),
        (" react-native ", "react-native"),
        ("C++", "c++"),
        ("node.js", "nodejs"),
        ("!!!", ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_tag(raw) == expected


class TestLoadCatalog:
    def test_load(self, catalog_dir: Path):
        catalog = load_catalog(catalog_dir)
        assert catalog.names == ["WEB_APP", "API", "CLI"]

    def test_missing_definitions(self, tmp_path: Path):
        with pytest.raises(DependencyMissing, match="DEFINITIONS.md"):
            load_catalog(tmp_path)

    def test_bundled_catalog_parses(self):
        from rampante.core.data import STACK_DOCUMENTS, asset_path

        catalog = load_catalog(asset_path("recommended-stacks"))
        assert catalog.size == len(STACK_DOCUMENTS)
        assert sorted(f"{n}.md" for n in catalog.names) == sorted(STACK_DOCUMENTS)


class TestTechnologies:
    DOC = textwrap.dedent("""\
        # STACK

        ## Core Technologies

        - **Express**: server
        - **SQLite**: database

        ## Context7 Documentation

        - **Express**
        - **EJS**

        ## Project Structure

        - **ignored**
    """)

    def test_preferred_section_wins(self):
        assert extract_technologies(self.DOC) == ["EJS", "Express"]

    def test_fallback_when_preferred_empty(self):
        doc = "## Core Technologies\n- **Flask**\n- **Flask**\n\n## Context7 Documentation\nnone\n"
        assert extract_technologies(doc) == ["Flask"]

    def test_both_empty(self):
        assert extract_technologies("## Core Technologies\n\n## Context7 Documentation\n") == []

    def test_configurable_sections(self):
        sections = TechnologySettings(preferred_section="core technologies", fallback_section="documentation")
        assert extract_technologies(self.DOC, sections) == ["Express", "SQLite"]

    def test_load_technologies(self, catalog_dir: Path):
        stack = load_catalog(catalog_dir).get("API")
        assert load_technologies(catalog_dir, stack) == ["EJS", "Express"]

    def test_missing_document(self, catalog_dir: Path):
        stack = load_catalog(catalog_dir).get("API")
        (catalog_dir / "API.md").unlink()
        with pytest.raises(DependencyMissing, match="API.md"):
            load_technologies(catalog_dir, stack)
