"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from rampante.core.context import HOME_ENV_VAR, RunContext

SAMPLE_DEFINITIONS = textwrap.dedent("""\
    # Recommended Stacks

    ### WEB_APP

    - **Description**: Server-rendered web application
    - **Tags**: web, app
    - **Priority**: 5
    - **Use Cases**:
      - CRUD tools
      - Dashboards

    ### API

    - **Description**: HTTP API
    - **Tags**: api, rest
    - **Priority**: 5

    ### CLI

    - **Description**: Command-line tool
    - **Tags**: cli
    - **Priority**: 2
""")

SAMPLE_STACK_DOC = textwrap.dedent("""\
    # {name}

    ## Core Technologies

    - **Express**: server
    - **SQLite**: database

    ## Context7 Documentation

    - **Express**
    - **EJS**
""")


@pytest.fixture
def project(tmp_path_factory) -> Path:
    """An empty project root."""
    return tmp_path_factory.mktemp("project")


@pytest.fixture
def home(tmp_path_factory, monkeypatch) -> Path:
    """An isolated home directory, also exported as RAMPANTE_HOME."""
    home_dir = tmp_path_factory.mktemp("home")
    monkeypatch.setenv(HOME_ENV_VAR, str(home_dir))
    return home_dir


@pytest.fixture
def ctx(project: Path, home: Path) -> RunContext:
    return RunContext(project_root=project, home=home)


@pytest.fixture
def preview_ctx(ctx: RunContext) -> RunContext:
    return ctx.as_preview()


@pytest.fixture
def catalog_dir(project: Path) -> Path:
    """A small catalog (WEB_APP, API, CLI) with one document per stack."""
    stacks_dir = project / "recommended-stacks"
    stacks_dir.mkdir()
    (stacks_dir / "DEFINITIONS.md").write_text(SAMPLE_DEFINITIONS)
    for name in ("WEB_APP", "API", "CLI"):
        (stacks_dir / f"{name}.md").write_text(SAMPLE_STACK_DOC.format(name=name))
    return stacks_dir


@pytest.fixture
def fixed_clock():
    """A clock frozen at one second."""
    return lambda: 1718000000.0
