"""
Shared CLI plumbing — context/settings resolution and error reporting.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from rampante.core.context import Mode, RunContext
from rampante.core.errors import RampanteError
from rampante.core.models.settings import Settings


def resolve_project_root(ctx: click.Context) -> Path:
    """--root if given, else the current directory."""
    root: Path | None = ctx.obj.get("root")
    return (root or Path.cwd()).resolve()


def load_cli_settings(ctx: click.Context) -> Settings:
    """Load settings once per invocation and cache them on ``ctx.obj``."""
    if "settings" not in ctx.obj:
        from rampante.core.config.loader import load_settings

        ctx.obj["settings"] = load_settings(
            path=ctx.obj.get("config_path"),
            start_dir=resolve_project_root(ctx),
        )
    return ctx.obj["settings"]


def build_run_context(ctx: click.Context, mode: Mode = "normal") -> RunContext:
    return RunContext.from_env(project_root=resolve_project_root(ctx), mode=mode)


def fail(err: RampanteError) -> None:
    """Print *err* with its remediation and exit with its code."""
    click.secho(f"❌ {err.message}", fg="red", err=True)
    if err.remediation:
        click.echo(f"   → {err.remediation}", err=True)
    sys.exit(err.exit_code)
