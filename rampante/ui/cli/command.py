"""
CLI commands for the canonical /rampante command file.
"""

from __future__ import annotations

import json

import click

from rampante.ui.cli.common import build_run_context


@click.group()
def command() -> None:
    """Canonical command — maintain rampante/command/rampante.md."""


@command.command("update")
@click.option("--dry-run", "dry_run", is_flag=True, help="Run the checks, write nothing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def update(ctx: click.Context, dry_run: bool, as_json: bool) -> None:
    """Back up the command file and replace it with the simplified template.

    Requires the scripts/ directory installed by 'rampante install'.
    """
    from rampante.core.use_cases.update_command import update_command

    run_ctx = build_run_context(ctx, mode="preview" if dry_run else "normal")
    result = update_command(run_ctx)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.planned:
        click.secho("🔍 Would update the rampante command:", fg="cyan", bold=True)
    else:
        click.secho("✅ Rampante command updated", fg="green", bold=True)
    click.echo(f"   Command:  {result.command_path}")
    click.echo(f"   Template: {result.template_path}")
    click.echo(f"   Backup:   {result.backup_path or '(none)'}")
