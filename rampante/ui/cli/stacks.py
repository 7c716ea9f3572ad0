"""
CLI commands for the recommended-stack catalog.
"""

from __future__ import annotations

import json

import click

from rampante.ui.cli.common import build_run_context, load_cli_settings


@click.group()
def stacks() -> None:
    """Recommended stacks — inspect the catalog."""


@stacks.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List stacks in scan order (priority, then declaration order)."""
    from rampante.core.use_cases.select import list_stacks

    settings = load_cli_settings(ctx)
    result = list_stacks(build_run_context(ctx), settings)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"\n📚 Stacks in {result.catalog_dir}", fg="cyan", bold=True)
    for stack in result.catalog.in_scan_order():
        click.echo(f"   {stack.priority:>3}  ", nl=False)
        click.secho(stack.name, bold=True, nl=False)
        if stack.tags:
            click.echo(f"  [{', '.join(stack.tags)}]", nl=False)
        click.echo()
        if stack.description:
            click.echo(f"        {stack.description}")
    click.echo()
