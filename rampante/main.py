"""
Rampante — CLI entrypoint.

Usage:
    rampante --help
    rampante install codex
    rampante run --dry-run Build a dark mode toggle
    rampante select "build a REST api"
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from rampante import __version__
from rampante.core.errors import EXIT_DEPENDENCY, EXIT_USAGE, RampanteError, UsageError
from rampante.core.models.asset import AssetStatus
from rampante.core.observability.logging_config import setup_from_env
from rampante.ui.cli.common import build_run_context, fail, load_cli_settings

_STATUS_ICONS = {
    AssetStatus.CREATED: ("✅", "green"),
    AssetStatus.SKIPPED_EXISTS: ("⏭️ ", "white"),
    AssetStatus.RECREATED: ("🔄", "yellow"),
    AssetStatus.FAILED: ("❌", "red"),
}


class RampanteGroup(click.Group):
    """Maps errors raised below the group onto the documented exit codes.

    Argument errors on sub-commands exit 1 (click uses 2, which is
    reserved here for permission problems).
    """

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = EXIT_USAGE
            raise

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = EXIT_USAGE
            raise
        except RampanteError as e:
            fail(e)


@click.group(cls=RampanteGroup)
@click.version_option(version=__version__, prog_name="rampante")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to rampante.yml (default: auto-detect).",
)
@click.option(
    "--root",
    "root",
    type=click.Path(file_okay=False),
    default=None,
    help="Project root to operate on (default: current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    root: str | None,
) -> None:
    """Rampante — one-shot /specify, /plan, /tasks workflow for AI coding CLIs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["root"] = Path(root) if root else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_env(verbose=verbose, quiet=quiet, debug=debug)


# ── install ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("target")
@click.option("--force", is_flag=True, help="Recreate assets that already exist.")
@click.option("--dry-run", "dry_run", is_flag=True, help="Show the plan, write nothing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, target: str, force: bool, dry_run: bool, as_json: bool) -> None:
    """Install /rampante for TARGET (codex, claude, gemini)."""
    from rampante.core.use_cases.install import install_target

    settings = load_cli_settings(ctx)
    run_ctx = build_run_context(ctx, mode="preview" if dry_run else "normal")
    report = install_target(run_ctx, target, settings, force=force)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(report.exit_code)

    quiet = ctx.obj.get("quiet", False)
    title = "🔍 Install plan" if report.preview else "📦 Installing"
    if not quiet:
        click.secho(f"\n{title} for {report.target}", fg="cyan", bold=True)

    for outcome in report.outcomes:
        if quiet and outcome.status == AssetStatus.SKIPPED_EXISTS:
            continue
        icon, color = _STATUS_ICONS[outcome.status]
        label = outcome.detail if outcome.planned else outcome.status.value
        click.echo(f"   {icon} ", nl=False)
        click.secho(f"{label:<16}", fg=color, nl=False)
        click.echo(f" {outcome.target}")
        if outcome.backup_path:
            click.echo(f"      backup: {outcome.backup_path}")
        if outcome.error:
            click.secho(f"      {outcome.error}", fg="red")

    click.echo()
    summary = (
        f"   {report.created} created, {report.skipped} skipped, "
        f"{report.recreated} recreated, {report.failed} failed"
    )
    click.secho(summary, fg="green" if report.all_ok else "red")
    sys.exit(report.exit_code)


# ── run ─────────────────────────────────────────────────────────────


@cli.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON (before the prompt).")
@click.argument("prompt", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(ctx: click.Context, as_json: bool, prompt: tuple[str, ...]) -> None:
    """Handle a raw /rampante invocation.

    With --dry-run as the first word, print the prompts /specify, /plan
    and /tasks would receive.  Otherwise select a stack for PROMPT.

    Examples:

        rampante run --dry-run Build a dark mode toggle

        rampante run Build a REST api for todos
    """
    from rampante.core.services.dryrun import format_markdown
    from rampante.core.use_cases.preview import handle_invocation

    raw_input = " ".join(prompt)
    if not raw_input.strip():
        raise UsageError("Missing prompt", remediation="Usage: rampante run [--dry-run] PROMPT...")

    settings = load_cli_settings(ctx)
    result = handle_invocation(build_run_context(ctx), raw_input, settings)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.is_preview:
        click.echo(format_markdown(result.outcome))
        return

    _print_selection(result.selection)


# ── select ──────────────────────────────────────────────────────────


@cli.command("select")
@click.argument("prompt")
@click.option("--stack", "stack_name", default=None, help="Use this stack instead of matching tags.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def select_cmd(ctx: click.Context, prompt: str, stack_name: str | None, as_json: bool) -> None:
    """Pick a recommended stack for PROMPT."""
    from rampante.core.use_cases.select import select_for_prompt

    settings = load_cli_settings(ctx)
    result = select_for_prompt(build_run_context(ctx), prompt, settings, stack_name=stack_name)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _print_selection(result)


def _print_selection(result) -> None:
    sel = result.selection
    click.secho(f"\n🎯 {sel.selected_stack}", fg="cyan", bold=True)
    click.echo(f"   Reason:   {sel.reason}")
    click.echo(f"   Priority: {sel.priority}")
    click.echo(f"   Document: {result.doc_file}")
    if result.technologies:
        click.echo(f"   Technologies: {', '.join(result.technologies)}")
    click.echo()


# ── verify ──────────────────────────────────────────────────────────


@cli.command()
@click.argument("target")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, target: str, as_json: bool) -> None:
    """Check that TARGET's installation is complete (read-only)."""
    from rampante.core.use_cases.verify import verify_target

    settings = load_cli_settings(ctx)
    result = verify_target(build_run_context(ctx), target, settings)
    exit_code = 0 if result.ok else EXIT_DEPENDENCY

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(exit_code)

    click.secho(f"\n🩺 {result.target}", fg="cyan", bold=True)
    for check in result.checks:
        icon = "✅" if check.ok else "❌"
        suffix = f"  ({check.detail})" if check.detail else ""
        click.echo(f"   {icon} {check.name:<36} {check.path}{suffix}")
    click.echo()

    if not result.ok:
        click.secho(
            f"   {len(result.missing)} missing — run 'rampante install {result.target}'",
            fg="red",
        )
        sys.exit(exit_code)
    click.secho("   Installation complete", fg="green")


# ── Sub-command groups ──────────────────────────────────────────────

from rampante.ui.cli.command import command  # noqa: E402
from rampante.ui.cli.stacks import stacks  # noqa: E402

cli.add_command(stacks)
cli.add_command(command)


if __name__ == "__main__":
    cli()
