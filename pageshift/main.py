"""
pageshift — CLI entrypoint.

Usage:
    pageshift upgrade src/Pages/Home_.elm element
    pageshift upgrade src/Pages/Settings.elm advanced --shared --dry-run
    pageshift detect src/Pages/Home_.elm --json
    pageshift history list src/Pages/Home_.elm
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from pageshift import __version__
from pageshift.core.models.shape import SHAPE_TOKENS
from pageshift.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)

_PAGE_PATH = click.Path(dir_okay=False, path_type=Path)


@click.group()
@click.version_option(version=__version__, prog_name="pageshift")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to pageshift.yml (default: search upward from the page).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """pageshift — upgrade elm-spa pages between shapes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


@cli.command()
@click.argument("path", type=_PAGE_PATH)
@click.argument("target", type=click.Choice(SHAPE_TOKENS, case_sensitive=False))
@click.option("--shared", "-s", is_flag=True, help="Give page functions the shared model.")
@click.option("--request", "-r", is_flag=True, help="Give page functions the request.")
@click.option("--dry-run", "-d", is_flag=True, help="Print the new page instead of writing it.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def upgrade(
    ctx: click.Context,
    path: Path,
    target: str,
    shared: bool,
    request: bool,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Rewrite the page at PATH into TARGET (static, element, advanced)."""
    from pageshift.core.models.shape import Capability, Shape
    from pageshift.core.use_cases.upgrade import run_upgrade

    shape = Shape.from_token(target)
    assert shape is not None  # click.Choice only admits known tokens

    flags = [c for c, on in ((Capability.SHARED, shared), (Capability.REQUEST, request)) if on]
    result = run_upgrade(
        path,
        shape,
        flags,
        dry_run=dry_run,
        config_path=ctx.obj.get("config_path"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if dry_run:
        click.echo(result.text, nl=False)
        return

    if ctx.obj.get("quiet"):
        return

    assert result.source_shape is not None
    click.secho(
        f"✅ {result.module_name}: {result.source_shape.token} → {result.target_shape.token}",
        fg="green",
        bold=True,
    )
    if result.context_params:
        click.echo(f"   Context:    {', '.join(result.context_params)}")
    if result.ignored_flags:
        click.secho(
            f"   ⚠️  Ignored for {result.target_shape.token}: {', '.join(result.ignored_flags)}",
            fg="yellow",
        )
    if result.kept:
        click.echo(f"   Kept:       {', '.join(result.kept)}")
    if result.superseded:
        click.echo(f"   Archived:   {', '.join(result.superseded)}")
    click.echo(f"   History:    {result.history_batches} batch(es)")


@cli.command()
@click.argument("path", type=_PAGE_PATH)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(path: Path, as_json: bool) -> None:
    """Report the current shape of the page at PATH."""
    from pageshift.core.use_cases.detect import inspect_page

    result = inspect_page(path)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.error is None else 1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    detection = result.detection
    assert detection is not None

    click.secho(f"\n🔍 {result.module_name}", fg="cyan", bold=True)
    click.echo(f"   Shape:    {detection.shape.token} ({detection.shape.value})")
    context = ", ".join(p.value for p in detection.context_params) or "none"
    click.echo(f"   Context:  {context}")
    click.echo(f"   History:  {detection.history_batches} batch(es)")
    click.echo()
    for inv in detection.invocations:
        click.echo(f"     • {inv.name} = {' '.join([inv.function, *inv.args])}")
    click.echo()


from pageshift.ui.cli.history import history

cli.add_command(history)


if __name__ == "__main__":
    cli()
