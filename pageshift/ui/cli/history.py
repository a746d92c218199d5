"""
CLI commands for a page's archive history.

Thin wrappers over ``pageshift.core.services.history``; read-only.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from pageshift.core.models.page import PageModule


def _load(path: Path) -> PageModule:
    """Parse the page or exit with an error line."""
    from pageshift.core.errors import PageShiftError
    from pageshift.core.persistence.page_file import read_page
    from pageshift.core.services.parser import parse_page

    try:
        return parse_page(read_page(path))
    except (PageShiftError, OSError, UnicodeDecodeError) as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@click.group()
def history() -> None:
    """Archived declarations — list batches, show one."""


# ── List ────────────────────────────────────────────────────────


@history.command("list")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_batches(path: Path, as_json: bool) -> None:
    """List the archive batches stored at the end of PATH."""
    from pageshift.core.services.history import archived_names

    page = _load(path)
    batches = [
        {"number": idx, "marker": batch.marker, "names": archived_names(batch)}
        for idx, batch in enumerate(page.history.batches, start=1)
    ]

    if as_json:
        click.echo(json.dumps({"module": page.name, "batches": batches}, indent=2))
        return

    if not batches:
        click.secho(f"📭 {page.name}: no archived declarations", fg="yellow")
        return

    click.secho(f"🗄️  {page.name} — {len(batches)} batch(es)", fg="cyan", bold=True)
    for entry in batches:
        click.echo(f"   [{entry['number']}] {entry['marker']}")
        if entry["names"]:
            click.echo(f"       {', '.join(entry['names'])}")


# ── Show ────────────────────────────────────────────────────────


@history.command("show")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("number", type=int)
def show_batch(path: Path, number: int) -> None:
    """Print archive batch NUMBER (1 = oldest) of PATH verbatim."""
    page = _load(path)
    batches = page.history.batches

    if not 1 <= number <= len(batches):
        click.secho(
            f"❌ {page.name} has {len(batches)} batch(es); no batch {number}",
            fg="red",
        )
        sys.exit(1)

    click.echo(batches[number - 1].text)
