"""CLI: walter turfs list|search"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from walter_ai.models.turf import Turf

console = Console()


def _get_client():
    from walter_ai.cli.main import _get_client
    return _get_client()


def _run(coro):
    from walter_ai.cli.main import _run
    return _run(coro)


def _print_turfs(turfs: list[Turf], title: str, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps([t.model_dump(exclude_none=True) for t in turfs], indent=2))
        return
    table = Table(title=title)
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("OS")
    table.add_column("ID", style="dim")
    for t in turfs:
        status = "[green]online[/green]" if t.online else f"[dim]{t.status}[/dim]"
        table.add_row(t.label, t.type, status, t.os or "", t.turf_id)
    console.print(table)


@click.group()
def turfs():
    """Connected systems."""


@turfs.command("list")
@click.option("--json-output", "--json", is_flag=True)
def turfs_list(json_output):
    """List connected systems."""

    async def _list():
        async with _get_client() as client:
            result = await client.list_turfs()
        _print_turfs(result, f"Turfs ({len(result)})", json_output)

    _run(_list())


@turfs.command("search")
@click.option("--name", default=None, help="Partial name match")
@click.option("--type", "type_", type=click.Choice(["server", "aws", "gcp"]), default=None)
@click.option("--os", "os_", default=None, help="linux, darwin, windows")
@click.option("--status", type=click.Choice(["online", "offline"]), default=None)
@click.option("--json-output", "--json", is_flag=True)
def turfs_search(name: Optional[str], type_: Optional[str], os_: Optional[str], status: Optional[str], json_output):
    """Search connected systems."""
    if not any((name, type_, os_, status)):
        raise click.UsageError("Provide at least one of --name, --type, --os, --status.")

    async def _search():
        async with _get_client() as client:
            result = await client.search_turfs(name=name, type=type_, os=os_, status=status)
        _print_turfs(result.turfs, f"Matching turfs ({result.count})", json_output)

    _run(_search())
