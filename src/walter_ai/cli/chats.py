"""CLI: walter chats list|new|cancel"""

import json

import click
from rich.console import Console
from rich.table import Table

from walter_ai.formatting import format_cancel

console = Console()


def _get_client():
    from walter_ai.cli.main import _get_client
    return _get_client()


def _run(coro):
    from walter_ai.cli.main import _run
    return _run(coro)


@click.group()
def chats():
    """Conversation management."""


@chats.command("list")
@click.option("--json-output", "--json", is_flag=True)
def chats_list(json_output):
    """List conversations."""

    async def _list():
        async with _get_client() as client:
            result = await client.list_chats()
        if json_output:
            click.echo(json.dumps([c.model_dump() for c in result], indent=2))
            return
        table = Table(title=f"Chats ({len(result)})")
        table.add_column("ID", style="bold")
        table.add_column("Status")
        table.add_column("Title")
        table.add_column("Last activity")
        for c in result:
            table.add_row(c.id, c.status, c.title, c.last_activity_at or "")
        console.print(table)

    _run(_list())


@chats.command("new")
def chats_new():
    """Start a new conversation."""

    async def _new():
        async with _get_client() as client:
            with console.status("Starting chat..."):
                chat_id = await client.start_chat()
        console.print(f"[green]Chat started: {chat_id}[/green]")

    _run(_new())


@chats.command("cancel")
@click.argument("chat_id")
def chats_cancel(chat_id):
    """Interrupt whatever Walter is doing in a chat."""

    async def _cancel():
        async with _get_client() as client:
            with console.status("Cancelling..."):
                outcome = await client.cancel(chat_id)
        console.print(format_cancel(chat_id, outcome))

    _run(_cancel())
