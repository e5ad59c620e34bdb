"""CLI: walter chat"""

import asyncio
import json
import signal
from typing import Optional

import click
from rich.console import Console

from walter_ai.cancellation import CancelToken
from walter_ai.errors import RequestCancelled

console = Console()


def _get_client():
    from walter_ai.cli.main import _get_client
    return _get_client()


def _run(coro):
    from walter_ai.cli.main import _run
    return _run(coro)


@click.command("chat")
@click.argument("message")
@click.option("-c", "--chat", "chat_id", default=None, help="Continue this chat instead of starting one")
@click.option("--json-output", "--json", is_flag=True)
def chat_cmd(message: str, chat_id: Optional[str], json_output: bool):
    """Ask Walter something and wait for the answer (Ctrl+C cancels)."""

    async def _chat():
        token = CancelToken()
        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(signal.SIGINT, token.cancel)
        except NotImplementedError:
            # no loop signal handlers on Windows; Ctrl+C then aborts the process
            pass

        def on_partial(partial: str) -> None:
            if json_output:
                click.echo(json.dumps({"status": "processing", "partial": partial}))
            else:
                console.print(f"[dim]{partial}[/dim]")

        async with _get_client() as client:
            try:
                if not chat_id and not json_output:
                    console.print("[dim]Starting a new chat...[/dim]")
                result = await client.chat(message, chat_id, on_partial, token)
            except RequestCancelled:
                console.print("[yellow]Cancelled.[/yellow]")
                raise SystemExit(130)
        if json_output:
            click.echo(json.dumps({"status": "complete", "chat_id": result.chat_id, "response": result.response}))
        else:
            console.print(f"[green]Walter:[/green] {result.response}")
            console.print(f"[dim]Chat: {result.chat_id}[/dim]")

    _run(_chat())
