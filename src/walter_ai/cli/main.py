"""
Walter CLI — `walter` command.

Commands:
  walter config set|show|clear   Store the API token and endpoint
  walter chat <message>          Ask Walter and wait for the answer
  walter chats <cmd>             List, start or cancel conversations
  walter turfs <cmd>             List or search connected systems
"""

import asyncio
import logging

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install walter-ai[cli]")

from walter_ai.client import AsyncWalter
from walter_ai.config import load_config
from walter_ai.errors import ConfigError, WalterError
from walter_ai.formatting import to_user_message

console = Console()


def _get_client() -> AsyncWalter:
    try:
        cfg = load_config()
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    return AsyncWalter.from_config(cfg)


def _run(coro):
    try:
        return asyncio.run(coro)
    except WalterError as e:
        console.print(f"[red]Error: {to_user_message(e)}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log session and polling activity")
def main(verbose: bool):
    """Walter CLI — AI-powered infrastructure management."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )
        logging.getLogger("httpx").setLevel(logging.WARNING)


# Register subcommands from separate modules
from walter_ai.cli.chat import chat_cmd  # noqa: E402
from walter_ai.cli.chats import chats  # noqa: E402
from walter_ai.cli.config import config  # noqa: E402
from walter_ai.cli.turfs import turfs  # noqa: E402

main.add_command(config)
main.add_command(chat_cmd)
main.add_command(chats)
main.add_command(turfs)


if __name__ == "__main__":
    main()
