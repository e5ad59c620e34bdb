"""CLI: walter config set|show|clear"""

from typing import Optional

import click
from rich.console import Console

from walter_ai.config import CONFIG_FILE, WalterConfig, read_config_file, save_config
from walter_ai.errors import ConfigError

console = Console()


@click.group()
def config():
    """Token and endpoint settings."""


@config.command("set")
@click.option("--token", default=None, help="Walter API token")
@click.option("--url", default=None, help="Walter base URL")
def config_set(token: Optional[str], url: Optional[str]):
    """Save the API token and/or endpoint URL."""
    try:
        cfg = read_config_file()
    except ConfigError:
        cfg = {}
    if token is None and not cfg.get("token"):
        token = click.prompt("Walter API token", hide_input=True)
    merged = {**cfg, **{k: v for k, v in (("token", token), ("url", url)) if v is not None}}
    try:
        validated = WalterConfig.model_validate(merged)
    except ValueError as e:
        console.print(f"[red]Invalid config: {e}[/red]")
        raise SystemExit(1)
    save_config(validated.model_dump())
    console.print(f"[green]Saved. Talking to {validated.url}[/green]")
    console.print(f"[dim]Config saved to {CONFIG_FILE}[/dim]")


@config.command("show")
def config_show():
    """Show the stored settings (token masked)."""
    try:
        cfg = read_config_file()
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    if not cfg.get("token"):
        console.print("[yellow]No token configured. Run `walter config set`.[/yellow]")
        return
    token = str(cfg["token"])
    console.print(f"URL:   {cfg.get('url', WalterConfig.model_fields['url'].default)}")
    console.print(f"Token: {token[:4]}…{token[-4:]}" if len(token) > 8 else "Token: ****")


@config.command("clear")
def config_clear():
    """Forget the stored token."""
    save_config({})
    console.print("[green]Config cleared.[/green]")
