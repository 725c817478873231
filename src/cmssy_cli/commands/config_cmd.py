"""Config commands: show, set, unset registry settings."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from cmssy_cli.client.errors import error_handler
from cmssy_cli.commands._common import FormatOpt
from cmssy_cli.config.manager import ConfigManager
from cmssy_cli.output.formatter import output

app = typer.Typer(
    name="config",
    help="Manage registry settings in the user config file.",
    no_args_is_help=True,
)
console = Console()

KeyArg = Annotated[str, typer.Argument(help="Config key: api_url or api_token")]


def _get_manager() -> ConfigManager:
    return ConfigManager()


@app.command()
@error_handler
def show(fmt: FormatOpt = "table") -> None:
    """Show the effective registry settings."""
    mgr = _get_manager()
    settings = mgr.resolve_api()
    data = {
        "config_file": str(mgr.config_path),
        "api_url": settings.url,
        "api_token": settings.token,
    }
    # Mask token for display
    if data["api_token"]:
        token = data["api_token"]
        data["api_token"] = token[:8] + "..." if len(token) > 8 else "***"
    else:
        data["api_token"] = "(not set)"
    output(data, fmt, title="Registry")


@app.command("set")
@error_handler
def set_value(
    key: KeyArg,
    value: Annotated[str, typer.Argument(help="Value to store")],
) -> None:
    """Store a value in the user config file."""
    mgr = _get_manager()
    mgr.set_value(key, value)
    console.print(f"[green]Set {key}.[/] Config file: {mgr.config_path}")


@app.command()
@error_handler
def unset(key: KeyArg) -> None:
    """Remove a value from the user config file."""
    if _get_manager().unset_value(key):
        console.print(f"[green]Removed {key}.[/]")
    else:
        console.print(f"[yellow]{key} is not set.[/]")
