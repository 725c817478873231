"""Root Typer app: global options and command registration."""

from __future__ import annotations

from typing import Optional

import typer

from cmssy_cli import __version__
from cmssy_cli.commands import build, config_cmd, list_cmd, migrate, package, publish

app = typer.Typer(
    name="cmssy",
    help="Build, package, migrate, and publish Cmssy blocks and templates.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"cmssy-cli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Cmssy CLI: work with the blocks and templates of a Cmssy project."""


# Register commands
app.command("build")(build.build)
app.command("package")(package.package)
app.command("migrate")(migrate.migrate)
app.command("publish")(publish.publish)
app.command("list")(list_cmd.list_resources)
app.add_typer(config_cmd.app, name="config")


def main() -> None:
    app()
