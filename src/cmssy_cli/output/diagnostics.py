"""Warning and error lines on stderr."""

from __future__ import annotations

from collections.abc import Callable

from rich.markup import escape

from cmssy_cli.client.errors import err_console

WarningSink = Callable[[str], None]


def warn(message: str) -> None:
    err_console.print(f"[yellow]Warning: {escape(message)}[/]")


def error(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/]")
