"""Shared helpers for CLI commands: options, name lookup, batch tallies."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import BaseModel

from cmssy_cli.client.errors import ResourceNotFoundError
from cmssy_cli.config.constants import EXIT_PARTIAL
from cmssy_cli.models.resource import ScannedResource
from cmssy_cli.output.formatter import console

# Shared Typer option type aliases
ProjectDirOpt = Annotated[
    Path,
    typer.Option("--project-dir", "-C", help="Project root (defaults to cwd)"),
]
NamesArg = Annotated[
    Optional[list[str]],
    typer.Argument(help="Block or template names"),
]
AllOpt = Annotated[
    bool,
    typer.Option("--all", "-a", help="Process every block and template"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format: table, json, yaml, csv"),
]
ApiUrlOpt = Annotated[
    Optional[str],
    typer.Option("--api-url", help="Registry API URL override"),
]
ApiTokenOpt = Annotated[
    Optional[str],
    typer.Option("--api-token", help="Registry API token override"),
]


class BatchTally(BaseModel):
    """Per-resource outcome counts for a batch command."""

    succeeded: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def exit_code(self) -> int:
        return EXIT_PARTIAL if self.failed else 0


def select_named(
    resources: Sequence[ScannedResource],
    names: Sequence[str],
) -> list[ScannedResource]:
    """Resolve every name before anything is processed; the first miss is fatal."""
    by_name = {r.name: r for r in resources}
    selected: list[ScannedResource] = []
    for name in names:
        resource = by_name.get(name)
        if resource is None:
            raise ResourceNotFoundError(f"Block or template not found: {name}")
        selected.append(resource)
    return selected


def usage_error(command: str) -> typer.Exit:
    """Print the names-or---all usage hint and return the Exit to raise."""
    console.print(
        f"[red]✖ Specify names or use --all:[/]\n"
        f"  cmssy {command} hero\n"
        f"  cmssy {command} hero pricing\n"
        f"  cmssy {command} --all"
    )
    return typer.Exit(1)
