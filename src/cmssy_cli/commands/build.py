"""Build command: bundle every block and template into versioned output."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from cmssy_cli.build.builder import build_resource
from cmssy_cli.build.bundler import BundleOptions, EsbuildBundler
from cmssy_cli.client.errors import CmssyCLIError, error_handler
from cmssy_cli.commands._common import BatchTally, ProjectDirOpt
from cmssy_cli.config.manager import load_project_config
from cmssy_cli.discovery.scanner import BUILD_SCAN, scan_resources

console = Console()


@error_handler
def build(
    framework: Annotated[
        Optional[str],
        typer.Option("--framework", help="Framework override (defaults to cmssy.toml)"),
    ] = None,
    project_dir: ProjectDirOpt = Path("."),
) -> None:
    """Validate and build all blocks and templates."""
    cwd = project_dir.resolve()
    config = load_project_config(cwd)

    resources = scan_resources(BUILD_SCAN.in_dir(cwd))
    if not resources:
        console.print("[yellow]⚠ No blocks or templates found[/]")
        return

    out_dir = cwd / config.build.out_dir
    options = BundleOptions(
        minify=config.build.minify,
        sourcemap=config.build.sourcemap,
        target=config.build.target,
        framework=framework or config.framework,
    )
    bundler = EsbuildBundler()
    tally = BatchTally()

    console.print(f"[bold]Building {len(resources)} resources...[/]")
    for resource in resources:
        try:
            build_resource(resource, out_dir, bundler, options)
        except (CmssyCLIError, OSError) as exc:
            tally.failed += 1
            console.print(f"  [red]✖ {escape(resource.name)}:[/] {escape(str(exc))}")
            continue
        tally.succeeded += 1
        label = f"{resource.package_name}@{resource.version}"
        console.print(f"  [green]✓ {escape(label)}[/]")

    if tally.failed:
        console.print(
            f"[yellow]⚠ Build completed with errors: {tally.succeeded} succeeded, "
            f"{tally.failed} failed[/]"
        )
        raise typer.Exit(tally.exit_code)
    console.print(f"[green]✓ Build complete! {tally.succeeded} resources built[/]")
    console.print(f"[cyan]Output directory: {out_dir}[/]")
