"""Package command: zip blocks and templates for distribution."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from cmssy_cli.build.archiver import Archiver, ZipArchiver
from cmssy_cli.client.errors import CmssyCLIError, error_handler
from cmssy_cli.commands._common import (
    AllOpt,
    BatchTally,
    NamesArg,
    ProjectDirOpt,
    select_named,
    usage_error,
)
from cmssy_cli.config.constants import (
    PACKAGE_JSON,
    PREVIEW_JSON,
    README_FILE,
    RESOURCE_CONFIG_FILE,
    SOURCE_DIR,
)
from cmssy_cli.config.manager import load_project_config
from cmssy_cli.discovery.scanner import PACKAGE_SCAN, scan_resources
from cmssy_cli.models.resource import ScannedResource

console = Console()

DEFAULT_VERSION = "1.0.0"
ARCHIVED_FILES = (PACKAGE_JSON, RESOURCE_CONFIG_FILE, PREVIEW_JSON, README_FILE)


def package_resource(
    resource: ScannedResource,
    output_dir: Path,
    archiver: Archiver,
    build_dir: Path,
) -> tuple[Path, int]:
    """Write ``<name>-<version>.zip`` for *resource*; returns (path, size)."""
    version = resource.version or DEFAULT_VERSION
    output_file = output_dir / f"{resource.name}-{version}.zip"

    with archiver.create_archive(output_file) as archive:
        src = resource.path / SOURCE_DIR
        if src.is_dir():
            archive.add_directory(src, SOURCE_DIR)
        for filename in ARCHIVED_FILES:
            path = resource.path / filename
            if path.is_file():
                archive.add_file(path, filename)
        built = build_dir / resource.package_name / version
        if built.is_dir():
            archive.add_directory(built, "dist")
        size = archive.finalize()
    return output_file, size


@error_handler
def package(
    names: NamesArg = None,
    all_: AllOpt = False,
    output_dir: Annotated[
        str,
        typer.Option("--output", "-o", help="Output directory"),
    ] = "packages",
    project_dir: ProjectDirOpt = Path("."),
) -> None:
    """Package blocks and templates into zip archives."""
    cwd = project_dir.resolve()
    config = load_project_config(cwd)

    resources = scan_resources(PACKAGE_SCAN.in_dir(cwd))
    if not resources:
        console.print("[yellow]⚠ No blocks or templates found[/]")
        return

    if all_:
        to_package = resources
    elif names:
        to_package = select_named(resources, names)
    else:
        raise usage_error("package")

    dest = cwd / output_dir
    dest.mkdir(parents=True, exist_ok=True)
    archiver = ZipArchiver()
    build_dir = cwd / config.build.out_dir
    tally = BatchTally()

    console.print(f"[blue]📦 Packaging {len(to_package)} package(s)...[/]")
    for resource in to_package:
        label = f"{resource.type} [cyan]{escape(resource.name)}[/]"
        try:
            _, size = package_resource(resource, dest, archiver, build_dir)
        except (CmssyCLIError, OSError) as exc:
            tally.failed += 1
            console.print(f"  [red]✖ Failed to package {label}: {escape(str(exc))}[/]")
            continue
        tally.succeeded += 1
        console.print(f"  [green]✓[/] Packaged {label} ({size / 1024:.2f} KB)")

    if tally.failed:
        console.print(
            f"[yellow]⚠ Packaging completed with errors: {tally.succeeded} succeeded, "
            f"{tally.failed} failed[/]"
        )
        raise typer.Exit(tally.exit_code)
    console.print(
        f"[green]✓ Successfully packaged {tally.succeeded} package(s) to {dest}[/]"
    )
