"""Publish command: send blocks and templates to the Cmssy registry."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from cmssy_cli.client.errors import CmssyCLIError, error_handler
from cmssy_cli.client.registry import RegistryClient
from cmssy_cli.commands._common import (
    AllOpt,
    ApiTokenOpt,
    ApiUrlOpt,
    BatchTally,
    NamesArg,
    ProjectDirOpt,
    select_named,
    usage_error,
)
from cmssy_cli.config.constants import ENV_PUBLISH_TOKEN
from cmssy_cli.config.manager import ConfigManager, load_project_config
from cmssy_cli.discovery.scanner import BUILD_SCAN, scan_resources
from cmssy_cli.models.resource import ScannedResource
from cmssy_cli.schema.field_types import fetch_vocabulary
from cmssy_cli.schema.legacy import generate_package_json_metadata

console = Console()


def publish_input(resource: ScannedResource) -> dict[str, Any]:
    """PublishPackageInput for a scanned (and validated) resource."""
    payload: dict[str, Any] = {
        "packageName": resource.package_name,
        "version": resource.version,
    }
    if resource.resource_config is not None:
        payload.update(
            generate_package_json_metadata(resource.resource_config, resource.type)
        )
    else:
        payload["packageType"] = resource.type
    return payload


@error_handler
def publish(
    names: NamesArg = None,
    all_: AllOpt = False,
    publish_token: Annotated[
        Optional[str],
        typer.Option(
            "--publish-token", "-t",
            envvar=ENV_PUBLISH_TOKEN,
            help="Workspace publish token",
        ),
    ] = None,
    api_url: ApiUrlOpt = None,
    api_token: ApiTokenOpt = None,
    project_dir: ProjectDirOpt = Path("."),
) -> None:
    """Publish blocks and templates to the registry."""
    if not publish_token:
        console.print(
            f"[red]✖ A publish token is required (--publish-token or {ENV_PUBLISH_TOKEN}).[/]"
        )
        raise typer.Exit(1)

    cwd = project_dir.resolve()
    load_project_config(cwd)
    settings = ConfigManager().resolve_api(url=api_url, token=api_token)
    tally = BatchTally()
    with RegistryClient(settings) as client:
        resources = scan_resources(
            BUILD_SCAN.in_dir(cwd), vocabulary=lambda: fetch_vocabulary(client),
        )
        if not resources:
            console.print("[yellow]⚠ No blocks or templates found[/]")
            return

        if all_:
            to_publish = resources
        elif names:
            to_publish = select_named(resources, names)
        else:
            raise usage_error("publish")

        for resource in to_publish:
            label = f"{resource.package_name}@{resource.version}"
            try:
                result = client.publish(publish_token, publish_input(resource))
            except CmssyCLIError as exc:
                tally.failed += 1
                console.print(f"  [red]✖ {escape(label)}: {escape(str(exc))}[/]")
                continue
            if not result.success:
                tally.failed += 1
                console.print(
                    f"  [red]✖ {escape(label)}: {escape(result.message or 'rejected')}[/]"
                )
                continue
            tally.succeeded += 1
            status = f" ({result.status})" if result.status else ""
            console.print(f"  [green]✓ {escape(label)}{escape(status)}[/]")

    if tally.failed:
        console.print(
            f"[yellow]⚠ Publish completed with errors: {tally.succeeded} succeeded, "
            f"{tally.failed} failed[/]"
        )
        raise typer.Exit(tally.exit_code)
    console.print(f"[green]✓ Published {tally.succeeded} package(s)[/]")
