"""Migrate command: upgrade legacy package.json metadata to block_config.py."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape

from cmssy_cli.client.errors import CmssyCLIError, MigrationError, error_handler
from cmssy_cli.commands._common import BatchTally, NamesArg, ProjectDirOpt, select_named
from cmssy_cli.config.constants import LEGACY_SECTION, RESOURCE_CONFIG_FILE
from cmssy_cli.discovery.manifest import has_legacy_metadata, write_package_json
from cmssy_cli.discovery.scanner import MIGRATE_SCAN, scan_resources
from cmssy_cli.models.legacy import LegacyMetadata
from cmssy_cli.models.resource import BlockConfig, ResourceKind, ScannedResource, TemplateConfig
from cmssy_cli.output.diagnostics import WarningSink, warn
from cmssy_cli.schema.codegen import generate_config_source
from cmssy_cli.schema.legacy import convert_legacy_schema_to_new, default_category

console = Console()


def migrate_resource(resource: ScannedResource, on_warning: WarningSink = warn) -> Path:
    """Write block_config.py from the legacy section and strip it from package.json."""
    package_json = dict(resource.package_json or {})
    try:
        legacy = LegacyMetadata.model_validate(package_json[LEGACY_SECTION])
    except PydanticValidationError as exc:
        raise MigrationError(
            f"Invalid {LEGACY_SECTION} section: {exc.error_count()} error(s), "
            f"first: {exc.errors()[0]['msg']}"
        ) from exc

    kind: ResourceKind = resource.type
    if legacy.is_template:
        kind = "template"
    elif legacy.package_type == "block":
        kind = "block"
    schema = convert_legacy_schema_to_new(
        legacy.schema_fields, legacy.default_content, on_warning=on_warning,
    )
    model = TemplateConfig if kind == "template" else BlockConfig
    config = model(
        name=legacy.display_name or package_json.get("name") or resource.name,
        description=package_json.get("description") or legacy.description or "",
        long_description=legacy.long_description,
        category=legacy.category or default_category(kind),
        tags=legacy.tags,
        pricing=legacy.pricing or {"licenseType": "free"},
        content_schema=schema,
    )

    config_path = resource.path / RESOURCE_CONFIG_FILE
    config_path.write_text(generate_config_source(config, kind), encoding="utf-8")

    del package_json[LEGACY_SECTION]
    write_package_json(resource.path, package_json)
    return config_path


@error_handler
def migrate(
    names: NamesArg = None,
    project_dir: ProjectDirOpt = Path("."),
) -> None:
    """Migrate legacy package.json metadata to block_config.py."""
    cwd = project_dir.resolve()
    resources = scan_resources(MIGRATE_SCAN.in_dir(cwd))
    to_migrate = select_named(resources, names) if names else resources

    if not to_migrate:
        console.print("[yellow]⚠ No blocks or templates found to migrate[/]")
        return

    console.print(f"[cyan]Found {len(to_migrate)} block(s)/template(s)[/]")
    tally = BatchTally()
    for resource in to_migrate:
        name = escape(resource.name)
        if (resource.path / RESOURCE_CONFIG_FILE).exists():
            console.print(f"  [yellow]⊘ {name} - already migrated[/]")
            tally.skipped += 1
            continue
        if not has_legacy_metadata(resource.package_json):
            console.print(f"  [yellow]⊘ {name} - no {LEGACY_SECTION} metadata found[/]")
            tally.skipped += 1
            continue
        try:
            migrate_resource(resource)
        except (CmssyCLIError, OSError) as exc:
            console.print(f"  [red]✖ {name} - {escape(str(exc))}[/]")
            tally.failed += 1
            continue
        console.print(f"  [green]✓ {name} - migrated successfully[/]")
        tally.succeeded += 1

    summary = (
        f"  Migrated: {tally.succeeded}\n"
        f"  Skipped: {tally.skipped}"
    )
    if tally.failed:
        console.print("[yellow]⚠ Migration completed with errors[/]")
        console.print(f"{summary}\n  Errors: {tally.failed}")
        raise typer.Exit(tally.exit_code)
    console.print("[bold green]✓ Migration complete![/]")
    console.print(summary)
    console.print("[cyan]Next steps:[/]")
    console.print(f"  1. Review generated {RESOURCE_CONFIG_FILE} files")
    console.print("  2. Run: cmssy build")
    console.print(
        "[dim]Note: content typings are not generated; "
        "type component props by hand if you need them.[/]"
    )
