"""List command: lenient discovery with preview data."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from cmssy_cli.client.errors import error_handler
from cmssy_cli.commands._common import FormatOpt, ProjectDirOpt
from cmssy_cli.discovery.scanner import PREVIEW_SCAN, scan_resources
from cmssy_cli.models.resource import ScannedResource
from cmssy_cli.output.formatter import output


def _summary(resource: ScannedResource) -> dict[str, Any]:
    return {
        "type": resource.type,
        "name": resource.name,
        "displayName": resource.display_name,
        "description": resource.description,
        "category": resource.category,
        "package": resource.package_name,
        "version": resource.version,
        "fields": len(resource.resource_config.content_schema)
        if resource.resource_config
        else 0,
        "hasPreview": resource.preview_data is not None,
        "path": str(resource.path),
    }


@error_handler
def list_resources(
    fmt: FormatOpt = "table",
    project_dir: ProjectDirOpt = Path("."),
) -> None:
    """List blocks and templates (warnings instead of errors)."""
    resources = scan_resources(PREVIEW_SCAN.in_dir(project_dir.resolve()))
    data = [_summary(r) for r in resources]
    columns = ["Type", "Name", "Display Name", "Category", "Version", "Fields", "Preview"]
    rows = [
        [
            item["type"],
            item["name"],
            item["displayName"] or "",
            item["category"] or "",
            item["version"] or "",
            item["fields"],
            "yes" if item["hasPreview"] else "",
        ]
        for item in data
    ]
    output(data, fmt, columns=columns, rows=rows, title="Resources")
