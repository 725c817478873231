"""package.json access."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from cmssy_cli.client.errors import ManifestError
from cmssy_cli.config.constants import LEGACY_SECTION, PACKAGE_JSON


def read_package_json(resource_dir: Path) -> dict[str, Any] | None:
    path = resource_dir / PACKAGE_JSON
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Invalid {PACKAGE_JSON} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Invalid {PACKAGE_JSON} at {path}: expected an object")
    return data


def write_package_json(resource_dir: Path, data: dict[str, Any]) -> None:
    path = resource_dir / PACKAGE_JSON
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def has_legacy_metadata(package_json: dict[str, Any] | None) -> bool:
    return bool(package_json and package_json.get(LEGACY_SECTION))


def is_complete(package_json: dict[str, Any] | None) -> bool:
    """True when the manifest has a non-empty name and version."""
    return bool(
        package_json and package_json.get("name") and package_json.get("version")
    )
