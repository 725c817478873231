"""Build one resource into its versioned output directory."""

from __future__ import annotations

import copy
from pathlib import Path

from cmssy_cli.build.bundler import BundleOptions, Bundler
from cmssy_cli.client.errors import BundlerError, ManifestError
from cmssy_cli.config.constants import ENTRY_POINTS, LEGACY_SECTION, SOURCE_DIR
from cmssy_cli.discovery.manifest import write_package_json
from cmssy_cli.models.resource import ScannedResource
from cmssy_cli.schema.legacy import generate_package_json_metadata


def find_entry_point(resource_dir: Path) -> Path | None:
    src = resource_dir / SOURCE_DIR
    for name in ENTRY_POINTS:
        candidate = src / name
        if candidate.is_file():
            return candidate
    return None


def output_dir_for(resource: ScannedResource, out_dir: Path) -> Path:
    """``<out_dir>/<manifest name>/<manifest version>``."""
    if not resource.version:
        raise ManifestError(f"{resource.name}: package.json has no version")
    return out_dir / resource.package_name / resource.version


def build_resource(
    resource: ScannedResource,
    out_dir: Path,
    bundler: Bundler,
    options: BundleOptions,
) -> Path:
    """Bundle *resource* and write it with its package.json; returns the output dir."""
    dest = output_dir_for(resource, out_dir)
    entry = find_entry_point(resource.path)
    if entry is None:
        raise BundlerError(
            f"No entry point in {resource.path / SOURCE_DIR} "
            f"(expected one of: {', '.join(ENTRY_POINTS)})"
        )

    result = bundler.bundle(entry, options)

    dest.mkdir(parents=True, exist_ok=True)
    (dest / "index.js").write_bytes(result.script)
    if result.sourcemap is not None:
        (dest / "index.js.map").write_bytes(result.sourcemap)
    if result.stylesheet is not None:
        (dest / "index.css").write_bytes(result.stylesheet)

    package_json = copy.deepcopy(resource.package_json or {})
    if resource.resource_config is not None:
        package_json[LEGACY_SECTION] = generate_package_json_metadata(
            resource.resource_config, resource.type,
        )
    write_package_json(dest, package_json)
    return dest
