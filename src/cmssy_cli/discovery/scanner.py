"""Resource discovery for the ``blocks/`` and ``templates/`` collections.

Every command discovers resources through :func:`scan_resources`. What a
scan checks is controlled entirely by :class:`ScanOptions`:

- ``strict``: problems raise instead of being warned about and skipped
- ``load_config``: resolve ``block_config.py`` (legacy manifests are detected here)
- ``validate_schema``: run the schema validator on resolved configs
- ``load_preview``: attach ``preview.json`` data
- ``require_package_json``: drop (or reject) resources without name/version

A directory without any configuration is always skipped with a warning,
even in strict mode.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from cmssy_cli.client.errors import (
    ConfigLoadError,
    ManifestError,
    MigrationRequiredError,
    SchemaValidationError,
)
from cmssy_cli.config.constants import (
    BLOCKS_DIR,
    PREVIEW_JSON,
    RESOURCE_CONFIG_FILE,
    TEMPLATES_DIR,
)
from cmssy_cli.discovery.loader import ConfigLoader, load_resource_config
from cmssy_cli.discovery.manifest import (
    has_legacy_metadata,
    is_complete,
    read_package_json,
)
from cmssy_cli.models.field_types import FieldTypeVocabulary
from cmssy_cli.models.resource import ResourceConfig, ResourceKind, ScannedResource
from cmssy_cli.output.diagnostics import WarningSink, error, warn
from cmssy_cli.schema.field_types import get_field_types
from cmssy_cli.schema.validator import SchemaValidator

COLLECTIONS: tuple[tuple[ResourceKind, str], ...] = (
    ("block", BLOCKS_DIR),
    ("template", TEMPLATES_DIR),
)


class ScanOptions(BaseModel):
    """Declarative discovery mode."""

    model_config = ConfigDict(frozen=True)

    strict: bool = False
    load_config: bool = True
    validate_schema: bool = True
    load_preview: bool = False
    require_package_json: bool = True
    cwd: Path | None = None

    def in_dir(self, cwd: Path) -> ScanOptions:
        return self.model_copy(update={"cwd": cwd})


# build: everything must be valid
BUILD_SCAN = ScanOptions(strict=True)
# package: manifest only
PACKAGE_SCAN = ScanOptions(load_config=False, validate_schema=False)
# list / interactive tooling: lenient, with preview data
PREVIEW_SCAN = ScanOptions(load_preview=True)
# migrate: every directory, legacy or not
MIGRATE_SCAN = ScanOptions(
    load_config=False, validate_schema=False, require_package_json=False,
)


def _label(kind: ResourceKind) -> str:
    return "Block" if kind == "block" else "Template"


def _pydantic_errors(exc: PydanticValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    ]


class ResourceScanner:
    """Walks both collections and yields normalized resource records."""

    def __init__(
        self,
        options: ScanOptions | None = None,
        *,
        loader: ConfigLoader = load_resource_config,
        validator: SchemaValidator | None = None,
        vocabulary: Callable[[], FieldTypeVocabulary] | None = None,
        on_warning: WarningSink = warn,
        on_error: WarningSink = error,
    ) -> None:
        self.options = options or ScanOptions()
        self.cwd = self.options.cwd or Path.cwd()
        self.loader = loader
        self._validator = validator
        self._vocabulary = vocabulary
        self.on_warning = on_warning
        self.on_error = on_error

    @property
    def validator(self) -> SchemaValidator:
        """Validator, built on first use so the vocabulary is only fetched when needed."""
        if self._validator is None:
            fetch = self._vocabulary or get_field_types
            self._validator = SchemaValidator(fetch(), self.on_warning)
        return self._validator

    def scan(self) -> list[ScannedResource]:
        resources: list[ScannedResource] = []
        for kind, dirname in COLLECTIONS:
            collection = self.cwd / dirname
            if not collection.is_dir():
                continue
            for item_dir in sorted(p for p in collection.iterdir() if p.is_dir()):
                resource = self.scan_item(kind, item_dir)
                if resource is not None:
                    resources.append(resource)
        return resources

    def scan_item(self, kind: ResourceKind, item_dir: Path) -> ScannedResource | None:
        """Resolve one resource directory, or None when it is skipped."""
        name = item_dir.name
        package_json: dict[str, Any] | None = None
        config: ResourceConfig | None = None

        if self.options.load_config:
            try:
                declaration = self.loader(item_dir)
            except ConfigLoadError as exc:
                if self.options.strict:
                    raise
                self.on_warning(f"Skipping {name} - {exc}")
                return None
            if declaration is None:
                package_json = self._read_manifest(item_dir)
                self._handle_unconfigured(kind, name, package_json)
                return None

            try:
                config = declaration.to_config()
            except PydanticValidationError as exc:
                self._handle_invalid(name, _pydantic_errors(exc))
                return None

            if self.options.validate_schema:
                result = self.validator.validate(config.content_schema)
                if not result.valid:
                    self._handle_invalid(name, result.errors)
                    return None

        if package_json is None:
            package_json = self._read_manifest(item_dir)
        if self.options.require_package_json and not is_complete(package_json):
            message = (
                f'{_label(kind)} "{name}" must have package.json with name and version'
            )
            if self.options.strict:
                raise ManifestError(message)
            self.on_warning(message)
            return None

        resource = ScannedResource(
            type=kind,
            name=name,
            path=item_dir,
            package_json=package_json,
        )
        if config is not None:
            resource.resource_config = config
            resource.display_name = config.name or name
            resource.description = config.description or (
                (package_json or {}).get("description")
            )
            resource.category = config.category
        if self.options.load_preview:
            preview = self._read_preview(item_dir)
            if preview:
                resource.preview_data = preview
        return resource

    def _handle_unconfigured(
        self,
        kind: ResourceKind,
        name: str,
        package_json: dict[str, Any] | None,
    ) -> None:
        if has_legacy_metadata(package_json):
            message = (
                f'{_label(kind)} "{name}" uses legacy package.json format.\n'
                f"Please migrate to {RESOURCE_CONFIG_FILE}.\n"
                f"Run: cmssy migrate {name}"
            )
            if self.options.strict:
                raise MigrationRequiredError(message)
            self.on_warning(message)
            return
        self.on_warning(f"Skipping {name} - no {RESOURCE_CONFIG_FILE} found")

    def _handle_invalid(self, name: str, errors: list[str]) -> None:
        details = "\n".join(f"  - {err}" for err in errors)
        if self.options.strict:
            self.on_error(f"Validation errors in {name}:\n{details}")
            raise SchemaValidationError(name, errors)
        self.on_warning(f"Validation warnings in {name}:\n{details}")

    def _read_manifest(self, item_dir: Path) -> dict[str, Any] | None:
        try:
            return read_package_json(item_dir)
        except ManifestError as exc:
            if self.options.strict:
                raise
            self.on_warning(str(exc))
            return None

    def _read_preview(self, item_dir: Path) -> dict[str, Any]:
        path = item_dir / PREVIEW_JSON
        if not path.is_file():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self.on_warning(f"Ignoring invalid {PREVIEW_JSON} in {item_dir.name}: {exc}")
            return {}
        return data if isinstance(data, dict) else {}


def scan_resources(
    options: ScanOptions | None = None,
    **kwargs: Any,
) -> list[ScannedResource]:
    """Discover blocks and templates. See :class:`ResourceScanner` for kwargs."""
    return ResourceScanner(options, **kwargs).scan()
