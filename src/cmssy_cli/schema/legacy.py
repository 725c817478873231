"""Conversion between the nested schema and the legacy flat field list.

The two directions are not inverses. Legacy type aliases collapse onto one
current name (``text`` and ``string`` both become ``singleLine``), and the
reverse direction never restores them. Migration only ever goes
legacy -> current; the current -> legacy direction exists to derive the
``cmssy`` manifest section that older consumers read.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from cmssy_cli.models.fields import (
    REPEATER,
    SELECT,
    BaseField,
    RepeaterField,
    ScalarField,
    Schema,
    SelectField,
)
from cmssy_cli.models.legacy import LegacyField
from cmssy_cli.models.resource import ResourceConfig, ResourceKind
from cmssy_cli.output.diagnostics import WarningSink, warn

LEGACY_TYPE_MAP: dict[str, str] = {
    "text": "singleLine",
    "string": "singleLine",
}


def map_legacy_type(legacy_type: str) -> str:
    """Canonicalize a legacy type name; unknown names pass through."""
    return LEGACY_TYPE_MAP.get(legacy_type, legacy_type)


def default_category(package_type: ResourceKind) -> str:
    return "pages" if package_type == "template" else "other"


# ---------------------------------------------------------------------------
# Legacy -> current
# ---------------------------------------------------------------------------


def _convert_legacy_field(field: LegacyField) -> BaseField:
    field_type = map_legacy_type(field.type)
    common: dict[str, Any] = {
        "type": field_type,
        "label": field.label,
        "required": field.required,
    }
    if field.placeholder:
        common["placeholder"] = field.placeholder
    if field.help_text:
        common["helpText"] = field.help_text

    if field_type == SELECT:
        if field.options is not None:
            common["options"] = list(field.options)
        return SelectField.model_validate(common)

    if field_type == REPEATER:
        if field.min_items is not None:
            common["minItems"] = field.min_items
        if field.max_items is not None:
            common["maxItems"] = field.max_items
        nested = field.item_schema.fields if field.item_schema else None
        common["schema"] = _convert_fields(nested or [])
        return RepeaterField.model_validate(common)

    return ScalarField.model_validate(common)


def _convert_fields(fields: Sequence[LegacyField]) -> Schema:
    return {field.key: _convert_legacy_field(field) for field in fields}


def convert_legacy_schema_to_new(
    schema_fields: Sequence[LegacyField | Mapping[str, Any]],
    default_content: Mapping[str, Any] | None = None,
    *,
    on_warning: WarningSink = warn,
) -> Schema:
    """Convert legacy ``schemaFields`` (+ ``defaultContent``) to a schema.

    Defaults are merged into the matching top-level field; keys without a
    field are dropped. A default for a required field can never be observed,
    so it is reported through *on_warning* and left out.
    """
    fields = [
        f if isinstance(f, LegacyField) else LegacyField.model_validate(f)
        for f in schema_fields
    ]
    schema = _convert_fields(fields)

    for key, value in (default_content or {}).items():
        field = schema.get(key)
        if field is None:
            continue
        if field.required:
            on_warning(
                f'Default content for required field "{key}" was dropped. '
                "A required field cannot have a defaultValue."
            )
            continue
        field.default_value = value

    return schema


# ---------------------------------------------------------------------------
# Current -> legacy
# ---------------------------------------------------------------------------


def _field_to_legacy(key: str, field: BaseField) -> dict[str, Any]:
    legacy: dict[str, Any] = {
        "key": key,
        "type": field.type,
        "label": field.label,
        "required": field.required,
    }
    if field.placeholder:
        legacy["placeholder"] = field.placeholder

    match field:
        case SelectField():
            legacy["options"] = field.options
        case RepeaterField():
            if field.min_items is not None:
                legacy["minItems"] = field.min_items
            if field.max_items is not None:
                legacy["maxItems"] = field.max_items
            legacy["itemSchema"] = {
                "type": "object",
                "fields": convert_schema_to_legacy_format(field.item_schema or {}),
            }
    return legacy


def convert_schema_to_legacy_format(
    schema: Mapping[str, BaseField],
) -> list[dict[str, Any]]:
    """Flatten a schema into legacy ``schemaFields`` descriptors."""
    return [_field_to_legacy(key, field) for key, field in schema.items()]


def extract_default_content(schema: Mapping[str, BaseField]) -> dict[str, Any]:
    """Collect declared defaults; repeaters without one default to ``[]``."""
    content: dict[str, Any] = {}
    for key, field in schema.items():
        if field.has_default:
            content[key] = field.default_value
        elif isinstance(field, RepeaterField):
            content[key] = []
    return content


def generate_package_json_metadata(
    config: ResourceConfig,
    package_type: ResourceKind,
) -> dict[str, Any]:
    """Build the ``cmssy`` package.json section from a resource config."""
    metadata: dict[str, Any] = {
        "packageType": package_type,
        "displayName": config.name,
        "description": config.description,
    }
    if config.long_description is not None:
        metadata["longDescription"] = config.long_description
    metadata.update(
        category=config.category or default_category(package_type),
        tags=list(config.tags),
        pricing=config.pricing or {"licenseType": "free"},
        schemaFields=convert_schema_to_legacy_format(config.content_schema),
        defaultContent=extract_default_content(config.content_schema),
    )
    return metadata
