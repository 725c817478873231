"""Render a resource config as an editable ``block_config.py`` source file."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from cmssy_cli.models.fields import BaseField, RepeaterField, SelectField
from cmssy_cli.models.resource import ResourceConfig, ResourceKind

INDENT = "    "

DEFINE_FUNCTIONS: dict[str, str] = {
    "block": "define_block",
    "template": "define_template",
}


def _literal(value: Any) -> str:
    """Python literal for *value*; strings come out quoted and escaped."""
    return repr(value)


def _field_items(field: BaseField) -> Iterator[tuple[str, Any]]:
    yield "type", field.type
    yield "label", field.label
    if field.required:
        yield "required", True
    if field.placeholder:
        yield "placeholder", field.placeholder
    if field.help_text:
        yield "helpText", field.help_text
    if field.has_default:
        yield "defaultValue", field.default_value
    for key, value in (field.model_extra or {}).items():
        yield key, value
    if isinstance(field, SelectField) and field.options is not None:
        yield "options", field.options
    if isinstance(field, RepeaterField):
        if field.min_items is not None:
            yield "minItems", field.min_items
        if field.max_items is not None:
            yield "maxItems", field.max_items
        yield "schema", field.item_schema or {}


def format_schema(schema: Mapping[str, BaseField], depth: int) -> str:
    """Format *schema* as a dict literal whose entries sit at *depth*."""
    if not schema:
        return "{}"
    pad = INDENT * depth
    inner = INDENT * (depth + 1)
    lines = ["{"]
    for key, field in schema.items():
        lines.append(f"{pad}{_literal(key)}: {{")
        for attr, value in _field_items(field):
            if attr == "schema" and isinstance(field, RepeaterField):
                rendered = format_schema(value, depth + 2)
            else:
                rendered = _literal(value)
            lines.append(f"{inner}{_literal(attr)}: {rendered},")
        lines.append(f"{pad}}},")
    lines.append(f"{INDENT * (depth - 1)}}}")
    return "\n".join(lines)


def generate_config_source(config: ResourceConfig, kind: ResourceKind) -> str:
    """Return the source of a ``block_config.py`` declaring *config*."""
    define = DEFINE_FUNCTIONS[kind]
    lines = [
        f"from cmssy_cli.authoring import {define}",
        "",
        f"config = {define}(",
        f"{INDENT}name={_literal(config.name)},",
        f"{INDENT}description={_literal(config.description)},",
    ]
    if config.long_description:
        lines.append(f"{INDENT}long_description={_literal(config.long_description)},")
    lines.extend([
        f"{INDENT}category={_literal(config.category)},",
        f"{INDENT}tags={_literal(list(config.tags))},",
        "",
        f"{INDENT}schema={format_schema(config.content_schema, 2)},",
        "",
        f"{INDENT}pricing={_literal(config.pricing)},",
        ")",
        "",
    ])
    return "\n".join(lines)
