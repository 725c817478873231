"""Tests for the legacy <-> current schema transform."""

from __future__ import annotations

from cmssy_cli.models.fields import RepeaterField, SelectField, parse_schema
from cmssy_cli.models.resource import BlockConfig, TemplateConfig
from cmssy_cli.schema.legacy import (
    convert_legacy_schema_to_new,
    convert_schema_to_legacy_format,
    default_category,
    extract_default_content,
    generate_package_json_metadata,
    map_legacy_type,
)


class TestTypeMapping:
    def test_aliases(self):
        assert map_legacy_type("text") == "singleLine"
        assert map_legacy_type("string") == "singleLine"

    def test_unknown_passes_through(self):
        assert map_legacy_type("image") == "image"
        assert map_legacy_type("whatever") == "whatever"

    def test_default_category(self):
        assert default_category("template") == "pages"
        assert default_category("block") == "other"


class TestLegacyToCurrent:
    def test_required_default_is_dropped(self, warned):
        schema = convert_legacy_schema_to_new(
            [{"key": "title", "type": "text", "label": "Title", "required": True}],
            {"title": "Hello"},
            on_warning=warned.append,
        )
        assert schema["title"].model_dump(by_alias=True, exclude_unset=True) == {
            "type": "singleLine", "label": "Title", "required": True,
        }
        assert not schema["title"].has_default
        assert len(warned) == 1
        assert '"title"' in warned[0]

    def test_defaults_merged_and_unknown_keys_dropped(self, warned):
        schema = convert_legacy_schema_to_new(
            [{"key": "cta", "type": "string", "label": "CTA"}],
            {"cta": "Go", "missing": 1},
            on_warning=warned.append,
        )
        assert schema["cta"].default_value == "Go"
        assert "missing" not in schema
        assert warned == []

    def test_structural_attributes(self):
        schema = convert_legacy_schema_to_new([
            {
                "key": "title",
                "type": "singleLine",
                "label": "Title",
                "placeholder": "Enter",
                "helpText": "Shown big",
            },
            {"key": "align", "type": "select", "label": "Align", "options": ["l", "r"]},
        ])
        assert schema["title"].placeholder == "Enter"
        assert schema["title"].help_text == "Shown big"
        assert isinstance(schema["align"], SelectField)
        assert schema["align"].options == ["l", "r"]

    def test_repeater_nested(self):
        schema = convert_legacy_schema_to_new([{
            "key": "slides",
            "type": "repeater",
            "label": "Slides",
            "minItems": 1,
            "maxItems": 4,
            "itemSchema": {
                "type": "object",
                "fields": [{"key": "caption", "type": "text", "label": "Caption"}],
            },
        }])
        slides = schema["slides"]
        assert isinstance(slides, RepeaterField)
        assert slides.min_items == 1
        assert slides.max_items == 4
        assert slides.item_schema is not None
        assert slides.item_schema["caption"].type == "singleLine"

    def test_repeater_without_item_schema_gets_empty_schema(self):
        schema = convert_legacy_schema_to_new([
            {"key": "slides", "type": "repeater", "label": "Slides"},
        ])
        assert schema["slides"].item_schema == {}


class TestCurrentToLegacy:
    def test_flat_descriptors(self):
        schema = parse_schema({
            "title": {"type": "singleLine", "label": "Title", "required": True,
                      "placeholder": "Type"},
            "align": {"type": "select", "label": "Align", "options": ["l"]},
        })
        assert convert_schema_to_legacy_format(schema) == [
            {"key": "title", "type": "singleLine", "label": "Title",
             "required": True, "placeholder": "Type"},
            {"key": "align", "type": "select", "label": "Align",
             "required": False, "options": ["l"]},
        ]

    def test_repeater_item_schema(self):
        schema = parse_schema({
            "items": {
                "type": "repeater",
                "label": "Items",
                "maxItems": 3,
                "schema": {"name": {"type": "singleLine", "label": "Name"}},
            },
        })
        [items] = convert_schema_to_legacy_format(schema)
        assert items["maxItems"] == 3
        assert "minItems" not in items
        assert items["itemSchema"] == {
            "type": "object",
            "fields": [
                {"key": "name", "type": "singleLine", "label": "Name", "required": False},
            ],
        }

    def test_round_trip_preserves_structure(self):
        legacy = [
            {"key": "title", "type": "singleLine", "label": "Title", "required": True},
            {"key": "align", "type": "select", "label": "Align", "required": False,
             "options": ["l", "r"]},
            {"key": "items", "type": "repeater", "label": "Items", "required": False,
             "minItems": 1, "maxItems": 2,
             "itemSchema": {"type": "object", "fields": [
                 {"key": "n", "type": "number", "label": "N", "required": False},
             ]}},
        ]
        assert convert_schema_to_legacy_format(convert_legacy_schema_to_new(legacy)) == legacy

    def test_alias_not_recovered(self):
        schema = convert_legacy_schema_to_new([{"key": "t", "type": "text", "label": "T"}])
        assert convert_schema_to_legacy_format(schema)[0]["type"] == "singleLine"


class TestDefaultContent:
    def test_defaults_and_repeaters_only(self):
        schema = parse_schema({
            "title": {"type": "singleLine", "defaultValue": "Hi"},
            "empty": {"type": "singleLine", "defaultValue": None},
            "body": {"type": "richText"},
            "items": {"type": "repeater", "schema": {"x": {"type": "number"}}},
            "preset": {"type": "repeater", "defaultValue": [{"x": 1}], "schema": {}},
        })
        assert extract_default_content(schema) == {
            "title": "Hi",
            "empty": None,
            "items": [],
            "preset": [{"x": 1}],
        }


class TestPackageJsonMetadata:
    def test_block_metadata(self):
        config = BlockConfig.model_validate({
            "name": "Hero",
            "description": "Big",
            "tags": ["a", "a", "b"],
            "schema": {"title": {"type": "singleLine", "label": "Title",
                                 "defaultValue": "Hi"}},
        })
        meta = generate_package_json_metadata(config, "block")
        assert meta == {
            "packageType": "block",
            "displayName": "Hero",
            "description": "Big",
            "category": "other",
            "tags": ["a", "b"],
            "pricing": {"licenseType": "free"},
            "schemaFields": [
                {"key": "title", "type": "singleLine", "label": "Title", "required": False},
            ],
            "defaultContent": {"title": "Hi"},
        }

    def test_template_fallback_category_and_long_description(self):
        config = TemplateConfig(name="Landing", long_description="Long text")
        meta = generate_package_json_metadata(config, "template")
        assert meta["category"] == "pages"
        assert meta["longDescription"] == "Long text"
