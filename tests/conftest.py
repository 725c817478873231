"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from cmssy_cli.models.field_types import FieldTypeVocabulary
from cmssy_cli.schema.field_types import get_field_types
from cmssy_cli.schema.validator import SchemaValidator

FIELD_TYPES = (
    "singleLine",
    "multiLine",
    "richText",
    "image",
    "link",
    "boolean",
    "number",
    "select",
    "repeater",
)

HERO_CONFIG = """\
from cmssy_cli.authoring import define_block

config = define_block(
    name="Hero",
    description="Full-width hero section",
    category="marketing",
    tags=["hero", "landing"],
    schema={
        "title": {"type": "singleLine", "label": "Title", "required": True},
        "subtitle": {"type": "multiLine", "label": "Subtitle", "defaultValue": "Welcome"},
    },
)
"""


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from the real user config, env vars, and vocabulary cache."""
    for var in ("CMSSY_API_URL", "CMSSY_API_TOKEN", "CMSSY_PUBLISH_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "cmssy_cli.config.manager.CONFIG_FILE", tmp_path / "user" / "config.toml",
    )
    get_field_types.cache_clear()
    yield
    get_field_types.cache_clear()


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def vocabulary() -> FieldTypeVocabulary:
    return FieldTypeVocabulary.from_names(*FIELD_TYPES)


@pytest.fixture
def warned() -> list[str]:
    """Collects messages passed to an ``on_warning`` sink."""
    return []


@pytest.fixture
def validator(vocabulary: FieldTypeVocabulary, warned: list[str]) -> SchemaValidator:
    return SchemaValidator(vocabulary, on_warning=warned.append)


@pytest.fixture
def use_vocabulary(monkeypatch: pytest.MonkeyPatch, vocabulary: FieldTypeVocabulary):
    """Serve the fixed vocabulary instead of fetching it from the registry."""
    monkeypatch.setattr(
        "cmssy_cli.discovery.scanner.get_field_types", lambda: vocabulary,
    )
    return vocabulary


class ProjectBuilder:
    """Writes a Cmssy project layout under a temp directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        (root / "blocks").mkdir(parents=True, exist_ok=True)
        (root / "templates").mkdir(parents=True, exist_ok=True)
        (root / "cmssy.toml").write_text('framework = "react"\n')

    def add(
        self,
        kind: str,
        name: str,
        *,
        config: str | None = None,
        package_json: dict[str, Any] | None = None,
        preview: Any = None,
        source: str | None = "export default function Block() { return null }\n",
    ) -> Path:
        item = self.root / f"{kind}s" / name
        item.mkdir(parents=True)
        if config is not None:
            (item / "block_config.py").write_text(config)
        if package_json is not None:
            (item / "package.json").write_text(json.dumps(package_json, indent=2))
        if preview is not None:
            (item / "preview.json").write_text(json.dumps(preview))
        if source is not None:
            (item / "src").mkdir()
            (item / "src" / "index.tsx").write_text(source)
        return item

    def add_block(self, name: str, **kwargs: Any) -> Path:
        return self.add("block", name, **kwargs)

    def add_template(self, name: str, **kwargs: Any) -> Path:
        return self.add("template", name, **kwargs)


@pytest.fixture
def project(tmp_path: Path) -> ProjectBuilder:
    return ProjectBuilder(tmp_path / "site")


@pytest.fixture
def hero_config() -> str:
    return HERO_CONFIG


@pytest.fixture
def legacy_package() -> dict[str, Any]:
    """A package.json still carrying the legacy ``cmssy`` section."""
    return {
        "name": "@acme/legacy-hero",
        "version": "1.2.0",
        "description": "Legacy hero",
        "cmssy": {
            "packageType": "block",
            "displayName": "Legacy Hero",
            "category": "marketing",
            "tags": ["hero"],
            "schemaFields": [
                {"key": "title", "type": "text", "label": "Title", "required": True},
                {"key": "cta", "type": "string", "label": "CTA", "placeholder": "Click"},
                {
                    "key": "slides",
                    "type": "repeater",
                    "label": "Slides",
                    "minItems": 1,
                    "maxItems": 5,
                    "itemSchema": {
                        "type": "object",
                        "fields": [
                            {"key": "image", "type": "image", "label": "Image"},
                        ],
                    },
                },
            ],
            "defaultContent": {"title": "Hello", "cta": "Go", "unknown": 1},
        },
    }
