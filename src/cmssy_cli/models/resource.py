"""Resource configuration and discovery record models."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cmssy_cli.models.fields import Schema

ResourceKind = Literal["block", "template"]


def _free_pricing() -> dict[str, Any]:
    return {"licenseType": "free"}


class ResourceConfig(BaseModel):
    """The declared content contract of a block or template."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    kind: ClassVar[ResourceKind | None] = None

    name: str
    description: str = ""
    long_description: str | None = Field(default=None, alias="longDescription")
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    pricing: dict[str, Any] = Field(default_factory=_free_pricing)
    content_schema: Schema = Field(default_factory=dict, alias="schema")

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class BlockConfig(ResourceConfig):
    kind: ClassVar[ResourceKind | None] = "block"


class TemplateConfig(ResourceConfig):
    kind: ClassVar[ResourceKind | None] = "template"


class ScannedResource(BaseModel):
    """A normalized discovery record for one resource directory."""

    type: ResourceKind
    name: str
    path: Path
    package_json: dict[str, Any] | None = None
    resource_config: ResourceConfig | None = None
    display_name: str | None = None
    description: str | None = None
    category: str | None = None
    preview_data: dict[str, Any] | None = None

    @property
    def package_name(self) -> str:
        """Manifest name, falling back to the directory name."""
        if self.package_json and self.package_json.get("name"):
            return str(self.package_json["name"])
        return self.name

    @property
    def version(self) -> str | None:
        if self.package_json and self.package_json.get("version"):
            return str(self.package_json["version"])
        return None
