"""Legacy schema models (the ``cmssy`` section of package.json)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LegacyItemSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = "object"
    fields: list[LegacyField] | None = None


class LegacyField(BaseModel):
    """A flat legacy field descriptor."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    key: str
    type: str
    label: str = ""
    required: bool = False
    placeholder: str | None = None
    help_text: str | None = Field(default=None, alias="helpText")
    options: list[Any] | None = None
    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")
    item_schema: LegacyItemSchema | None = Field(default=None, alias="itemSchema")


class LegacyMetadata(BaseModel):
    """Resource metadata embedded in package.json by older tooling."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    package_type: str | None = Field(default=None, alias="packageType")
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None
    long_description: str | None = Field(default=None, alias="longDescription")
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    pricing: dict[str, Any] | None = None
    schema_fields: list[LegacyField] = Field(default_factory=list, alias="schemaFields")
    default_content: dict[str, Any] = Field(default_factory=dict, alias="defaultContent")

    @property
    def is_template(self) -> bool:
        return self.package_type == "template"


LegacyItemSchema.model_rebuild()
LegacyField.model_rebuild()
