"""Pydantic data models for resources, schemas, and field types."""

from cmssy_cli.models.field_types import (
    FieldTypeInfo,
    FieldTypeVocabulary,
    is_valid_field_type,
)
from cmssy_cli.models.fields import (
    BaseField,
    FieldConfig,
    RepeaterField,
    ScalarField,
    Schema,
    SelectField,
)
from cmssy_cli.models.legacy import LegacyField, LegacyItemSchema, LegacyMetadata
from cmssy_cli.models.resource import (
    BlockConfig,
    ResourceConfig,
    ResourceKind,
    ScannedResource,
    TemplateConfig,
)

__all__ = [
    "BaseField",
    "BlockConfig",
    "FieldConfig",
    "FieldTypeInfo",
    "FieldTypeVocabulary",
    "LegacyField",
    "LegacyItemSchema",
    "LegacyMetadata",
    "RepeaterField",
    "ResourceConfig",
    "ResourceKind",
    "ScalarField",
    "ScannedResource",
    "Schema",
    "SelectField",
    "TemplateConfig",
    "is_valid_field_type",
]
