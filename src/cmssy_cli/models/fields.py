"""Content schema field models.

A schema maps field keys to field declarations. ``FieldConfig`` is a tagged
union discriminated by ``type``: ``select`` and ``repeater`` carry their own
payload, every other vocabulary type is a ``ScalarField``. Repeaters nest a
schema of the same shape, so the model is recursive.

Kind payloads (``options``, ``schema``, item bounds) are optional here; the
schema validator reports missing or out-of-range values, not the parser.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter

SELECT = "select"
REPEATER = "repeater"


class BaseField(BaseModel):
    """Attributes shared by every field kind."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str
    label: str = ""
    required: bool = False
    placeholder: str | None = None
    help_text: str | None = Field(default=None, alias="helpText")
    default_value: Any = Field(default=None, alias="defaultValue")

    @property
    def has_default(self) -> bool:
        """True when ``defaultValue`` was declared, even as ``None``."""
        return "default_value" in self.model_fields_set


class ScalarField(BaseField):
    """Any field kind without a kind-specific payload (singleLine, image, ...)."""


class SelectField(BaseField):
    type: Literal["select"] = SELECT
    options: list[Any] | None = None


class RepeaterField(BaseField):
    type: Literal["repeater"] = REPEATER
    item_schema: dict[str, FieldConfig] | None = Field(default=None, alias="schema")
    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")


def _field_kind(value: Any) -> str:
    if isinstance(value, Mapping):
        field_type = value.get("type")
    else:
        field_type = getattr(value, "type", None)
    if field_type in (SELECT, REPEATER):
        return field_type
    return "scalar"


FieldConfig = Annotated[
    Union[
        Annotated[SelectField, Tag(SELECT)],
        Annotated[RepeaterField, Tag(REPEATER)],
        Annotated[ScalarField, Tag("scalar")],
    ],
    Discriminator(_field_kind),
]

Schema = dict[str, FieldConfig]

RepeaterField.model_rebuild()

_schema_adapter: TypeAdapter[dict[str, Any]] = TypeAdapter(Schema)
_field_adapter: TypeAdapter[Any] = TypeAdapter(FieldConfig)


def parse_schema(data: Mapping[str, Any]) -> Schema:
    """Validate a plain mapping into a typed schema."""
    return _schema_adapter.validate_python(dict(data))


def parse_field(data: Mapping[str, Any]) -> BaseField:
    result: BaseField = _field_adapter.validate_python(dict(data))
    return result
