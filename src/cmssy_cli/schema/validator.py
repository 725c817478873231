"""Schema validation against the field-type vocabulary.

Every field is checked depth-first in declaration order. Errors accumulate
instead of stopping at the first problem, and nested repeater fields are
reported with a dotted path (``items.title``). A required field that also
declares a default is only a warning; it goes to ``on_warning`` and never
into the error list.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field

from cmssy_cli.models.field_types import FieldTypeVocabulary, is_valid_field_type
from cmssy_cli.models.fields import BaseField, RepeaterField, SelectField
from cmssy_cli.output.diagnostics import WarningSink, warn


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


class SchemaValidator:
    """Validates schemas with a fixed vocabulary."""

    def __init__(
        self,
        vocabulary: FieldTypeVocabulary,
        on_warning: WarningSink = warn,
    ) -> None:
        self.vocabulary = vocabulary
        self.on_warning = on_warning

    def validate(self, schema: Mapping[str, BaseField]) -> ValidationResult:
        errors: list[str] = []
        self._validate_schema(schema, "", errors)
        return ValidationResult(valid=not errors, errors=errors)

    def _validate_schema(
        self,
        schema: Mapping[str, BaseField],
        parent_path: str,
        errors: list[str],
    ) -> None:
        for key, field in schema.items():
            self._validate_field(key, field, parent_path, errors)

    def _validate_field(
        self,
        key: str,
        field: BaseField,
        parent_path: str,
        errors: list[str],
    ) -> None:
        path = f"{parent_path}.{key}" if parent_path else key

        if not is_valid_field_type(field.type, self.vocabulary):
            errors.append(
                f'Invalid field type "{field.type}" for field "{path}". '
                f"Valid types: {', '.join(self.vocabulary.type_names)}"
            )

        match field:
            case RepeaterField():
                if not field.item_schema:
                    errors.append(
                        f'Repeater field "{path}" must have a non-empty "schema" property'
                    )
                else:
                    self._validate_schema(field.item_schema, path, errors)
                if field.min_items is not None and field.min_items < 0:
                    errors.append(
                        f'Repeater field "{path}" has invalid minItems (must be >= 0)'
                    )
                if field.max_items is not None and field.max_items < 1:
                    errors.append(
                        f'Repeater field "{path}" has invalid maxItems (must be >= 1)'
                    )
                if (
                    field.min_items is not None
                    and field.max_items is not None
                    and field.min_items > field.max_items
                ):
                    errors.append(
                        f'Repeater field "{path}" has minItems ({field.min_items}) '
                        f"> maxItems ({field.max_items})"
                    )
            case SelectField():
                if not field.options:
                    errors.append(
                        f'Select field "{path}" must have at least one option'
                    )

        if field.required and field.has_default:
            self.on_warning(
                f'Field "{path}" is required but has a defaultValue. '
                "The defaultValue will be ignored."
            )
