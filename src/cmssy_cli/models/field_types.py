"""Field-type vocabulary models."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict


class FieldTypeInfo(BaseModel):
    """One entry of the registry's field-type catalogue."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    label: str | None = None
    category: str | None = None
    description: str | None = None


class FieldTypeVocabulary(BaseModel):
    """The authoritative, ordered set of valid field types."""

    model_config = ConfigDict(frozen=True)

    types: tuple[FieldTypeInfo, ...] = ()

    @classmethod
    def from_names(cls, *names: str) -> FieldTypeVocabulary:
        return cls(types=tuple(FieldTypeInfo(type=name) for name in names))

    @property
    def type_names(self) -> list[str]:
        return [ft.type for ft in self.types]

    def __contains__(self, field_type: object) -> bool:
        return any(ft.type == field_type for ft in self.types)

    def __iter__(self) -> Iterator[FieldTypeInfo]:  # type: ignore[override]
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)


def is_valid_field_type(field_type: str, vocabulary: FieldTypeVocabulary) -> bool:
    return field_type in vocabulary
