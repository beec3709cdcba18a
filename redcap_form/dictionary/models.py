"""Pydantic models for data dictionary entries.

Attribute names follow the REDCap metadata export so that a raw metadata
row validates directly into a FieldDefinition.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class DuplicateFieldError(ValueError):
    """Raised when a data dictionary declares the same field name twice."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Duplicate field name in data dictionary: {field_name}")


class ValidationRule(BaseModel):
    """Text validation descriptor of a field."""

    model_config = ConfigDict(frozen=True)

    type: str | None = None
    min: str | None = None
    max: str | None = None


class FieldDefinition(BaseModel):
    """One entry of the data dictionary."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    field_name: str
    form_name: str = ""
    section_header: str = ""
    field_type: str = ""
    field_label: str = ""
    select_choices_or_calculations: str = ""
    field_note: str = ""
    text_validation_type_or_show_slider_number: str = ""
    text_validation_min: str = ""
    text_validation_max: str = ""
    identifier: str = ""
    branching_logic: str = ""
    required_field: str = ""
    custom_alignment: str = ""
    question_number: str = ""
    matrix_group_name: str = ""
    matrix_ranking: str = ""
    field_annotation: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        # Metadata rows sometimes carry nulls instead of empty strings
        return "" if value is None else value

    @field_validator("field_name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("field_name must not be empty")
        return value

    @property
    def validation(self) -> ValidationRule:
        """Return the text validation descriptor."""
        return ValidationRule(
            type=self.text_validation_type_or_show_slider_number or None,
            min=self.text_validation_min or None,
            max=self.text_validation_max or None,
        )

    @property
    def is_identifier(self) -> bool:
        return self.identifier.lower() == "y"

    @property
    def is_required(self) -> bool:
        return self.required_field.lower() == "y"

    @property
    def is_matrix_ranking(self) -> bool:
        return self.matrix_ranking.lower() == "y"


class DataDictionary:
    """Ordered, name-unique collection of field definitions.

    Order is the instrument display order and also the order used when
    matching fields against each other's branching logic.
    """

    def __init__(self, definitions: Iterable[FieldDefinition] = ()) -> None:
        self._definitions: tuple[FieldDefinition, ...] = tuple(definitions)
        self._by_name: dict[str, FieldDefinition] = {}
        for definition in self._definitions:
            if definition.field_name in self._by_name:
                raise DuplicateFieldError(definition.field_name)
            self._by_name[definition.field_name] = definition

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "DataDictionary":
        """Build a dictionary from raw metadata rows."""
        return cls(FieldDefinition.model_validate(dict(record)) for record in records)

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._definitions)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._by_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataDictionary):
            return NotImplemented
        return self._definitions == other._definitions

    def __hash__(self) -> int:
        return hash(self._definitions)

    def __repr__(self) -> str:
        return f"DataDictionary({len(self)} fields)"

    def get(self, field_name: str) -> FieldDefinition | None:
        """Get a definition by field name."""
        return self._by_name.get(field_name)

    def names(self) -> list[str]:
        """List field names in dictionary order."""
        return [d.field_name for d in self._definitions]

    def instrument_names(self) -> list[str]:
        """List distinct instrument (form) names in first-appearance order."""
        seen: dict[str, None] = {}
        for definition in self._definitions:
            if definition.form_name:
                seen.setdefault(definition.form_name, None)
        return list(seen)

    def for_instrument(self, form_name: str) -> list[FieldDefinition]:
        """Get the definitions belonging to one instrument, in order."""
        return [d for d in self._definitions if d.form_name == form_name]
