"""Field decoding.

A Field binds one data dictionary entry to a decoding variant. Decoding is
a pure function of the field, the call's options and the response record:
nothing from a call is kept on the field.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from redcap_form.dictionary.models import FieldDefinition
from redcap_form.fields.associations import expression_for
from redcap_form.fields.choices import parse_choices
from redcap_form.fields.types import Capability, FieldType

Response = Mapping[str, str]
Value = bool | str | list | dict | None

CHECKBOX_SEPARATOR = "___"
SELECTED = "1"


class FieldOptions(BaseModel):
    """Per-call decoding options.

    ``default`` only applies when it was passed explicitly, so ``default=None``
    differs from no default at all.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    default: Any = None
    type_override: FieldType | str | None = None

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


DEFAULT_OPTIONS = FieldOptions()


def checkbox_key(field_name: str, key: str) -> str:
    """Response key holding one checkbox choice (``conditions___3``)."""
    return f"{field_name}{CHECKBOX_SEPARATOR}{key}"


class Field:
    """A data dictionary entry bound to a decoding variant.

    Attributes:
        definition: The underlying FieldDefinition.
        field_type: The decoding variant.
        choices: Ordered ``key -> label`` mapping; empty for variants without
            choices.
        associated_fields: Fields shown only when one of this field's choices
            is selected. Assigned once when the owning form is built.
    """

    def __init__(
        self,
        definition: FieldDefinition,
        field_type: FieldType,
        associated_fields: Iterable["Field"] = (),
        choices: dict[str, str] | None = None,
    ) -> None:
        self.definition = definition
        self.field_type = field_type
        self.associated_fields: tuple[Field, ...] = tuple(associated_fields)
        if choices is None:
            choices = (
                parse_choices(definition.select_choices_or_calculations)
                if field_type.has(Capability.HAS_CHOICES)
                else {}
            )
        self.choices = choices

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.field_type.value})"

    @property
    def name(self) -> str:
        return self.definition.field_name

    @property
    def label(self) -> str:
        return self.definition.field_label

    @property
    def branching_logic(self) -> str:
        return self.definition.branching_logic

    def with_type(self, field_type: FieldType) -> "Field":
        """Return a copy decoded as another variant, keeping the associations."""
        return Field(self.definition, field_type, self.associated_fields)

    def decode(self, response: Response, options: FieldOptions | None = None) -> Value:
        """Decode this field's value from a response record.

        Args:
            response: Raw response record.
            options: Optional per-call options.

        Returns:
            The decoded value. Missing keys never raise.
        """
        decoder = self._DECODERS[self.field_type]
        return decoder(self, response, options or DEFAULT_OPTIONS)

    # Associated field lookup

    def associated_fields_for_key(self, key: str) -> list["Field"]:
        """Associated fields shown when choice ``key`` is selected."""
        expression = expression_for(self.name, key)
        return [f for f in self.associated_fields if f.branching_logic == expression]

    def other_text_field(self, key: str) -> "Field | None":
        """The free-text field attached to choice ``key``, if any."""
        for field in self.associated_fields_for_key(key):
            if field.field_type.has(Capability.TEXT_LIKE):
                return field
        return None

    def single_choice_field(self, key: str) -> "Field | None":
        for field in self.associated_fields_for_key(key):
            if field.field_type.has(Capability.SINGLE_CHOICE):
                return field
        return None

    def multi_choice_fields(self, key: str) -> list["Field"]:
        return [
            f for f in self.associated_fields_for_key(key) if f.field_type.has(Capability.MULTI_CHOICE)
        ]

    def selected_choices(self, response: Response) -> dict[str, str]:
        """Selected checkbox choices, in declared choice order."""
        return {
            key: label
            for key, label in self.choices.items()
            if response.get(checkbox_key(self.name, key)) == SELECTED
        }

    # Decoders

    def _decode_raw(self, response: Response, options: FieldOptions) -> Value:
        return response.get(self.name)

    def _decode_file(self, response: Response, options: FieldOptions) -> Value:
        if response.get(self.name):
            return self.name
        return None

    def _decode_yesno(self, response: Response, options: FieldOptions) -> Value:
        raw = response.get(self.name)
        if options.has_default and raw == "":
            return options.default
        return raw == SELECTED

    def _decode_choice(self, response: Response, options: FieldOptions) -> Value:
        raw = response.get(self.name)
        if raw is None:
            return None
        return self.choices.get(raw)

    def _decode_checkboxes(self, response: Response, options: FieldOptions) -> Value:
        return list(self.selected_choices(response).values())

    def _decode_checkboxes_with_other(self, response: Response, options: FieldOptions) -> Value:
        values: list[str] = []
        for key, label in self.selected_choices(response).items():
            other = self.other_text_field(key)
            if other is None:
                values.append(label)
            else:
                text = other.decode(response)
                values.append(f"{label}: {text or ''}")
        return values

    def _decode_checkboxes_with_radio_buttons_or_other(
        self, response: Response, options: FieldOptions
    ) -> Value:
        values: dict[str, Value] = {}
        for key, label in self.selected_choices(response).items():
            associate = self.other_text_field(key) or self.single_choice_field(key)
            values[label] = associate.decode(response) if associate is not None else None
        return values

    def _decode_checkboxes_with_checkboxes_or_other(
        self, response: Response, options: FieldOptions
    ) -> Value:
        values: dict[str, Value] = {}
        for key, label in self.selected_choices(response).items():
            sub_fields = self.multi_choice_fields(key)
            if sub_fields:
                values[label] = [f.decode(response) for f in sub_fields]
                continue
            # Choice 501 ("Other") conventionally carries a lone text field
            other = self.other_text_field(key)
            values[label] = [other.decode(response)] if other is not None else []
        return values

    _DECODERS = {
        FieldType.TEXT: _decode_raw,
        FieldType.NOTES: _decode_raw,
        FieldType.DESCRIPTIVE: _decode_raw,
        FieldType.DROPDOWN_RAW: _decode_raw,
        FieldType.SQL: _decode_raw,
        FieldType.FILE: _decode_file,
        FieldType.YESNO: _decode_yesno,
        FieldType.DROPDOWN: _decode_choice,
        FieldType.RADIO_BUTTONS: _decode_choice,
        FieldType.CHECKBOXES: _decode_checkboxes,
        FieldType.CHECKBOXES_WITH_OTHER: _decode_checkboxes_with_other,
        FieldType.CHECKBOXES_WITH_RADIO_BUTTONS_OR_OTHER: _decode_checkboxes_with_radio_buttons_or_other,
        FieldType.CHECKBOXES_WITH_CHECKBOXES_OR_OTHER: _decode_checkboxes_with_checkboxes_or_other,
    }
