"""Field types, the type registry and field decoding."""

from redcap_form.fields.associations import AssociatedFieldResolver, expression_for
from redcap_form.fields.choices import parse_choices
from redcap_form.fields.field import Field, FieldOptions, Value, checkbox_key
from redcap_form.fields.registry import FieldTypeRegistry, normalize_type_name
from redcap_form.fields.types import Capability, FieldType

__all__ = [
    "AssociatedFieldResolver",
    "Capability",
    "Field",
    "FieldOptions",
    "FieldType",
    "FieldTypeRegistry",
    "Value",
    "checkbox_key",
    "expression_for",
    "normalize_type_name",
    "parse_choices",
]
