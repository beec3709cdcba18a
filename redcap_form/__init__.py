"""redcap_form: Typed decoding of REDCap survey responses."""

__version__ = "0.1.0"

from redcap_form.dictionary import DataDictionary, DictionaryLoader, FieldDefinition
from redcap_form.fields import Field, FieldOptions, FieldType, FieldTypeRegistry
from redcap_form.form import FieldNotFoundError, Form

__all__ = [
    "__version__",
    "DataDictionary",
    "DictionaryLoader",
    "Field",
    "FieldDefinition",
    "FieldNotFoundError",
    "FieldOptions",
    "FieldType",
    "FieldTypeRegistry",
    "Form",
]
