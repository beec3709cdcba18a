"""Data dictionary models and loading."""

from redcap_form.dictionary.loader import (
    DictionaryLoader,
    DictionaryNotFoundError,
    DictionaryValidationError,
)
from redcap_form.dictionary.models import (
    DataDictionary,
    DuplicateFieldError,
    FieldDefinition,
    ValidationRule,
)

__all__ = [
    "DataDictionary",
    "DictionaryLoader",
    "DictionaryNotFoundError",
    "DictionaryValidationError",
    "DuplicateFieldError",
    "FieldDefinition",
    "ValidationRule",
]
