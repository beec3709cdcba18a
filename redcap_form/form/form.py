"""Form: decoding of response records against a data dictionary.

The form builds one Field per dictionary entry the first time its fields
are needed, wires associated fields, and then decodes response records on
request. Building happens once per Form; after that the form is read-only
and may be shared between threads.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from redcap_form.diagnostics import DiagnosticsCollector, FormDiagnostic
from redcap_form.dictionary.models import DataDictionary
from redcap_form.fields.associations import AssociatedFieldResolver
from redcap_form.fields.choices import parse_choices
from redcap_form.fields.field import Field, FieldOptions, Response, Value
from redcap_form.fields.registry import FieldTypeRegistry
from redcap_form.fields.types import Capability, FieldType

logger = logging.getLogger(__name__)


class FieldNotFoundError(KeyError):
    """Raised when a field name is not in the data dictionary."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(field_name)

    def __str__(self) -> str:
        return f"Field not found in data dictionary: {self.field_name}"


class Form:
    """Decodes response records using a data dictionary.

    Example:
        form = Form(metadata)
        form.get("gender", {"gender": "1"})  # -> "Male"
        form.get("consent", record, default=True)
        form.get("gender", record, type_override="text")  # -> "1"
    """

    def __init__(
        self,
        data_dictionary: DataDictionary | Iterable[Mapping[str, Any]],
        registry: FieldTypeRegistry | None = None,
    ) -> None:
        """Initialize the form.

        Args:
            data_dictionary: A DataDictionary or raw metadata rows.
            registry: Optional type registry. Defaults to the built-in table.
        """
        if not isinstance(data_dictionary, DataDictionary):
            data_dictionary = DataDictionary.from_records(data_dictionary)
        self.data_dictionary = data_dictionary
        self.registry = registry if registry is not None else FieldTypeRegistry()
        self.resolver = AssociatedFieldResolver()

        self._collector = DiagnosticsCollector()
        self._fields: tuple[Field, ...] | None = None
        self._fields_by_name: dict[str, Field] = {}
        self._lock = threading.Lock()

    def fields(self) -> tuple[Field, ...]:
        """Return the built fields in dictionary order, building them once."""
        fields = self._fields
        if fields is None:
            with self._lock:
                if self._fields is None:
                    built = self._build()
                    self._fields_by_name = {f.name: f for f in built}
                    self._fields = built
                fields = self._fields
        return fields

    def field(self, field_name: str) -> Field:
        """Get a built field by name.

        Raises:
            FieldNotFoundError: If the name is not in the data dictionary.
        """
        self.fields()
        try:
            return self._fields_by_name[field_name]
        except KeyError:
            raise FieldNotFoundError(field_name) from None

    def has_field(self, field_name: str) -> bool:
        return field_name in self.data_dictionary

    def get(
        self,
        field_name: str,
        response: Response,
        type_override: FieldType | str | None = None,
        **options: Any,
    ) -> Value:
        """Decode one field from a response record.

        Args:
            field_name: Name of the field to decode.
            response: Raw response record.
            type_override: Optional variant (or type name) to decode with
                instead of the declared field type.
            **options: Per-call options (``default``).

        Returns:
            The decoded value.

        Raises:
            FieldNotFoundError: If the name is not in the data dictionary.
            pydantic.ValidationError: If an unknown option is passed.
        """
        field_options = FieldOptions(type_override=type_override, **options)
        field = self.field(field_name)
        if field_options.type_override is not None:
            field = field.with_type(
                self.registry.resolve(field_options.type_override, field_name=field_name)
            )
        return field.decode(response, field_options)

    def decode(
        self,
        response: Response,
        field_names: Iterable[str] | None = None,
    ) -> dict[str, Value]:
        """Decode several fields from a response record.

        Args:
            response: Raw response record.
            field_names: Fields to decode. Defaults to every field.

        Returns:
            Mapping of field name to decoded value, in the requested order
            (dictionary order by default).
        """
        if field_names is None:
            return {f.name: f.decode(response) for f in self.fields()}
        return {name: self.field(name).decode(response) for name in field_names}

    @property
    def diagnostics(self) -> FormDiagnostic:
        """Diagnostics recorded while building the fields."""
        self.fields()
        return self._collector.finalize()

    def _build(self) -> tuple[Field, ...]:
        fields: list[Field] = []
        for definition in self.data_dictionary:
            field_type = self.registry.resolve(
                definition.field_type,
                diagnostics=self._collector,
                field_name=definition.field_name,
            )
            choices = None
            if field_type.has(Capability.HAS_CHOICES):
                choices = self._parse_choices(definition.field_name, definition.select_choices_or_calculations)
            fields.append(Field(definition, field_type, choices=choices))

        self.resolver.wire(fields)
        logger.debug("Built %d fields", len(fields))
        return tuple(fields)

    def _parse_choices(self, field_name: str, raw: str) -> dict[str, str]:
        malformed: list[str] = []
        choices = parse_choices(raw, malformed)
        for pair in malformed:
            message = f"Skipping malformed choice {pair!r} in field {field_name}"
            logger.warning(message)
            self._collector.add_warning(
                stage="choices",
                code="MALFORMED_CHOICE",
                message=message,
                field_name=field_name,
                details={"pair": pair},
            )
        return choices
