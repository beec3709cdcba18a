"""Field type registry.

Maps data dictionary ``field_type`` names to decoding variants. Names are
matched after normalization, so ``radio_buttons``, ``RadioButtons`` and
``radio-buttons`` are the same name.
"""

import logging
import re

from redcap_form.diagnostics import DiagnosticsCollector
from redcap_form.fields.types import FieldType

logger = logging.getLogger(__name__)

FALLBACK_TYPE = FieldType.TEXT

_IGNORED = re.compile(r"[\s_\-]+")

DEFAULT_TYPE_NAMES: dict[str, FieldType] = {
    "text": FieldType.TEXT,
    "notes": FieldType.NOTES,
    "descriptive": FieldType.DESCRIPTIVE,
    "sql": FieldType.SQL,
    "dropdown_raw": FieldType.DROPDOWN_RAW,
    "dropdown": FieldType.DROPDOWN,
    "file": FieldType.FILE,
    "yesno": FieldType.YESNO,
    "radio": FieldType.RADIO_BUTTONS,
    "radio_buttons": FieldType.RADIO_BUTTONS,
    "checkboxes": FieldType.CHECKBOXES,
    "checkbox": FieldType.CHECKBOXES_WITH_OTHER,
    "checkboxes_with_other": FieldType.CHECKBOXES_WITH_OTHER,
    "checkboxes_with_radio_buttons_or_other": FieldType.CHECKBOXES_WITH_RADIO_BUTTONS_OR_OTHER,
    "checkboxes_with_checkboxes_or_other": FieldType.CHECKBOXES_WITH_CHECKBOXES_OR_OTHER,
}


def normalize_type_name(type_name: str) -> str:
    """Normalize a type name for lookup (``RadioButtons`` -> ``radiobuttons``)."""
    return _IGNORED.sub("", type_name).lower()


class FieldTypeRegistry:
    """Resolves field type names to decoding variants.

    Unknown names never raise: they resolve to Text, and the fallback is
    logged and optionally recorded in a DiagnosticsCollector.
    """

    def __init__(self, type_names: dict[str, FieldType] | None = None) -> None:
        """Initialize the registry.

        Args:
            type_names: Name -> variant table. Defaults to the built-in table.
        """
        self._types: dict[str, FieldType] = {}
        for name, field_type in (type_names or DEFAULT_TYPE_NAMES).items():
            self.register(name, field_type)

    def register(self, type_name: str, field_type: FieldType) -> None:
        """Register a type name, replacing any existing entry."""
        self._types[normalize_type_name(type_name)] = field_type

    def has_type(self, type_name: str) -> bool:
        """Check if a type name is registered."""
        return normalize_type_name(type_name) in self._types

    @property
    def registered_names(self) -> list[str]:
        """List all registered (normalized) type names."""
        return list(self._types.keys())

    def resolve(
        self,
        type_name: FieldType | str | None,
        diagnostics: DiagnosticsCollector | None = None,
        field_name: str | None = None,
    ) -> FieldType:
        """Resolve a type name to a variant.

        Args:
            type_name: A field type name, or a FieldType which is returned as-is.
            diagnostics: Optional collector that records the fallback.
            field_name: Optional field the name belongs to, for the diagnostic.

        Returns:
            The registered FieldType, or Text for unknown names.
        """
        if isinstance(type_name, FieldType):
            return type_name

        field_type = self._types.get(normalize_type_name(type_name or ""))
        if field_type is not None:
            return field_type

        message = f"Unimplemented field type: `{type_name}`. Falling back to Text."
        logger.warning(message)
        if diagnostics is not None:
            diagnostics.add_warning(
                stage="build",
                code="UNIMPLEMENTED_FIELD_TYPE",
                message=message,
                field_name=field_name,
                details={"field_type": type_name},
            )
        return FALLBACK_TYPE
