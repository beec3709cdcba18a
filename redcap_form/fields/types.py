"""Field type variants and their capabilities."""

from enum import Enum


class Capability(str, Enum):
    """Traits used when matching associated fields."""

    TEXT_LIKE = "text_like"
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    HAS_CHOICES = "has_choices"


class FieldType(str, Enum):
    """Closed set of decoding variants."""

    TEXT = "text"
    NOTES = "notes"
    DESCRIPTIVE = "descriptive"
    DROPDOWN_RAW = "dropdown_raw"
    SQL = "sql"
    FILE = "file"
    YESNO = "yesno"
    DROPDOWN = "dropdown"
    RADIO_BUTTONS = "radio_buttons"
    CHECKBOXES = "checkboxes"
    CHECKBOXES_WITH_OTHER = "checkboxes_with_other"
    CHECKBOXES_WITH_RADIO_BUTTONS_OR_OTHER = "checkboxes_with_radio_buttons_or_other"
    CHECKBOXES_WITH_CHECKBOXES_OR_OTHER = "checkboxes_with_checkboxes_or_other"

    @property
    def capabilities(self) -> frozenset[Capability]:
        return _CAPABILITIES.get(self, frozenset())

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities


_TEXT = frozenset({Capability.TEXT_LIKE})
_SINGLE = frozenset({Capability.SINGLE_CHOICE, Capability.HAS_CHOICES})
_MULTI = frozenset({Capability.MULTI_CHOICE, Capability.HAS_CHOICES})

_CAPABILITIES: dict[FieldType, frozenset[Capability]] = {
    FieldType.TEXT: _TEXT,
    FieldType.NOTES: _TEXT,
    FieldType.DROPDOWN: _SINGLE,
    FieldType.RADIO_BUTTONS: _SINGLE,
    FieldType.CHECKBOXES: _MULTI,
    FieldType.CHECKBOXES_WITH_OTHER: _MULTI,
    FieldType.CHECKBOXES_WITH_RADIO_BUTTONS_OR_OTHER: _MULTI,
    FieldType.CHECKBOXES_WITH_CHECKBOXES_OR_OTHER: _MULTI,
}
