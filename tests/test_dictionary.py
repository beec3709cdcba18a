"""Tests for data dictionary models."""

from typing import Any

import pytest
from pydantic import ValidationError

from redcap_form.dictionary import DataDictionary, DuplicateFieldError, FieldDefinition


class TestFieldDefinition:
    """Tests for FieldDefinition."""

    def test_validates_metadata_row(self) -> None:
        """Test that a raw metadata row validates into a definition."""
        definition = FieldDefinition.model_validate(
            {
                "field_name": "age",
                "form_name": "intake",
                "field_type": "text",
                "field_label": "Age",
                "text_validation_type_or_show_slider_number": "integer",
                "text_validation_min": "18",
                "text_validation_max": "",
            }
        )

        assert definition.field_name == "age"
        assert definition.form_name == "intake"
        assert definition.branching_logic == ""

    def test_validation_rule(self) -> None:
        """Test that the validation descriptor maps empty strings to None."""
        definition = FieldDefinition(
            field_name="age",
            text_validation_type_or_show_slider_number="integer",
            text_validation_min="18",
        )

        rule = definition.validation
        assert rule.type == "integer"
        assert rule.min == "18"
        assert rule.max is None

    def test_none_values_become_empty_strings(self) -> None:
        """Test that nulls in metadata are treated as empty."""
        definition = FieldDefinition.model_validate(
            {"field_name": "notes", "branching_logic": None, "field_type": None}
        )
        assert definition.branching_logic == ""
        assert definition.field_type == ""

    def test_flags(self) -> None:
        """Test the y/n flag views."""
        definition = FieldDefinition(
            field_name="name", identifier="y", required_field="Y", matrix_ranking=""
        )
        assert definition.is_identifier is True
        assert definition.is_required is True
        assert definition.is_matrix_ranking is False

    def test_empty_name_rejected(self) -> None:
        """Test that a field needs a name."""
        with pytest.raises(ValidationError):
            FieldDefinition(field_name="  ")

    def test_unknown_keys_ignored(self) -> None:
        """Test that extra metadata keys are ignored."""
        definition = FieldDefinition.model_validate({"field_name": "x", "something_new": "1"})
        assert definition.field_name == "x"

    def test_is_immutable(self) -> None:
        """Test that definitions are frozen."""
        definition = FieldDefinition(field_name="x")
        with pytest.raises(ValidationError):
            definition.field_type = "yesno"


class TestDataDictionary:
    """Tests for DataDictionary."""

    def test_preserves_order(self, metadata: list[dict[str, Any]]) -> None:
        """Test that dictionary order follows the metadata order."""
        dictionary = DataDictionary.from_records(metadata)

        assert len(dictionary) == 5
        assert dictionary.names() == ["study_id", "name", "consent", "gender", "conditions"]
        assert [d.field_name for d in dictionary] == dictionary.names()

    def test_lookup(self, metadata: list[dict[str, Any]]) -> None:
        """Test lookup by name."""
        dictionary = DataDictionary.from_records(metadata)

        assert "gender" in dictionary
        assert "missing" not in dictionary
        assert dictionary.get("gender").field_type == "radio"
        assert dictionary.get("missing") is None

    def test_duplicate_names_rejected(self) -> None:
        """Test that field names must be unique."""
        with pytest.raises(DuplicateFieldError) as exc_info:
            DataDictionary.from_records(
                [{"field_name": "a"}, {"field_name": "b"}, {"field_name": "a"}]
            )
        assert exc_info.value.field_name == "a"

    def test_instruments(self) -> None:
        """Test instrument listing and subsetting."""
        dictionary = DataDictionary.from_records(
            [
                {"field_name": "study_id", "form_name": "intake"},
                {"field_name": "phq1", "form_name": "phq9"},
                {"field_name": "age", "form_name": "intake"},
            ]
        )

        assert dictionary.instrument_names() == ["intake", "phq9"]
        assert [d.field_name for d in dictionary.for_instrument("intake")] == ["study_id", "age"]
        assert dictionary.for_instrument("unknown") == []

    def test_equality(self, metadata: list[dict[str, Any]]) -> None:
        """Test that dictionaries built from the same rows are equal."""
        assert DataDictionary.from_records(metadata) == DataDictionary.from_records(metadata)
