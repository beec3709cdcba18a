"""Loader for data dictionaries stored on disk.

Reads either the JSON metadata export (a list of objects keyed by export
names) or the "Data Dictionary" CSV download, whose columns carry
human-readable headers.
"""

import csv
import json
from pathlib import Path
from typing import Any

import jsonschema

from redcap_form.dictionary.models import DataDictionary

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "data_dictionary.schema.json"

# CSV download header -> metadata export key
CSV_HEADERS: dict[str, str] = {
    "Variable / Field Name": "field_name",
    "Form Name": "form_name",
    "Section Header": "section_header",
    "Field Type": "field_type",
    "Field Label": "field_label",
    "Choices, Calculations, OR Slider Labels": "select_choices_or_calculations",
    "Field Note": "field_note",
    "Text Validation Type OR Show Slider Number": "text_validation_type_or_show_slider_number",
    "Text Validation Min": "text_validation_min",
    "Text Validation Max": "text_validation_max",
    "Identifier?": "identifier",
    "Branching Logic (Show field only if...)": "branching_logic",
    "Required Field?": "required_field",
    "Custom Alignment": "custom_alignment",
    "Question Number (surveys only)": "question_number",
    "Matrix Group Name": "matrix_group_name",
    "Matrix Ranking?": "matrix_ranking",
    "Field Annotation": "field_annotation",
}


class DictionaryNotFoundError(Exception):
    """Raised when a data dictionary file does not exist."""

    pass


class DictionaryValidationError(Exception):
    """Raised when a data dictionary fails validation."""

    pass


class DictionaryLoader:
    """Loads and validates data dictionaries from JSON or CSV files."""

    def __init__(self, schema_path: Path | str | None = None) -> None:
        """Initialize the loader.

        Args:
            schema_path: Optional path to a JSON Schema used to validate JSON
                metadata. Defaults to the bundled data dictionary schema.
        """
        path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH
        with open(path) as f:
            self._schema: dict = json.load(f)

    def load(self, path: Path | str) -> DataDictionary:
        """Load a data dictionary, choosing the format by file suffix.

        Raises:
            DictionaryNotFoundError: If the file doesn't exist.
            DictionaryValidationError: If the file is invalid or has an
                unsupported suffix.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix == ".json":
            return self.load_json(path)
        if suffix == ".csv":
            return self.load_csv(path)
        raise DictionaryValidationError(
            f"Unsupported data dictionary format: {path.name} (expected .json or .csv)"
        )

    def load_json(self, path: Path | str) -> DataDictionary:
        """Load a JSON metadata export.

        Args:
            path: Path to a JSON file holding a list of metadata rows.

        Returns:
            The validated DataDictionary.

        Raises:
            DictionaryNotFoundError: If the file doesn't exist.
            DictionaryValidationError: If the JSON is malformed or fails schema
                validation.
        """
        path = self._require(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DictionaryValidationError(f"Invalid JSON in {path}: {e}") from e

        return self.from_records(data, source=str(path))

    def load_csv(self, path: Path | str) -> DataDictionary:
        """Load a "Data Dictionary" CSV download.

        Unknown columns are ignored. Headers already using export keys are
        accepted as well.
        """
        path = self._require(path)
        records: list[dict[str, Any]] = []
        # utf-8-sig strips the BOM the CSV download starts with
        with open(path, newline="", encoding="utf-8-sig") as f:
            for row in csv.DictReader(f):
                record: dict[str, Any] = {}
                for header, value in row.items():
                    if header is None:
                        continue
                    key = CSV_HEADERS.get(header.strip(), header.strip())
                    record[key] = value if value is not None else ""
                records.append(record)

        return self.from_records(records, source=str(path))

    def from_records(self, data: Any, source: str = "<records>") -> DataDictionary:
        """Validate raw metadata rows and build a DataDictionary."""
        try:
            jsonschema.validate(data, self._schema)
        except jsonschema.ValidationError as e:
            raise DictionaryValidationError(
                f"Data dictionary validation failed for {source}: {e.message}"
            ) from e

        try:
            return DataDictionary.from_records(data)
        except ValueError as e:
            raise DictionaryValidationError(
                f"Data dictionary validation failed for {source}: {e}"
            ) from e

    def _require(self, path: Path | str) -> Path:
        path = Path(path)
        if not path.exists():
            raise DictionaryNotFoundError(f"Data dictionary not found: {path}")
        return path
