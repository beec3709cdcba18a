"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any

import pytest

from redcap_form import Form


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def schema_path(project_root: Path) -> Path:
    """Return the bundled data dictionary schema path."""
    return project_root / "redcap_form" / "schemas" / "data_dictionary.schema.json"


@pytest.fixture
def metadata() -> list[dict[str, Any]]:
    """A small intake instrument as returned by the metadata export."""
    return [
        {
            "field_name": "study_id",
            "form_name": "intake",
            "field_type": "text",
            "field_label": "Study ID",
        },
        {
            "field_name": "name",
            "form_name": "intake",
            "field_type": "text",
            "field_label": "Participant Name",
            "identifier": "y",
        },
        {
            "field_name": "consent",
            "form_name": "intake",
            "field_type": "yesno",
            "field_label": "Consent Given",
            "required_field": "y",
        },
        {
            "field_name": "gender",
            "form_name": "intake",
            "field_type": "radio",
            "field_label": "Gender",
            "select_choices_or_calculations": "1,Male | 2,Female | 3,Other",
        },
        {
            "field_name": "conditions",
            "form_name": "intake",
            "field_type": "checkbox",
            "field_label": "Medical Conditions",
            "select_choices_or_calculations": "1,Diabetes | 2,Hypertension | 3,Other",
        },
    ]


@pytest.fixture
def responses() -> dict[str, str]:
    """A response record for the intake instrument."""
    return {
        "study_id": "001",
        "name": "John Doe",
        "consent": "1",
        "gender": "1",
        "conditions___1": "1",
        "conditions___2": "0",
        "conditions___3": "1",
    }


@pytest.fixture
def form(metadata: list[dict[str, Any]]) -> Form:
    """A form built from the intake metadata."""
    return Form(metadata)
