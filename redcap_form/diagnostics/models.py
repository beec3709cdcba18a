"""Data models for decoding diagnostics.

Tracks problems found while building forms (unimplemented field types,
malformed choice lists) and while extracting instruments (rows without a
record key) without interrupting processing.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

Stage = Literal["build", "choices", "extract"]


class ProcessingStatus(str, Enum):
    """Status of a form build or extraction."""

    SUCCESS = "success"  # No warnings or errors
    PARTIAL = "partial"  # Usable, but something degraded
    FAILED = "failed"  # At least one error


class DiagnosticError(BaseModel):
    """An error recorded during processing."""

    stage: Stage
    code: str  # Error code like "MISSING_RECORD_KEY"
    message: str
    field_name: str | None = None
    details: dict | None = None


class DiagnosticWarning(BaseModel):
    """A non-fatal problem recorded during processing."""

    stage: Stage
    code: str  # Warning code like "UNIMPLEMENTED_FIELD_TYPE"
    message: str
    field_name: str | None = None
    details: dict | None = None


class FormDiagnostic(BaseModel):
    """Diagnostics for a built form."""

    status: ProcessingStatus
    errors: list[DiagnosticError] = Field(default_factory=list)
    warnings: list[DiagnosticWarning] = Field(default_factory=list)

    def codes(self) -> list[str]:
        """Return every warning and error code, warnings first."""
        return [w.code for w in self.warnings] + [e.code for e in self.errors]
