"""Diagnostics collection for form building and decoding.

Tracks unimplemented field types and malformed choice lists found while
building forms, and rows rejected while extracting instruments.
"""

from redcap_form.diagnostics.collector import DiagnosticsCollector
from redcap_form.diagnostics.models import (
    DiagnosticError,
    DiagnosticWarning,
    FormDiagnostic,
    ProcessingStatus,
)

__all__ = [
    "DiagnosticsCollector",
    "DiagnosticError",
    "DiagnosticWarning",
    "FormDiagnostic",
    "ProcessingStatus",
]
