"""Collector for decoding diagnostics."""

from redcap_form.diagnostics.models import (
    DiagnosticError,
    DiagnosticWarning,
    FormDiagnostic,
    ProcessingStatus,
    Stage,
)


class DiagnosticsCollector:
    """Collects warnings and errors and produces a FormDiagnostic.

    A collector is append-only; ``finalize`` may be called any number of
    times and always reflects everything recorded so far.
    """

    def __init__(self) -> None:
        self._errors: list[DiagnosticError] = []
        self._warnings: list[DiagnosticWarning] = []

    def add_error(
        self,
        stage: Stage,
        code: str,
        message: str,
        field_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Add an error to the diagnostics.

        Args:
            stage: Processing stage where the error occurred.
            code: Error code (e.g., "MISSING_RECORD_KEY").
            message: Human-readable error message.
            field_name: Optional field the error relates to.
            details: Optional additional details.
        """
        self._errors.append(
            DiagnosticError(
                stage=stage,
                code=code,
                message=message,
                field_name=field_name,
                details=details,
            )
        )

    def add_warning(
        self,
        stage: Stage,
        code: str,
        message: str,
        field_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Add a warning to the diagnostics.

        Args:
            stage: Processing stage where the warning occurred.
            code: Warning code (e.g., "MALFORMED_CHOICE").
            message: Human-readable warning message.
            field_name: Optional field the warning relates to.
            details: Optional additional details.
        """
        self._warnings.append(
            DiagnosticWarning(
                stage=stage,
                code=code,
                message=message,
                field_name=field_name,
                details=details,
            )
        )

    def finalize(self) -> FormDiagnostic:
        """Return the diagnostic report for everything collected so far."""
        if self._errors:
            status = ProcessingStatus.FAILED
        elif self._warnings:
            status = ProcessingStatus.PARTIAL
        else:
            status = ProcessingStatus.SUCCESS

        return FormDiagnostic(
            status=status,
            errors=list(self._errors),
            warnings=list(self._warnings),
        )
