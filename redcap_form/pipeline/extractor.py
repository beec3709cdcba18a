"""Instrument extraction.

Selects the rows of an export that belong to one instrument and decodes
the configured fields of each row through a Form.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field, model_validator

from redcap_form.diagnostics import DiagnosticsCollector, FormDiagnostic
from redcap_form.fields.field import Response
from redcap_form.form import FieldNotFoundError, Form

logger = logging.getLogger(__name__)

EVENT_NAME_KEY = "redcap_event_name"
REPEAT_INSTRUMENT_KEY = "redcap_repeat_instrument"
REPEAT_INSTANCE_KEY = "redcap_repeat_instance"


class MissingRecordKeyError(Exception):
    """Raised when a record lacks the configured key field."""

    pass


class ExtractorConfig(BaseModel):
    """Configuration for extracting one instrument."""

    instrument_name: str
    field_names: list[str]
    key: str = "study_id"
    repeating: bool = False
    events: list[str] = Field(default_factory=list)
    type_overrides: dict[str, str] = Field(default_factory=dict)
    defaults: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_field_options(self) -> ExtractorConfig:
        """Ensure overrides and defaults only name configured fields."""
        configured = set(self.field_names)
        for option_name in ("type_overrides", "defaults"):
            unknown = sorted(set(getattr(self, option_name)) - configured)
            if unknown:
                raise ValueError(f"{option_name} names fields not in 'field_names': {unknown}")
        return self


class DecodedRecord(BaseModel):
    """Decoded values of one instrument row."""

    instrument_name: str
    key: str
    event: str | None = None
    repeat_instance: str | None = None
    values: dict[str, Any]

    def var(self, field_name: str) -> str:
        """Qualified variable name (``<instrument>.<field>``)."""
        return f"{self.instrument_name}.{field_name}"


class InstrumentExtractor:
    """Decodes the configured fields of one instrument from export rows."""

    def __init__(self, form: Form, config: ExtractorConfig) -> None:
        """Initialize the extractor.

        Args:
            form: Form built from the project's data dictionary.
            config: Which instrument and fields to extract.

        Raises:
            FieldNotFoundError: If the key or a configured field is not in the
                form's data dictionary.
        """
        for field_name in [config.key, *config.field_names]:
            if not form.has_field(field_name):
                raise FieldNotFoundError(field_name)
        self.form = form
        self.config = config
        self._collector = DiagnosticsCollector()

    def accepts(self, record: Response) -> bool:
        """Check whether a row belongs to the configured instrument and events."""
        if self.config.events and record.get(EVENT_NAME_KEY) not in self.config.events:
            return False
        if self.config.repeating:
            return record.get(REPEAT_INSTRUMENT_KEY) == self.config.instrument_name
        return True

    def extract(self, record: Response) -> DecodedRecord | None:
        """Decode one row.

        Returns:
            The DecodedRecord, or None when the row belongs to another event or
            repeating instrument.

        Raises:
            MissingRecordKeyError: If the row has no value (or an empty one)
                for the key field.
        """
        if not self.accepts(record):
            return None

        key = record.get(self.config.key)
        if key in (None, ""):
            raise MissingRecordKeyError(
                f"Record has no {self.config.key!r} value for instrument "
                f"{self.config.instrument_name!r}"
            )

        values: dict[str, Any] = {}
        for field_name in self.config.field_names:
            options: dict[str, Any] = {}
            if field_name in self.config.defaults:
                options["default"] = self.config.defaults[field_name]
            values[field_name] = self.form.get(
                field_name,
                record,
                type_override=self.config.type_overrides.get(field_name),
                **options,
            )

        repeat_instance = record.get(REPEAT_INSTANCE_KEY) if self.config.repeating else None

        return DecodedRecord(
            instrument_name=self.config.instrument_name,
            key=str(key),
            event=record.get(EVENT_NAME_KEY),
            repeat_instance=str(repeat_instance) if repeat_instance not in (None, "") else None,
            values=values,
        )

    def extract_batch(self, records: Iterable[Response]) -> list[DecodedRecord]:
        """Decode every accepted row of a batch.

        Rows without a key are skipped and recorded as errors in
        ``diagnostics``.
        """
        decoded: list[DecodedRecord] = []
        for index, record in enumerate(records):
            try:
                result = self.extract(record)
            except MissingRecordKeyError as e:
                logger.warning("Skipping row %d: %s", index, e)
                self._collector.add_error(
                    stage="extract",
                    code="MISSING_RECORD_KEY",
                    message=str(e),
                    field_name=self.config.key,
                    details={"index": index},
                )
                continue
            if result is not None:
                decoded.append(result)
        return decoded

    @property
    def diagnostics(self) -> FormDiagnostic:
        """Rows rejected by ``extract_batch`` so far."""
        return self._collector.finalize()
