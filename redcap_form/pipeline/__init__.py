"""Instrument extraction over exported records."""

from redcap_form.pipeline.extractor import (
    DecodedRecord,
    ExtractorConfig,
    InstrumentExtractor,
    MissingRecordKeyError,
)

__all__ = [
    "DecodedRecord",
    "ExtractorConfig",
    "InstrumentExtractor",
    "MissingRecordKeyError",
]
