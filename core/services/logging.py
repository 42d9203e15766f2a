"""Logging helpers for metadata output."""

from __future__ import annotations

from core.models.record import MetadataRecord
from core.serialization import render_tag_value
from logger import get_logger

log = get_logger()


def log_metadata_record(
    record: MetadataRecord,
    *,
    label: str,
    indent: str = "    - ",
) -> None:
    """Log each record entry on its own line, truncating long values."""
    if not len(record):
        log.warn("  ⚠️ No metadata fields were collected.")
        return
    log.info(label)
    for key, value in record.items():
        text = render_tag_value(value)
        preview = text if len(text) <= 120 else (text[:117] + "...")
        log.info(f"{indent}{key}: {preview}")
