"""Matroska tag document serialization."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Tuple

from core.errors import SerializationError
from core.files.io_utils import write_bytes_atomic
from core.models.record import MetadataRecord, RecordValue

XML_DECLARATION = b'<?xml version="1.0" encoding="UTF-8"?>\n'
LIST_SEPARATOR = ", "

# Anything outside the XML 1.0 Char production.
_INVALID_XML_CHARS = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def xml_safe_text(text: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document."""
    return _INVALID_XML_CHARS.sub("", text)


def render_tag_value(value: RecordValue) -> str:
    """Render a record value as tag text, joining lists with ``", "``."""
    if isinstance(value, list):
        return xml_safe_text(LIST_SEPARATOR.join(value))
    return xml_safe_text(value)


def serialize_record(record: MetadataRecord) -> bytes:
    """Serialize a record into a Matroska tags XML document.

    The output depends only on the record: the same ordered entries always
    produce the same bytes.

    Args:
        record: Ordered metadata record.

    Returns:
        UTF-8 encoded document including the XML declaration.
    """
    root = ET.Element("Tags")
    tag = ET.SubElement(root, "Tag")
    for name, value in record.items():
        simple = ET.SubElement(tag, "Simple")
        ET.SubElement(simple, "Name").text = xml_safe_text(name)
        ET.SubElement(simple, "String").text = render_tag_value(value)
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode").encode("utf-8") + b"\n"


def parse_tag_document(data: bytes) -> List[Tuple[str, str]]:
    """Read ``(Name, String)`` pairs back from a tag document in order."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise SerializationError(f"Invalid tag document: {exc}") from exc
    entries: List[Tuple[str, str]] = []
    for simple in root.iter("Simple"):
        entries.append((simple.findtext("Name") or "", simple.findtext("String") or ""))
    return entries


def write_tag_document(record: MetadataRecord, path: Path, overwrite: bool = False) -> Path:
    """Serialize a record and write it to ``path`` in one atomic step.

    Raises:
        SerializationError: The document could not be built or written.
    """
    try:
        data = serialize_record(record)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Could not build tag document: {exc}") from exc
    try:
        return write_bytes_atomic(path, data, overwrite=overwrite)
    except (FileExistsError, OSError) as exc:
        raise SerializationError(f"Could not write tag document {path}: {exc}") from exc
