"""Parser for PDF."""

import io

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ragcall.domain.entities import Metadata
from ragcall.domain.exceptions import UnreadableFormat
from ragcall.infrastructure.document_loaders.base import ParseResult, file_metadata
from ragcall.infrastructure.document_loaders.metadata_keys import (
    PARSER_KEY_TO_CANONICAL,
    normalize_metadata_value,
)


def _parse_pdf_date(value: str) -> str:
    """Convert PDF date string (D:YYYYMMDD...) to YYYY-MM-DD."""
    if not value.startswith("D:"):
        return value
    s = value[2:].strip()
    if len(s) >= 8:
        return f"{s[:4]}-{s[4:6]}-{s[6:8]}"
    return value


def _map_metadata(reader: PdfReader) -> Metadata:
    """Map PDF document info to canonical keys."""
    result: Metadata = {}
    meta = reader.metadata
    if not meta:
        return result
    for key in ("/Title", "/Author", "/Producer", "/CreationDate", "/ModDate", "/Lang"):
        raw = meta.get(key)
        if not raw:
            continue
        canonical = PARSER_KEY_TO_CANONICAL[key]
        if canonical in result:
            continue
        value = str(raw)
        result[canonical] = _parse_pdf_date(value) if "Date" in key else normalize_metadata_value(value)
    return result


def parse_pdf(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract text and metadata from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(data))
        parts = [t for t in (page.extract_text() for page in reader.pages) if t]
    except (PdfReadError, ValueError, OSError) as e:
        raise UnreadableFormat(f"Invalid or corrupted PDF: {e}") from e
    metadata = _map_metadata(reader)
    metadata["page_count"] = len(reader.pages)
    metadata.update(file_metadata(filename, "pdf" if filename else None))
    return ParseResult(text="\n\n".join(parts), metadata=metadata)
