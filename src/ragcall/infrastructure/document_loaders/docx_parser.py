"""Parser for .docx (Office Open XML Word)."""

import io
from zipfile import BadZipFile

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from ragcall.domain.entities import Metadata
from ragcall.domain.exceptions import UnreadableFormat
from ragcall.infrastructure.document_loaders.base import ParseResult, file_metadata
from ragcall.infrastructure.document_loaders.metadata_keys import (
    PARSER_KEY_TO_CANONICAL,
    normalize_metadata_value,
)


def _map_metadata(core_props: object) -> Metadata:
    """Map docx core properties to canonical keys."""
    result: Metadata = {}
    for name in ("title", "subject", "author", "last_modified_by", "created", "modified", "language"):
        value = getattr(core_props, name, None)
        if value is None or value == "":
            continue
        canonical = PARSER_KEY_TO_CANONICAL[name]
        if canonical not in result:
            result[canonical] = normalize_metadata_value(value)
    return result


def parse_docx(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract paragraphs and table rows from .docx bytes."""
    try:
        doc = DocxDocument(io.BytesIO(data))
    except (PackageNotFoundError, BadZipFile, KeyError) as e:
        raise UnreadableFormat("Invalid or corrupted docx file") from e
    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
    rows: list[str] = []
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                rows.append(" ".join(cells))
    text = "\n\n".join(paragraphs)
    if rows:
        text += "\n\n" + "\n".join(rows)
    metadata = _map_metadata(doc.core_properties)
    metadata.update(file_metadata(filename, "docx" if filename else None))
    return ParseResult(text=text, metadata=metadata)
