"""Canonical metadata keys attached to ingested chunks (unified across file formats)."""

from datetime import date, datetime

from ragcall.domain.entities import MetadataValue

CANONICAL_KEYS = (
    "title",
    "author",
    "created_date",
    "modified_date",
    "page_count",
    "language",
    "source_file_name",
    "source_file_type",
)

# Parser-specific key -> canonical key
PARSER_KEY_TO_CANONICAL: dict[str, str] = {
    # docx / OOXML
    "title": "title",
    "subject": "title",
    "author": "author",
    "created": "created_date",
    "modified": "modified_date",
    "last_modified_by": "author",
    "language": "language",
    # pdf
    "/Title": "title",
    "/Author": "author",
    "/CreationDate": "created_date",
    "/ModDate": "modified_date",
    "/Producer": "author",
    "/Lang": "language",
}


def normalize_metadata_value(value: object) -> MetadataValue:
    """Coerce a parser value to a metadata scalar."""
    if value is None:
        return ""
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
