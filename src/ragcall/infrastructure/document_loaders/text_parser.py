"""Parser for plain text, markdown, CSV, TSV."""

import csv
import io
from pathlib import Path

from ragcall.infrastructure.document_loaders.base import ParseResult, file_metadata


def decode_text(data: bytes) -> str:
    """Decode as UTF-8, falling back to cp1251 and then lossy UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        try:
            return data.decode("cp1251")
        except UnicodeDecodeError:
            return data.decode("utf-8", errors="replace")


def parse_text(data: bytes, filename: str | None = None) -> ParseResult:
    """Treat as text. No metadata except source_file_name/type."""
    suffix = Path(filename).suffix.lstrip(".").lower() if filename else ""
    return ParseResult(text=decode_text(data), metadata=file_metadata(filename, suffix or None))


def parse_csv_tsv(data: bytes, filename: str | None = None, delimiter: str = ",") -> ParseResult:
    """Parse CSV or TSV: one line per row, cells joined by spaces."""
    reader = csv.reader(io.StringIO(decode_text(data)), delimiter=delimiter)
    lines = [" ".join(cell.strip() for cell in row if cell.strip()) for row in reader]
    file_type = "csv" if delimiter == "," else "tsv"
    return ParseResult(
        text="\n".join(lines),
        metadata=file_metadata(filename, file_type if filename else None),
    )


def parse_txt(data: bytes, filename: str | None = None) -> ParseResult:
    """Plain text (.txt)."""
    return parse_text(data, filename)


def parse_md(data: bytes, filename: str | None = None) -> ParseResult:
    """Markdown (.md) - kept as-is."""
    return parse_text(data, filename)


def parse_csv(data: bytes, filename: str | None = None) -> ParseResult:
    """CSV."""
    return parse_csv_tsv(data, filename, delimiter=",")


def parse_tsv(data: bytes, filename: str | None = None) -> ParseResult:
    """TSV."""
    return parse_csv_tsv(data, filename, delimiter="\t")
