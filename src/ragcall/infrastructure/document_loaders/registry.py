"""Registry: select parser by extension/MIME and return normalized ParseResult."""

from pathlib import Path

from ragcall.application.dto.document_dto import LoadedDocument
from ragcall.domain.exceptions import UnreadableFormat
from ragcall.infrastructure.document_loaders.base import FileParser, ParseResult
from ragcall.infrastructure.document_loaders.docx_parser import parse_docx
from ragcall.infrastructure.document_loaders.pdf_parser import parse_pdf
from ragcall.infrastructure.document_loaders.text_parser import (
    parse_csv,
    parse_md,
    parse_tsv,
    parse_txt,
)

# extension (lower) -> parse function
_PARSERS_BY_EXT: dict[str, FileParser] = {
    "txt": parse_txt,
    "md": parse_md,
    "csv": parse_csv,
    "tsv": parse_tsv,
    "docx": parse_docx,
    "pdf": parse_pdf,
}

_MIME_TO_EXT: dict[str, str] = {
    "text/plain": "txt",
    "text/markdown": "md",
    "text/csv": "csv",
    "text/tab-separated-values": "tsv",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/pdf": "pdf",
}


def get_parser_for_filename(filename: str | None) -> FileParser | None:
    """Return parse function for given filename (by extension) or None."""
    if not filename:
        return None
    ext = Path(filename).suffix.lstrip(".").lower()
    return _PARSERS_BY_EXT.get(ext)


def get_parser_for_content_type(content_type: str | None) -> FileParser | None:
    """Return parse function for MIME type or None."""
    if not content_type:
        return None
    mime = content_type.split(";")[0].strip().lower()
    ext = _MIME_TO_EXT.get(mime)
    if not ext:
        return None
    return _PARSERS_BY_EXT.get(ext)


def parse_file(
    data: bytes,
    filename: str | None = None,
    content_type: str | None = None,
) -> ParseResult:
    """
    Select parser by filename (extension) or content_type, run it, return ParseResult.
    Without either hint the bytes are treated as plain text.
    Raises UnreadableFormat if no parser matches or parsing failed.
    """
    if not filename and not content_type:
        return parse_txt(data)
    parser = get_parser_for_filename(filename) or get_parser_for_content_type(content_type)
    if not parser:
        ext = Path(filename).suffix if filename else content_type
        raise UnreadableFormat(f"No parser for file type: {ext or 'unknown'}")
    return parser(data, filename)


def supported_extensions() -> list[str]:
    """Return list of supported file extensions."""
    return sorted(_PARSERS_BY_EXT.keys())


class RegistryDocumentParser:
    """DocumentParser port backed by the extension/MIME parser registry."""

    def parse(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> LoadedDocument:
        result = parse_file(data, filename=filename, content_type=content_type)
        return LoadedDocument(text=result.text, metadata=result.metadata)
