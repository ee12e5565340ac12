"""Base protocol for document parsers."""

from pathlib import Path
from typing import Protocol

from ragcall.domain.entities import Metadata


class ParseResult:
    """Result of parsing a file: extracted text and normalized metadata."""

    __slots__ = ("text", "metadata")

    def __init__(self, text: str, metadata: Metadata) -> None:
        self.text = text
        self.metadata = metadata


class FileParser(Protocol):
    """Format-specific parse function: file bytes to text and metadata."""

    def __call__(self, data: bytes, filename: str | None = None) -> ParseResult:
        """Extract text and metadata. Raises UnreadableFormat on parse error."""
        ...


def file_metadata(filename: str | None, file_type: str | None) -> Metadata:
    """source_file_name / source_file_type for a parsed file."""
    metadata: Metadata = {}
    if filename:
        metadata["source_file_name"] = Path(filename).name
    if file_type:
        metadata["source_file_type"] = file_type
    return metadata
