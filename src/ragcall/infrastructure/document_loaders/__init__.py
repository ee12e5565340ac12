"""Document loaders: extract text and metadata from files."""

from ragcall.infrastructure.document_loaders.base import ParseResult
from ragcall.infrastructure.document_loaders.file_loader import FileDocumentLoader
from ragcall.infrastructure.document_loaders.registry import (
    RegistryDocumentParser,
    parse_file,
    supported_extensions,
)

__all__ = [
    "FileDocumentLoader",
    "ParseResult",
    "RegistryDocumentParser",
    "parse_file",
    "supported_extensions",
]
