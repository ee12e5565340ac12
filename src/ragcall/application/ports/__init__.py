"""Application ports - interfaces for external adapters."""

from ragcall.application.ports.chunker import Chunker
from ragcall.application.ports.completion_provider import (
    CompletionProvider,
    CompletionResult,
)
from ragcall.application.ports.document_loader import DocumentLoader, DocumentParser
from ragcall.application.ports.embedding_provider import EmbeddingProvider
from ragcall.application.ports.vector_index import VectorIndex

__all__ = [
    "Chunker",
    "CompletionProvider",
    "CompletionResult",
    "DocumentLoader",
    "DocumentParser",
    "EmbeddingProvider",
    "VectorIndex",
]
