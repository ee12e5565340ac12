"""Ingest document use case."""

import asyncio
import logging
from collections.abc import Mapping, Sequence

from ragcall.application.dto.chunking_config import ChunkingConfig
from ragcall.application.dto.document_dto import DocumentInput, IngestReport, LoadedDocument
from ragcall.application.ports import (
    Chunker,
    DocumentLoader,
    DocumentParser,
    EmbeddingProvider,
    VectorIndex,
)
from ragcall.domain.entities import IndexEntry, Metadata
from ragcall.domain.exceptions import InvalidConfiguration, InvalidInput

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, int, float, bool)


class IngestDocumentUseCase:
    """Ingest document into the index: parse, validate, chunk, embed, insert.

    Ingestion of one document is all-or-nothing: entries are inserted only
    after every chunk has been embedded.

    Whitespace-only chunks are not embedded or stored, so stored ordinals may
    have gaps and the stored chunks need not cover the whole document.
    """

    def __init__(
        self,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
        vector_index: VectorIndex,
        chunking_config: ChunkingConfig,
        document_parser: DocumentParser,
        document_loader: DocumentLoader | None = None,
    ) -> None:
        if embedding_provider.dimensions != vector_index.dimensions:
            raise InvalidConfiguration(
                f"Embedding dimensions ({embedding_provider.dimensions}) do not match "
                f"index dimensions ({vector_index.dimensions})"
            )
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._vector_index = vector_index
        self._config = chunking_config
        self._parser = document_parser
        self._loader = document_loader

    async def execute(self, document: DocumentInput) -> int:
        """Ingest raw document bytes. Returns number of chunks inserted."""
        if not document.identifier:
            raise InvalidInput("Document identifier is required")
        loaded = await asyncio.to_thread(
            self._parser.parse, document.data, document.filename, document.content_type
        )
        return await self._ingest(document.identifier, loaded, document.metadata)

    async def execute_from_location(
        self,
        location: str,
        metadata: Metadata | None = None,
        identifier: str | None = None,
    ) -> int:
        """Ingest a document fetched by the document loader."""
        if self._loader is None:
            raise InvalidConfiguration("No document loader configured")
        loaded = await self._loader.load(location)
        return await self._ingest(identifier or location, loaded, metadata or {})

    async def execute_many(self, documents: Sequence[DocumentInput]) -> list[IngestReport]:
        """Ingest documents concurrently; one report per document, in input order."""
        outcomes = await asyncio.gather(
            *(self.execute(d) for d in documents),
            return_exceptions=True,
        )
        reports: list[IngestReport] = []
        for document, outcome in zip(documents, outcomes, strict=True):
            if isinstance(outcome, Exception):
                logger.error(
                    "Ingestion of %s failed: %s",
                    document.identifier,
                    outcome,
                    exc_info=outcome,
                )
                reports.append(IngestReport(identifier=document.identifier, error=str(outcome)))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                reports.append(IngestReport(identifier=document.identifier, chunk_count=outcome))
        return reports

    async def _ingest(self, identifier: str, loaded: LoadedDocument, metadata: Metadata) -> int:
        if not isinstance(metadata, Mapping):
            raise InvalidInput(f"Metadata for {identifier} must be a mapping")
        for key, value in metadata.items():
            if not isinstance(value, _SCALAR_TYPES):
                raise InvalidInput(f"Metadata value for {key!r} must be a scalar")
        if not loaded.text.strip():
            raise InvalidInput(f"Document {identifier} is empty")

        chunks = [
            c
            for c in self._chunker.split(loaded.text, self._config, identifier)
            if c.text.strip()
        ]
        vectors = await self._embedding_provider.embed_many([c.text for c in chunks])

        entries = [
            IndexEntry(
                chunk=chunk,
                vector=vector,
                metadata={
                    **loaded.metadata,
                    **metadata,
                    "source_ref": identifier,
                    "ordinal": chunk.ordinal,
                },
            )
            for chunk, vector in zip(chunks, vectors, strict=True)
        ]
        await self._vector_index.insert(entries)
        logger.info("Ingested %s: %d chunks", identifier, len(entries))
        return len(entries)
