"""Document loader port - fetches raw documents for ingestion."""

from typing import Protocol

from ragcall.application.dto.document_dto import LoadedDocument


class DocumentLoader(Protocol):
    """Port for loading a document by location or identifier."""

    async def load(self, location: str) -> LoadedDocument: ...


class DocumentParser(Protocol):
    """Port for turning uploaded bytes into text and metadata."""

    def parse(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> LoadedDocument: ...
