"""Document DTOs."""

from dataclasses import dataclass, field

from ragcall.domain.entities import Metadata


@dataclass
class DocumentInput:
    """Raw document submitted for ingestion."""

    identifier: str
    data: bytes
    filename: str | None = None
    content_type: str | None = None
    metadata: Metadata = field(default_factory=dict)


@dataclass
class LoadedDocument:
    """Text and metadata produced by a document loader."""

    text: str
    metadata: Metadata = field(default_factory=dict)


@dataclass
class IngestReport:
    """Per-document outcome of a batch ingestion."""

    identifier: str
    chunk_count: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
