"""Index entry and scored query result."""

from dataclasses import dataclass, field

from ragcall.domain.entities.chunk import Chunk

MetadataValue = str | int | float | bool
Metadata = dict[str, MetadataValue]


@dataclass(frozen=True)
class IndexEntry:
    """Stored triple of chunk, embedding and metadata."""

    chunk: Chunk
    vector: list[float]
    metadata: Metadata = field(default_factory=dict)


@dataclass(frozen=True)
class ScoredResult:
    """Chunk returned by a similarity query."""

    chunk: Chunk
    metadata: Metadata
    score: float
