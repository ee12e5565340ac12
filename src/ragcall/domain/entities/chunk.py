"""Chunk entity - bounded text segment of a source document."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Chunk:
    """Chunk - atomic unit of retrieval."""

    id: UUID
    text: str
    source_ref: str
    ordinal: int
