"""Chunking configuration DTO."""

from dataclasses import dataclass

from ragcall.domain.exceptions import InvalidConfiguration
from ragcall.domain.value_objects import ChunkingUnit


@dataclass(frozen=True)
class ChunkingConfig:
    """Configuration for text chunking."""

    chunk_size: int
    chunk_overlap: int
    unit: ChunkingUnit = ChunkingUnit.CHARACTERS

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise InvalidConfiguration(f"chunk_size must be positive, got {self.chunk_size}")
        if self.chunk_overlap <= 0:
            raise InvalidConfiguration(f"chunk_overlap must be positive, got {self.chunk_overlap}")
        if self.chunk_overlap >= self.chunk_size:
            raise InvalidConfiguration(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than chunk_size ({self.chunk_size})"
            )

    @property
    def step(self) -> int:
        return self.chunk_size - self.chunk_overlap
