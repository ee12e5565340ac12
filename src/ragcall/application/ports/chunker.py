"""Chunker port - text splitting strategies."""

from typing import Protocol

from ragcall.application.dto.chunking_config import ChunkingConfig
from ragcall.domain.entities import Chunk


class Chunker(Protocol):
    """Port for splitting text into chunks."""

    def split(self, text: str, config: ChunkingConfig, source_ref: str) -> list[Chunk]: ...
