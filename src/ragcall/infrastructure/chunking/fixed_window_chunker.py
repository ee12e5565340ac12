"""Fixed-window text chunker implementation."""

from uuid import uuid4

from ragcall.application.dto.chunking_config import ChunkingConfig
from ragcall.domain.entities import Chunk
from ragcall.domain.exceptions import InvalidConfiguration
from ragcall.domain.value_objects import ChunkingUnit


class FixedWindowChunker:
    """Chunker using fixed-size character windows with overlap."""

    def split(self, text: str, config: ChunkingConfig, source_ref: str) -> list[Chunk]:
        """Split text into overlapping windows covering it with no gaps.

        Every chunk except the last is exactly ``chunk_size`` characters and
        consecutive chunks share exactly ``chunk_overlap`` characters, so
        ``chunks[0].text + "".join(c.text[overlap:] for c in chunks[1:])``
        is the original text.
        """
        if config.unit != ChunkingUnit.CHARACTERS:
            raise InvalidConfiguration(f"Unsupported chunking unit: {config.unit}")
        if not text:
            return []

        chunks: list[Chunk] = []
        start = 0
        ordinal = 0
        while True:
            end = start + config.chunk_size
            chunks.append(
                Chunk(
                    id=uuid4(),
                    text=text[start:end],
                    source_ref=source_ref,
                    ordinal=ordinal,
                )
            )
            if end >= len(text):
                break
            start += config.step
            ordinal += 1
        return chunks
