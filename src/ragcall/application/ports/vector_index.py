"""Vector index port - nearest-neighbour storage."""

from typing import Protocol

from ragcall.domain.entities import IndexEntry, ScoredResult


class VectorIndex(Protocol):
    """Port for storing embeddings and answering similarity queries."""

    @property
    def dimensions(self) -> int: ...

    async def insert(self, entries: list[IndexEntry]) -> None: ...

    async def query(self, vector: list[float], k: int) -> list[ScoredResult]: ...

    async def count(self) -> int: ...

    async def reset(self) -> None: ...
