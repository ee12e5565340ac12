"""In-memory vector index with cosine similarity and snapshot files."""

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

import numpy as np

from ragcall.domain.entities import Chunk, IndexEntry, ScoredResult
from ragcall.domain.exceptions import (
    DimensionMismatch,
    InvalidConfiguration,
    InvalidInput,
    RetrievalUnavailable,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _IndexState:
    """Immutable snapshot of index contents; replaced wholesale on insert."""

    entries: tuple[IndexEntry, ...]
    # Row-normalised vectors, shape (len(entries), dimensions).
    matrix: np.ndarray


class InMemoryVectorIndex:
    """Vector index held in process memory.

    Inserts build a new state under a lock and publish it with a single
    reference assignment, so a concurrent query sees either the whole insert
    or none of it.
    """

    def __init__(self, dimensions: int) -> None:
        if dimensions <= 0:
            raise InvalidConfiguration(f"Index dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions
        self._write_lock = threading.Lock()
        self._state = self._empty_state()

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _empty_state(self) -> _IndexState:
        return _IndexState(entries=(), matrix=np.zeros((0, self._dimensions), dtype=np.float64))

    def _check_dimensions(self, vector: list[float]) -> None:
        if len(vector) != self._dimensions:
            raise DimensionMismatch(self._dimensions, len(vector))

    @staticmethod
    def _normalize(matrix: np.ndarray) -> np.ndarray:
        norms = np.linalg.norm(matrix, axis=-1, keepdims=True)
        # Zero vectors stay zero and score 0 against everything.
        norms[norms == 0] = 1.0
        return matrix / norms

    async def insert(self, entries: list[IndexEntry]) -> None:
        """Append entries. Validates all dimensions before changing anything."""
        if not entries:
            return
        for entry in entries:
            self._check_dimensions(entry.vector)
        added = self._normalize(np.asarray([e.vector for e in entries], dtype=np.float64))
        with self._write_lock:
            current = self._state
            self._state = _IndexState(
                entries=current.entries + tuple(entries),
                matrix=np.vstack([current.matrix, added]),
            )
        logger.debug("Inserted %d entries, index size %d", len(entries), len(self._state.entries))

    async def query(self, vector: list[float], k: int) -> list[ScoredResult]:
        """Return up to ``k`` entries by descending cosine similarity."""
        if k <= 0:
            raise InvalidInput(f"k must be positive, got {k}")
        self._check_dimensions(vector)
        state = self._state
        if not state.entries:
            return []

        query = self._normalize(np.asarray(vector, dtype=np.float64))
        scores = state.matrix @ query
        # Stable sort keeps insertion order among equal scores.
        order = np.argsort(-scores, kind="stable")[:k]
        return [
            ScoredResult(
                chunk=state.entries[i].chunk,
                metadata=dict(state.entries[i].metadata),
                score=float(scores[i]),
            )
            for i in order
        ]

    async def count(self) -> int:
        return len(self._state.entries)

    def entries(self) -> list[IndexEntry]:
        """Current entries in insertion order."""
        return list(self._state.entries)

    async def reset(self) -> None:
        with self._write_lock:
            self._state = self._empty_state()
        logger.info("Vector index reset")

    def save(self, path: str | Path) -> None:
        """Write a best-effort snapshot (``.npz`` with vectors and a JSON payload)."""
        state = self._state
        payload = [
            {
                "id": str(e.chunk.id),
                "text": e.chunk.text,
                "source_ref": e.chunk.source_ref,
                "ordinal": e.chunk.ordinal,
                "metadata": e.metadata,
            }
            for e in state.entries
        ]
        vectors = np.asarray([e.vector for e in state.entries], dtype=np.float64).reshape(
            len(state.entries), self._dimensions
        )
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        # The target always holds either the previous or the complete new snapshot.
        tmp_path = path.with_name(f"{path.name}.tmp")
        with tmp_path.open("wb") as f:
            np.savez(f, vectors=vectors, entries=np.array(json.dumps(payload)))
        tmp_path.replace(path)
        logger.info("Saved %d entries to %s", len(payload), path)

    @classmethod
    def load(cls, path: str | Path, dimensions: int) -> "InMemoryVectorIndex":
        """Restore an index from a snapshot written by :meth:`save`."""
        path = Path(path)
        try:
            with np.load(path) as data:
                vectors = data["vectors"]
                payload = json.loads(str(data["entries"]))
        except (OSError, KeyError, ValueError) as e:
            raise RetrievalUnavailable(f"Cannot read index snapshot {path}: {e}") from e

        index = cls(dimensions)
        if len(payload) and vectors.shape[1] != dimensions:
            raise DimensionMismatch(dimensions, int(vectors.shape[1]))
        entries = [
            IndexEntry(
                chunk=Chunk(
                    id=UUID(item["id"]),
                    text=item["text"],
                    source_ref=item["source_ref"],
                    ordinal=item["ordinal"],
                ),
                vector=vector.tolist(),
                metadata=item.get("metadata", {}),
            )
            for item, vector in zip(payload, vectors, strict=True)
        ]
        if entries:
            index._state = _IndexState(
                entries=tuple(entries),
                matrix=cls._normalize(np.asarray(vectors, dtype=np.float64)),
            )
        logger.info("Loaded %d entries from %s", len(entries), path)
        return index
