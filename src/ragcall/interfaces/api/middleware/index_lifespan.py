"""Index lifespan middleware - restores the snapshot on startup, saves on shutdown."""

import logging
from pathlib import Path
from typing import Any

from ragcall.infrastructure.vector_index.in_memory_index import InMemoryVectorIndex

logger = logging.getLogger(__name__)


class IndexSnapshotMiddleware:
    """Keeps an in-memory index alive across restarts via a snapshot file."""

    def __init__(self, index: InMemoryVectorIndex, snapshot_path: str | Path) -> None:
        self._index = index
        self._path = Path(snapshot_path)

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Load entries from the snapshot when ASGI server starts."""
        if not self._path.exists():
            logger.info("No index snapshot at %s, starting empty", self._path)
            return
        restored = InMemoryVectorIndex.load(self._path, self._index.dimensions)
        await self._index.reset()
        await self._index.insert(restored.entries())

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Save entries when ASGI server shuts down."""
        self._index.save(self._path)
