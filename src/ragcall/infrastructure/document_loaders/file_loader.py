"""Document loader reading files from a local directory."""

import asyncio
import logging
from pathlib import Path

from ragcall.application.dto.document_dto import LoadedDocument
from ragcall.domain.exceptions import NotFound, UnreadableFormat
from ragcall.infrastructure.document_loaders.registry import parse_file

logger = logging.getLogger(__name__)


class FileDocumentLoader:
    """Loads documents by path relative to a root directory."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    def _resolve(self, location: str) -> Path:
        path = (self._root / location).resolve()
        if not path.is_relative_to(self._root):
            raise NotFound(f"Document {location} is outside the documents root")
        if not path.is_file():
            raise NotFound(f"Document {location} not found")
        return path

    async def load(self, location: str) -> LoadedDocument:
        """Read and parse the file; NotFound or UnreadableFormat on failure."""
        path = self._resolve(location)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise UnreadableFormat(f"Cannot read document {location}: {e}") from e
        parsed = await asyncio.to_thread(parse_file, data, path.name)
        logger.debug("Loaded %s (%d bytes)", path, len(data))
        return LoadedDocument(text=parsed.text, metadata=parsed.metadata)
