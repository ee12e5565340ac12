"""Unit in which chunk size and overlap are measured."""

from enum import StrEnum


class ChunkingUnit(StrEnum):
    """Supported chunking units."""

    CHARACTERS = "characters"
