"""Domain value objects."""

from ragcall.domain.value_objects.chunking_unit import ChunkingUnit
from ragcall.domain.value_objects.role import Role
from ragcall.domain.value_objects.tool_choice import ToolChoice

__all__ = [
    "ChunkingUnit",
    "Role",
    "ToolChoice",
]
