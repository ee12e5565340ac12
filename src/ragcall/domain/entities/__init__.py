"""Domain entities."""

from ragcall.domain.entities.chunk import Chunk
from ragcall.domain.entities.conversation import (
    AssistantTurn,
    Conversation,
    ConversationTurn,
    SystemTurn,
    ToolResultTurn,
    UserTurn,
)
from ragcall.domain.entities.index_entry import (
    IndexEntry,
    Metadata,
    MetadataValue,
    ScoredResult,
)
from ragcall.domain.entities.tool import ToolCallRequest, ToolDeclaration

__all__ = [
    "AssistantTurn",
    "Chunk",
    "Conversation",
    "ConversationTurn",
    "IndexEntry",
    "Metadata",
    "MetadataValue",
    "ScoredResult",
    "SystemTurn",
    "ToolCallRequest",
    "ToolDeclaration",
    "ToolResultTurn",
    "UserTurn",
]
