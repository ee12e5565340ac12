"""Answer DTOs."""

from dataclasses import dataclass, field

from ragcall.domain.entities import Conversation, ToolResultTurn


@dataclass
class RetrievalAnswer:
    """Grounded answer with the sources supplied to the model."""

    answer: str
    sources: list[str]


@dataclass
class ToolAnswer:
    """Final answer of a tool-calling dispatch and the updated conversation."""

    answer: str
    conversation: Conversation
    tool_results: list[ToolResultTurn] = field(default_factory=list)
