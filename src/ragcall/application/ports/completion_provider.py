"""Completion provider port - chat completions with optional tools."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from ragcall.domain.entities import ConversationTurn, ToolCallRequest, ToolDeclaration
from ragcall.domain.value_objects import ToolChoice


@dataclass
class CompletionResult:
    """Model response: plain content or a set of tool-call requests."""

    content: str | None
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    finish_reason: str | None = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


class CompletionProvider(Protocol):
    """Port for chat completion calls."""

    async def complete(
        self,
        turns: Sequence[ConversationTurn],
        tools: Sequence[ToolDeclaration] | None = None,
        tool_choice: ToolChoice = ToolChoice.AUTO,
    ) -> CompletionResult: ...
