"""Conversation turns and append-only conversation."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from ragcall.domain.entities.tool import ToolCallRequest
from ragcall.domain.value_objects import Role


@dataclass(frozen=True)
class SystemTurn:
    content: str
    role: Role = field(default=Role.SYSTEM, init=False)


@dataclass(frozen=True)
class UserTurn:
    content: str
    role: Role = field(default=Role.USER, init=False)


@dataclass(frozen=True)
class AssistantTurn:
    content: str | None
    tool_calls: tuple[ToolCallRequest, ...] = ()
    role: Role = field(default=Role.ASSISTANT, init=False)


@dataclass(frozen=True)
class ToolResultTurn:
    """Result of one tool call, correlated by ``tool_call_id``."""

    tool_call_id: str
    name: str
    content: str
    is_error: bool = False
    role: Role = field(default=Role.TOOL, init=False)


ConversationTurn = SystemTurn | UserTurn | AssistantTurn | ToolResultTurn


class Conversation:
    """Ordered, append-only sequence of turns scoped to one session."""

    def __init__(self, turns: list[ConversationTurn] | None = None) -> None:
        self._turns: list[ConversationTurn] = list(turns or [])

    @classmethod
    def start(cls, system_instruction: str | None = None) -> "Conversation":
        """New conversation, optionally opened by a system instruction."""
        if system_instruction:
            return cls([SystemTurn(system_instruction)])
        return cls()

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def append(self, turn: ConversationTurn) -> None:
        self._turns.append(turn)

    def extend(self, turns: list[ConversationTurn]) -> None:
        self._turns.extend(turns)

    def fork(self) -> "Conversation":
        """Independent copy; turns are immutable so a shallow copy suffices."""
        return Conversation(self._turns)

    def last(self) -> ConversationTurn | None:
        return self._turns[-1] if self._turns else None

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(self.turns)
