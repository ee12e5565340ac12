"""Per-session conversation storage."""

import asyncio
import logging

from ragcall.domain.entities import Conversation

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Holds one conversation per session id, isolated from other sessions.

    Sessions live until they are reset; there is no expiry. Callers that read,
    extend and save a conversation hold :meth:`lock` for the whole exchange so
    concurrent messages to one session are applied one after another.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Conversation] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, session_id: str) -> asyncio.Lock:
        return self._locks.setdefault(session_id, asyncio.Lock())

    def get(self, session_id: str) -> Conversation | None:
        conversation = self._sessions.get(session_id)
        return conversation.fork() if conversation is not None else None

    def save(self, session_id: str, conversation: Conversation) -> None:
        self._sessions[session_id] = conversation.fork()

    def reset(self, session_id: str) -> bool:
        """Drop the session's history. Returns whether it existed."""
        existed = self._sessions.pop(session_id, None) is not None
        if existed:
            logger.info("Session %s reset", session_id)
        return existed

    def __len__(self) -> int:
        return len(self._sessions)
