"""Conversation roles."""

from enum import StrEnum


class Role(StrEnum):
    """Author of a conversation turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
