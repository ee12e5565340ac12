"""OpenAI-compatible chat completion provider with tool calling."""

import logging
from collections.abc import Sequence
from typing import Any

import openai
from openai import AsyncOpenAI

from ragcall.application.ports.completion_provider import CompletionResult
from ragcall.domain.entities import (
    AssistantTurn,
    ConversationTurn,
    SystemTurn,
    ToolCallRequest,
    ToolDeclaration,
    ToolResultTurn,
    UserTurn,
)
from ragcall.domain.exceptions import ProviderUnavailable
from ragcall.domain.value_objects import ToolChoice
from ragcall.infrastructure.openai_errors import map_openai_error, provider_retrying

logger = logging.getLogger(__name__)


def turn_to_message(turn: ConversationTurn) -> dict[str, Any]:
    """Render a conversation turn as a chat-completions message."""
    if isinstance(turn, (SystemTurn, UserTurn)):
        return {"role": turn.role.value, "content": turn.content}
    if isinstance(turn, AssistantTurn):
        message: dict[str, Any] = {"role": turn.role.value, "content": turn.content}
        if turn.tool_calls:
            message["tool_calls"] = [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {"name": tc.function_name, "arguments": tc.raw_arguments},
                }
                for tc in turn.tool_calls
            ]
        return message
    if isinstance(turn, ToolResultTurn):
        return {"role": turn.role.value, "tool_call_id": turn.tool_call_id, "content": turn.content}
    raise TypeError(f"Unsupported conversation turn: {type(turn).__name__}")


class OpenAICompletionProvider:
    """Completion provider using the OpenAI chat completions API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        timeout_seconds: float = 60.0,
        temperature: float | None = None,
        max_attempts: int = 4,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self._model = model
        self._temperature = temperature
        self._max_attempts = max_attempts

    async def complete(
        self,
        turns: Sequence[ConversationTurn],
        tools: Sequence[ToolDeclaration] | None = None,
        tool_choice: ToolChoice = ToolChoice.AUTO,
    ) -> CompletionResult:
        """Send the conversation and return text or tool-call requests."""
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [turn_to_message(t) for t in turns],
        }
        if tools:
            kwargs["tools"] = [t.to_openai_tool() for t in tools]
            kwargs["tool_choice"] = tool_choice.value
        if self._temperature is not None:
            kwargs["temperature"] = self._temperature

        async for attempt in provider_retrying(self._max_attempts):
            with attempt:
                try:
                    response = await self._client.chat.completions.create(**kwargs)
                except openai.OpenAIError as e:
                    raise map_openai_error(e) from e

        if not response.choices:
            raise ProviderUnavailable("Completion provider returned no choices")
        choice = response.choices[0]
        message = choice.message
        tool_calls = [
            ToolCallRequest(
                id=tc.id,
                function_name=tc.function.name,
                raw_arguments=tc.function.arguments or "{}",
            )
            for tc in (message.tool_calls or [])
        ]
        logger.debug(
            "Completion %s finished with %s, %d tool calls",
            self._model,
            choice.finish_reason,
            len(tool_calls),
        )
        return CompletionResult(
            content=message.content,
            tool_calls=tool_calls,
            finish_reason=choice.finish_reason,
        )
