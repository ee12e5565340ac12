"""Tool dispatcher - two-round tool-calling protocol."""

import asyncio
import inspect
import json
import logging
from typing import Any

from pydantic import BaseModel

from ragcall.application.dto.answer_dto import ToolAnswer
from ragcall.application.ports import CompletionProvider
from ragcall.application.tools.registry import ToolRegistry
from ragcall.domain.entities import (
    AssistantTurn,
    Conversation,
    ToolCallRequest,
    ToolResultTurn,
    UserTurn,
)
from ragcall.domain.exceptions import InvalidInput, RagCallError, ToolProtocolError
from ragcall.domain.value_objects import ToolChoice

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a helpful assistant. Call the available functions when they help answer "
    "the user's question. If a function reports an error, tell the user what went "
    "wrong or answer without it."
)


def _serialize_result(result: Any) -> str:
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump_json()
    return json.dumps(result, ensure_ascii=False, default=str)


def _error_content(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


def _is_async(implementation: Any) -> bool:
    return inspect.iscoroutinefunction(implementation) or inspect.iscoroutinefunction(
        getattr(implementation, "__call__", None)
    )


class ToolDispatcher:
    """Run one user question through the tool-calling protocol.

    Round one advertises every registered tool with ``tool_choice=auto``. If the
    model asks for tools, all of them are executed (concurrently) and each gets
    exactly one result turn before round two is sent with ``tool_choice=none``.
    A round-two response that still requests tools is a protocol violation.
    """

    def __init__(
        self,
        completion_provider: CompletionProvider,
        registry: ToolRegistry,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ) -> None:
        self._completion_provider = completion_provider
        self._registry = registry
        self._system_instruction = system_instruction

    def new_conversation(self) -> Conversation:
        return Conversation.start(self._system_instruction)

    async def answer(self, question: str, conversation: Conversation | None = None) -> ToolAnswer:
        """Answer ``question``, continuing ``conversation`` if given.

        The caller's conversation is never modified; the returned ToolAnswer
        carries the extended copy.
        """
        if not question or not question.strip():
            raise InvalidInput("Question must not be empty")
        conversation = conversation.fork() if conversation is not None else self.new_conversation()
        conversation.append(UserTurn(question))

        declarations = self._registry.declarations()
        first = await self._completion_provider.complete(
            conversation.turns, tools=declarations, tool_choice=ToolChoice.AUTO
        )
        if not first.has_tool_calls:
            answer = first.content or ""
            conversation.append(AssistantTurn(answer))
            return ToolAnswer(answer=answer, conversation=conversation)

        requests = first.tool_calls
        self._check_unique_ids(requests)
        conversation.append(AssistantTurn(first.content, tool_calls=tuple(requests)))
        logger.info(
            "Model requested %d tool calls: %s",
            len(requests),
            ", ".join(r.function_name for r in requests),
        )

        results = await asyncio.gather(*(self._execute(r) for r in requests))
        conversation.extend(list(results))

        second = await self._completion_provider.complete(
            conversation.turns, tools=declarations, tool_choice=ToolChoice.NONE
        )
        if second.has_tool_calls:
            logger.error(
                "Model requested %d more tool calls after receiving results",
                len(second.tool_calls),
            )
            raise ToolProtocolError("Model requested tools again after tool results were supplied")

        answer = second.content or ""
        conversation.append(AssistantTurn(answer))
        return ToolAnswer(answer=answer, conversation=conversation, tool_results=list(results))

    @staticmethod
    def _check_unique_ids(requests: list[ToolCallRequest]) -> None:
        seen: set[str] = set()
        for request in requests:
            if not request.id or request.id in seen:
                raise ToolProtocolError(f"Missing or duplicate tool call id: {request.id!r}")
            seen.add(request.id)

    async def _execute(self, request: ToolCallRequest) -> ToolResultTurn:
        """Run one request; failures become error results instead of aborting."""
        name = request.function_name
        try:
            implementation = self._registry.resolve(name)
            arguments = self._registry.validate_arguments(name, request.arguments())
            kwargs = arguments.model_dump()
            if _is_async(implementation):
                result = await implementation(**kwargs)
            else:
                result = await asyncio.to_thread(implementation, **kwargs)
        except RagCallError as e:
            logger.warning("Tool call %s (%s) failed: %s", request.id, name, e)
            return ToolResultTurn(request.id, name, _error_content(str(e)), is_error=True)
        except Exception as e:
            logger.exception("Tool call %s (%s) raised", request.id, name)
            return ToolResultTurn(
                request.id, name, _error_content(f"{type(e).__name__}: {e}"), is_error=True
            )
        return ToolResultTurn(request.id, name, _serialize_result(result))
