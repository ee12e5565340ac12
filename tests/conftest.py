"""Pytest fixtures for ragcall tests."""

from __future__ import annotations

import re
import zlib
from collections.abc import Sequence
from dataclasses import dataclass

import pytest

from ragcall.application.dto.chunking_config import ChunkingConfig
from ragcall.application.ports.completion_provider import CompletionResult
from ragcall.application.tools.registry import ToolRegistry
from ragcall.application.use_cases.retrieval.answer_question import NO_CONTEXT
from ragcall.domain.entities import ConversationTurn, ToolDeclaration, UserTurn
from ragcall.domain.exceptions import ProviderUnavailable
from ragcall.domain.value_objects import ToolChoice
from ragcall.infrastructure.document_loaders import RegistryDocumentParser
from ragcall.infrastructure.tools.builtin_tools import register_builtin_tools
from ragcall.infrastructure.vector_index.in_memory_index import InMemoryVectorIndex

DIMENSIONS = 64


# --- Fake providers ---


class HashingEmbeddingProvider:
    """Deterministic bag-of-words embeddings: one hashed bucket per token."""

    def __init__(self, dimensions: int = DIMENSIONS, fail_on: str | None = None) -> None:
        self.dimensions = dimensions
        self.fail_on = fail_on
        self.calls: list[list[str]] = []

    def vector(self, text: str) -> list[float]:
        v = [0.0] * self.dimensions
        for token in re.findall(r"[a-z0-9]+", text.lower()):
            v[zlib.crc32(token.encode()) % self.dimensions] += 1.0
        return v

    async def embed(self, text: str) -> list[float]:
        return (await self.embed_many([text]))[0]

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.fail_on is not None and any(self.fail_on in t for t in texts):
            raise ProviderUnavailable("embedding backend is down")
        return [self.vector(t) for t in texts]


@dataclass
class RecordedCall:
    turns: tuple[ConversationTurn, ...]
    tools: list[ToolDeclaration]
    tool_choice: ToolChoice


class ScriptedCompletionProvider:
    """Returns queued results (or raises queued exceptions) in order."""

    def __init__(self, *results: CompletionResult | Exception) -> None:
        self._results = list(results)
        self.calls: list[RecordedCall] = []

    def queue(self, *results: CompletionResult | Exception) -> None:
        self._results.extend(results)

    async def complete(
        self,
        turns: Sequence[ConversationTurn],
        tools: Sequence[ToolDeclaration] | None = None,
        tool_choice: ToolChoice = ToolChoice.AUTO,
    ) -> CompletionResult:
        self.calls.append(RecordedCall(tuple(turns), list(tools or []), tool_choice))
        if not self._results:
            raise AssertionError("Unexpected completion call")
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class ContextEchoCompletionProvider:
    """Answers with the first retrieved passage, or admits missing context."""

    def __init__(self) -> None:
        self.calls: list[tuple[ConversationTurn, ...]] = []

    async def complete(self, turns, tools=None, tool_choice=ToolChoice.AUTO) -> CompletionResult:
        self.calls.append(tuple(turns))
        prompt = next(t.content for t in reversed(turns) if isinstance(t, UserTurn))
        if NO_CONTEXT in prompt:
            return CompletionResult(content="The provided context is insufficient to answer.")
        first_passage = prompt.split("\n")[2]
        return CompletionResult(content=f"According to the context: {first_passage}")


# --- Fixtures ---


@pytest.fixture
def embedding_provider() -> HashingEmbeddingProvider:
    return HashingEmbeddingProvider()


@pytest.fixture
def vector_index() -> InMemoryVectorIndex:
    """Empty in-memory index matching the fake embedder."""
    return InMemoryVectorIndex(DIMENSIONS)


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Default chunking config for chunker tests."""
    return ChunkingConfig(chunk_size=100, chunk_overlap=20)


@pytest.fixture
def document_parser() -> RegistryDocumentParser:
    return RegistryDocumentParser()


@pytest.fixture
def tool_registry(embedding_provider, vector_index) -> ToolRegistry:
    """Registry with the built-in tools."""
    return register_builtin_tools(ToolRegistry(), embedding_provider, vector_index)
