"""OpenAI-compatible embedding provider."""

import logging

import openai
from openai import AsyncOpenAI

from ragcall.domain.exceptions import DimensionMismatch, InvalidInput, ProviderUnavailable
from ragcall.infrastructure.openai_errors import map_openai_error, provider_retrying

logger = logging.getLogger(__name__)


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        dimensions: int,
        batch_size: int = 256,
        max_attempts: int = 4,
        send_dimensions: bool = True,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(base_url=base_url, api_key=api_key, max_retries=0)
        self._model = model
        self._dimensions = dimensions
        self._batch_size = max(1, batch_size)
        self._max_attempts = max_attempts
        self._send_dimensions = send_dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed(self, text: str) -> list[float]:
        """Generate embedding for a single text."""
        vectors = await self.embed_many([text])
        return vectors[0]

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts, preserving order."""
        if not texts:
            return []
        for i, text in enumerate(texts):
            if not text or not text.strip():
                raise InvalidInput(f"Cannot embed empty text at position {i}")

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            batch = texts[start : start + self._batch_size]
            vectors.extend(await self._embed_batch(batch))
        return vectors

    async def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        kwargs = {"model": self._model, "input": texts}
        if self._send_dimensions:
            kwargs["dimensions"] = self._dimensions

        async for attempt in provider_retrying(self._max_attempts):
            with attempt:
                try:
                    response = await self._client.embeddings.create(**kwargs)
                except openai.OpenAIError as e:
                    raise map_openai_error(e) from e

        data = sorted(response.data, key=lambda d: d.index)
        vectors = [d.embedding for d in data]
        if len(vectors) != len(texts):
            raise ProviderUnavailable(f"Provider returned {len(vectors)} embeddings for {len(texts)} texts")
        for vector in vectors:
            if len(vector) != self._dimensions:
                raise DimensionMismatch(self._dimensions, len(vector))
        logger.debug("Embedded %d texts with %s", len(texts), self._model)
        return vectors
