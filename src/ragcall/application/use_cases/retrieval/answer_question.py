"""Answer question use case - retrieval-grounded completion."""

import logging

from ragcall.application.dto.answer_dto import RetrievalAnswer
from ragcall.application.ports import CompletionProvider, EmbeddingProvider, VectorIndex
from ragcall.domain.entities import ScoredResult, SystemTurn, UserTurn
from ragcall.domain.exceptions import InvalidInput

logger = logging.getLogger(__name__)

GROUNDING_INSTRUCTION = (
    "Answer the user's question using only the context supplied in the message. "
    "Do not use outside knowledge and do not invent facts. "
    "If the context does not contain the answer, say that the provided context is "
    "insufficient to answer the question."
)

NO_CONTEXT = "(no context was retrieved)"


def build_context_prompt(question: str, results: list[ScoredResult]) -> str:
    """Numbered chunk texts in the given order, then the question."""
    if results:
        context = "\n\n".join(
            f"[{i}] (source: {r.chunk.source_ref})\n{r.chunk.text}"
            for i, r in enumerate(results, start=1)
        )
    else:
        context = NO_CONTEXT
    return f"Context:\n{context}\n\nQuestion: {question}"


def unique_sources(results: list[ScoredResult]) -> list[str]:
    """Deduplicated source refs in first-seen order."""
    return list(dict.fromkeys(r.chunk.source_ref for r in results))


class AnswerQuestionUseCase:
    """Retrieve top-k chunks and synthesize an answer that cites their sources."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_index: VectorIndex,
        completion_provider: CompletionProvider,
        default_k: int = 3,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._vector_index = vector_index
        self._completion_provider = completion_provider
        self._default_k = default_k

    async def execute(self, question: str, k: int | None = None) -> RetrievalAnswer:
        """Answer ``question`` from the ``k`` most similar chunks.

        An empty retrieval still reaches the model, which is expected to say the
        context is insufficient.
        """
        if not question or not question.strip():
            raise InvalidInput("Question must not be empty")
        k = self._default_k if k is None else k
        if k <= 0:
            raise InvalidInput(f"k must be positive, got {k}")

        vector = await self._embedding_provider.embed(question)
        results = await self._vector_index.query(vector, k)
        if not results:
            logger.info("No context retrieved for question, asking model anyway")

        completion = await self._completion_provider.complete(
            [
                SystemTurn(GROUNDING_INSTRUCTION),
                UserTurn(build_context_prompt(question, results)),
            ]
        )
        return RetrievalAnswer(
            answer=completion.content or "",
            sources=unique_sources(results),
        )
