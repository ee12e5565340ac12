"""Retrieval answer API resource."""

import falcon.asgi

from ragcall.application.use_cases.retrieval.answer_question import AnswerQuestionUseCase
from ragcall.domain.exceptions import RagCallError
from ragcall.interfaces.api.resources.errors import respond_with_error


class AnswersResource:
    """POST /v1/answers - answer a question from retrieved context."""

    def __init__(self, answer_question: AnswerQuestionUseCase) -> None:
        self._answer_question = answer_question

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Answer with cited sources."""
        try:
            body = await req.get_media()
            question = body["question"]
            if not isinstance(question, str):
                raise ValueError("question must be a string")
            k = body.get("k")
            if k is not None and (isinstance(k, bool) or not isinstance(k, int)):
                raise ValueError("k must be an integer")
        except (KeyError, ValueError, AttributeError, falcon.MediaMalformedError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            result = await self._answer_question.execute(question, k)
        except RagCallError as e:
            respond_with_error(resp, e)
            return
        resp.media = {"answer": result.answer, "sources": result.sources}
        resp.status = falcon.HTTP_200
