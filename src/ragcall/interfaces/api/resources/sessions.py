"""Tool-calling session API resources."""

import falcon.asgi

from ragcall.application.sessions.session_store import InMemorySessionStore
from ragcall.application.use_cases.tools.dispatch_tools import ToolDispatcher
from ragcall.domain.exceptions import RagCallError
from ragcall.interfaces.api.resources.errors import respond_with_error


class SessionMessagesResource:
    """POST /v1/sessions/{session_id}/messages - ask a question that may use tools."""

    def __init__(self, dispatcher: ToolDispatcher, session_store: InMemorySessionStore) -> None:
        self._dispatcher = dispatcher
        self._session_store = session_store

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        session_id: str,
    ) -> None:
        """Run the tool-calling protocol and store the extended conversation."""
        try:
            body = await req.get_media()
            question = body["question"]
            if not isinstance(question, str):
                raise ValueError("question must be a string")
        except (KeyError, ValueError, AttributeError, falcon.MediaMalformedError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        async with self._session_store.lock(session_id):
            try:
                result = await self._dispatcher.answer(
                    question, self._session_store.get(session_id)
                )
            except RagCallError as e:
                respond_with_error(resp, e)
                return
            self._session_store.save(session_id, result.conversation)
        resp.media = {
            "answer": result.answer,
            "tool_results": [
                {
                    "id": t.tool_call_id,
                    "name": t.name,
                    "content": t.content,
                    "is_error": t.is_error,
                }
                for t in result.tool_results
            ],
        }
        resp.status = falcon.HTTP_200


class SessionResource:
    """DELETE /v1/sessions/{session_id} - reset a session's history."""

    def __init__(self, session_store: InMemorySessionStore) -> None:
        self._session_store = session_store

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        session_id: str,
    ) -> None:
        async with self._session_store.lock(session_id):
            existed = self._session_store.reset(session_id)
        resp.media = {"session_id": session_id, "reset": existed}
        resp.status = falcon.HTTP_200
