"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from ragcall.interfaces.api.resources.answers import AnswersResource
from ragcall.interfaces.api.resources.documents import DocumentsResource
from ragcall.interfaces.api.resources.health import HealthResource
from ragcall.interfaces.api.resources.sessions import SessionMessagesResource, SessionResource
from ragcall.interfaces.api.resources.tools import ToolsResource

logger = logging.getLogger(__name__)


async def log_exception(req, resp, ex, params) -> None:
    """Catch-all: log unexpected exceptions and answer 500."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    documents_resource: DocumentsResource,
    answers_resource: AnswersResource,
    session_messages_resource: SessionMessagesResource,
    session_resource: SessionResource,
    tools_resource: ToolsResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/documents", documents_resource)
    app.add_route("/v1/answers", answers_resource)
    app.add_route("/v1/sessions/{session_id}", session_resource)
    app.add_route("/v1/sessions/{session_id}/messages", session_messages_resource)
    app.add_route("/v1/tools", tools_resource)
    return app
