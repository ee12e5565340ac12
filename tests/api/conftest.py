"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from ragcall.application.sessions.session_store import InMemorySessionStore
from ragcall.application.use_cases.ingestion.ingest_document import IngestDocumentUseCase
from ragcall.application.use_cases.retrieval.answer_question import AnswerQuestionUseCase
from ragcall.application.use_cases.tools.dispatch_tools import ToolDispatcher
from ragcall.infrastructure.chunking.fixed_window_chunker import FixedWindowChunker
from ragcall.infrastructure.document_loaders import FileDocumentLoader
from ragcall.interfaces.api.app import create_app
from ragcall.interfaces.api.resources.answers import AnswersResource
from ragcall.interfaces.api.resources.documents import DocumentsResource
from ragcall.interfaces.api.resources.health import HealthResource
from ragcall.interfaces.api.resources.sessions import SessionMessagesResource, SessionResource
from ragcall.interfaces.api.resources.tools import ToolsResource

from tests.conftest import ContextEchoCompletionProvider, ScriptedCompletionProvider


@pytest.fixture
def documents_root(tmp_path):
    (tmp_path / "alice.txt").write_text("Alice is a Python developer.", encoding="utf-8")
    return tmp_path


@pytest.fixture
def completion_provider() -> ScriptedCompletionProvider:
    """Scripted provider for tool sessions; tests queue results on it."""
    return ScriptedCompletionProvider()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def app(
    embedding_provider,
    vector_index,
    chunking_config,
    document_parser,
    tool_registry,
    completion_provider,
    session_store,
    documents_root,
):
    """Falcon ASGI app wired with in-memory fakes."""
    ingest_document = IngestDocumentUseCase(
        chunker=FixedWindowChunker(),
        embedding_provider=embedding_provider,
        vector_index=vector_index,
        chunking_config=chunking_config,
        document_parser=document_parser,
        document_loader=FileDocumentLoader(documents_root),
    )
    answer_question = AnswerQuestionUseCase(
        embedding_provider=embedding_provider,
        vector_index=vector_index,
        completion_provider=ContextEchoCompletionProvider(),
    )
    dispatcher = ToolDispatcher(completion_provider, tool_registry)
    return create_app(
        documents_resource=DocumentsResource(ingest_document),
        answers_resource=AnswersResource(answer_question),
        session_messages_resource=SessionMessagesResource(dispatcher, session_store),
        session_resource=SessionResource(session_store),
        tools_resource=ToolsResource(tool_registry),
        health_resource=HealthResource(vector_index),
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
