"""Application entry point and composition root."""

import logging

from ragcall import __version__
from ragcall.application.dto.chunking_config import ChunkingConfig
from ragcall.application.sessions.session_store import InMemorySessionStore
from ragcall.application.tools.registry import ToolRegistry
from ragcall.application.use_cases.ingestion.ingest_document import IngestDocumentUseCase
from ragcall.application.use_cases.retrieval.answer_question import AnswerQuestionUseCase
from ragcall.application.use_cases.tools.dispatch_tools import ToolDispatcher
from ragcall.config import Settings, get_settings
from ragcall.infrastructure.chunking.fixed_window_chunker import FixedWindowChunker
from ragcall.infrastructure.completion.openai_provider import OpenAICompletionProvider
from ragcall.infrastructure.document_loaders import FileDocumentLoader, RegistryDocumentParser
from ragcall.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from ragcall.infrastructure.tools.builtin_tools import register_builtin_tools
from ragcall.infrastructure.vector_index.in_memory_index import InMemoryVectorIndex
from ragcall.interfaces.api.app import create_app
from ragcall.interfaces.api.middleware.index_lifespan import IndexSnapshotMiddleware
from ragcall.interfaces.api.resources.answers import AnswersResource
from ragcall.interfaces.api.resources.documents import DocumentsResource
from ragcall.interfaces.api.resources.health import HealthResource
from ragcall.interfaces.api.resources.sessions import SessionMessagesResource, SessionResource
from ragcall.interfaces.api.resources.tools import ToolsResource

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Root logger setup from settings."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # SDK request logs are noisy below WARNING.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_ragcall_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()

    embedding_provider = OpenAIEmbeddingProvider(
        base_url=settings.openai_api_url,
        api_key=settings.openai_api_key,
        model=settings.embedding_model,
        dimensions=settings.embedding_dimensions,
        batch_size=settings.embedding_batch_size,
        max_attempts=settings.provider_max_attempts,
    )
    completion_provider = OpenAICompletionProvider(
        base_url=settings.openai_api_url,
        api_key=settings.openai_api_key,
        model=settings.completion_model,
        timeout_seconds=settings.completion_timeout_seconds,
        temperature=settings.completion_temperature,
        max_attempts=settings.provider_max_attempts,
    )
    vector_index = InMemoryVectorIndex(settings.embedding_dimensions)
    chunking_config = ChunkingConfig(
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
    )

    registry = register_builtin_tools(ToolRegistry(), embedding_provider, vector_index)
    session_store = InMemorySessionStore()

    ingest_document = IngestDocumentUseCase(
        chunker=FixedWindowChunker(),
        embedding_provider=embedding_provider,
        vector_index=vector_index,
        chunking_config=chunking_config,
        document_parser=RegistryDocumentParser(),
        document_loader=FileDocumentLoader(settings.documents_root),
    )
    answer_question = AnswerQuestionUseCase(
        embedding_provider=embedding_provider,
        vector_index=vector_index,
        completion_provider=completion_provider,
        default_k=settings.default_top_k,
    )
    dispatcher = ToolDispatcher(
        completion_provider=completion_provider,
        registry=registry,
    )

    middleware = []
    if settings.index_snapshot_path:
        middleware.append(IndexSnapshotMiddleware(vector_index, settings.index_snapshot_path))

    logger.info(
        "ragcall %s: %s embeddings (%d dims), %s completions, %d tools",
        __version__,
        settings.embedding_model,
        settings.embedding_dimensions,
        settings.completion_model,
        len(registry),
    )
    return create_app(
        documents_resource=DocumentsResource(ingest_document),
        answers_resource=AnswersResource(answer_question),
        session_messages_resource=SessionMessagesResource(dispatcher, session_store),
        session_resource=SessionResource(session_store),
        tools_resource=ToolsResource(registry),
        health_resource=HealthResource(vector_index),
        middleware=middleware,
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_ragcall_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    configure_logging(settings)
    print(f"ragcall v{__version__}")
    run_server()


if __name__ == "__main__":
    main()
