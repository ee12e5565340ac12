"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # OpenAI-compatible API (embeddings and chat completions)
    openai_api_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible API URL",
    )
    openai_api_key: str = Field(default="", description="API key")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name",
    )
    embedding_dimensions: int = Field(default=1536, gt=0, description="Embedding vector size")
    embedding_batch_size: int = Field(default=256, gt=0, description="Texts per embedding request")
    completion_model: str = Field(default="gpt-4o-mini", description="Chat completion model")
    completion_timeout_seconds: float = Field(default=60.0, gt=0, description="Completion timeout")
    completion_temperature: float | None = Field(default=None, description="Sampling temperature")
    provider_max_attempts: int = Field(
        default=4, ge=1, description="Attempts for retryable provider errors"
    )

    # Ingestion & retrieval
    chunk_size: int = Field(default=500, description="Chunk size in characters")
    chunk_overlap: int = Field(default=50, description="Chunk overlap in characters")
    default_top_k: int = Field(default=3, ge=1, description="Chunks retrieved per question")
    documents_root: str = Field(default="./documents", description="Root for file-based loading")
    index_snapshot_path: str | None = Field(
        default=None,
        description="Optional .npz file the index is loaded from and saved to",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
