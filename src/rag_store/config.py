"""Shared configuration loaded from environment / ``.env``."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embedding
    embedding_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="HuggingFace model id used by the default vectorizer",
    )

    # Ingestion
    batch_size: int = Field(default=50, description="Documents per vectorize/store flush")
    chunk_size: int = Field(default=1000, description="Characters per text chunk")
    chunk_overlap: int = Field(default=200, description="Characters shared by consecutive chunks")

    # Vector store
    store_backend: str = Field(
        default="memory",
        description="One of 'memory', 'chroma' or 'meilisearch'",
    )
    distance_metric: str = "cosine"

    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "rag_store"

    meilisearch_url: str = "http://localhost:7700"
    meilisearch_api_key: str = ""
    meilisearch_index: str = "rag_store"
    meilisearch_embedder: str = "default"
    meilisearch_dimensions: int = 384
    meilisearch_semantic_ratio: float = 1.0

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Module-level instance shared by the CLI, factory and backends.
settings = Settings()
