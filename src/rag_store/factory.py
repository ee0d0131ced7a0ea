"""Build the store and the ingestion pipeline from :class:`Settings`."""

from __future__ import annotations

from typing import Iterable

from rag_store.config import Settings, settings
from rag_store.exceptions import InvalidArgumentError
from rag_store.ingestion.base import FilterBase, VectorizerBase
from rag_store.ingestion.chunker import TextSplitTransformer
from rag_store.ingestion.processor import DocumentProcessor
from rag_store.ingestion.vectorizer import EmbeddingsVectorizer
from rag_store.retrieval.base import VectorStoreBase
from rag_store.retrieval.memory_store import InMemoryStore


def build_store(cfg: Settings = settings) -> VectorStoreBase:
    """Return the backend selected by ``cfg.store_backend``."""
    backend = cfg.store_backend.lower()
    if backend == "memory":
        return InMemoryStore(cfg.distance_metric)
    if backend == "chroma":
        from rag_store.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore(
            cfg.chroma_collection,
            host=cfg.chroma_host,
            port=cfg.chroma_port,
            distance=cfg.distance_metric,
        )
    if backend == "meilisearch":
        from rag_store.retrieval.meilisearch_store import MeilisearchStore

        return MeilisearchStore(
            cfg.meilisearch_url,
            cfg.meilisearch_api_key,
            cfg.meilisearch_index,
            embedder=cfg.meilisearch_embedder,
            embeddings_dimension=cfg.meilisearch_dimensions,
            semantic_ratio=cfg.meilisearch_semantic_ratio,
        )
    raise InvalidArgumentError(f"Unsupported store_backend={cfg.store_backend!r}.")


def build_processor(
    cfg: Settings = settings,
    *,
    store: VectorStoreBase | None = None,
    vectorizer: VectorizerBase | None = None,
    filters: Iterable[FilterBase] = (),
) -> DocumentProcessor:
    """Wire filters → window chunker → vectorizer → store from settings."""
    return DocumentProcessor(
        vectorizer=vectorizer if vectorizer is not None else EmbeddingsVectorizer(),
        store=store if store is not None else build_store(cfg),
        filters=filters,
        transformers=[TextSplitTransformer(cfg.chunk_size, cfg.chunk_overlap)],
    )
