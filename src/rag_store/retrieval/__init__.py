"""
Retrieval — vector stores, distance metrics and query-time retrieval.

This module hides the storage backend behind :class:`VectorStoreBase` so
that the ingestion pipeline never needs to know which DB it writes to.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend.
- :class:`InMemoryStore` — exact, brute-force store (default).
- :class:`ChromaVectorStore` / :class:`MeilisearchStore` — remote bridges.
- :class:`DistanceMetric`, :func:`compute_distance` — metrics.
- :class:`QueryOptions` — typed query options.
- :class:`Retriever` — text query → ranked documents.
"""

from rag_store.retrieval.base import VectorStoreBase
from rag_store.retrieval.distance import DistanceMetric, compute_distance
from rag_store.retrieval.memory_store import InMemoryStore
from rag_store.retrieval.models import QueryOptions

__all__ = [
    "ChromaVectorStore",
    "DistanceMetric",
    "InMemoryStore",
    "MeilisearchStore",
    "QueryOptions",
    "Retriever",
    "VectorStoreBase",
    "compute_distance",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends and the retriever to keep optional clients out of import time."""
    if name == "ChromaVectorStore":
        from rag_store.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    if name == "MeilisearchStore":
        from rag_store.retrieval.meilisearch_store import MeilisearchStore

        return MeilisearchStore
    if name == "Retriever":
        from rag_store.retrieval.retriever import Retriever

        return Retriever
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
