"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import chromadb

from rag_store.config import settings
from rag_store.documents import Metadata, NullVector, Vector, VectorDocument
from rag_store.exceptions import InvalidArgumentError
from rag_store.retrieval.base import VectorStoreBase, resolve_query_options
from rag_store.retrieval.distance import DistanceMetric
from rag_store.retrieval.models import QueryOptions

logger = logging.getLogger(__name__)

# Chroma's HNSW index supports a subset of our metrics.
_HNSW_SPACE = {
    DistanceMetric.COSINE: "cosine",
    DistanceMetric.EUCLIDEAN: "l2",
}


def _flatten_metadata(metadata: Metadata) -> dict[str, Any]:
    """Chroma metadata values must be flat str/int/float/bool."""
    return {
        k: v
        for k, v in metadata.items()
        if k != Metadata.KEY_TEXT and isinstance(v, (str, int, float, bool))
    }


def _first(results: Mapping[str, Any], key: str) -> list[Any]:
    value = results.get(key)
    if value is None or len(value) == 0:
        return []
    return list(value[0])


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    distance:
        ``cosine`` or ``euclidean`` (Chroma's ``l2``).
    client:
        Pre-built Chroma client; an ``HttpClient`` is created when omitted.

    Scores on query results are Chroma distances (smaller = closer).  Note
    that Chroma's ``l2`` space reports *squared* Euclidean distance.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        distance: DistanceMetric | str = DistanceMetric.COSINE,
        client: Any = None,
    ) -> None:
        metric = DistanceMetric.parse(distance)
        if metric not in _HNSW_SPACE:
            raise InvalidArgumentError(f"Chroma does not support the {metric.value!r} distance.")
        self.collection_name = collection_name
        self.distance = metric
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection: Any = None

    @property
    def collection(self) -> Any:
        if self._collection is None:
            self.initialize()
        return self._collection

    # -- VectorStoreBase overrides --------------------------------------------

    def initialize(self, **options: Any) -> None:
        self._collection = self._client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": _HNSW_SPACE[self.distance]},
        )

    def add(self, *documents: VectorDocument) -> None:
        if not documents:
            return
        self.collection.add(
            ids=[str(doc.id) for doc in documents],
            embeddings=[doc.vector.to_list() for doc in documents],
            metadatas=[_flatten_metadata(doc.metadata) or None for doc in documents],
            documents=[doc.metadata.get_text() or "" for doc in documents],
        )
        logger.debug("Added %d documents to Chroma collection %s", len(documents), self.collection_name)

    def query(
        self,
        vector: Vector,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> list[VectorDocument]:
        opts = resolve_query_options(options)
        n_results = opts.max_items if opts.max_items is not None else self.collection.count()
        if n_results <= 0:
            return []

        results = self.collection.query(
            query_embeddings=[vector.to_list()],
            n_results=n_results,
            include=["documents", "metadatas", "distances", "embeddings"],
        )

        ids = _first(results, "ids")
        docs = _first(results, "documents")
        metas = _first(results, "metadatas")
        distances = _first(results, "distances")
        embeddings = _first(results, "embeddings")

        hits: list[VectorDocument] = []
        for i, doc_id in enumerate(ids):
            metadata = Metadata(metas[i] or {}) if i < len(metas) else Metadata()
            if i < len(docs) and docs[i]:
                metadata.set_text(docs[i])
            embedding = embeddings[i] if i < len(embeddings) else None
            hit = VectorDocument(
                id=doc_id,
                vector=Vector(embedding) if embedding is not None and len(embedding) else NullVector(),
                metadata=metadata,
            )
            hits.append(hit.with_score(float(distances[i])))
        return hits

    def drop(self) -> None:
        self._client.delete_collection(self.collection_name)
        self._collection = None
