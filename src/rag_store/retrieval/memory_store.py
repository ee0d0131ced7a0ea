"""Exact (brute-force) in-memory vector store."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from rag_store.documents import Vector, VectorDocument
from rag_store.retrieval.base import VectorStoreBase, resolve_query_options
from rag_store.retrieval.distance import DistanceMetric, compute_distance
from rag_store.retrieval.models import QueryOptions

logger = logging.getLogger(__name__)


class InMemoryStore(VectorStoreBase):
    """Keep vector documents in a list and rank them by linear scan.

    Parameters
    ----------
    distance:
        Metric used by every query, fixed for the store's lifetime.

    Queries cost ``O(n·d)``.  Results are sorted ascending by distance with
    ties kept in insertion order, and each result's ``score`` is its
    distance to the query vector.
    """

    def __init__(self, distance: DistanceMetric | str = DistanceMetric.COSINE) -> None:
        self.distance = DistanceMetric.parse(distance)
        self._documents: list[VectorDocument] = []

    def __len__(self) -> int:  # noqa: D105
        return len(self._documents)

    @property
    def documents(self) -> list[VectorDocument]:
        """Stored documents, in insertion order (a copy)."""
        return list(self._documents)

    def add(self, *documents: VectorDocument) -> None:
        self._documents.extend(documents)
        logger.debug("Added %d documents (total=%d)", len(documents), len(self._documents))

    def query(
        self,
        vector: Vector,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> list[VectorDocument]:
        opts = resolve_query_options(options)

        candidates = self._documents
        if opts.filter is not None:
            candidates = [doc for doc in candidates if opts.filter(doc)]

        scored = [(compute_distance(self.distance, vector, doc.vector), doc) for doc in candidates]
        # list.sort is stable: equal distances keep insertion order.
        scored.sort(key=lambda pair: pair[0])

        if opts.max_items is not None:
            scored = scored[: max(opts.max_items, 0)]

        logger.debug("Query over %d documents returned %d results", len(candidates), len(scored))
        return [doc.with_score(distance) for distance, doc in scored]

    def drop(self) -> None:
        self._documents = []
