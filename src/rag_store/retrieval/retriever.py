"""Text-to-results retrieval on top of any vector store.

Usage::

    from rag_store.retrieval.retriever import Retriever

    retriever = Retriever(vectorizer, store)
    for doc in retriever.retrieve("How are chunks overlapped?", max_items=5):
        print(doc.score, doc.metadata.get_text()[:80])
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from rag_store.documents import VectorDocument
from rag_store.ingestion.base import VectorizerBase
from rag_store.retrieval.base import VectorStoreBase, resolve_query_options
from rag_store.retrieval.models import QueryOptions

logger = logging.getLogger(__name__)


class Retriever:
    """Embed a natural-language query and rank stored documents against it.

    Parameters
    ----------
    vectorizer:
        Must be the same embedding model the documents were indexed with.
    store:
        Any :class:`VectorStoreBase`.
    """

    def __init__(self, vectorizer: VectorizerBase, store: VectorStoreBase) -> None:
        self.vectorizer = vectorizer
        self.store = store

    def retrieve(
        self,
        query: str,
        options: QueryOptions | Mapping[str, Any] | None = None,
        *,
        max_items: int | None = None,
    ) -> list[VectorDocument]:
        """Return stored documents ranked against *query*, best first.

        ``max_items`` is a shortcut overriding ``options.max_items``.
        """
        opts = resolve_query_options(options)
        if max_items is not None:
            opts = opts.model_copy(update={"max_items": max_items})

        vector = self.vectorizer.vectorize_text(query)
        results = self.store.query(vector, opts)
        logger.debug("Retrieved %d documents for query %r", len(results), query[:60])
        return results
