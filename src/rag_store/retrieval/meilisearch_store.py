"""Meilisearch bridge — a remote vector store reached over HTTP.

Documents are indexed with a *user-provided* embedder, so vectors computed
by our vectorizer are stored as-is::

    {"id": "...", "_vectors": {"default": {"embeddings": [...], "regenerate": false}}, ...metadata}

Any non-2xx response raises ``requests.HTTPError``; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from rag_store.config import settings
from rag_store.documents import Metadata, NullVector, Vector, VectorDocument
from rag_store.exceptions import ProcessingError
from rag_store.retrieval.base import VectorStoreBase, resolve_query_options
from rag_store.retrieval.models import QueryOptions

logger = logging.getLogger(__name__)


class MeilisearchStore(VectorStoreBase):
    """Vector store backed by a Meilisearch index.

    Parameters
    ----------
    endpoint_url:
        Base URL of the Meilisearch server, e.g. ``http://localhost:7700``.
    api_key:
        Sent as a ``Bearer`` token.
    index_name:
        Target index (created by :meth:`initialize`).
    embedder:
        Name of the user-provided embedder declared on the index.
    embeddings_dimension:
        Vector size declared on the embedder.
    semantic_ratio:
        Hybrid-search ratio; ``1.0`` is a pure vector search.
    timeout:
        Per-request timeout in seconds.
    session:
        Optional ``requests.Session`` (tests inject a mock).

    Result scores are Meilisearch's ``_rankingScore`` (higher = better).
    """

    def __init__(
        self,
        endpoint_url: str = settings.meilisearch_url,
        api_key: str = settings.meilisearch_api_key,
        index_name: str = settings.meilisearch_index,
        *,
        embedder: str = settings.meilisearch_embedder,
        embeddings_dimension: int = settings.meilisearch_dimensions,
        semantic_ratio: float = settings.meilisearch_semantic_ratio,
        timeout: int = 60,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint_url = endpoint_url.rstrip("/")
        self.api_key = api_key
        self.index_name = index_name
        self.embedder = embedder
        self.embeddings_dimension = embeddings_dimension
        self.semantic_ratio = semantic_ratio
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    # -- VectorStoreBase overrides --------------------------------------------

    def initialize(self, **options: Any) -> None:
        self._request("POST", "indexes", {"uid": self.index_name, "primaryKey": "id"})
        self._request(
            "PATCH",
            f"indexes/{self.index_name}/settings",
            {
                "embedders": {
                    self.embedder: {
                        "source": "userProvided",
                        "dimensions": self.embeddings_dimension,
                    }
                }
            },
        )

    def add(self, *documents: VectorDocument) -> None:
        if not documents:
            return
        self._request(
            "PUT",
            f"indexes/{self.index_name}/documents",
            [self._to_payload(doc) for doc in documents],
        )

    def query(
        self,
        vector: Vector,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> list[VectorDocument]:
        opts = resolve_query_options(options)
        payload: dict[str, Any] = {
            "vector": vector.to_list(),
            "showRankingScore": True,
            "retrieveVectors": True,
            "hybrid": {"embedder": self.embedder, "semanticRatio": self.semantic_ratio},
        }
        if opts.max_items is not None:
            payload["limit"] = opts.max_items

        result = self._request("POST", f"indexes/{self.index_name}/search", payload)
        return [self._to_vector_document(hit) for hit in result.get("hits", [])]

    def drop(self) -> None:
        self._request("DELETE", f"indexes/{self.index_name}", None)

    # -- internals ------------------------------------------------------------

    def _request(self, method: str, endpoint: str, payload: Any) -> dict[str, Any]:
        url = f"{self.endpoint_url}/{endpoint}"
        logger.debug("%s %s", method, url)
        response = self._session.request(
            method,
            url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json() if response.content else {}

    def _to_payload(self, document: VectorDocument) -> dict[str, Any]:
        # "id" and "_vectors" take precedence over metadata keys.
        return {
            **document.metadata.to_dict(),
            "id": str(document.id),
            "_vectors": {
                self.embedder: {
                    "embeddings": document.vector.to_list(),
                    "regenerate": False,
                }
            },
        }

    def _to_vector_document(self, hit: Mapping[str, Any]) -> VectorDocument:
        data = dict(hit)
        if "id" not in data:
            raise ProcessingError('Missing "id" field in the document data.')
        doc_id = data.pop("id")
        vectors = data.pop("_vectors", None) or {}
        score = data.pop("_rankingScore", None)

        embeddings = (vectors.get(self.embedder) or {}).get("embeddings")
        vector = Vector(embeddings) if embeddings else NullVector()
        document = VectorDocument(id=doc_id, vector=vector, metadata=Metadata(data))
        return document.with_score(float(score)) if score is not None else document
