"""Embedding of document batches through a LangChain ``Embeddings`` model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from rag_store.config import settings
from rag_store.documents import TextDocument, Vector
from rag_store.exceptions import ProcessingError
from rag_store.ingestion.base import VectorizerBase

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def get_embedding_function(model_name: str | None = None) -> Embeddings:
    """Return the configured sentence-transformer embedding function."""
    from langchain_huggingface import HuggingFaceEmbeddings

    return HuggingFaceEmbeddings(model_name=model_name or settings.embedding_model)


class EmbeddingsVectorizer(VectorizerBase):
    """Vectorizer backed by any ``langchain_core`` ``Embeddings`` model.

    Parameters
    ----------
    embeddings:
        The embedding model.  When *None*, a ``HuggingFaceEmbeddings`` for
        ``settings.embedding_model`` is created on first use.

    Each :meth:`vectorize` call issues exactly one ``embed_documents``
    request for the whole batch.  Non-empty ``platform_options`` are passed
    to that request as keyword arguments.
    """

    def __init__(self, embeddings: Embeddings | None = None) -> None:
        self._embeddings = embeddings

    @property
    def embeddings(self) -> Embeddings:
        if self._embeddings is None:
            self._embeddings = get_embedding_function()
        return self._embeddings

    def vectorize(
        self,
        documents: Sequence[TextDocument],
        platform_options: Mapping[str, Any] | None = None,
    ) -> list[Vector]:
        if not documents:
            return []

        texts = [doc.content for doc in documents]
        kwargs = dict(platform_options or {})
        logger.debug("Embedding batch of %d documents", len(texts))
        raw = self.embeddings.embed_documents(texts, **kwargs) if kwargs else self.embeddings.embed_documents(texts)

        if len(raw) != len(texts):
            raise ProcessingError(
                f"Embedding model returned {len(raw)} vectors for {len(texts)} documents."
            )
        return [Vector(values) for values in raw]

    def vectorize_text(
        self,
        text: str,
        platform_options: Mapping[str, Any] | None = None,
    ) -> Vector:
        kwargs = dict(platform_options or {})
        raw = self.embeddings.embed_query(text, **kwargs) if kwargs else self.embeddings.embed_query(text)
        return Vector(raw)
