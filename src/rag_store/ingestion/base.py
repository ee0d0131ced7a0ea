"""Abstract interfaces for the ingestion stages.

The pipeline is ``load → filter → transform → vectorize → store``.  Every
stage that handles documents works on *iterables* and should return a lazy
iterator (a generator) so that arbitrarily large sources stream through
without being materialised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Mapping, Sequence

from rag_store.documents import TextDocument, Vector
from rag_store.exceptions import InvalidArgumentError


def require_document(item: Any, consumer: str) -> TextDocument:
    """Return *item* if it is a :class:`TextDocument`, raise otherwise."""
    if not isinstance(item, TextDocument):
        raise InvalidArgumentError(
            f"{consumer} expects documents to be instances of TextDocument, got {type(item).__name__!r}."
        )
    return item


class LoaderBase(ABC):
    """Turns a source identifier (path, URL, …) into documents."""

    @abstractmethod
    def load(
        self,
        source: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Iterator[TextDocument]:
        """Yield the documents found at *source*.

        Raises
        ------
        InvalidArgumentError
            When *source* is missing or unusable for this loader.
        NotFoundError
            When *source* does not exist.
        """
        ...


class FilterBase(ABC):
    """Drops unwanted documents; never reorders or alters the survivors."""

    @abstractmethod
    def filter(
        self,
        documents: Iterable[TextDocument],
        options: Mapping[str, Any] | None = None,
    ) -> Iterator[TextDocument]:
        ...


class TransformerBase(ABC):
    """Maps documents to documents, possibly 1:N (chunking) or 1:1 (cleaning)."""

    @abstractmethod
    def transform(
        self,
        documents: Iterable[TextDocument],
        options: Any = None,
    ) -> Iterator[TextDocument]:
        ...


class VectorizerBase(ABC):
    """Computes embeddings for batches of documents."""

    @abstractmethod
    def vectorize(
        self,
        documents: Sequence[TextDocument],
        platform_options: Mapping[str, Any] | None = None,
    ) -> list[Vector]:
        """Return one vector per document, in the same order as *documents*.

        Transport / quota errors are propagated unchanged; callers do not
        retry.
        """
        ...

    @abstractmethod
    def vectorize_text(
        self,
        text: str,
        platform_options: Mapping[str, Any] | None = None,
    ) -> Vector:
        """Embed a single free-text string (typically a search query)."""
        ...
