"""Abstract base class for vector-store backends.

Adding a new backend (Qdrant, Weaviate, …) only requires subclassing
:class:`VectorStoreBase` and implementing :meth:`add` and :meth:`query`.
The ingestion pipeline and the retriever are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from rag_store.documents import Vector, VectorDocument
from rag_store.retrieval.models import QueryOptions


def resolve_query_options(options: QueryOptions | Mapping[str, Any] | None) -> QueryOptions:
    """Accept a :class:`QueryOptions`, a plain mapping or ``None``."""
    if options is None:
        return QueryOptions()
    if isinstance(options, QueryOptions):
        return options
    return QueryOptions.model_validate(dict(options))


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Stores are single shared mutable resources: callers must serialise
    :meth:`add` with concurrent :meth:`query` calls.
    """

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def add(self, *documents: VectorDocument) -> None:
        """Append *documents*.  No de-duplication, no overwrite by id."""
        ...

    @abstractmethod
    def query(
        self,
        vector: Vector,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> list[VectorDocument]:
        """Return stored documents ranked best match first.

        Each result carries a ``score`` set through
        :meth:`VectorDocument.with_score`; the meaning of the score
        (distance or similarity) is backend-specific.
        """
        ...

    # -- optional overrides ---------------------------------------------------

    def initialize(self, **options: Any) -> None:
        """Create the backing index / collection.  Idempotent; no-op by default."""

    def drop(self) -> None:
        """Remove every stored document.  Optional; raises by default."""
        raise NotImplementedError(f"{type(self).__name__} does not support drop")
