"""Typed options for vector-store queries."""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, Field

from rag_store.documents import VectorDocument


class QueryOptions(BaseModel):
    """Options accepted by :meth:`VectorStoreBase.query`.

    Attributes
    ----------
    max_items:
        Upper bound on the number of results.  ``None`` returns every
        stored document, ranked.
    filter:
        Optional predicate on stored documents; only documents for which it
        returns ``True`` are ranked.  Honoured by the in-memory store only.
    """

    max_items: int | None = Field(default=None, description="Maximum number of results")
    filter: Callable[[VectorDocument], bool] | None = Field(default=None, exclude=True)
