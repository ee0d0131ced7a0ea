"""Core document and vector types.

``TextDocument`` is what loaders, filters and transformers pass around;
``VectorDocument`` is what the vectorizer produces and what stores persist
and return.  Both are immutable; the ``with_*`` helpers return new
instances.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterable
from uuid import uuid4

import numpy as np
from numpy.typing import NDArray

from rag_store.documents.metadata import Metadata
from rag_store.exceptions import InvalidArgumentError


def new_document_id() -> str:
    """Return a fresh random (uuid4) document identifier."""
    return str(uuid4())


def _as_metadata(value: Any) -> Metadata:
    if isinstance(value, Metadata):
        return value
    return Metadata(value or {})


@dataclass(frozen=True)
class Vector:
    """Fixed-length sequence of floats; ``dimension`` is its length."""

    data: tuple[float, ...]

    def __init__(self, data: Iterable[float]) -> None:
        values = tuple(float(v) for v in data)
        if not values:
            raise InvalidArgumentError("A vector needs at least one dimension.")
        object.__setattr__(self, "data", values)

    @property
    def dimension(self) -> int:
        return len(self.data)

    def as_array(self) -> NDArray[np.float64]:
        return np.asarray(self.data, dtype=np.float64)

    def to_list(self) -> list[float]:
        return list(self.data)

    def __len__(self) -> int:  # noqa: D105
        return len(self.data)


@dataclass(frozen=True)
class NullVector(Vector):
    """Placeholder for hits a backend returned without their embedding."""

    def __init__(self) -> None:
        object.__setattr__(self, "data", ())


@dataclass(frozen=True)
class TextDocument:
    """A piece of text awaiting embedding.

    Attributes
    ----------
    id:
        Caller- or loader-supplied identifier (see :func:`new_document_id`).
    content:
        The text.  Must contain at least one non-whitespace character; it is
        stored as given, not trimmed.
    metadata:
        Provenance and arbitrary extra fields.  A plain ``dict`` is wrapped
        in a new :class:`Metadata`; a ``Metadata`` instance is kept as-is
        (shared, not copied).
    """

    id: str | int
    content: str
    metadata: Metadata = field(default_factory=Metadata)

    def __post_init__(self) -> None:
        if not isinstance(self.content, str) or not self.content.strip():
            raise InvalidArgumentError("The content shall not be an empty string.")
        object.__setattr__(self, "metadata", _as_metadata(self.metadata))

    def with_content(self, content: str) -> TextDocument:
        """Return a copy with *content* replaced; id and metadata are kept."""
        return dataclasses.replace(self, content=content)


@dataclass(frozen=True)
class VectorDocument:
    """An embedded document as persisted by (and returned from) a store.

    ``score`` is only ever set by the retrieval path via :meth:`with_score`.
    """

    id: str | int
    vector: Vector
    metadata: Metadata = field(default_factory=Metadata)
    score: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _as_metadata(self.metadata))

    def with_score(self, score: float) -> VectorDocument:
        """Return a new instance carrying *score*; ``self`` is untouched."""
        return dataclasses.replace(self, score=score)
