"""Document model — text documents, embedded documents, vectors and metadata."""

from rag_store.documents.metadata import Metadata
from rag_store.documents.models import (
    NullVector,
    TextDocument,
    Vector,
    VectorDocument,
    new_document_id,
)

__all__ = [
    "Metadata",
    "NullVector",
    "TextDocument",
    "Vector",
    "VectorDocument",
    "new_document_id",
]
