"""General-purpose document transformers."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from rag_store.documents import TextDocument
from rag_store.ingestion.base import TransformerBase, require_document


class ChainTransformer(TransformerBase):
    """Apply several transformers in sequence, lazily.

    *options* are handed to every transformer in the chain.
    """

    def __init__(self, transformers: Iterable[TransformerBase]) -> None:
        self.transformers = list(transformers)

    def transform(self, documents: Iterable[TextDocument], options: Any = None) -> Iterator[TextDocument]:
        stream: Iterable[TextDocument] = documents
        for transformer in self.transformers:
            stream = transformer.transform(stream, options)
        return iter(stream)


class TextTrimTransformer(TransformerBase):
    """Strip leading and trailing whitespace from every document."""

    def transform(self, documents: Iterable[TextDocument], options: Any = None) -> Iterator[TextDocument]:
        for item in documents:
            document = require_document(item, "TextTrimTransformer")
            trimmed = document.content.strip()
            yield document if trimmed == document.content else document.with_content(trimmed)
