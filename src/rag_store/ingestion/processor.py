"""Document processing pipeline: filter → transform → vectorize → store.

Stages are composed lazily: filters and transformers wrap the incoming
iterable in generators, and only the current batch is held in memory.
Every full batch (and the final partial one) is vectorized in a single call
and written to the store in a single ``add`` call, in source order.

Nothing is retried here.  A failing vectorizer or store aborts the run;
batches flushed before the failure stay in the store.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from rag_store.documents import TextDocument, Vector, VectorDocument
from rag_store.exceptions import InvalidArgumentError, ProcessingError
from rag_store.ingestion.base import FilterBase, TransformerBase, VectorizerBase, require_document
from rag_store.ingestion.models import ProcessingOptions
from rag_store.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


def to_vector_documents(documents: Sequence[TextDocument], vectors: Sequence[Vector]) -> list[VectorDocument]:
    """Pair each document with its vector.

    The stored metadata is a copy of the document's metadata with ``_text``
    set to the embedded content (unless the document already carries one).
    """
    if len(documents) != len(vectors):
        raise ProcessingError(f"Expected {len(documents)} vectors, got {len(vectors)}.")

    result: list[VectorDocument] = []
    for document, vector in zip(documents, vectors):
        metadata = document.metadata.snapshot()
        if not metadata.has_text():
            metadata.set_text(document.content)
        result.append(VectorDocument(id=document.id, vector=vector, metadata=metadata))
    return result


class DocumentProcessor:
    """Run documents through filters and transformers into a vector store.

    Parameters
    ----------
    vectorizer:
        Produces one vector per document for each batch.
    store:
        Receives one ``add`` call per batch.
    filters:
        Applied first, in order.
    transformers:
        Applied after the filters, in order (chunking, cleaning, …).
    """

    def __init__(
        self,
        vectorizer: VectorizerBase,
        store: VectorStoreBase,
        filters: Iterable[FilterBase] = (),
        transformers: Iterable[TransformerBase] = (),
    ) -> None:
        self.vectorizer = vectorizer
        self.store = store
        self.filters = list(filters)
        self.transformers = list(transformers)

    def process(
        self,
        documents: Iterable[Any],
        options: ProcessingOptions | Mapping[str, Any] | None = None,
    ) -> None:
        """Filter, transform, vectorize and store *documents*.

        Parameters
        ----------
        documents:
            Any iterable of :class:`TextDocument`; generators are consumed
            lazily.
        options:
            A :class:`ProcessingOptions` or an equivalent mapping
            (``{"chunk_size": 50, "platform_options": {...}}``).

        Raises
        ------
        InvalidArgumentError
            On a non-positive batch size or when an item reaching the batch
            is not a :class:`TextDocument`.  The batch holding the bad item
            is never flushed.
        """
        opts = self._resolve_options(options)
        logger.debug("Starting document processing pipeline")

        stream: Iterable[Any] = documents
        for f in self.filters:
            stream = f.filter(stream)
        for transformer in self.transformers:
            stream = transformer.transform(stream)

        counter = 0
        batches = 0
        batch: list[TextDocument] = []
        for item in stream:
            batch.append(require_document(item, "DocumentProcessor"))
            counter += 1

            if len(batch) == opts.chunk_size:
                self._flush(batch, opts)
                batches += 1
                batch = []

        if batch:
            self._flush(batch, opts)
            batches += 1

        logger.debug("Document processing completed: total_documents=%d batches=%d", counter, batches)

    # -- internals ------------------------------------------------------------

    @staticmethod
    def _resolve_options(options: ProcessingOptions | Mapping[str, Any] | None) -> ProcessingOptions:
        if options is None:
            opts = ProcessingOptions()
        elif isinstance(options, ProcessingOptions):
            opts = options
        else:
            opts = ProcessingOptions.model_validate(dict(options))
        if opts.chunk_size < 1:
            raise InvalidArgumentError(f"chunk_size must be a positive integer, got {opts.chunk_size}.")
        return opts

    def _flush(self, batch: list[TextDocument], opts: ProcessingOptions) -> None:
        vectors = self.vectorizer.vectorize(batch, opts.platform_options)
        self.store.add(*to_vector_documents(batch, vectors))
        logger.debug("Flushed batch of %d documents", len(batch))
