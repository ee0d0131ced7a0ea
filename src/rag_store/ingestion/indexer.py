"""Indexers — entry points that feed a :class:`DocumentProcessor`.

* :class:`DocumentIndexer` takes documents directly.
* :class:`SourceIndexer` takes source identifiers and loads them lazily.
* :class:`ConfiguredSourceIndexer` adds a default source to a
  :class:`SourceIndexer` (handy when the source comes from settings).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable as IterableABC
from typing import Any, Iterable, Iterator, Mapping

from rag_store.documents import TextDocument
from rag_store.exceptions import InvalidArgumentError
from rag_store.ingestion.base import LoaderBase
from rag_store.ingestion.models import ProcessingOptions
from rag_store.ingestion.processor import DocumentProcessor

logger = logging.getLogger(__name__)

Options = ProcessingOptions | Mapping[str, Any] | None


class DocumentIndexer:
    """Index a single :class:`TextDocument` or an iterable of them."""

    def __init__(self, processor: DocumentProcessor) -> None:
        self.processor = processor

    def index(self, documents: TextDocument | Iterable[TextDocument], options: Options = None) -> None:
        if isinstance(documents, TextDocument):
            documents = [documents]
        elif isinstance(documents, (str, bytes)) or not isinstance(documents, IterableABC):
            raise InvalidArgumentError(
                "DocumentIndexer expects a TextDocument or an iterable of them, "
                f"got {type(documents).__name__!r}."
            )
        self.processor.process(documents, options)


class SourceIndexer:
    """Load documents from one or many sources and index them.

    Sources are loaded one after the other as the pipeline pulls documents,
    so only the current batch is held in memory.
    """

    def __init__(self, loader: LoaderBase, processor: DocumentProcessor) -> None:
        self.loader = loader
        self.processor = processor

    def index(self, sources: str | Iterable[str], options: Options = None) -> None:
        if isinstance(sources, str):
            sources = [sources]
        elif not isinstance(sources, IterableABC):
            raise InvalidArgumentError(
                f"SourceIndexer expects a string or an iterable of strings, got {type(sources).__name__!r}."
            )
        self.processor.process(self._load_all(sources), options)

    def _load_all(self, sources: Iterable[Any]) -> Iterator[TextDocument]:
        for source in sources:
            if not isinstance(source, str):
                raise InvalidArgumentError(
                    f"SourceIndexer expects sources to be strings, got {type(source).__name__!r}."
                )
            logger.debug("Loading source %s", source)
            yield from self.loader.load(source)


class ConfiguredSourceIndexer:
    """A :class:`SourceIndexer` with a default source.

    ``index()`` without a source indexes *default_source*; an explicit source
    overrides it.
    """

    def __init__(self, indexer: SourceIndexer, default_source: str | list[str]) -> None:
        self.indexer = indexer
        self.default_source = default_source

    def index(self, sources: str | Iterable[str] | None = None, options: Options = None) -> None:
        self.indexer.index(sources if sources is not None else self.default_source, options)
