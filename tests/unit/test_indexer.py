"""Unit tests for the indexers."""

from __future__ import annotations

from typing import Any, Iterator, Mapping
from unittest.mock import MagicMock

import pytest

from rag_store.documents import Metadata, TextDocument
from rag_store.exceptions import InvalidArgumentError
from rag_store.ingestion.base import LoaderBase
from rag_store.ingestion.indexer import ConfiguredSourceIndexer, DocumentIndexer, SourceIndexer
from rag_store.ingestion.models import ProcessingOptions
from rag_store.ingestion.processor import DocumentProcessor


class DictLoader(LoaderBase):
    """Serves documents from an in-memory ``{source: [content, ...]}`` map."""

    def __init__(self, sources: dict[str, list[str]]) -> None:
        self.sources = sources
        self.loaded: list[str] = []

    def load(self, source: str | None = None, options: Mapping[str, Any] | None = None) -> Iterator[TextDocument]:
        self.loaded.append(source)
        for i, content in enumerate(self.sources[source]):
            yield TextDocument(f"{source}-{i}", content, Metadata({"_source": source}))


def _consume(processor: MagicMock) -> list[TextDocument]:
    """Drain the iterable passed to the (mocked) ``process`` call."""
    documents, _ = processor.process.call_args.args
    return list(documents)


@pytest.fixture()
def processor() -> MagicMock:
    return MagicMock(spec=DocumentProcessor)


# ── DocumentIndexer ─────────────────────────────────────────────────────


class TestDocumentIndexer:
    def test_single_document_is_wrapped(self, processor: MagicMock) -> None:
        doc = TextDocument("id", "text")
        DocumentIndexer(processor).index(doc)

        processor.process.assert_called_once()
        assert _consume(processor) == [doc]

    def test_iterable_is_forwarded_with_options(self, processor: MagicMock) -> None:
        docs = [TextDocument("a", "one"), TextDocument("b", "two")]
        options = ProcessingOptions(chunk_size=10)
        DocumentIndexer(processor).index(docs, options)

        processor.process.assert_called_once_with(docs, options)

    @pytest.mark.parametrize("bad", ["plain string", b"bytes", 42, None])
    def test_rejects_non_document_input(self, processor: MagicMock, bad: Any) -> None:
        with pytest.raises(InvalidArgumentError, match="DocumentIndexer expects"):
            DocumentIndexer(processor).index(bad)
        processor.process.assert_not_called()


# ── SourceIndexer ───────────────────────────────────────────────────────


class TestSourceIndexer:
    def test_single_source(self, processor: MagicMock) -> None:
        loader = DictLoader({"a.txt": ["alpha", "beta"]})
        SourceIndexer(loader, processor).index("a.txt")

        assert [d.id for d in _consume(processor)] == ["a.txt-0", "a.txt-1"]

    def test_multiple_sources_in_order(self, processor: MagicMock) -> None:
        loader = DictLoader({"a.txt": ["alpha"], "b.txt": ["beta", "gamma"]})
        SourceIndexer(loader, processor).index(["a.txt", "b.txt"], {"chunk_size": 2})

        assert [d.metadata.get_source() for d in _consume(processor)] == ["a.txt", "b.txt", "b.txt"]
        assert processor.process.call_args.args[1] == {"chunk_size": 2}

    def test_sources_are_loaded_lazily(self, processor: MagicMock) -> None:
        loader = DictLoader({"a.txt": ["alpha"], "b.txt": ["beta"]})
        SourceIndexer(loader, processor).index(["a.txt", "b.txt"])

        assert loader.loaded == []
        stream = iter(processor.process.call_args.args[0])
        next(stream)
        assert loader.loaded == ["a.txt"]

    def test_non_string_source_raises_while_loading(self, processor: MagicMock) -> None:
        loader = DictLoader({"a.txt": ["alpha"]})
        SourceIndexer(loader, processor).index(["a.txt", 42])

        with pytest.raises(InvalidArgumentError, match="SourceIndexer expects sources to be strings, got 'int'."):
            _consume(processor)

    def test_non_iterable_sources_rejected(self, processor: MagicMock) -> None:
        with pytest.raises(InvalidArgumentError):
            SourceIndexer(DictLoader({}), processor).index(42)  # type: ignore[arg-type]

    def test_end_to_end_with_real_processor(self) -> None:
        from rag_store.documents import Vector
        from rag_store.retrieval.memory_store import InMemoryStore

        vectorizer = MagicMock()
        vectorizer.vectorize.side_effect = lambda docs, _opts: [Vector([1.0, float(i)]) for i in range(len(docs))]
        store = InMemoryStore()
        loader = DictLoader({"a.txt": ["alpha", "beta", "gamma"]})

        SourceIndexer(loader, DocumentProcessor(vectorizer, store)).index("a.txt", {"chunk_size": 2})

        assert len(store) == 3
        assert vectorizer.vectorize.call_count == 2


# ── ConfiguredSourceIndexer ─────────────────────────────────────────────


class TestConfiguredSourceIndexer:
    def test_uses_default_source(self) -> None:
        inner = MagicMock(spec=SourceIndexer)
        ConfiguredSourceIndexer(inner, "default.txt").index()
        inner.index.assert_called_once_with("default.txt", None)

    def test_explicit_source_overrides_default(self) -> None:
        inner = MagicMock(spec=SourceIndexer)
        ConfiguredSourceIndexer(inner, "default.txt").index(["x.txt", "y.txt"], {"chunk_size": 5})
        inner.index.assert_called_once_with(["x.txt", "y.txt"], {"chunk_size": 5})
