"""Text chunking strategies.

Both transformers cut long documents into overlapping pieces and record the
lineage of every piece in ``metadata["_parent_id"]``.

* :class:`TextSplitTransformer` — fixed-width sliding window over code
  points.  Deterministic window boundaries, the default chunker.
* :class:`RecursiveSplitTransformer` — separator-aware splitting (paragraph,
  line, sentence, word) backed by ``langchain_text_splitters``.

Chunk metadata is a deep *copy* of the parent's metadata, never the parent's
instance: chunks are mutated (``_parent_id``) and must not leak changes back
into the parent or into their siblings.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from langchain_text_splitters import RecursiveCharacterTextSplitter

from rag_store.documents import TextDocument, new_document_id
from rag_store.exceptions import InvalidArgumentError
from rag_store.ingestion.base import TransformerBase, require_document
from rag_store.ingestion.models import ChunkOptions

DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


def _validate(options: ChunkOptions) -> ChunkOptions:
    if options.chunk_size < 1:
        raise InvalidArgumentError(f"Chunk size must be positive. Got chunk size: {options.chunk_size}")
    if options.overlap < 0 or options.overlap >= options.chunk_size:
        raise InvalidArgumentError(
            "Overlap must be non-negative and less than chunk size. "
            f"Got chunk size: {options.chunk_size}, overlap: {options.overlap}"
        )
    return options


def _make_chunk(parent: TextDocument, text: str) -> TextDocument:
    metadata = parent.metadata.snapshot()
    metadata.set_parent_id(parent.id)
    return TextDocument(new_document_id(), text, metadata)


class _ChunkingTransformer(TransformerBase):
    """Shared option handling: constructor defaults, per-call overrides."""

    def __init__(self, chunk_size: int = 1000, overlap: int = 200) -> None:
        self.options = _validate(ChunkOptions(chunk_size=chunk_size, overlap=overlap))

    def resolve_options(self, options: ChunkOptions | Mapping[str, Any] | None) -> ChunkOptions:
        """Merge per-call *options* over the constructor defaults and validate."""
        if options is None:
            return self.options
        if isinstance(options, ChunkOptions):
            overrides = options.model_dump(exclude_unset=True)
        else:
            overrides = {k: v for k, v in options.items() if k in ChunkOptions.model_fields}
        return _validate(self.options.model_copy(update=overrides))

    def transform(
        self,
        documents: Iterable[TextDocument],
        options: ChunkOptions | Mapping[str, Any] | None = None,
    ) -> Iterator[TextDocument]:
        # Raises here, before any document is pulled.
        resolved = self.resolve_options(options)
        return self._split_all(documents, resolved)

    def _split_all(self, documents: Iterable[TextDocument], options: ChunkOptions) -> Iterator[TextDocument]:
        for item in documents:
            document = require_document(item, type(self).__name__)
            if len(document.content) <= options.chunk_size:
                yield document
                continue
            yield from self.split(document, options)

    def split(self, document: TextDocument, options: ChunkOptions) -> Iterator[TextDocument]:
        raise NotImplementedError


class TextSplitTransformer(_ChunkingTransformer):
    """Split documents into fixed-width, overlapping windows.

    Parameters
    ----------
    chunk_size:
        Window width in code points (default 1000).
    overlap:
        Code points repeated at the start of the next window (default 200).

    A document of length ``L <= chunk_size`` is yielded unchanged.  Longer
    documents produce windows starting at ``0, s, 2s, …`` while the start is
    below ``L``, with ``s = chunk_size - overlap``; the last window is
    clipped to ``L``.  A window made only of whitespace cannot become a
    document and raises :class:`InvalidArgumentError`.

    Example: 1500 characters, ``chunk_size=1000``, ``overlap=200`` →
    ``[0, 1000)`` and ``[800, 1500)``.
    """

    def split(self, document: TextDocument, options: ChunkOptions) -> Iterator[TextDocument]:
        text = document.content
        length = len(text)
        step = options.chunk_size - options.overlap
        start = 0
        while start < length:
            window = text[start : start + options.chunk_size]
            if not window.strip():
                raise InvalidArgumentError(
                    f"Chunk [{start}, {start + len(window)}) of document {document.id!r} is blank; "
                    "the content shall not be an empty string."
                )
            yield _make_chunk(document, window)
            start += step


class RecursiveSplitTransformer(_ChunkingTransformer):
    """Split on natural boundaries (paragraphs, lines, sentences, words).

    Pieces are at most ``chunk_size`` characters long and share up to
    ``overlap`` characters with their neighbour, but boundaries follow
    *separators* instead of fixed offsets.
    """

    def __init__(
        self,
        chunk_size: int = 1000,
        overlap: int = 200,
        separators: list[str] | None = None,
    ) -> None:
        super().__init__(chunk_size=chunk_size, overlap=overlap)
        self.separators = separators or list(DEFAULT_SEPARATORS)

    def split(self, document: TextDocument, options: ChunkOptions) -> Iterator[TextDocument]:
        splitter = RecursiveCharacterTextSplitter(
            chunk_size=options.chunk_size,
            chunk_overlap=options.overlap,
            length_function=len,
            separators=self.separators,
        )
        for piece in splitter.split_text(document.content):
            if piece.strip():
                yield _make_chunk(document, piece)
