"""Document loaders — turn files into :class:`TextDocument` streams.

Text, Markdown and PDF files are read through LangChain document loaders
(``TextLoader``, ``PyPDFLoader``); CSV rows are parsed with :mod:`csv`.
Every loader sets ``metadata["_source"]`` to the source it read from.
"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterator, Mapping

from langchain_community.document_loaders import PyPDFLoader, TextLoader

from rag_store.documents import Metadata, TextDocument, new_document_id
from rag_store.exceptions import InvalidArgumentError, NotFoundError, ProcessingError
from rag_store.ingestion.base import LoaderBase

if TYPE_CHECKING:
    from langchain_core.document_loaders import BaseLoader
    from langchain_core.documents import Document


def _require_file(loader: str, source: str | None) -> Path:
    if source is None:
        raise InvalidArgumentError(f"{loader} requires a file path as source, null given.")
    path = Path(source)
    if not path.is_file():
        raise NotFoundError(f'File "{source}" does not exist.')
    return path


def _utf8_text_loader(path: str) -> BaseLoader:
    return TextLoader(path, encoding="utf-8")


# -- LangChain adapter ------------------------------------------------------


class LangChainLoader(LoaderBase):
    """Adapter over any LangChain document loader (PDF by default).

    Parameters
    ----------
    loader_factory:
        Callable building a ``langchain_core`` ``BaseLoader`` for a path.
        Defaults to ``PyPDFLoader``, which yields one document per page.

    LangChain metadata is copied over; its ``source`` key becomes
    ``_source``.  Blank pages are skipped.  Errors raised by the wrapped
    loader surface as :class:`ProcessingError`.
    """

    def __init__(self, loader_factory: Callable[[str], BaseLoader] | None = None) -> None:
        self.loader_factory = loader_factory or PyPDFLoader

    def load(self, source: str | None = None, options: Mapping[str, Any] | None = None) -> Iterator[TextDocument]:
        _require_file(type(self).__name__, source)
        return self._load(source, options or {})

    def _load(self, source: str, options: Mapping[str, Any]) -> Iterator[TextDocument]:
        for page in self._pages(source):
            if not page.page_content.strip():
                continue
            metadata = Metadata(page.metadata)
            metadata.set_source(metadata.pop("source", source))
            yield TextDocument(new_document_id(), page.page_content, metadata)

    def _pages(self, source: str) -> Iterator[Document]:
        pages = self.loader_factory(source).lazy_load()
        while True:
            try:
                page = next(pages)
            except StopIteration:
                return
            except Exception as exc:
                raise ProcessingError(f'Unable to load "{source}": {exc}') from exc
            yield page


# -- Plain text -------------------------------------------------------------


class TextFileLoader(LangChainLoader):
    """Load a plain-text (UTF-8) file as a single, trimmed document."""

    def __init__(self) -> None:
        super().__init__(_utf8_text_loader)

    def _load(self, source: str, options: Mapping[str, Any]) -> Iterator[TextDocument]:
        text = self._read(source)
        if text:
            yield TextDocument(new_document_id(), text, Metadata({Metadata.KEY_SOURCE: source}))

    def _read(self, source: str) -> str:
        return "".join(page.page_content for page in self._pages(source)).strip()


# -- Markdown ---------------------------------------------------------------

_TITLE_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)

# (pattern, replacement) pairs, applied in order.
_MARKDOWN_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"(\*{1,3}|_{1,3})(.+?)\1"), r"\2"),
    (re.compile(r"~~(.+?)~~"), r"\1"),
    (re.compile(r"^>\s?", re.MULTILINE), ""),
    (re.compile(r"^[-*_]{3,}$", re.MULTILINE), ""),
    (re.compile(r"^[ \t]*[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^[ \t]*\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]


def strip_markdown(text: str) -> str:
    """Remove common Markdown syntax, keeping the readable text."""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


class MarkdownLoader(TextFileLoader):
    """Load a Markdown file as a single document.

    The raw text is read with ``TextLoader``.  The first level-one heading
    (``# Title``) is stored in ``metadata["title"]``.  Pass
    ``{"strip_formatting": True}`` as *options* to drop Markdown syntax from
    the content.
    """

    def __init__(self, strip_formatting: bool = False) -> None:
        super().__init__()
        self.strip_formatting = strip_formatting

    def _load(self, source: str, options: Mapping[str, Any]) -> Iterator[TextDocument]:
        text = self._read(source)
        if not text:
            return

        metadata = Metadata({Metadata.KEY_SOURCE: source})
        match = _TITLE_RE.search(text)
        if match:
            metadata["title"] = match.group(1).strip()

        if options.get("strip_formatting", self.strip_formatting):
            text = strip_markdown(text).strip()
            if not text:
                return

        yield TextDocument(new_document_id(), text, metadata)


# -- CSV --------------------------------------------------------------------


class CsvLoader(LoaderBase):
    """Load one document per CSV row.

    Parameters
    ----------
    content_column:
        Header name (or index, without header) holding the text.
    id_column:
        Column used as document id; rows with an empty id get a uuid4.
    metadata_columns:
        Columns copied into metadata.  Integer columns are stored under
        ``column_<n>``.
    delimiter / quotechar:
        Forwarded to :func:`csv.reader`.
    has_header:
        Whether the first row names the columns.

    Every keyword can be overridden per call through *options*.  Rows with
    blank content are skipped; ``metadata["_row_index"]`` counts the data
    rows seen so far (skipped rows included).
    """

    def __init__(
        self,
        content_column: str | int = "content",
        id_column: str | int | None = None,
        metadata_columns: list[str | int] | None = None,
        delimiter: str = ",",
        quotechar: str = '"',
        has_header: bool = True,
    ) -> None:
        self.defaults: dict[str, Any] = {
            "content_column": content_column,
            "id_column": id_column,
            "metadata_columns": list(metadata_columns or []),
            "delimiter": delimiter,
            "quotechar": quotechar,
            "has_header": has_header,
        }

    def load(self, source: str | None = None, options: Mapping[str, Any] | None = None) -> Iterator[TextDocument]:
        path = _require_file("CsvLoader", source)
        opts = {**self.defaults, **(options or {})}
        return self._load(path, source, opts)

    def _load(self, path: Path, source: str, opts: dict[str, Any]) -> Iterator[TextDocument]:
        content_column = opts["content_column"]
        with open(path, newline="", encoding="utf-8") as fh:
            reader = csv.reader(fh, delimiter=opts["delimiter"], quotechar=opts["quotechar"])
            headers: list[str] | None = None
            row_index = 0
            for row in reader:
                if not row:
                    continue

                if opts["has_header"] and headers is None:
                    headers = row
                    if isinstance(content_column, str) and content_column not in headers:
                        raise InvalidArgumentError(f'Content column "{content_column}" not found in CSV headers.')
                    continue

                data = self._normalize_row(row, headers)
                content = data.get(content_column)
                if content is None or not content.strip():
                    row_index += 1
                    continue

                yield TextDocument(
                    self._resolve_id(data, opts["id_column"]),
                    content.strip(),
                    self._build_metadata(data, opts["metadata_columns"], source, row_index),
                )
                row_index += 1

    @staticmethod
    def _normalize_row(row: list[str], headers: list[str] | None) -> dict[str | int, str]:
        if headers is None:
            return dict(enumerate(row))
        padded = row + [""] * (len(headers) - len(row))
        return dict(zip(headers, padded))

    @staticmethod
    def _resolve_id(data: dict[str | int, str], id_column: str | int | None) -> str:
        if id_column is None:
            return new_document_id()
        value = data.get(id_column)
        return value if value else new_document_id()

    @staticmethod
    def _build_metadata(
        data: dict[str | int, str],
        metadata_columns: list[str | int],
        source: str,
        row_index: int,
    ) -> Metadata:
        metadata = Metadata({Metadata.KEY_SOURCE: source, "_row_index": row_index})
        for column in metadata_columns:
            value = data.get(column)
            if value is not None:
                metadata[f"column_{column}" if isinstance(column, int) else column] = value
        return metadata


LOADERS_BY_SUFFIX: dict[str, type[LoaderBase]] = {
    ".txt": TextFileLoader,
    ".md": MarkdownLoader,
    ".markdown": MarkdownLoader,
    ".csv": CsvLoader,
    ".pdf": LangChainLoader,
}


class AutoLoader(LoaderBase):
    """Pick a loader from the file extension (``.txt`` for unknown ones)."""

    def __init__(self) -> None:
        self._loaders: dict[type[LoaderBase], LoaderBase] = {}

    def load(self, source: str | None = None, options: Mapping[str, Any] | None = None) -> Iterator[TextDocument]:
        if source is None:
            raise InvalidArgumentError("AutoLoader requires a file path as source, null given.")
        loader_cls = LOADERS_BY_SUFFIX.get(Path(source).suffix.lower(), TextFileLoader)
        loader = self._loaders.setdefault(loader_cls, loader_cls())
        return loader.load(source, options)
