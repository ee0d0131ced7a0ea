"""Unit tests for the document loaders."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest
from langchain_community.document_loaders import TextLoader
from langchain_core.document_loaders import BaseLoader
from langchain_core.documents import Document

from rag_store.exceptions import InvalidArgumentError, NotFoundError, ProcessingError
from rag_store.ingestion.loader import (
    AutoLoader,
    CsvLoader,
    LangChainLoader,
    MarkdownLoader,
    TextFileLoader,
    strip_markdown,
)


def _write(tmp_path: Path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


# ── Error handling shared by file loaders ───────────────────────────────


@pytest.mark.parametrize("loader", [TextFileLoader(), MarkdownLoader(), CsvLoader(), LangChainLoader()])
class TestFileErrors:
    def test_null_source(self, loader) -> None:
        with pytest.raises(InvalidArgumentError, match="requires a file path as source, null given."):
            loader.load(None)

    def test_missing_file(self, loader, tmp_path: Path) -> None:
        missing = str(tmp_path / "nope.txt")
        with pytest.raises(NotFoundError, match="does not exist"):
            loader.load(missing)


# ── TextFileLoader ──────────────────────────────────────────────────────


class TestTextFileLoader:
    def test_loads_trimmed_content_with_source(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "note.txt", "\n  Hello world.  \n")
        (doc,) = TextFileLoader().load(source)

        assert doc.content == "Hello world."
        assert doc.metadata.get_source() == source
        assert doc.id

    def test_blank_file_yields_nothing(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "empty.txt", "  \n\n ")
        assert list(TextFileLoader().load(source)) == []

    def test_reads_through_langchain_text_loader(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "note.txt", "Hello world.")
        with patch("rag_store.ingestion.loader.TextLoader", wraps=TextLoader) as mock_loader:
            (doc,) = TextFileLoader().load(source)

        mock_loader.assert_called_once_with(source, encoding="utf-8")
        assert doc.content == "Hello world."

    def test_undecodable_file_raises_processing_error(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes("caf\xe9".encode("latin-1"))

        with pytest.raises(ProcessingError, match="Unable to load"):
            list(TextFileLoader().load(str(path)))


# ── MarkdownLoader ──────────────────────────────────────────────────────


MARKDOWN = """# Getting Started

Hello

This is **bold** and a [link](https://example.com).
"""


class TestMarkdownLoader:
    def test_title_is_extracted(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "guide.md", MARKDOWN)
        (doc,) = MarkdownLoader().load(source)

        assert doc.metadata["title"] == "Getting Started"
        assert doc.metadata.get_source() == source
        assert doc.content.startswith("# Getting Started")

    def test_no_title_without_level_one_heading(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "notes.md", "## Sub heading\n\nBody text.")
        (doc,) = MarkdownLoader().load(source)
        assert "title" not in doc.metadata

    def test_strip_formatting_option(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "guide.md", MARKDOWN)
        (doc,) = MarkdownLoader().load(source, {"strip_formatting": True})

        assert doc.content == "Getting Started\n\nHello\n\nThis is bold and a link."
        assert doc.metadata["title"] == "Getting Started"

    def test_strip_formatting_constructor_default(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "guide.md", "Use `pip install` and ~~not~~ this.")
        (doc,) = MarkdownLoader(strip_formatting=True).load(source)
        assert doc.content == "Use pip install and not this."

    def test_strip_markdown(self) -> None:
        assert strip_markdown("Hello\n\nThis is **bold** and a [link](https://x.y).") == (
            "Hello\n\nThis is bold and a link."
        )

    def test_strip_markdown_drops_code_blocks_and_list_markers(self) -> None:
        text = "- first\n- second\n\n```python\nprint(1)\n```\n\n1. numbered\n> quoted"
        assert strip_markdown(text) == "first\nsecond\n\nnumbered\nquoted"


# ── CsvLoader ───────────────────────────────────────────────────────────


CSV = """id,content,author,year
1,First article,alice,2020
2,   ,bob,2021
3,Third article,carol,2022
"""


class TestCsvLoader:
    def test_one_document_per_row(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "posts.csv", CSV)
        docs = list(CsvLoader(id_column="id", metadata_columns=["author"]).load(source))

        assert [d.id for d in docs] == ["1", "3"]
        assert [d.content for d in docs] == ["First article", "Third article"]
        assert docs[0].metadata == {"_source": source, "_row_index": 0, "author": "alice"}
        # The blank row still counts.
        assert docs[1].metadata["_row_index"] == 2

    def test_ids_default_to_uuid(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "posts.csv", CSV)
        docs = list(CsvLoader().load(source))
        assert len({d.id for d in docs}) == 2
        assert "1" not in {d.id for d in docs}

    def test_missing_content_column(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "posts.csv", CSV)
        with pytest.raises(InvalidArgumentError, match='Content column "body" not found'):
            list(CsvLoader(content_column="body").load(source))

    def test_options_override_constructor(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "posts.csv", "title;body\nA;alpha\nB;beta\n")
        docs = list(CsvLoader().load(source, {"content_column": "body", "id_column": "title", "delimiter": ";"}))
        assert [(d.id, d.content) for d in docs] == [("A", "alpha"), ("B", "beta")]

    def test_headerless_with_integer_columns(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "rows.csv", "x1,hello there,en\nx2,bonjour,fr\n")
        loader = CsvLoader(content_column=1, id_column=0, metadata_columns=[2], has_header=False)
        docs = list(loader.load(source))

        assert [d.id for d in docs] == ["x1", "x2"]
        assert docs[1].content == "bonjour"
        assert docs[1].metadata["column_2"] == "fr"

    def test_quoted_fields(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "q.csv", 'content\n"Hello, world"\n')
        (doc,) = CsvLoader().load(source)
        assert doc.content == "Hello, world"


# ── LangChainLoader ─────────────────────────────────────────────────────


class FakePageLoader(BaseLoader):
    def __init__(self, path: str) -> None:
        self.path = path

    def lazy_load(self) -> Iterator[Document]:
        yield Document(page_content="Page one", metadata={"source": self.path, "page": 0})
        yield Document(page_content="   ", metadata={"source": self.path, "page": 1})
        yield Document(page_content="Page three", metadata={"page": 2})


class TestLangChainLoader:
    def test_maps_pages_and_metadata(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "doc.pdf", "placeholder")
        docs = list(LangChainLoader(FakePageLoader).load(source))

        assert [d.content for d in docs] == ["Page one", "Page three"]
        assert [d.metadata["page"] for d in docs] == [0, 2]
        assert all(d.metadata.get_source() == source for d in docs)
        assert all("source" not in d.metadata for d in docs)

    def test_loader_errors_become_processing_errors(self, tmp_path: Path) -> None:
        class BrokenLoader(BaseLoader):
            def __init__(self, path: str) -> None:
                self.path = path

            def lazy_load(self) -> Iterator[Document]:
                yield Document(page_content="Page one", metadata={})
                raise ValueError("EOF marker not found")

        source = _write(tmp_path, "broken.pdf", "placeholder")
        docs = LangChainLoader(BrokenLoader).load(source)

        assert next(docs).content == "Page one"
        with pytest.raises(ProcessingError, match="EOF marker not found") as exc_info:
            next(docs)
        assert isinstance(exc_info.value.__cause__, ValueError)


# ── AutoLoader ──────────────────────────────────────────────────────────


class TestAutoLoader:
    def test_dispatches_on_suffix(self, tmp_path: Path) -> None:
        md = _write(tmp_path, "a.md", "# Title\n\nBody")
        csv_source = _write(tmp_path, "b.csv", "content\nrow one\nrow two\n")
        txt = _write(tmp_path, "c.log", "plain text")
        loader = AutoLoader()

        (md_doc,) = loader.load(md)
        assert md_doc.metadata["title"] == "Title"
        assert [d.content for d in loader.load(csv_source)] == ["row one", "row two"]
        assert [d.content for d in loader.load(txt)] == ["plain text"]

    def test_null_source(self) -> None:
        with pytest.raises(InvalidArgumentError):
            AutoLoader().load(None)
