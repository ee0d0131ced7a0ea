"""Document filters — drop unwanted documents before they are chunked."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from rag_store.documents import TextDocument
from rag_store.ingestion.base import FilterBase, require_document


class TextContainsFilter(FilterBase):
    """Remove documents whose content contains *needle*.

    Parameters
    ----------
    needle:
        Text that disqualifies a document (e.g. ``"Week of Symfony"``).
    case_sensitive:
        Match case exactly.  Defaults to a case-insensitive match.
    """

    def __init__(self, needle: str, *, case_sensitive: bool = False) -> None:
        self.needle = needle
        self.case_sensitive = case_sensitive

    def filter(
        self,
        documents: Iterable[TextDocument],
        options: Mapping[str, Any] | None = None,
    ) -> Iterator[TextDocument]:
        needle = self.needle if self.case_sensitive else self.needle.lower()
        for item in documents:
            document = require_document(item, "TextContainsFilter")
            content = document.content if self.case_sensitive else document.content.lower()
            if needle not in content:
                yield document


class ChainFilter(FilterBase):
    """Apply several filters in sequence, lazily."""

    def __init__(self, filters: Iterable[FilterBase]) -> None:
        self.filters = list(filters)

    def filter(
        self,
        documents: Iterable[TextDocument],
        options: Mapping[str, Any] | None = None,
    ) -> Iterator[TextDocument]:
        stream: Iterable[TextDocument] = documents
        for f in self.filters:
            stream = f.filter(stream, options)
        return iter(stream)
