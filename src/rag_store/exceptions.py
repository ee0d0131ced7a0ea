"""Exception hierarchy shared by the ingestion and retrieval layers."""

from __future__ import annotations


class RagStoreError(Exception):
    """Base class for every error raised by :mod:`rag_store`."""


class InvalidArgumentError(RagStoreError, ValueError):
    """Malformed configuration or input shape.

    Raised synchronously where the problem is detected and never retried:
    a bad overlap/chunk-size pair, a non-document in a pipeline stream, a
    vector dimension mismatch, and so on.
    """


class NotFoundError(RagStoreError, LookupError):
    """A requested source (file, URL, …) does not exist."""


class ProcessingError(RagStoreError, RuntimeError):
    """A collaborator failed or broke its contract at runtime."""
