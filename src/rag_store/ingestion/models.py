"""Typed option structures for the ingestion pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ChunkOptions(BaseModel):
    """Window configuration for :class:`~rag_store.ingestion.chunker.TextSplitTransformer`.

    Attributes
    ----------
    chunk_size:
        Window width, counted in Unicode code points.
    overlap:
        Code points shared by two consecutive windows.  Must satisfy
        ``0 <= overlap < chunk_size``.
    """

    chunk_size: int = Field(default=1000, description="Window width in code points")
    overlap: int = Field(default=200, description="Code points shared by consecutive windows")


class ProcessingOptions(BaseModel):
    """Per-run options for :meth:`DocumentProcessor.process`.

    Attributes
    ----------
    chunk_size:
        Number of *documents* per vectorize/store flush (not characters).
    platform_options:
        Opaque mapping forwarded verbatim to the vectorizer.
    """

    chunk_size: int = Field(default=50, description="Documents per flushed batch")
    platform_options: dict[str, Any] = Field(default_factory=dict)
