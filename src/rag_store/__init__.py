"""rag-store — streaming document ingestion and exact vector search."""

__version__ = "0.1.0"
