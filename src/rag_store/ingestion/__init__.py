"""
Ingestion — document loading, filtering, chunking and embedding into a store.

This module is responsible for the streaming pipeline that turns raw
sources (text, Markdown, CSV, PDF, …) into embedded chunks persisted in a
vector store::

    load → filter → transform (chunk) → batch → vectorize → store.add

Entry points are :class:`~rag_store.ingestion.processor.DocumentProcessor`
and the indexers in :mod:`rag_store.ingestion.indexer`.
"""
