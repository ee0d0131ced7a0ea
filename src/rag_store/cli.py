"""Command-line entry point.

Index files::

    rag-store index docs/*.md --chunk-size 800 --overlap 100

Query a persistent backend (``STORE_BACKEND=chroma`` or ``meilisearch``)::

    rag-store query "How is overlap applied?" -k 5

The ``memory`` backend only lives for the duration of one command, so
``query`` is only meaningful against a remote backend.
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from rag_store.config import settings
from rag_store.factory import build_processor, build_store
from rag_store.ingestion.filters import TextContainsFilter
from rag_store.ingestion.indexer import SourceIndexer
from rag_store.ingestion.loader import AutoLoader
from rag_store.ingestion.models import ProcessingOptions
from rag_store.ingestion.vectorizer import EmbeddingsVectorizer
from rag_store.retrieval.retriever import Retriever

log = logging.getLogger("rag_store")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rag-store", description="Ingest documents into a vector store")
    sub = parser.add_subparsers(dest="command", required=True)

    index = sub.add_parser("index", help="Load, chunk, embed and store files")
    index.add_argument("sources", nargs="+", help="File paths (.txt, .md, .csv, .pdf)")
    index.add_argument("--batch-size", type=int, default=settings.batch_size, help="Documents per flush")
    index.add_argument("--chunk-size", type=int, default=settings.chunk_size, help="Characters per chunk")
    index.add_argument("--overlap", type=int, default=settings.chunk_overlap, help="Characters shared by chunks")
    index.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="TEXT",
        help="Skip documents containing TEXT (repeatable)",
    )

    query = sub.add_parser("query", help="Rank stored chunks against a text query")
    query.add_argument("text", help="Natural-language query")
    query.add_argument("-k", type=int, default=5, help="Number of results")
    return parser


def _run_index(args: argparse.Namespace) -> None:
    cfg = settings.model_copy(update={"chunk_size": args.chunk_size, "chunk_overlap": args.overlap})
    store = build_store(cfg)
    store.initialize()
    processor = build_processor(
        cfg,
        store=store,
        filters=[TextContainsFilter(text) for text in args.exclude],
    )
    SourceIndexer(AutoLoader(), processor).index(args.sources, ProcessingOptions(chunk_size=args.batch_size))
    log.info("Indexed %d source(s)", len(args.sources))


def _run_query(args: argparse.Namespace) -> None:
    retriever = Retriever(EmbeddingsVectorizer(), build_store())
    for rank, doc in enumerate(retriever.retrieve(args.text, max_items=args.k), 1):
        text = (doc.metadata.get_text() or "").replace("\n", " ")
        score = f"{doc.score:.4f}" if doc.score is not None else "-"
        print(f"{rank:>2}. [{score}] {doc.metadata.get_source() or doc.id}: {text[:100]}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper())

    if args.command == "index":
        _run_index(args)
    else:
        _run_query(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
