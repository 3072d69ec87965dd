"""
CLI entry point for the knowledge base ingestion pipeline.
See docs/CleanArchitecture.md — Infrastructure layer for the architectural rationale.

This script is the Composition Root for the ingestion use-case: it wires
infrastructure adapters (WebPageLoader, Bedrock embeddings, FAISSIndexEngine)
to the VectorStoreAdapter and IngestDocumentsService, indexes the pages, and
runs one retrieval query against the fresh index.

Run locally:

    export AWS_PROFILE=<your-profile>
    export AWS_DEFAULT_REGION=us-east-1
    python -m src.infrastructure.knowledge_base.ingest --query "What is task decomposition?"
"""

import argparse
import logging
import os

from dotenv import load_dotenv

from src.application.services.knowledge_ingestor import IngestDocumentsService
from src.application.services.vector_store_adapter import VectorStoreAdapter
from src.application.use_cases.retrieve_documents import RetrieveDocumentsUseCase
from src.infrastructure.embeddings.langchain_embeddings import (
    LangChainEmbeddingsProvider,
    build_bedrock_embeddings,
    embedding_dimension,
)
from src.infrastructure.knowledge_base.faiss_index import FAISSIndexEngine
from src.infrastructure.knowledge_base.web_loader import WebPageLoader

PAGE_SOURCES = [
    "https://lilianweng.github.io/posts/2023-06-23-agent/",
]

DEFAULT_QUERY = "What is task decomposition?"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index web pages and query them.")
    parser.add_argument("sources", nargs="*", default=PAGE_SOURCES, help="Page URLs or paths.")
    parser.add_argument("--query", default=DEFAULT_QUERY, help="Question to ask the index.")
    parser.add_argument("-k", type=int, default=4, help="Number of passages to retrieve.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)

    dimension = embedding_dimension()
    vector_store = VectorStoreAdapter(
        LangChainEmbeddingsProvider(build_bedrock_embeddings(dimension=dimension)),
        FAISSIndexEngine(),
        index_name=os.environ.get("VECTOR_INDEX_NAME"),
        dimension=dimension,
    )
    loader = WebPageLoader(
        chunk_size=IngestDocumentsService.CHUNK_SIZE,
        chunk_overlap=IngestDocumentsService.CHUNK_OVERLAP,
    )
    service = IngestDocumentsService(loader=loader, vector_store=vector_store)

    ids = service.ingest(sources=args.sources)
    print(f"\nIngestion complete — {len(ids)} chunks indexed in '{vector_store.index_name}'.")

    passages = RetrieveDocumentsUseCase(vector_store).execute(args.query, k=args.k)
    print(f"\nQuery: {args.query}\n")
    print(passages or "No relevant passages found.")


if __name__ == "__main__":
    main()
