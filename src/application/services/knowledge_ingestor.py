"""
Application service: orchestrates the knowledge base ingestion pipeline.
See docs/CleanArchitecture.md — Application layer for the architectural rationale.

Business decisions owned here:
  - CHUNK_SIZE / CHUNK_OVERLAP: what constitutes a good retrieval chunk.
  - Ingestion flow: load every source → embed and index in one call.

Infrastructure adapters (IDocumentLoader, IVectorStore) are injected; no
imports from langchain, faiss, requests, or any other external library appear here.
"""

import logging

from src.domain.entities.document import Document
from src.domain.ports.document_loader_port import IDocumentLoader
from src.domain.ports.vector_store_port import IVectorStore

logger = logging.getLogger(__name__)


class IngestDocumentsService:
    CHUNK_SIZE: int = 500
    CHUNK_OVERLAP: int = 0

    def __init__(self, loader: IDocumentLoader, vector_store: IVectorStore) -> None:
        self._loader = loader
        self._vector_store = vector_store

    def ingest(self, sources: list[str]) -> list[str]:
        """Run the full ingestion pipeline for a list of URLs or local paths.

        Args:
            sources: List of page URLs or local file paths.

        Returns:
            One id per indexed chunk, in load order.
        """
        all_chunks: list[Document] = []
        for source in sources:
            chunks = self._loader.load(source)
            logger.info("Loaded %d chunks from %s", len(chunks), source)
            all_chunks.extend(chunks)

        return self._vector_store.add_documents(all_chunks)
