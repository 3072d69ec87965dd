"""
Application service: the vector store adapter.
See docs/CleanArchitecture.md — Application layer for the architectural rationale.

Business decisions owned here:
  - BATCH_SIZE: how many records go into one bulk insertion call.
  - ID strategy: every index record gets a fresh random id. The ids returned to
    the caller are either the caller's own ids or a separate set of fresh ones,
    so they do NOT identify the stored records.
  - Lazy index creation: the backing index is created on the first ingestion
    call and reused afterwards.

The embeddings provider and the index engine are injected through domain ports;
no imports from langchain, faiss or numpy appear here.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence

from src.application.services.identifiers import (
    deserialize_metadata,
    new_id,
    resolve_index_name,
    serialize_metadata,
)
from src.domain.entities.document import Document, IndexRecord, IndexSchema, ScoredDocument
from src.domain.errors import IndexUnavailableError, LengthMismatchError
from src.domain.ports.embeddings_port import IEmbeddingsProvider
from src.domain.ports.vector_index_port import IVectorIndexEngine, IVectorIndexHandle
from src.domain.ports.vector_store_port import IVectorStore

logger = logging.getLogger(__name__)


class VectorStoreAdapter(IVectorStore):
    BATCH_SIZE: int = 500
    DEFAULT_DIMENSION: int = 1536

    def __init__(
        self,
        embeddings: IEmbeddingsProvider,
        engine: IVectorIndexEngine,
        index_name: str | None = None,
        dimension: int = DEFAULT_DIMENSION,
    ) -> None:
        self._embeddings = embeddings
        self._engine = engine
        self._schema = IndexSchema(dimension=dimension)
        self._index_name = resolve_index_name(index_name)
        self._index: IVectorIndexHandle | None = None

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def index(self) -> IVectorIndexHandle | None:
        return self._index

    @property
    def embeddings(self) -> IEmbeddingsProvider:
        return self._embeddings

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add_documents(
        self, documents: Sequence[Document], ids: Optional[Sequence[str]] = None
    ) -> list[str]:
        """Embed all documents in one provider call and index them.

        The backing index is created on the first call.
        """
        self._ensure_index()
        contents = [doc.content for doc in documents]
        vectors = self._embeddings.embed_documents(contents) if contents else []
        return self.add_vectors(vectors, documents, ids=ids)

    def add_vectors(
        self,
        vectors: Sequence[Sequence[float]],
        documents: Sequence[Document],
        ids: Optional[Sequence[str]] = None,
    ) -> list[str]:
        """Insert documents with pre-computed vectors in batches of BATCH_SIZE.

        Returns *ids* verbatim when given, otherwise fresh ids. Neither set is
        written into the index records, which get their own generated ids.

        Raises:
            IndexUnavailableError: if no index has been created yet.
            LengthMismatchError:   if vectors, documents or ids differ in length.
        """
        index = self._require_index()
        if len(vectors) != len(documents):
            raise LengthMismatchError(
                f"Vectors and documents must have the same length "
                f"({len(vectors)} != {len(documents)})"
            )
        if ids is not None and len(ids) != len(documents):
            raise LengthMismatchError(
                f"ids and documents must have the same length ({len(ids)} != {len(documents)})"
            )
        if not documents:
            return []

        total = len(documents)
        # Every document's metadata is serialized before the first insertion.
        metadatas = [serialize_metadata(doc.metadata) for doc in documents]
        full_batches = total // self.BATCH_SIZE
        for batch_no in range(full_batches):
            start = batch_no * self.BATCH_SIZE
            self._insert_batch(index, vectors, documents, metadatas, start, start + self.BATCH_SIZE)
        tail_start = full_batches * self.BATCH_SIZE
        if tail_start < total:
            self._insert_batch(index, vectors, documents, metadatas, tail_start, total)

        logger.info("Indexed %d documents into %s", total, self._index_name)
        if ids is not None:
            return list(ids)
        return [new_id() for _ in range(total)]

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def similarity_search_vector_with_score(
        self, query_vector: Sequence[float], k: int = 4, filter: Any = None
    ) -> list[ScoredDocument]:
        """Return up to *k* documents nearest to *query_vector*.

        Ranking and scores come from the index engine unchanged. *filter* is
        accepted for interface compatibility and not evaluated.
        """
        index = self._require_index()
        result = index.search_vector(
            list(query_vector), property=self._schema.vector_field, limit=k
        )
        logger.debug("Search on %s matched %d records", self._index_name, result.count)
        if result.count == 0:
            return []

        scored: list[ScoredDocument] = []
        for hit in result.hits[: max(min(k, result.count), 0)]:
            metadata = deserialize_metadata(hit.document.metadata)
            document = Document(content=hit.document.content or "", metadata=metadata)
            scored.append(ScoredDocument(document=document, score=hit.score))
        return scored

    def similarity_search_with_score(
        self, query: str, k: int = 4, filter: Any = None
    ) -> list[ScoredDocument]:
        query_vector = self._embeddings.embed_query(query)
        return self.similarity_search_vector_with_score(query_vector, k=k, filter=filter)

    def similarity_search(self, query: str, k: int = 4, filter: Any = None) -> list[Document]:
        return [item.document for item in self.similarity_search_with_score(query, k, filter)]

    # ------------------------------------------------------------------
    # Bulk constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_texts(
        cls,
        texts: Sequence[str],
        metadatas: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None,
        embeddings: IEmbeddingsProvider,
        engine: IVectorIndexEngine,
        **kwargs: Any,
    ) -> "VectorStoreAdapter":
        """Build documents from *texts* and return a populated adapter.

        *metadatas* is either one mapping shared by every text or a sequence
        with one mapping per text.
        """
        if metadatas is None or isinstance(metadatas, Mapping):
            shared = dict(metadatas or {})
            per_text = [dict(shared) for _ in texts]
        else:
            if len(metadatas) != len(texts):
                raise LengthMismatchError(
                    f"metadatas and texts must have the same length "
                    f"({len(metadatas)} != {len(texts)})"
                )
            per_text = [dict(metadata) for metadata in metadatas]
        documents = [
            Document(content=text, metadata=metadata) for text, metadata in zip(texts, per_text)
        ]
        return cls.from_documents(documents, embeddings, engine, **kwargs)

    @classmethod
    def from_documents(
        cls,
        documents: Sequence[Document],
        embeddings: IEmbeddingsProvider,
        engine: IVectorIndexEngine,
        **kwargs: Any,
    ) -> "VectorStoreAdapter":
        instance = cls(embeddings, engine, **kwargs)
        instance.add_documents(documents)
        return instance

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _ensure_index(self) -> IVectorIndexHandle:
        if self._index is None:
            index = self._engine.create(self._schema, self._index_name)
            if index is None:
                raise IndexUnavailableError(
                    f"Index engine did not return a usable index for {self._index_name!r}"
                )
            logger.info(
                "Created vector index %s (dimension=%d)", self._index_name, self._schema.dimension
            )
            self._index = index
        return self._index

    def _require_index(self) -> IVectorIndexHandle:
        if self._index is None:
            raise IndexUnavailableError(
                f"Vector index {self._index_name!r} does not exist — call add_documents() first."
            )
        return self._index

    def _insert_batch(
        self,
        index: IVectorIndexHandle,
        vectors: Sequence[Sequence[float]],
        documents: Sequence[Document],
        metadatas: list[str],
        start: int,
        stop: int,
    ) -> None:
        records = [
            IndexRecord(
                id=new_id(),
                content=documents[i].content,
                embedding=list(vectors[i]),
                metadata=metadatas[i],
            )
            for i in range(start, stop)
        ]
        logger.debug("Inserting records %d-%d into %s", start, stop - 1, self._index_name)
        index.insert_multiple(records, batch_size=self.BATCH_SIZE)
