"""
Infrastructure adapter: VectorStoreAdapter → LangChain VectorStore.
See docs/CleanArchitecture.md — Infrastructure layer for the architectural rationale.

Lets the indexed store plug into LangChain retrievers and chains. Document
conversion between langchain_core and the domain happens here, so the
application layer never imports langchain.
"""

from typing import Any, Callable, Iterable, Optional

from langchain_core.documents import Document as LCDocument
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import VectorStore

from src.application.services.vector_store_adapter import VectorStoreAdapter
from src.domain.entities.document import Document, ScoredDocument
from src.domain.errors import LengthMismatchError
from src.domain.ports.vector_index_port import IVectorIndexEngine
from src.infrastructure.embeddings.langchain_embeddings import LangChainEmbeddingsProvider
from src.infrastructure.knowledge_base.faiss_index import FAISSIndexEngine


class IndexedVectorStore(VectorStore):
    """LangChain VectorStore backed by VectorStoreAdapter and, by default, FAISS."""

    def __init__(
        self,
        embedding: Embeddings,
        engine: IVectorIndexEngine | None = None,
        index_name: str | None = None,
        dimension: int = VectorStoreAdapter.DEFAULT_DIMENSION,
    ) -> None:
        self._embedding = embedding
        self._adapter = VectorStoreAdapter(
            LangChainEmbeddingsProvider(embedding),
            engine or FAISSIndexEngine(),
            index_name=index_name,
            dimension=dimension,
        )

    @property
    def embeddings(self) -> Embeddings:
        return self._embedding

    @property
    def adapter(self) -> VectorStoreAdapter:
        return self._adapter

    @property
    def index_name(self) -> str:
        return self._adapter.index_name

    def add_texts(
        self,
        texts: Iterable[str],
        metadatas: Optional[list[dict]] = None,
        *,
        ids: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> list[str]:
        texts = list(texts)
        metadatas = metadatas or [{} for _ in texts]
        if len(metadatas) != len(texts):
            raise LengthMismatchError(
                f"metadatas and texts must have the same length ({len(metadatas)} != {len(texts)})"
            )
        documents = [
            Document(content=text, metadata=dict(metadata))
            for text, metadata in zip(texts, metadatas)
        ]
        return self._adapter.add_documents(documents, ids=ids)

    def similarity_search(self, query: str, k: int = 4, **kwargs: Any) -> list[LCDocument]:
        return [doc for doc, _ in self.similarity_search_with_score(query, k=k, **kwargs)]

    def similarity_search_with_score(
        self, query: str, k: int = 4, **kwargs: Any
    ) -> list[tuple[LCDocument, float]]:
        embedding = self._embedding.embed_query(query)
        return self.similarity_search_by_vector_with_score(embedding, k=k, **kwargs)

    def similarity_search_by_vector(
        self, embedding: list[float], k: int = 4, **kwargs: Any
    ) -> list[LCDocument]:
        return [doc for doc, _ in self.similarity_search_by_vector_with_score(embedding, k, **kwargs)]

    def similarity_search_by_vector_with_score(
        self, embedding: list[float], k: int = 4, filter: Any = None, **kwargs: Any
    ) -> list[tuple[LCDocument, float]]:
        results = self._adapter.similarity_search_vector_with_score(embedding, k=k, filter=filter)
        return [(self._to_lc_doc(item), item.score) for item in results]

    def _select_relevance_score_fn(self) -> Callable[[float], float]:
        # Scores are cosine similarities in [-1, 1].
        return lambda score: (score + 1.0) / 2.0

    @classmethod
    def from_texts(
        cls,
        texts: list[str],
        embedding: Embeddings,
        metadatas: Optional[list[dict]] = None,
        *,
        ids: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> "IndexedVectorStore":
        store = cls(embedding, **kwargs)
        store.add_texts(texts, metadatas, ids=ids)
        return store

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_lc_doc(item: ScoredDocument) -> LCDocument:
        return LCDocument(
            page_content=item.document.content,
            metadata=dict(item.document.metadata),
        )
