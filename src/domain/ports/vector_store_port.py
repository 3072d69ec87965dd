"""
Port (interface) for vector stores.
See docs/CleanArchitecture.md — Domain layer for the architectural rationale.
VectorStoreAdapter implements this interface; use-cases depend only on it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from src.domain.entities.document import Document, ScoredDocument


class IVectorStore(ABC):
    @abstractmethod
    def add_documents(
        self, documents: Sequence[Document], ids: Optional[Sequence[str]] = None
    ) -> list[str]:
        """Embed and index documents, returning one id per document."""
        ...

    @abstractmethod
    def add_vectors(
        self,
        vectors: Sequence[Sequence[float]],
        documents: Sequence[Document],
        ids: Optional[Sequence[str]] = None,
    ) -> list[str]:
        """Index pre-computed vectors with their documents."""
        ...

    @abstractmethod
    def similarity_search_vector_with_score(
        self, query_vector: Sequence[float], k: int = 4, filter: Any = None
    ) -> list[ScoredDocument]:
        """Return up to k documents nearest to *query_vector*, in index ranking order."""
        ...

    @abstractmethod
    def similarity_search_with_score(
        self, query: str, k: int = 4, filter: Any = None
    ) -> list[ScoredDocument]:
        """Embed *query* and return up to k scored documents."""
        ...

    @abstractmethod
    def similarity_search(self, query: str, k: int = 4, filter: Any = None) -> list[Document]:
        """Embed *query* and return up to k documents."""
        ...
