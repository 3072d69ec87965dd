"""
Ports (interfaces) for embedded vector index engines.
See docs/CleanArchitecture.md — Domain layer for the architectural rationale.
Infrastructure adapters (e.g. FAISSIndexEngine) must implement these interfaces.

Engines own storage layout and distance computation. The vector store only
creates an index, bulk-inserts records and runs vector searches against it.
"""

from abc import ABC, abstractmethod

from src.domain.entities.document import IndexRecord, IndexSchema, SearchResult


class IVectorIndexHandle(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of records currently stored."""
        ...

    @abstractmethod
    def insert_multiple(self, records: list[IndexRecord], batch_size: int = 500) -> None:
        """Insert *records* in bulk. Either every record is stored or an error is raised.

        Raises:
            EmbeddingDimensionError: if any embedding length differs from the schema dimension.
            ValueError: if a record id is already taken.
        """
        ...

    @abstractmethod
    def search_vector(
        self, vector: list[float], property: str, limit: int = 10
    ) -> SearchResult:
        """Return the matching records for *vector*, best first, at most *limit* of them."""
        ...


class IVectorIndexEngine(ABC):
    @abstractmethod
    def create(self, schema: IndexSchema, index_id: str) -> IVectorIndexHandle:
        """Create an empty index named *index_id* with the given schema."""
        ...
