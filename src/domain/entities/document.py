"""
Domain entities for documents and their on-index representation.
See docs/CleanArchitecture.md — Domain layer for the architectural rationale.
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Document:
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScoredDocument:
    document: Document
    score: float


@dataclass(frozen=True)
class IndexRecord:
    """A single stored unit: id, raw content, embedding and serialized metadata."""

    id: str
    content: str
    embedding: list[float]
    metadata: str


@dataclass(frozen=True)
class IndexSchema:
    dimension: int
    id_field: str = "id"
    content_field: str = "content"
    vector_field: str = "embedding"
    metadata_field: str = "metadata"

    def __post_init__(self) -> None:
        if self.dimension <= 0:
            raise ValueError(f"Embedding dimension must be positive, got {self.dimension}")

    @property
    def fields(self) -> dict[str, str]:
        return {
            self.id_field: "string",
            self.content_field: "string",
            self.vector_field: f"vector[{self.dimension}]",
            self.metadata_field: "string",
        }


@dataclass(frozen=True)
class SearchHit:
    document: IndexRecord
    score: float


@dataclass(frozen=True)
class SearchResult:
    count: int
    hits: list[SearchHit]
