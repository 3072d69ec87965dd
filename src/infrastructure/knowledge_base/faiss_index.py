"""
Infrastructure adapter: FAISS flat inner-product index → IVectorIndexEngine.
See docs/CleanArchitecture.md — Infrastructure layer for the architectural rationale.

All faiss and numpy details are confined here. Vectors are L2-normalised before
they reach FAISS, so scores are cosine similarities (higher is better).
Zero vectors are stored as-is and score 0 against everything.
"""

import logging

import faiss
import numpy as np

from src.domain.entities.document import IndexRecord, IndexSchema, SearchHit, SearchResult
from src.domain.errors import EmbeddingDimensionError
from src.domain.ports.vector_index_port import IVectorIndexEngine, IVectorIndexHandle

logger = logging.getLogger(__name__)


class FAISSIndexHandle(IVectorIndexHandle):
    """One in-memory FAISS index plus the records stored alongside its rows."""

    def __init__(
        self, schema: IndexSchema, name: str, similarity_threshold: float | None = None
    ) -> None:
        self._schema = schema
        self._name = name
        self._similarity_threshold = similarity_threshold
        self._index = faiss.IndexFlatIP(schema.dimension)
        self._records: list[IndexRecord] = []
        self._ids: set[str] = set()

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> IndexSchema:
        return self._schema

    @property
    def count(self) -> int:
        return len(self._records)

    def insert_multiple(self, records: list[IndexRecord], batch_size: int = 500) -> None:
        if not records:
            return
        # Validate the whole call before touching the index.
        rows = np.vstack([self._to_row(record.embedding) for record in records])
        seen: set[str] = set()
        for record in records:
            if record.id in self._ids or record.id in seen:
                raise ValueError(f"Record id {record.id!r} already exists in index {self._name!r}")
            seen.add(record.id)

        for start in range(0, len(records), batch_size):
            self._index.add(rows[start : start + batch_size])
            self._records.extend(records[start : start + batch_size])
        self._ids.update(seen)
        logger.debug("Index %s now holds %d records", self._name, self.count)

    def search_vector(
        self, vector: list[float], property: str, limit: int = 10
    ) -> SearchResult:
        if property != self._schema.vector_field:
            raise ValueError(
                f"Property {property!r} is not a vector field of index {self._name!r}"
            )
        query = self._to_row(vector)
        if not self._records:
            return SearchResult(count=0, hits=[])

        scores, positions = self._index.search(query, len(self._records))
        matches = [
            SearchHit(document=self._records[position], score=float(score))
            for score, position in zip(scores[0], positions[0])
            if position >= 0
            and (self._similarity_threshold is None or score >= self._similarity_threshold)
        ]
        return SearchResult(count=len(matches), hits=matches[: max(limit, 0)])

    def _to_row(self, vector: list[float]) -> np.ndarray:
        row = np.asarray(vector, dtype=np.float32).reshape(1, -1)
        if row.shape[1] != self._schema.dimension:
            raise EmbeddingDimensionError(
                f"Vector dimension {row.shape[1]} does not match index dimension "
                f"{self._schema.dimension}"
            )
        norm = np.linalg.norm(row)
        if norm > 0:
            row = row / norm
        return row


class FAISSIndexEngine(IVectorIndexEngine):
    """Creates FAISS-backed indexes.

    Args:
        similarity_threshold: Minimum cosine similarity for a record to count as
                              a match. None treats every stored record as a match.
    """

    def __init__(self, similarity_threshold: float | None = None) -> None:
        self._similarity_threshold = similarity_threshold

    def create(self, schema: IndexSchema, index_id: str) -> FAISSIndexHandle:
        logger.debug("Creating FAISS index %s with fields %s", index_id, schema.fields)
        return FAISSIndexHandle(schema, index_id, self._similarity_threshold)
