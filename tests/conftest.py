import hashlib

import pytest

from src.domain.entities.document import IndexRecord, IndexSchema, SearchHit, SearchResult
from src.domain.ports.embeddings_port import IEmbeddingsProvider
from src.domain.ports.vector_index_port import IVectorIndexEngine, IVectorIndexHandle
from src.infrastructure.knowledge_base.faiss_index import FAISSIndexEngine


class FakeEmbeddingsProvider(IEmbeddingsProvider):
    """Looks texts up in a table, falling back to a hash-derived vector."""

    def __init__(self, dimension: int = 4, table: dict | None = None) -> None:
        self.dimension = dimension
        self.table = table or {}
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        if text in self.table:
            return list(self.table[text])
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [digest[i % len(digest)] / 255.0 + 0.01 for i in range(self.dimension)]

    def embed_documents(self, texts):
        self.document_calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text):
        self.query_calls.append(text)
        return self._vector(text)


class RecordingIndexHandle(IVectorIndexHandle):
    """Stores records in a list and remembers every bulk insertion call."""

    def __init__(self, schema: IndexSchema, name: str, fail_on_call: int | None = None) -> None:
        self.schema = schema
        self._name = name
        self.records: list[IndexRecord] = []
        self.insert_calls: list[int] = []
        self.search_calls: list[dict] = []
        self._fail_on_call = fail_on_call

    @property
    def name(self) -> str:
        return self._name

    @property
    def count(self) -> int:
        return len(self.records)

    def insert_multiple(self, records, batch_size=500):
        self.insert_calls.append(len(records))
        if self._fail_on_call is not None and len(self.insert_calls) == self._fail_on_call:
            raise ConnectionError("index engine went away")
        self.records.extend(records)

    def search_vector(self, vector, property, limit=10):
        self.search_calls.append({"vector": vector, "property": property, "limit": limit})
        hits = [SearchHit(document=record, score=1.0) for record in self.records]
        return SearchResult(count=len(hits), hits=hits[:limit])


class RecordingIndexEngine(IVectorIndexEngine):
    def __init__(self, fail_on_call: int | None = None) -> None:
        self.created: list[RecordingIndexHandle] = []
        self._fail_on_call = fail_on_call

    def create(self, schema, index_id):
        handle = RecordingIndexHandle(schema, index_id, self._fail_on_call)
        self.created.append(handle)
        return handle


class NullIndexEngine(IVectorIndexEngine):
    def create(self, schema, index_id):
        return None


@pytest.fixture
def embeddings() -> FakeEmbeddingsProvider:
    return FakeEmbeddingsProvider(dimension=4)


@pytest.fixture
def toy_embeddings() -> FakeEmbeddingsProvider:
    return FakeEmbeddingsProvider(
        dimension=2,
        table={"alpha": [1.0, 0.0], "beta": [0.0, 1.0], "gamma": [1.0, 1.0]},
    )


@pytest.fixture
def recording_engine() -> RecordingIndexEngine:
    return RecordingIndexEngine()


@pytest.fixture
def failing_engine() -> RecordingIndexEngine:
    return RecordingIndexEngine(fail_on_call=2)


@pytest.fixture
def null_engine() -> NullIndexEngine:
    return NullIndexEngine()


@pytest.fixture
def faiss_engine() -> FAISSIndexEngine:
    return FAISSIndexEngine()
