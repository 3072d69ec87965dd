import pytest

from src.domain.entities.document import IndexRecord, IndexSchema
from src.domain.errors import EmbeddingDimensionError
from src.infrastructure.knowledge_base.faiss_index import FAISSIndexEngine, FAISSIndexHandle


def record(record_id: str, embedding: list[float], content: str = "") -> IndexRecord:
    return IndexRecord(id=record_id, content=content or record_id, embedding=embedding, metadata="{}")


@pytest.fixture
def index() -> FAISSIndexHandle:
    return FAISSIndexEngine().create(IndexSchema(dimension=2), "test-index")


def test_create_returns_empty_named_handle(index):
    assert index.name == "test-index"
    assert index.count == 0
    assert index.schema.dimension == 2


def test_search_on_empty_index_reports_no_matches(index):
    result = index.search_vector([1.0, 0.0], property="embedding")

    assert result.count == 0
    assert result.hits == []


def test_hits_are_ranked_by_cosine_similarity(index):
    index.insert_multiple([record("x", [1.0, 0.0]), record("y", [0.0, 3.0]), record("xy", [2.0, 2.0])])

    result = index.search_vector([5.0, 0.0], property="embedding")

    assert result.count == 3
    assert [hit.document.id for hit in result.hits] == ["x", "xy", "y"]
    assert [hit.score for hit in result.hits] == pytest.approx([1.0, 0.7071, 0.0], abs=1e-4)


def test_limit_caps_hits_but_not_count(index):
    index.insert_multiple([record(str(i), [1.0, float(i)]) for i in range(5)])

    result = index.search_vector([1.0, 0.0], property="embedding", limit=2)

    assert result.count == 5
    assert len(result.hits) == 2


def test_similarity_threshold_limits_matches():
    index = FAISSIndexEngine(similarity_threshold=0.8).create(IndexSchema(dimension=2), "strict")
    index.insert_multiple([record("x", [1.0, 0.0]), record("y", [0.0, 1.0])])

    result = index.search_vector([1.0, 0.0], property="embedding")

    assert result.count == 1
    assert result.hits[0].document.id == "x"


def test_batch_size_hint_does_not_change_contents(index):
    index.insert_multiple([record(str(i), [1.0, float(i)]) for i in range(7)], batch_size=3)

    assert index.count == 7


def test_wrong_dimension_rejects_whole_call(index):
    with pytest.raises(EmbeddingDimensionError):
        index.insert_multiple([record("ok", [1.0, 0.0]), record("bad", [1.0, 0.0, 0.0])])

    assert index.count == 0


def test_wrong_query_dimension_raises(index):
    index.insert_multiple([record("x", [1.0, 0.0])])

    with pytest.raises(EmbeddingDimensionError):
        index.search_vector([1.0], property="embedding")


def test_duplicate_ids_are_rejected(index):
    index.insert_multiple([record("x", [1.0, 0.0])])

    with pytest.raises(ValueError):
        index.insert_multiple([record("x", [0.0, 1.0])])
    with pytest.raises(ValueError):
        index.insert_multiple([record("y", [0.0, 1.0]), record("y", [1.0, 1.0])])

    assert index.count == 1


def test_unknown_vector_property_raises(index):
    with pytest.raises(ValueError):
        index.search_vector([1.0, 0.0], property="content")


def test_zero_vector_is_stored(index):
    index.insert_multiple([record("zero", [0.0, 0.0])])

    result = index.search_vector([1.0, 0.0], property="embedding")

    assert result.count == 1
    assert result.hits[0].score == pytest.approx(0.0)
