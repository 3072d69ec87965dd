from src.domain.entities.document import Document
from src.infrastructure.knowledge_base import ingest


class FakeBedrockEmbeddings:
    def embed_documents(self, texts):
        return [[1.0, float(len(text))] for text in texts]

    def embed_query(self, text):
        return [1.0, float(len(text))]


class FakeLoader:
    def __init__(self, chunk_size, chunk_overlap):
        self.chunk_size = chunk_size

    def load(self, source):
        return [Document(content="decompose", metadata={"source": source})]


def test_parse_args_defaults():
    args = ingest.parse_args([])

    assert args.sources == ingest.PAGE_SOURCES
    assert args.query == ingest.DEFAULT_QUERY
    assert args.k == 4


def test_main_indexes_and_queries(monkeypatch, capsys):
    monkeypatch.setenv("EMBEDDING_DIMENSION", "2")
    monkeypatch.setenv("VECTOR_INDEX_NAME", "cli-index")
    monkeypatch.setattr(ingest, "load_dotenv", lambda: None)
    monkeypatch.setattr(ingest, "build_bedrock_embeddings", lambda dimension: FakeBedrockEmbeddings())
    monkeypatch.setattr(ingest, "WebPageLoader", FakeLoader)

    ingest.main(["page.html", "--query", "decompose", "-k", "1"])

    out = capsys.readouterr().out
    assert "1 chunks indexed in 'cli-index'" in out
    assert "[Source: page.html, Score: 1.0000]\ndecompose" in out
