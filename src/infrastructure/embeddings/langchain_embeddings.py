"""
Infrastructure adapter: LangChain Embeddings (e.g. Bedrock Titan) → IEmbeddingsProvider.
See docs/CleanArchitecture.md — Infrastructure layer for the architectural rationale.

Any langchain_core Embeddings implementation can back the vector store;
build_bedrock_embeddings() wires the default Amazon Titan Text Embeddings v2 model.
"""

import os

from langchain_aws import BedrockEmbeddings
from langchain_core.embeddings import Embeddings

from src.domain.ports.embeddings_port import IEmbeddingsProvider

DEFAULT_EMBEDDING_MODEL_ID = "amazon.titan-embed-text-v2:0"
DEFAULT_EMBEDDING_DIMENSION = 1024


class LangChainEmbeddingsProvider(IEmbeddingsProvider):
    """Wraps a LangChain Embeddings object and exposes the IEmbeddingsProvider interface."""

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings

    @property
    def embeddings(self) -> Embeddings:
        return self._embeddings

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return self._embeddings.embed_documents(list(texts))

    def embed_query(self, text: str) -> list[float]:
        return self._embeddings.embed_query(text)


def embedding_dimension() -> int:
    return int(os.environ.get("EMBEDDING_DIMENSION", DEFAULT_EMBEDDING_DIMENSION))


def build_bedrock_embeddings(
    model_id: str | None = None, dimension: int | None = None
) -> BedrockEmbeddings:
    """Build BedrockEmbeddings from arguments, falling back to environment configuration."""
    return BedrockEmbeddings(
        model_id=model_id or os.environ.get("EMBEDDING_MODEL_ID", DEFAULT_EMBEDDING_MODEL_ID),
        region_name=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        model_kwargs={"dimensions": dimension or embedding_dimension()},
    )
