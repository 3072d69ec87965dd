"""
Port (interface) for embeddings providers.
See docs/CleanArchitecture.md — Domain layer for the architectural rationale.
Infrastructure adapters (e.g. LangChainEmbeddingsProvider) must implement this interface.
"""

from abc import ABC, abstractmethod


class IEmbeddingsProvider(ABC):
    @abstractmethod
    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Return one vector per text, in the same order."""
        ...

    @abstractmethod
    def embed_query(self, text: str) -> list[float]:
        """Return the vector for a single search query."""
        ...
