"""
Port (interface) for document loaders.
See docs/CleanArchitecture.md — Domain layer for the architectural rationale.
Infrastructure adapters (e.g. WebPageLoader) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.document import Document


class IDocumentLoader(ABC):
    @abstractmethod
    def load(self, source: str) -> list[Document]:
        """Load and chunk a document from a URL or local path."""
        ...
