"""
Error taxonomy for the vector store.
See docs/CleanArchitecture.md — Domain layer for the architectural rationale.

Failures raised by the embeddings provider or the index engine are not part of
this taxonomy: they propagate to the caller unmodified.
"""


class VectorStoreError(Exception):
    """Base class for errors raised by the vector store itself."""


class IndexUnavailableError(VectorStoreError, RuntimeError):
    """An operation needed the backing index before one was created."""


class LengthMismatchError(VectorStoreError, ValueError):
    """Parallel inputs (vectors, documents, ids, metadatas) differ in length."""


class MetadataDeserializationError(VectorStoreError, ValueError):
    """Stored metadata could not be decoded back into a mapping."""


class EmbeddingDimensionError(VectorStoreError, ValueError):
    """A vector does not match the index's fixed embedding dimension."""
