"""
Identifier generation and metadata serialization helpers for the vector store.
See docs/CleanArchitecture.md — Application layer for the architectural rationale.
"""

import json
import uuid
from typing import Any

from src.domain.errors import MetadataDeserializationError

INDEX_NAME_PREFIX = "vectorstore"


def new_id() -> str:
    """Return a fresh random UUID4 string (backed by os.urandom)."""
    return str(uuid.uuid4())


def resolve_index_name(index_name: str | None = None) -> str:
    if not index_name:
        return f"{INDEX_NAME_PREFIX}-{new_id()}"
    return index_name


def serialize_metadata(metadata: dict[str, Any]) -> str:
    return json.dumps(metadata, separators=(",", ":"))


def deserialize_metadata(raw: str) -> dict[str, Any]:
    try:
        metadata = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise MetadataDeserializationError(f"Stored metadata is not valid JSON: {raw!r}") from exc
    if not isinstance(metadata, dict):
        raise MetadataDeserializationError(
            f"Stored metadata must decode to an object, got {type(metadata).__name__}"
        )
    return metadata
