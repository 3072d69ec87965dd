"""
Use-case: semantic search over the indexed knowledge base.
See docs/CleanArchitecture.md — Application layer for the architectural rationale.
Depends only on Domain ports and entities — no infrastructure imports.
"""

from src.domain.ports.vector_store_port import IVectorStore


class RetrieveDocumentsUseCase:
    def __init__(self, vector_store: IVectorStore) -> None:
        self._vector_store = vector_store

    def execute(self, query: str, k: int = 4) -> str:
        """Search the vector store and return formatted passages.

        Args:
            query: Natural-language search query.
            k:     Number of top chunks to retrieve.

        Returns:
            Passages with source and score, separated by rules, or an empty
            string if the vector store returns no results.
        """
        results = self._vector_store.similarity_search_with_score(query, k=k)
        if not results:
            return ""
        passages = [
            f"[Source: {r.document.metadata.get('source', 'Unknown')}, Score: {r.score:.4f}]\n"
            f"{r.document.content}"
            for r in results
        ]
        return "\n\n---\n\n".join(passages)
