"""
LangChain @tool wrappers — Infrastructure entrypoint / Composition Root.
See docs/CleanArchitecture.md — Infrastructure layer for the architectural rationale.

The @tool decorator is a LangChain infrastructure concern and must NOT appear
in the application or domain layers. This module binds the retrieval use-case
to a tool callable that agents and chains can call.
"""

from langchain_core.tools import tool

from src.application.use_cases.retrieve_documents import RetrieveDocumentsUseCase
from src.domain.errors import VectorStoreError
from src.domain.ports.vector_store_port import IVectorStore


def create_tools(vector_store: IVectorStore) -> list:
    """Build and return the knowledge base tools with injected use-case dependencies.

    Args:
        vector_store: IVectorStore implementation, already populated (e.g. VectorStoreAdapter).

    Returns:
        List of @tool callables.
    """
    retrieval_uc = RetrieveDocumentsUseCase(vector_store)

    @tool
    def search_knowledge_base(query: str, k: int = 4) -> str:
        """Search the indexed knowledge base for passages relevant to a query.

        Args:
            query: Natural-language question or keywords.
            k:     Maximum number of passages to return.

        Returns:
            Passages annotated with their source and relevance score, or a
            message saying that nothing relevant was found.
        """
        try:
            passages = retrieval_uc.execute(query, k=k)
        except VectorStoreError as exc:
            return f"Knowledge base unavailable: {exc}"
        return passages or "No relevant passages found."

    return [search_knowledge_base]
