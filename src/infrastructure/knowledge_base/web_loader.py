"""
Infrastructure adapter: HTML page (URL or path) → IDocumentLoader.
See docs/CleanArchitecture.md — Infrastructure layer for the architectural rationale.

Responsibilities confined here:
  - HTTP download and local caching of HTML pages.
  - HTML parsing via BSHTMLLoader (LangChain community, BeautifulSoup).
  - Text splitting via RecursiveCharacterTextSplitter.

Chunking parameters (CHUNK_SIZE / CHUNK_OVERLAP) are injected from
IngestDocumentsService so the business decision remains in the application layer.
"""

import hashlib
import logging
import os
from urllib.parse import urlparse

import requests
from langchain_community.document_loaders import BSHTMLLoader
from langchain_text_splitters import RecursiveCharacterTextSplitter

from src.domain.entities.document import Document
from src.domain.ports.document_loader_port import IDocumentLoader

logger = logging.getLogger(__name__)


class WebPageLoader(IDocumentLoader):
    """Downloads HTML pages, extracts their text, and returns pre-chunked Documents."""

    _DOWNLOAD_DIR = "data/pages"

    def __init__(
        self,
        chunk_size: int = 500,
        chunk_overlap: int = 0,
        download_dir: str | None = None,
    ) -> None:
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )
        self._download_dir = download_dir or self._DOWNLOAD_DIR

    def load(self, source: str) -> list[Document]:
        """Load a page from a URL or local path and return chunked Documents."""
        local_path = self._resolve(source)
        pages = BSHTMLLoader(
            local_path,
            open_encoding="utf-8",
            bs_kwargs={"features": "html.parser"},
        ).load()
        lc_chunks = self._splitter.split_documents(pages)
        return [
            Document(
                content=chunk.page_content,
                metadata={
                    "source": source,
                    "title": chunk.metadata.get("title", ""),
                    "chunk_id": idx,
                },
            )
            for idx, chunk in enumerate(lc_chunks)
        ]

    def _resolve(self, source: str) -> str:
        if source.startswith("http://") or source.startswith("https://"):
            return self._download(source)
        return source

    def _download(self, url: str) -> str:
        os.makedirs(self._download_dir, exist_ok=True)
        local_path = os.path.join(self._download_dir, self._filename(url))
        if not os.path.exists(local_path):
            logger.info("Downloading %s", url)
            response = requests.get(url, timeout=120)
            response.raise_for_status()
            with open(local_path, "wb") as fh:
                fh.write(response.content)
            logger.info("Saved to %s", local_path)
        return local_path

    @staticmethod
    def _filename(url: str) -> str:
        parsed = urlparse(url)
        segments = [parsed.netloc] + [part for part in parsed.path.split("/") if part]
        name = "_".join(segments)
        if parsed.query:
            name = f"{name}_{hashlib.sha256(parsed.query.encode('utf-8')).hexdigest()[:12]}"
        if not name.endswith((".html", ".htm")):
            name = f"{name}.html"
        return name
