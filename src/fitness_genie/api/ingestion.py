"""
Adding websites and files to a knowledge base.

Two modes, picked explicitly through FITNESS_GENIE_INGESTION_MODE:

- mock: nothing is fetched or read. A placeholder passage naming the URL or
  path and the category is indexed instead, as one chunk.
- live: the page is downloaded (or the text file read), markup is stripped,
  and the text is split into word-bounded chunks.
"""

import html
import itertools
import logging
import re
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

import requests

from fitness_genie.api.knowledge import KnowledgeBase
from fitness_genie.sdk.errors import IngestionError

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "fitness"
WORDS_PER_CHUNK = 200
FETCH_TIMEOUT = 10

TEXT_SUFFIXES = {".txt", ".md", ".markdown", ".rst", ".html", ".htm"}

_SCRIPT_STYLE = re.compile(r"<(script|style)\b.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]+>")


class KnowledgeIngestor:
    """Turns websites and files into documents of a knowledge base."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        mode: str = "mock",
        session: Optional[requests.Session] = None,
    ):
        if mode not in ("mock", "live"):
            raise ValueError(f"Invalid ingestion mode '{mode}'. Must be 'mock' or 'live'")
        self.knowledge_base = knowledge_base
        self.mode = mode
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    @property
    def is_mock(self) -> bool:
        return self.mode == "mock"

    def add_website(self, url: str, category: str = DEFAULT_CATEGORY) -> int:
        """
        Index a web page.

        Returns:
            Number of chunks added

        Raises:
            IngestionError: If the URL is invalid or the page can't be fetched
        """
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise IngestionError(f"Invalid URL: {url!r}")
        source = f"website_{parsed.hostname}"

        if self.is_mock:
            content = (
                f"Content from {url} about {category}. This would contain the actual "
                "website content in a real implementation."
            )
            return self._index([content], category, source, "web")

        try:
            response = self._session.get(url, timeout=FETCH_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise IngestionError(f"Could not fetch {url}: {e}") from e

        return self._index(chunk_text(html_to_text(response.text)), category, source, "web")

    def add_file(self, file_path: str, category: str = DEFAULT_CATEGORY) -> int:
        """
        Index a local text file.

        Returns:
            Number of chunks added

        Raises:
            IngestionError: If the file type is unsupported or unreadable
        """
        if not file_path or not file_path.strip():
            raise IngestionError("file_path is required")
        path = Path(file_path).expanduser()
        source = f"file_{path.name}"

        if self.is_mock:
            content = (
                f"Content from file {file_path} in category {category}. "
                "This would contain the actual file content."
            )
            return self._index([content], category, source, "file")

        if path.suffix.lower() not in TEXT_SUFFIXES:
            raise IngestionError(
                f"Unsupported file type '{path.suffix}'. "
                f"Supported: {', '.join(sorted(TEXT_SUFFIXES))}"
            )
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise IngestionError(f"Could not read {path}: {e}") from e

        if path.suffix.lower() in (".html", ".htm"):
            text = html_to_text(text)
        return self._index(chunk_text(text), category, source, "file")

    def _index(self, chunks: List[str], category: str, source: str, prefix: str) -> int:
        if not chunks:
            raise IngestionError(f"No text content found in {source}")
        for chunk in chunks:
            self.knowledge_base.add_document(
                chunk, category, source, doc_id=f"{prefix}_{next(self._ids)}",
            )
        logger.info(f"Indexed {len(chunks)} chunk(s) from {source} ({self.mode} mode)")
        return len(chunks)


def html_to_text(markup: str) -> str:
    """Visible text of an HTML document, whitespace collapsed."""
    text = _SCRIPT_STYLE.sub(" ", markup)
    text = _TAG.sub(" ", text)
    return " ".join(html.unescape(text).split())


def chunk_text(text: str, words_per_chunk: int = WORDS_PER_CHUNK) -> List[str]:
    """Split text into chunks of at most words_per_chunk words."""
    words = text.split()
    return [
        " ".join(words[i:i + words_per_chunk])
        for i in range(0, len(words), words_per_chunk)
    ]
