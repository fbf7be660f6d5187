"""Keyword search over locally loaded documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Protocol, Sequence, Tuple

from kbfinder.config import RetrievalConfig
from kbfinder.index.chunker import chunk_documents
from kbfinder.index.context import render_results
from kbfinder.index.scoring import calculate_score
from kbfinder.ingestion.loader import load_documents
from kbfinder.models import Document, DocumentChunk, RenderedContext, SearchResult
from kbfinder.utils.text import extract_keywords

LOGGER = logging.getLogger(__name__)

# Score reported for the whole-document fallback when a query has no keywords
FALLBACK_SCORE = 0.5


class RetrievalBackend(Protocol):
    """Anything that can answer queries with scored, cited snippets."""

    name: str

    def search(self, query: str) -> List[SearchResult]: ...

    def render_context(self, query: str) -> RenderedContext: ...

    def get_all_documents(self) -> Sequence[object]: ...


class LocalRetriever:
    """High-level API to search an in-memory document store."""

    def __init__(self, name: str, config: RetrievalConfig | None = None) -> None:
        self.name = name
        self.config = config or RetrievalConfig()
        self._documents: Tuple[Document, ...] = ()
        self._chunks: Tuple[DocumentChunk, ...] = ()

    @property
    def chunks(self) -> Tuple[DocumentChunk, ...]:
        return self._chunks

    def init(self, data_dir: Path, *, recursive: bool = False) -> None:
        """Load every document from ``data_dir``, replacing the current store."""
        self.load(load_documents(data_dir, recursive=recursive))

    def load(self, documents: Iterable[Document]) -> None:
        """Replace the document store and rebuild all chunks."""
        documents = tuple(documents)
        chunks = tuple(chunk_documents(documents, self.config.max_chunk_size))
        self._documents, self._chunks = documents, chunks
        LOGGER.info("Loaded %s documents (%s chunks) into %s", len(documents), len(chunks), self.name)

    def search(self, query: str) -> List[SearchResult]:
        if not query:
            return []

        keywords = extract_keywords(query)
        if not keywords:
            if not self._documents:
                return []
            first = self._documents[0]
            LOGGER.debug("No keywords in %r, falling back to %s", query, first.citation)
            return [SearchResult(content=first.content, citation=first.citation, score=FALLBACK_SCORE)]

        # TODO: precompute per-chunk token frequencies if corpora outgrow regex scanning
        scored = [(chunk, calculate_score(chunk.content, keywords)) for chunk in self._chunks]
        relevant = [item for item in scored if item[1] >= self.config.min_score]
        relevant.sort(key=lambda item: item[1], reverse=True)

        return [
            SearchResult(content=chunk.content, citation=chunk.citation, score=score)
            for chunk, score in relevant[: self.config.top_k]
        ]

    def render_context(self, query: str) -> RenderedContext:
        return render_results(self.search(query))

    def get_all_documents(self) -> List[Document]:
        return list(self._documents)
