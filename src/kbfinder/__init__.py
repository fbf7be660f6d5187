"""KBFinder - local lexical retrieval over a small knowledge base."""

from kbfinder.config import AppConfig, RetrievalConfig, SharePointConfig
from kbfinder.index.search import LocalRetriever, RetrievalBackend
from kbfinder.models import Document, DocumentChunk, RenderedContext, SearchResult

__all__ = [
    "AppConfig",
    "Document",
    "DocumentChunk",
    "LocalRetriever",
    "RenderedContext",
    "RetrievalBackend",
    "RetrievalConfig",
    "SearchResult",
    "SharePointConfig",
]

__version__ = "0.1.0"
