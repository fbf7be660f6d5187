"""SharePoint document source.

Only the connection surface exists: ``fetch_documents`` does not talk to
Microsoft Graph yet, so an enabled source initializes with no documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List

from kbfinder.config import SharePointConfig
from kbfinder.index.context import render_results
from kbfinder.models import Document, RenderedContext, SearchResult

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SharePointDocument:
    id: str
    name: str
    web_url: str
    content: str
    last_modified: datetime


class SharePointSource:
    """Retrieve documents stored in a SharePoint folder."""

    def __init__(self, name: str, config: SharePointConfig) -> None:
        self.name = name
        self.config = config
        self._documents: List[SharePointDocument] = []
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def is_enabled(self) -> bool:
        return self.config.enabled

    def init(self) -> None:
        if not self.is_enabled():
            LOGGER.info("SharePoint integration not enabled. Set SHAREPOINT_SITE_URL to enable.")
            return

        try:
            LOGGER.info("Initializing SharePoint connection to: %s", self.config.site_url)
            LOGGER.info("Folder path: %s", self.config.folder_path)
            self._documents = self.fetch_documents()
            self._initialized = True
            LOGGER.info("SharePoint source initialized with %s documents", len(self._documents))
        except Exception as exc:
            LOGGER.error("Failed to initialize SharePoint source: %s", exc)
            raise

    def fetch_documents(self) -> List[SharePointDocument]:
        """List and download the folder contents.

        Authentication and the Graph API calls are not implemented, so nothing
        is returned.
        """
        LOGGER.warning("SharePoint fetching is not implemented; no documents loaded")
        return []

    def search(self, query: str) -> List[SearchResult]:
        if not self._initialized or not self._documents:
            return []

        query_lower = query.lower()
        return [
            SearchResult(content=doc.content, citation=doc.name, score=1.0)
            for doc in self._documents
            if query_lower in doc.content.lower()
        ]

    def render_context(self, query: str) -> RenderedContext:
        return render_results(self.search(query))

    def get_all_documents(self) -> List[SharePointDocument]:
        return list(self._documents)

    def to_documents(self) -> List[Document]:
        """Convert fetched files into records a LocalRetriever can load."""
        return [Document(content=doc.content, citation=doc.name) for doc in self._documents]
