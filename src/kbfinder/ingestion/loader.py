"""Local document loading.

Files are read as UTF-8 text. Failures are logged and skipped so a broken
entry never aborts the whole load.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from kbfinder.config import AppConfig
from kbfinder.models import Document
from kbfinder.sources.sharepoint import SharePointSource
from kbfinder.utils.files import iter_text_paths

LOGGER = logging.getLogger(__name__)


def read_document(path: Path, citation: str | None = None) -> Optional[Document]:
    """Read a single file into a Document, or None if it cannot be read."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Error reading file %s: %s", path.name, exc)
        return None
    return Document(content=content.strip(), citation=citation or path.name)


def _iter_entries(data_dir: Path, recursive: bool) -> Iterable[tuple[Path, str]]:
    if recursive:
        for path in iter_text_paths([data_dir]):
            yield path, path.relative_to(data_dir).as_posix()
        return
    for path in sorted(data_dir.iterdir()):
        if path.is_file():
            yield path, path.name


def load_documents(data_dir: Path, *, recursive: bool = False) -> List[Document]:
    """Load all non-empty documents found under ``data_dir``.

    By default every file directly inside the directory is read and cited by
    its file name. With ``recursive`` the tree is walked for known text
    extensions and citations are paths relative to ``data_dir``.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        LOGGER.warning("Data directory not found: %s", data_dir)
        return []

    documents: List[Document] = []
    for path, citation in _iter_entries(data_dir, recursive):
        document = read_document(path, citation)
        if document is None or not document.content:
            LOGGER.debug("Skipping empty document %s", citation)
            continue
        documents.append(document)
    return documents


def load_corpus(config: AppConfig, data_dir: Path, *, recursive: bool = False) -> List[Document]:
    """Collect local documents plus any fetched by an enabled SharePoint source."""
    documents = load_documents(data_dir, recursive=recursive)
    sharepoint = SharePointSource("sharepoint-kb", config.sharepoint)
    if sharepoint.is_enabled():
        sharepoint.init()
        documents.extend(sharepoint.to_documents())
    return documents
