"""Core KBFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class Document:
    """Loaded document text paired with its citation label."""

    content: str
    citation: str


@dataclass(frozen=True, slots=True)
class DocumentChunk:
    """Paragraph-aligned slice of a document."""

    content: str
    citation: str
    chunk_index: int
    total_chunks: int


@dataclass(slots=True)
class SearchResult:
    content: str
    citation: str
    score: float


@dataclass(slots=True)
class RenderedContext:
    """Annotated context block plus the citations it was built from."""

    content: str
    sources: List[str] = field(default_factory=list)
