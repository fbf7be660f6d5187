"""Document chunking pipeline."""

from __future__ import annotations

from typing import Iterable, List

from kbfinder.models import Document, DocumentChunk
from kbfinder.utils.text import split_into_chunks


def chunk_documents(documents: Iterable[Document], max_chunk_size: int) -> List[DocumentChunk]:
    """Split every document into chunks, keeping document order."""
    chunks: List[DocumentChunk] = []
    for document in documents:
        parts = split_into_chunks(document.content, max_chunk_size)
        total = len(parts)
        for index, part in enumerate(parts):
            chunks.append(
                DocumentChunk(
                    content=part,
                    citation=document.citation,
                    chunk_index=index,
                    total_chunks=total,
                )
            )
    return chunks
