"""Context rendering shared by every retrieval backend."""

from __future__ import annotations

from typing import Sequence

from kbfinder.models import RenderedContext, SearchResult


def format_document(content: str, citation: str) -> str:
    return f'<context source="{citation}">\n{content}\n</context>'


def render_results(results: Sequence[SearchResult]) -> RenderedContext:
    """Wrap results in citation-tagged blocks, keeping rank order.

    Citations are collected as-is, so several chunks of one document produce
    repeated sources.
    """
    if not results:
        return RenderedContext(content="", sources=[])

    blocks = [format_document(result.content, result.citation) for result in results]
    return RenderedContext(
        content="\n\n".join(blocks).rstrip(),
        sources=[result.citation for result in results],
    )
