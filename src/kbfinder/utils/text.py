"""Text helpers: keyword extraction and paragraph-aware chunking."""

from __future__ import annotations

import math
import re
from typing import List

# Rough approximation: 1 token is about 4 characters
CHARS_PER_TOKEN = 4

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "were", "will", "with", "what", "how", "why", "when",
        "where", "who", "which", "can", "do", "does", "did", "have", "had",
        "me", "my", "about", "tell", "explain", "describe", "i", "you", "your",
        "this", "these", "those",
    }
)

_NON_WORD_RE = re.compile(r"[^\w\s]", re.ASCII)
_PARAGRAPH_RE = re.compile(r"\n\n+")


def extract_keywords(query: str) -> List[str]:
    """Extract meaningful keywords from a query.

    Repeated words are kept so they weigh more when scoring.
    """
    cleaned = _NON_WORD_RE.sub(" ", query.lower())
    return [word for word in cleaned.split() if len(word) > 2 and word not in STOP_WORDS]


def estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def split_into_chunks(text: str, max_size: int) -> List[str]:
    """Split text into chunks by paragraphs, respecting an approximate token budget.

    Paragraphs are never split, so a paragraph larger than ``max_size`` ends up
    alone in an oversized chunk. When no paragraph survives trimming the
    original text is returned as the only chunk.
    """
    chunks: List[str] = []
    current = ""

    for paragraph in _PARAGRAPH_RE.split(text):
        paragraph = paragraph.strip()
        if not paragraph:
            continue

        if current and estimate_tokens(current) + estimate_tokens(paragraph) > max_size:
            chunks.append(current)
            current = paragraph
        else:
            current = f"{current}\n\n{paragraph}" if current else paragraph

    if current:
        chunks.append(current)

    return chunks or [text]
