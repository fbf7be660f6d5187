"""Keyword relevance scoring."""

from __future__ import annotations

import math
import re
from typing import Sequence


def count_occurrences(content: str, keyword: str) -> int:
    """Count whole-word, case-insensitive occurrences of ``keyword``."""
    pattern = re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE | re.ASCII)
    return len(pattern.findall(content))


def calculate_score(content: str, keywords: Sequence[str]) -> float:
    """Score ``content`` against query keywords.

    Each matched keyword adds ``ln(1 + occurrences)``. The sum is weighted by the
    fraction of keywords that matched and divided by ``sqrt(len(keywords))`` so
    long queries do not inflate scores.
    """
    if not keywords:
        return 0.0

    content_lower = content.lower()
    score = 0.0
    matched = 0

    for keyword in keywords:
        occurrences = count_occurrences(content_lower, keyword)
        if occurrences:
            matched += 1
            score += math.log(1 + occurrences)

    coverage = matched / len(keywords)
    return (score * coverage) / math.sqrt(len(keywords))
