"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Collection, Iterable, Iterator

DEFAULT_EXTENSIONS = frozenset({".txt", ".md", ".markdown", ".rst", ".text"})


def iter_text_paths(
    inputs: Iterable[Path], extensions: Collection[str] = DEFAULT_EXTENSIONS
) -> Iterator[Path]:
    """Yield text file paths from input paths, descending into directories.

    An empty ``extensions`` collection accepts every file.
    """
    for item in inputs:
        if item.is_dir():
            yield from iter_text_paths(
                sorted(child for child in item.rglob("*") if child.is_file()), extensions
            )
        elif item.is_file() and (not extensions or item.suffix.lower() in extensions):
            yield item
