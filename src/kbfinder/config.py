"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

DEFAULT_FOLDER_PATH = "/Shared Documents/KnowledgeBase"


def _get_default_data_dir() -> Path:
    """Get the default document directory for the current execution context."""
    # When running from source, prefer local data/ if it exists
    local_dir = Path("data")
    if local_dir.exists():
        return local_dir

    return Path.home() / "Documents" / "KBFinder" / "data"


@dataclass(frozen=True, slots=True)
class RetrievalConfig:
    max_chunk_size: int = 800
    top_k: int = 3
    min_score: float = 0.1

    def __post_init__(self) -> None:
        if self.max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {self.max_chunk_size}")
        if self.top_k <= 0:
            raise ValueError(f"top_k must be positive, got {self.top_k}")
        if self.min_score < 0:
            raise ValueError(f"min_score must be non-negative, got {self.min_score}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RetrievalConfig":
        env = os.environ if environ is None else environ
        return cls(
            max_chunk_size=int(env.get("RETRIEVAL_CHUNK_SIZE", "800")),
            top_k=int(env.get("RETRIEVAL_TOP_K", "3")),
            min_score=float(env.get("RETRIEVAL_MIN_SCORE", "0.1")),
        )


@dataclass(frozen=True, slots=True)
class SharePointConfig:
    site_url: str | None = None
    folder_path: str = DEFAULT_FOLDER_PATH

    @property
    def enabled(self) -> bool:
        return bool(self.site_url)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SharePointConfig":
        env = os.environ if environ is None else environ
        return cls(
            site_url=env.get("SHAREPOINT_SITE_URL") or None,
            folder_path=env.get("SHAREPOINT_FOLDER_PATH") or DEFAULT_FOLDER_PATH,
        )


@dataclass(slots=True)
class AppConfig:
    data_dir: Path | None = None
    retrieval: RetrievalConfig = field(default_factory=RetrievalConfig)
    sharepoint: SharePointConfig = field(default_factory=SharePointConfig)

    def __post_init__(self) -> None:
        if self.data_dir is None:
            env_dir = os.environ.get("KBFINDER_DATA_DIR")
            self.data_dir = Path(env_dir) if env_dir else _get_default_data_dir()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        data_dir = env.get("KBFINDER_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else _get_default_data_dir(),
            retrieval=RetrievalConfig.from_env(env),
            sharepoint=SharePointConfig.from_env(env),
        )

    def resolve_data_dir(self, base_dir: Path | None = None) -> Path:
        if self.data_dir is None:
            self.data_dir = _get_default_data_dir()
        if Path(self.data_dir).is_absolute() or base_dir is None:
            return Path(self.data_dir)
        return base_dir / self.data_dir
