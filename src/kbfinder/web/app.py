"""FastAPI application exposing KBFinder retrieval over HTTP."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from kbfinder.config import AppConfig, RetrievalConfig, SharePointConfig
from kbfinder.index.search import LocalRetriever
from kbfinder.ingestion.loader import load_corpus
from kbfinder.models import RenderedContext, SearchResult

LOGGER = logging.getLogger(__name__)

MAX_TOP_K = 50


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    yield


app = FastAPI(title="KBFinder API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class SearchPayload(BaseModel):
    query: str
    data_dir: Path | None = None
    top_k: int | None = None
    min_score: float | None = None


class ContextPayload(BaseModel):
    query: str
    data_dir: Path | None = None


def _load_config() -> AppConfig:
    try:
        retrieval = RetrievalConfig.from_env()
    except ValueError as exc:
        LOGGER.warning("Invalid retrieval settings in environment, using defaults: %s", exc)
        retrieval = RetrievalConfig()
    return AppConfig(retrieval=retrieval, sharepoint=SharePointConfig.from_env())


def _resolve_data_dir(data_dir: Path | None) -> Path:
    config = _load_config()
    if data_dir is not None:
        config.data_dir = data_dir
    return config.resolve_data_dir(Path.cwd())


def _build_retriever(data_dir: Path, retrieval: RetrievalConfig | None = None) -> LocalRetriever:
    config = _load_config()
    retriever = LocalRetriever("local-kb", retrieval or config.retrieval)
    retriever.load(load_corpus(config, data_dir))
    return retriever


def _require_data_dir(data_dir: Path | None) -> Path:
    resolved = _resolve_data_dir(data_dir)
    if not resolved.is_dir():
        raise HTTPException(
            status_code=404,
            detail=f"Data directory not found at {resolved}. "
            "Add knowledge base files there or pass data_dir explicitly.",
        )
    return resolved


@app.post("/search")
async def search_documents(payload: SearchPayload) -> dict[str, List[SearchResult]]:
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    defaults = _load_config().retrieval
    requested = defaults.top_k if payload.top_k is None else payload.top_k
    top_k = max(1, min(requested, MAX_TOP_K))
    min_score = defaults.min_score if payload.min_score is None else max(payload.min_score, 0.0)

    resolved_dir = _require_data_dir(payload.data_dir)
    retrieval = RetrievalConfig(
        max_chunk_size=defaults.max_chunk_size, top_k=top_k, min_score=min_score
    )
    retriever = _build_retriever(resolved_dir, retrieval)
    results = retriever.search(query)
    LOGGER.info("Search returned %s results from %s", len(results), resolved_dir)
    return {"results": results}


@app.post("/context")
async def render_context(payload: ContextPayload) -> RenderedContext:
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    resolved_dir = _require_data_dir(payload.data_dir)
    retriever = _build_retriever(resolved_dir)
    return retriever.render_context(query)


@app.get("/documents")
async def list_documents(data_dir: Path | None = None) -> dict[str, Any]:
    """List all documents that would be loaded from the data directory."""
    resolved_dir = _resolve_data_dir(data_dir)
    if not resolved_dir.is_dir():
        return {"documents": [], "stats": {"document_count": 0, "chunk_count": 0}}

    retriever = _build_retriever(resolved_dir)
    documents = [
        {"citation": document.citation, "characters": len(document.content)}
        for document in retriever.get_all_documents()
    ]
    return {
        "documents": documents,
        "stats": {"document_count": len(documents), "chunk_count": len(retriever.chunks)},
    }
