"""Command line interface for KBFinder."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from kbfinder.config import AppConfig, RetrievalConfig, SharePointConfig
from kbfinder.index.search import LocalRetriever
from kbfinder.ingestion.loader import load_corpus
from kbfinder.web.app import app as web_app


console = Console()
app = typer.Typer(help="KBFinder - local keyword retrieval for grounding LLM prompts")

_DEFAULTS = RetrievalConfig()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_retriever(
    data_dir: Path | None,
    *,
    chunk_size: int = _DEFAULTS.max_chunk_size,
    top_k: int = _DEFAULTS.top_k,
    min_score: float = _DEFAULTS.min_score,
    recursive: bool = False,
) -> LocalRetriever:
    try:
        retrieval = RetrievalConfig(max_chunk_size=chunk_size, top_k=top_k, min_score=min_score)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    config = AppConfig(
        data_dir=data_dir,
        retrieval=retrieval,
        sharepoint=SharePointConfig.from_env(),
    )
    resolved_dir = config.resolve_data_dir(Path.cwd())
    if not resolved_dir.is_dir():
        raise typer.BadParameter(f"Data directory not found: {resolved_dir}")

    retriever = LocalRetriever("local-kb", config.retrieval)
    retriever.load(load_corpus(config, resolved_dir, recursive=recursive))
    return retriever


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    data_dir: Path = typer.Option(
        None, "--data-dir", envvar="KBFINDER_DATA_DIR", help="Directory with knowledge base files"
    ),
    chunk_size: int = typer.Option(
        _DEFAULTS.max_chunk_size, envvar="RETRIEVAL_CHUNK_SIZE", help="Approximate tokens per chunk"
    ),
    top_k: int = typer.Option(
        _DEFAULTS.top_k, envvar="RETRIEVAL_TOP_K", help="Number of results to display"
    ),
    min_score: float = typer.Option(
        _DEFAULTS.min_score, envvar="RETRIEVAL_MIN_SCORE", help="Minimum relevance score"
    ),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Walk subdirectories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run a keyword search over the knowledge base."""
    _setup_logging(verbose)
    retriever = _build_retriever(
        data_dir, chunk_size=chunk_size, top_k=top_k, min_score=min_score, recursive=recursive
    )

    results = retriever.search(query)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Source")
    table.add_column("Snippet")

    for result in results:
        snippet = result.content.replace("\n", " ")
        table.add_row(f"{result.score:.4f}", result.citation, snippet[:180])

    console.print(table)


@app.command()
def context(
    query: str = typer.Argument(..., help="Query text"),
    data_dir: Path = typer.Option(
        None, "--data-dir", envvar="KBFINDER_DATA_DIR", help="Directory with knowledge base files"
    ),
    chunk_size: int = typer.Option(
        _DEFAULTS.max_chunk_size, envvar="RETRIEVAL_CHUNK_SIZE", help="Approximate tokens per chunk"
    ),
    top_k: int = typer.Option(
        _DEFAULTS.top_k, envvar="RETRIEVAL_TOP_K", help="Number of blocks to include"
    ),
    min_score: float = typer.Option(
        _DEFAULTS.min_score, envvar="RETRIEVAL_MIN_SCORE", help="Minimum relevance score"
    ),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Walk subdirectories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the citation-tagged context block for a query."""
    _setup_logging(verbose)
    retriever = _build_retriever(
        data_dir, chunk_size=chunk_size, top_k=top_k, min_score=min_score, recursive=recursive
    )

    rendered = retriever.render_context(query)
    if not rendered.content:
        console.print("[yellow]No context found.[/yellow]")
        return

    console.print(rendered.content, markup=False, highlight=False)
    console.print(f"Sources: {', '.join(rendered.sources)}", markup=False)


@app.command()
def documents(
    data_dir: Path = typer.Option(
        None, "--data-dir", envvar="KBFINDER_DATA_DIR", help="Directory with knowledge base files"
    ),
    chunk_size: int = typer.Option(
        _DEFAULTS.max_chunk_size, envvar="RETRIEVAL_CHUNK_SIZE", help="Approximate tokens per chunk"
    ),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Walk subdirectories"),
) -> None:
    """List loaded documents and how they were chunked."""
    retriever = _build_retriever(data_dir, chunk_size=chunk_size, recursive=recursive)

    loaded = retriever.get_all_documents()
    if not loaded:
        console.print("[yellow]No documents loaded.[/yellow]")
        return

    chunk_counts: dict[str, int] = {}
    for chunk in retriever.chunks:
        chunk_counts[chunk.citation] = chunk.total_chunks

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Citation")
    table.add_column("Chunks")
    table.add_column("Characters")
    for document in loaded:
        table.add_row(
            document.citation,
            str(chunk_counts.get(document.citation, 0)),
            str(len(document.content)),
        )
    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting API on http://{host}:{port} (data: {AppConfig().data_dir})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    app()
