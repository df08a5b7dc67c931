import logging

from typer import Argument, Exit, Option, Typer
from typing import Annotated
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import (
    DEFAULT_CODE_MODE,
    is_code_mode,
    resolve_data_dir,
    resolve_mode,
    resolve_text_field,
)
from .corpus.loader import CorpusLoadError, load_corpus
from .embeddings import EmbeddingProvider
from .search import ScoredResult, SearchEngine, SearchError

app = Typer(help="Find similar contest problems by embedding similarity.")
console = Console()


@app.callback()
def configure(
    verbose: Annotated[
        bool,
        Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_engine(data_dir: str | None, *, with_embeddings: bool = False) -> SearchEngine:
    try:
        corpus = load_corpus(resolve_data_dir(data_dir))
    except CorpusLoadError as exc:
        console.print(f"[bold red]Failed to load corpus:[/] {exc}")
        raise Exit(code=1)
    embedding_provider = EmbeddingProvider() if with_embeddings else None
    return SearchEngine(corpus, embedding_provider=embedding_provider)


def render_results(results: list[ScoredResult], *, title: str) -> None:
    if not results:
        console.print("No similar problems found.")
        return
    table = Table(title=title, title_justify="left")
    table.add_column("#", justify="right")
    table.add_column("Problem")
    table.add_column("Title")
    table.add_column("Tags")
    table.add_column("Score", justify="right", style="bold cyan")
    for rank, result in enumerate(results, start=1):
        table.add_row(
            str(rank),
            result.problem.problem_id,
            result.problem.title,
            ", ".join(result.problem.tags),
            f"{result.score:.4f}",
        )
    console.print(table)


@app.command()
def similar(
    problem_id: Annotated[str, Argument(help="Problem to find neighbours for.")],
    mode: Annotated[
        str | None,
        Option("--mode", "-m", help="Embedding field, or a code-prefixed mode to compare solutions."),
    ] = None,
    tag: Annotated[
        list[str] | None,
        Option("--tag", "-t", help="Only keep results carrying this tag (repeatable)."),
    ] = None,
    data_dir: Annotated[
        str | None,
        Option("--data-dir", help="Corpus directory (defaults to PROBLEM_SEARCH_DATA_DIR or ./data)."),
    ] = None,
) -> None:
    """List problems similar to PROBLEM_ID."""
    engine = build_engine(data_dir)
    resolved_mode = resolve_mode(mode)
    try:
        results = engine.search_similar(problem_id, resolved_mode, tags=tag)
    except SearchError as exc:
        console.print(f"[bold red]{exc}[/]")
        raise Exit(code=1)
    render_results(results, title=f"Similar to {problem_id} ({resolved_mode})")


@app.command()
def text(
    query: Annotated[str, Argument(help="Free-text description of a problem.")],
    field: Annotated[
        str | None,
        Option("--field", "-f", help="Problem embedding field to compare against."),
    ] = None,
    tag: Annotated[
        list[str] | None,
        Option("--tag", "-t", help="Only keep results carrying this tag (repeatable)."),
    ] = None,
    data_dir: Annotated[str | None, Option("--data-dir", help="Corpus directory.")] = None,
) -> None:
    """Search problems by embedding free text."""
    engine = build_engine(data_dir, with_embeddings=True)
    resolved_field = resolve_text_field(field)
    try:
        with console.status(status="Embedding query..."):
            results = engine.search_text(query, resolved_field, tags=tag)
    except SearchError as exc:
        console.print(f"[bold red]{exc}[/]")
        raise Exit(code=1)
    render_results(results, title=f"Text search ({resolved_field})")


@app.command()
def suggest(
    query: Annotated[str, Argument(help="Substring of a problem id or title.")],
    limit: Annotated[int, Option("--limit", "-n", help="Maximum suggestions.")] = 10,
    data_dir: Annotated[str | None, Option("--data-dir", help="Corpus directory.")] = None,
) -> None:
    """Suggest problems whose id or title contains QUERY."""
    engine = build_engine(data_dir)
    for problem in engine.corpus.suggest(query, limit=limit):
        console.print(f"[{problem.problem_id}] {problem.title}", markup=False)


@app.command()
def modes(
    data_dir: Annotated[str | None, Option("--data-dir", help="Corpus directory.")] = None,
) -> None:
    """List the comparison modes the loaded corpus supports."""
    engine = build_engine(data_dir)
    for field in engine.corpus.embedding_fields():
        if not is_code_mode(field):
            console.print(field)
    if engine.corpus.has_codes():
        console.print(f"{DEFAULT_CODE_MODE} (via shortest solution code)")
    else:
        console.print("[yellow]code search disabled: no codes loaded[/]")


@app.command()
def serve(
    host: Annotated[str, Option("--host", help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, Option("--port", help="Port to listen on.")] = 8000,
) -> None:
    """Run the HTTP search API."""
    from .server import run_server

    run_server(host=host, port=port)
