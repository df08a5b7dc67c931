"""
FastAPI server exposing problem similarity search.

The corpus is loaded once per process from the configured data directory;
searches are pure functions of that snapshot and need no locking.
"""

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import (
    DEFAULT_CODE_MODE,
    is_code_mode,
    resolve_data_dir,
    resolve_mode,
    resolve_text_field,
)
from .corpus.loader import load_corpus
from .embeddings import EmbeddingProvider
from .search import (
    EmbeddingUnavailableError,
    InvalidQueryError,
    MissingVectorError,
    ScoredResult,
    SearchEngine,
    UnknownProblemError,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="ProblemSearch", description="Similar contest problem search")

_engine: SearchEngine | None = None


def get_engine() -> SearchEngine:
    """Return the process-wide engine, loading the corpus on first use."""
    global _engine
    if _engine is None:
        corpus = load_corpus(resolve_data_dir())
        _engine = SearchEngine(corpus, embedding_provider=EmbeddingProvider())
        logger.info("Search engine ready with %d problems", len(corpus))
    return _engine


def set_engine(engine: SearchEngine | None) -> None:
    """Replace the process-wide engine (None forces a reload)."""
    global _engine
    _engine = engine


class SimilarRequest(BaseModel):
    """Request model for similar-problem search."""

    problem_id: str
    mode: str | None = None
    tags: list[str] = Field(default_factory=list)


class TextRequest(BaseModel):
    """Request model for free-text search."""

    text: str
    field: str | None = None
    tags: list[str] = Field(default_factory=list)


def _serialize(mode: str, results: list[ScoredResult]) -> dict:
    return {
        "mode": mode,
        "results": [
            {
                "problem_id": result.problem.problem_id,
                "title": result.problem.title,
                "url": result.problem.url,
                "tags": list(result.problem.tags),
                "score": result.score,
            }
            for result in results
        ],
    }


@app.get("/api/modes")
async def list_modes():
    """List embedding fields and code search availability."""
    try:
        engine = get_engine()
        return {
            "fields": [
                field for field in engine.corpus.embedding_fields() if not is_code_mode(field)
            ],
            "code_mode": DEFAULT_CODE_MODE if engine.corpus.has_codes() else None,
            "text_search": engine.embedding_provider is not None,
        }
    except Exception as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/api/problems/suggest")
async def suggest_problems(q: str, limit: int = 10):
    """Suggest problems whose id or title contains the query."""
    try:
        engine = get_engine()
        return {
            "suggestions": [
                {"problem_id": problem.problem_id, "title": problem.title}
                for problem in engine.corpus.suggest(q, limit=limit)
            ]
        }
    except Exception as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.post("/api/search/similar")
async def search_similar(request: SimilarRequest):
    """Rank problems similar to an existing problem."""
    mode = resolve_mode(request.mode)
    try:
        engine = get_engine()
        results = engine.search_similar(request.problem_id, mode, tags=request.tags)
        return _serialize(mode, results)
    except UnknownProblemError as exc:
        return JSONResponse({"error": str(exc)}, status_code=404)
    except MissingVectorError as exc:
        return JSONResponse(
            {"error": str(exc), "reason": "missing_vector", "cause": exc.reason},
            status_code=422,
        )
    except Exception as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.post("/api/search/text")
async def search_text(request: TextRequest):
    """Rank problems against an embedded free-text query."""
    field = resolve_text_field(request.field)
    try:
        engine = get_engine()
        results = engine.search_text(request.text, field, tags=request.tags)
        return _serialize(field, results)
    except InvalidQueryError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    except EmbeddingUnavailableError as exc:
        return JSONResponse({"error": str(exc)}, status_code=503)
    except MissingVectorError as exc:
        return JSONResponse(
            {"error": str(exc), "reason": "missing_vector", "cause": exc.reason},
            status_code=422,
        )
    except Exception as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
