"""
Search facade dispatching queries to the problem ranker or the code resolver.

The engine holds no per-query state: the query vector and mode are passed to
every call, so one engine can serve concurrent searches over the same corpus.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..config import is_code_mode
from ..corpus.index import Corpus
from ..corpus.records import Problem
from ..embeddings import EmbeddingProvider
from .errors import (
    EmbeddingUnavailableError,
    InvalidQueryError,
    MissingVectorError,
    UnknownProblemError,
)
from .filters import filter_by_tags
from .ranker import ScoredResult, rank_by_vector
from .resolver import resolve_via_codes


logger = logging.getLogger(__name__)

MIN_TEXT_QUERY_LENGTH = 10


class SearchEngine:
    """Rank problems of a corpus by embedding similarity."""

    def __init__(
        self,
        corpus: Corpus,
        embedding_provider: EmbeddingProvider | None = None,
    ) -> None:
        self.corpus = corpus
        self.embedding_provider = embedding_provider

    def search(
        self,
        query_vector: Sequence[float] | None,
        mode: str,
        *,
        tags: Iterable[str] | None = None,
    ) -> list[ScoredResult]:
        """
        Rank problems against *query_vector*.

        Code modes expect a code-space vector and go through the code resolver;
        any other mode names the problem embedding field to compare against.
        An empty list means nothing passed the thresholds.
        """
        if query_vector is None:
            raise MissingVectorError(
                f"No comparable vector for mode '{mode}'.",
                reason=MissingVectorError.REASON_NO_QUERY_VECTOR,
                mode=mode,
            )
        if is_code_mode(mode):
            results = resolve_via_codes(query_vector, self.corpus)
        else:
            results = rank_by_vector(query_vector, self.corpus.problems, mode)
        logger.debug("Search in mode %s returned %d results", mode, len(results))
        return filter_by_tags(results, tags)

    def query_vector_for(self, problem: Problem, mode: str) -> Sequence[float]:
        """Return the vector a selected problem contributes as a query in *mode*."""
        if is_code_mode(mode):
            if not problem.shortest_code_filename:
                raise MissingVectorError(
                    f"Problem '{problem.problem_id}' has no linked code file.",
                    reason=MissingVectorError.REASON_NO_LINKED_CODE,
                    mode=mode,
                    problem_id=problem.problem_id,
                )
            code = self.corpus.get_code(problem.shortest_code_filename)
            if code is None:
                raise MissingVectorError(
                    f"Code '{problem.shortest_code_filename}' linked from problem "
                    f"'{problem.problem_id}' is not in the corpus.",
                    reason=MissingVectorError.REASON_CODE_NOT_LOADED,
                    mode=mode,
                    problem_id=problem.problem_id,
                )
            if code.embedding is None:
                raise MissingVectorError(
                    f"Code '{problem.shortest_code_filename}' for problem "
                    f"'{problem.problem_id}' has no embedding.",
                    reason=MissingVectorError.REASON_CODE_WITHOUT_EMBEDDING,
                    mode=mode,
                    problem_id=problem.problem_id,
                )
            return code.embedding

        vector = problem.vector(mode)
        if vector is None:
            raise MissingVectorError(
                f"Problem '{problem.problem_id}' has no '{mode}' vector.",
                reason=MissingVectorError.REASON_FIELD_ABSENT,
                mode=mode,
                problem_id=problem.problem_id,
            )
        return vector

    def search_similar(
        self,
        problem_id: str,
        mode: str,
        *,
        tags: Iterable[str] | None = None,
    ) -> list[ScoredResult]:
        """Find problems similar to an existing one."""
        problem = self.corpus.get_problem(problem_id)
        if problem is None:
            raise UnknownProblemError(problem_id)
        return self.search(self.query_vector_for(problem, mode), mode, tags=tags)

    def search_text(
        self,
        text: str,
        field: str,
        *,
        tags: Iterable[str] | None = None,
    ) -> list[ScoredResult]:
        """Embed free text and rank problems against the given field."""
        if len(text.strip()) < MIN_TEXT_QUERY_LENGTH:
            raise InvalidQueryError(
                f"Query text must be at least {MIN_TEXT_QUERY_LENGTH} characters."
            )
        if is_code_mode(field):
            raise InvalidQueryError("Free-text search cannot target code embeddings.")
        if self.embedding_provider is None:
            raise EmbeddingUnavailableError("No embedding provider is configured.")
        try:
            query_vector = self.embedding_provider.embed_query(text)
        except OSError as exc:
            raise EmbeddingUnavailableError(f"Failed to load embedding model: {exc}") from exc
        return self.search(query_vector, field, tags=tags)
