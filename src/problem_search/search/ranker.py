"""
Score and rank problems against a query vector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, TypeVar

from ..corpus.records import Problem
from .vector_math import cosine_similarity


T = TypeVar("T")

# Scores at or above the ceiling are treated as the query's own source item.
SELF_SIMILARITY_CEILING = 0.9999
PROBLEM_SCORE_FLOOR = 0.5
PROBLEM_RESULT_LIMIT = 15


@dataclass(frozen=True)
class ScoredResult:
    """A problem and its similarity to the query."""

    problem: Problem
    score: float


def select_top(
    scored: Iterable[tuple[T, float]],
    *,
    floor: float,
    ceiling: float,
    limit: int,
) -> list[tuple[T, float]]:
    """Keep scores strictly inside (floor, ceiling), best first, truncated.

    Sorting is stable, so equal scores keep their input order.
    """
    kept = [(item, score) for item, score in scored if floor < score < ceiling]
    kept.sort(key=lambda pair: -pair[1])
    return kept[: max(limit, 0)]


def rank_by_vector(
    query_vector: Sequence[float],
    problems: Iterable[Problem],
    field: str,
    *,
    floor: float = PROBLEM_SCORE_FLOOR,
    ceiling: float = SELF_SIMILARITY_CEILING,
    limit: int = PROBLEM_RESULT_LIMIT,
) -> list[ScoredResult]:
    """Rank problems by cosine similarity of their *field* embedding."""
    scored = (
        (problem, cosine_similarity(query_vector, problem.vector(field)))
        for problem in problems
    )
    return [
        ScoredResult(problem=problem, score=score)
        for problem, score in select_top(scored, floor=floor, ceiling=ceiling, limit=limit)
    ]
