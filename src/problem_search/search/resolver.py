"""
Resolve code-level similarity into problem-level results.

Codes are ranked against the query first; the ranked codes are then mapped to
the problems that list them as their shortest solution. A problem inherits the
score of its best-ranked code and appears at most once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..corpus.index import Corpus
from ..corpus.records import Code
from .ranker import PROBLEM_RESULT_LIMIT, SELF_SIMILARITY_CEILING, ScoredResult, select_top
from .vector_math import cosine_similarity


CODE_SCORE_FLOOR = 0.6
CODE_CANDIDATE_LIMIT = 30


@dataclass(frozen=True)
class ScoredCode:
    """A code candidate and its similarity to the query."""

    code: Code
    score: float


def rank_codes(
    query_vector: Sequence[float],
    codes: Sequence[Code],
    *,
    floor: float = CODE_SCORE_FLOOR,
    ceiling: float = SELF_SIMILARITY_CEILING,
    limit: int = CODE_CANDIDATE_LIMIT,
) -> list[ScoredCode]:
    """Rank codes by cosine similarity of their embeddings."""
    scored = ((code, cosine_similarity(query_vector, code.embedding)) for code in codes)
    return [
        ScoredCode(code=code, score=score)
        for code, score in select_top(scored, floor=floor, ceiling=ceiling, limit=limit)
    ]


def resolve_via_codes(
    query_vector: Sequence[float],
    corpus: Corpus,
    *,
    limit: int = PROBLEM_RESULT_LIMIT,
) -> list[ScoredResult]:
    """Rank problems through the similarity of their shortest codes."""
    results: list[ScoredResult] = []
    seen_problem_ids: set[str] = set()

    for candidate in rank_codes(query_vector, corpus.codes):
        if len(results) >= limit:
            break
        problem = corpus.problem_for_code(candidate.code.filename)
        if problem is None or problem.problem_id in seen_problem_ids:
            continue
        seen_problem_ids.add(problem.problem_id)
        results.append(ScoredResult(problem=problem, score=candidate.score))

    return results
