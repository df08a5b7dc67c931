"""Similarity ranking over problem and code corpora."""

from .engine import SearchEngine
from .errors import (
    EmbeddingUnavailableError,
    InvalidQueryError,
    MissingVectorError,
    SearchError,
    UnknownProblemError,
)
from .filters import filter_by_tags, parse_tags
from .ranker import ScoredResult, rank_by_vector
from .resolver import ScoredCode, rank_codes, resolve_via_codes
from .vector_math import cosine_similarity, dot, norm

__all__ = [
    "SearchEngine",
    "EmbeddingUnavailableError",
    "InvalidQueryError",
    "MissingVectorError",
    "SearchError",
    "UnknownProblemError",
    "filter_by_tags",
    "parse_tags",
    "ScoredResult",
    "rank_by_vector",
    "ScoredCode",
    "rank_codes",
    "resolve_via_codes",
    "cosine_similarity",
    "dot",
    "norm",
]
