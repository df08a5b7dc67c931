"""
problem_search - nearest-neighbor search over contest problems and solution codes.

Problems are ranked by cosine similarity of a chosen embedding field, or
through the similarity of their shortest solution codes.

Example usage:
    >>> from problem_search import SearchEngine, load_corpus
    >>> engine = SearchEngine(load_corpus("data"))
    >>> results = engine.search_similar("abc100_a", "text_embedding")
"""

from .corpus import Code, Corpus, Problem
from .corpus.loader import CorpusLoadError, load_corpus
from .embeddings import EmbeddingProvider
from .search import (
    MissingVectorError,
    ScoredResult,
    SearchEngine,
    SearchError,
    UnknownProblemError,
)

__all__ = [
    # Corpus
    "Code",
    "Corpus",
    "Problem",
    "CorpusLoadError",
    "load_corpus",
    # Search
    "SearchEngine",
    "ScoredResult",
    "SearchError",
    "MissingVectorError",
    "UnknownProblemError",
    # Embeddings
    "EmbeddingProvider",
]
