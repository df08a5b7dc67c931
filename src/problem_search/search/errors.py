"""
Per-query error conditions raised by the search engine.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for recoverable search failures."""


class MissingVectorError(SearchError):
    """Raised when there is no vector to compare for the requested mode.

    ``reason`` is one of the ``REASON_*`` constants below.
    """

    REASON_NO_QUERY_VECTOR = "no_query_vector"
    REASON_FIELD_ABSENT = "field_absent"
    REASON_NO_LINKED_CODE = "no_linked_code"
    REASON_CODE_NOT_LOADED = "code_not_loaded"
    REASON_CODE_WITHOUT_EMBEDDING = "code_without_embedding"

    def __init__(
        self,
        message: str,
        *,
        reason: str = REASON_NO_QUERY_VECTOR,
        mode: str | None = None,
        problem_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.mode = mode
        self.problem_id = problem_id


class UnknownProblemError(SearchError):
    """Raised when a problem id is not present in the corpus."""

    def __init__(self, problem_id: str) -> None:
        super().__init__(f"Unknown problem: {problem_id}")
        self.problem_id = problem_id


class InvalidQueryError(SearchError, ValueError):
    """Raised when a free-text query cannot be searched."""


class EmbeddingUnavailableError(SearchError):
    """Raised when free-text search is requested without an embedding provider."""
