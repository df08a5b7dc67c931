"""
In-memory corpus of problems and codes with lookup indexes.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .records import Code, Problem


logger = logging.getLogger(__name__)

MIN_SUGGEST_QUERY_LENGTH = 2
DEFAULT_SUGGEST_LIMIT = 10


class Corpus:
    """
    Read-only snapshot of the problem and code collections.

    Indexes are built once at construction. Records keep their load order,
    which is the order used for ties and for first-match resolution when two
    records claim the same filename.
    """

    def __init__(self, problems: Iterable[Problem], codes: Iterable[Code] = ()) -> None:
        self._problems: tuple[Problem, ...] = tuple(problems)
        self._codes: tuple[Code, ...] = tuple(codes)

        self._problems_by_id: dict[str, Problem] = {}
        for problem in self._problems:
            if problem.problem_id in self._problems_by_id:
                raise ValueError(f"Duplicate problem_id in corpus: {problem.problem_id}")
            self._problems_by_id[problem.problem_id] = problem

        self._codes_by_filename: dict[str, Code] = {}
        for code in self._codes:
            if code.filename in self._codes_by_filename:
                logger.warning(
                    "Duplicate code filename %s; keeping the first record", code.filename
                )
                continue
            self._codes_by_filename[code.filename] = code

        self._problems_by_code_filename: dict[str, Problem] = {}
        for problem in self._problems:
            filename = problem.shortest_code_filename
            if not filename:
                continue
            owner = self._problems_by_code_filename.get(filename)
            if owner is not None:
                logger.warning(
                    "Problems %s and %s both reference code %s; resolving to %s",
                    owner.problem_id,
                    problem.problem_id,
                    filename,
                    owner.problem_id,
                )
                continue
            self._problems_by_code_filename[filename] = problem

    @property
    def problems(self) -> tuple[Problem, ...]:
        return self._problems

    @property
    def codes(self) -> tuple[Code, ...]:
        return self._codes

    def __len__(self) -> int:
        return len(self._problems)

    def get_problem(self, problem_id: str) -> Problem | None:
        return self._problems_by_id.get(problem_id)

    def get_code(self, filename: str) -> Code | None:
        return self._codes_by_filename.get(filename)

    def problem_for_code(self, filename: str) -> Problem | None:
        """Return the problem whose shortest code is *filename*."""
        return self._problems_by_code_filename.get(filename)

    def linked_code(self, problem: Problem) -> Code | None:
        """Return the shortest-code record a problem points at, if loaded."""
        if not problem.shortest_code_filename:
            return None
        return self._codes_by_filename.get(problem.shortest_code_filename)

    def embedding_fields(self) -> list[str]:
        """Embedding field names present on at least one problem, sorted."""
        names: set[str] = set()
        for problem in self._problems:
            names.update(problem.embeddings)
        return sorted(names)

    def has_codes(self) -> bool:
        return bool(self._codes)

    def suggest(self, query: str, *, limit: int = DEFAULT_SUGGEST_LIMIT) -> list[Problem]:
        """Match problems whose id or title contains *query*, ignoring case."""
        if limit <= 0 or len(query) < MIN_SUGGEST_QUERY_LENGTH:
            return []
        needle = query.lower()
        matches: list[Problem] = []
        for problem in self._problems:
            if needle in problem.problem_id.lower() or needle in problem.title.lower():
                matches.append(problem)
                if len(matches) >= limit:
                    break
        return matches
