"""
Immutable corpus records for problems and solution codes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping


@dataclass(frozen=True)
class Code:
    """A solution snippet and its embedding."""

    filename: str
    embedding: tuple[float, ...] | None = None


@dataclass(frozen=True)
class Problem:
    """A contest problem with zero or more named embedding fields."""

    problem_id: str
    title: str = ""
    url: str = ""
    tags: tuple[str, ...] = ()
    shortest_code_filename: str | None = None
    embeddings: Mapping[str, tuple[float, ...]] = field(default_factory=dict, hash=False)

    def vector(self, field_name: str) -> tuple[float, ...] | None:
        """Return the embedding stored under *field_name*, if any."""
        return self.embeddings.get(field_name)

    def has_tags(self, tags: Iterable[str]) -> bool:
        """Return True when the problem carries every tag in *tags*."""
        return all(tag in self.tags for tag in tags)
