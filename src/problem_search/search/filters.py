"""
Tag filter helpers for ranked results.
"""

from __future__ import annotations

from typing import Iterable

from .ranker import ScoredResult


def parse_tags(raw_tags: str | Iterable[str] | None) -> frozenset[str]:
    """Normalize a comma-separated string or an iterable of tags."""
    if raw_tags is None:
        return frozenset()
    if isinstance(raw_tags, str):
        parts: Iterable[str] = raw_tags.split(",")
    else:
        parts = raw_tags
    return frozenset(part.strip() for part in parts if part and part.strip())


def filter_by_tags(
    results: list[ScoredResult],
    tags: Iterable[str] | None,
) -> list[ScoredResult]:
    """Keep results whose problem carries every active tag, preserving order."""
    active = parse_tags(tags)
    if not active:
        return list(results)
    return [result for result in results if result.problem.has_tags(active)]
