"""
Vector primitives used to score embeddings.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


Vector = Sequence[float]


def _as_array(vector: Vector) -> np.ndarray:
    return np.asarray(vector, dtype=np.float64)


def dot(a: Vector, b: Vector) -> float:
    """Dot product of two equal-length vectors."""
    return float(np.dot(_as_array(a), _as_array(b)))


def norm(a: Vector) -> float:
    """Euclidean length of a vector."""
    return float(np.linalg.norm(_as_array(a)))


def cosine_similarity(a: Vector | None, b: Vector | None) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 when either vector is missing or has zero norm. Lengths are
    not checked; callers compare vectors from the same embedding space.
    """
    if a is None or b is None:
        return 0.0
    va, vb = _as_array(a), _as_array(b)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    score = np.dot(va, vb) / (norm_a * norm_b)
    return float(np.clip(score, -1.0, 1.0))
