"""
Embedding provider for free-text queries.

Encodes a typed question with the same sentence-transformers model that built
the stored problem embeddings, so query and corpus vectors share one space.
A corpus built with another model needs PROBLEM_SEARCH_EMBEDDING_MODEL set to
that model.
"""

from __future__ import annotations

import logging
import os
from typing import Any


logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "sentence-transformers/paraphrase-multilingual-MiniLM-L12-v2"


class EmbeddingProvider:
    """Encode query text with a sentence-transformers model, loaded on first use."""

    def __init__(
        self,
        *,
        model_name: str | None = None,
        model: Any | None = None,
    ) -> None:
        self.model_name = model_name or os.getenv(
            "PROBLEM_SEARCH_EMBEDDING_MODEL", _DEFAULT_MODEL
        )
        self._model = model

    def _get_model(self) -> Any:
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            logger.info("Loading embedding model %s", self.model_name)
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_query(self, query: str) -> list[float]:
        """Mean-pooled, L2-normalized embedding of a single query."""
        vectors = self._get_model().encode([query], normalize_embeddings=True)
        return [float(value) for value in vectors[0]]
