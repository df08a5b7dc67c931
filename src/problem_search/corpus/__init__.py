"""Problem and code corpora."""

from .index import Corpus
from .records import Code, Problem

__all__ = [
    "Code",
    "Corpus",
    "Problem",
]
