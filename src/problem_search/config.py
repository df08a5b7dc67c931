"""
Configuration helpers for corpus location and search defaults.
"""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_DATA_DIR = "data"
ENV_DATA_DIR = "PROBLEM_SEARCH_DATA_DIR"

DEFAULT_MODE = "text_embedding"
ENV_DEFAULT_MODE = "PROBLEM_SEARCH_DEFAULT_MODE"

CODE_MODE_PREFIX = "code"
DEFAULT_CODE_MODE = "code_embedding"


def resolve_data_dir(override_path: str | None = None) -> str:
    """
    Resolve the corpus directory from CLI override, env var, or default.

    Precedence:
    1) explicit override_path
    2) PROBLEM_SEARCH_DATA_DIR
    3) default path
    """
    raw_path = override_path or os.getenv(ENV_DATA_DIR) or DEFAULT_DATA_DIR
    return str(Path(raw_path).expanduser().resolve())


def resolve_mode(mode: str | None = None) -> str:
    """Return *mode*, falling back to PROBLEM_SEARCH_DEFAULT_MODE then the default."""
    return mode or os.getenv(ENV_DEFAULT_MODE) or DEFAULT_MODE


def is_code_mode(mode: str) -> bool:
    """Code-derived modes compare through solution code embeddings."""
    return mode.startswith(CODE_MODE_PREFIX)


def resolve_text_field(field: str | None = None) -> str:
    """
    Resolve the problem field free-text queries compare against.

    An explicit *field* is returned as given. Without one, the default mode is
    used unless it is code-derived, in which case DEFAULT_MODE applies.
    """
    if field:
        return field
    mode = resolve_mode()
    return DEFAULT_MODE if is_code_mode(mode) else mode
