"""
Load problem and code corpora from manifest-listed JSON shards.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..models import CodePayload, ProblemPayload
from .index import Corpus
from .records import Code, Problem


logger = logging.getLogger(__name__)

PROBLEMS_MANIFEST = "problems_data_manifest.json"
CODES_MANIFEST = "codes_data_manifest.json"


class CorpusLoadError(RuntimeError):
    """Raised when corpus data cannot be read or validated."""


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CorpusLoadError(f"Failed to load {path.name}: file not found") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise CorpusLoadError(f"Failed to load {path.name}: {exc}") from exc


def _read_manifest(path: Path) -> list[str]:
    manifest = _read_json(path)
    if not isinstance(manifest, list) or not all(isinstance(name, str) for name in manifest):
        raise CorpusLoadError(f"{path.name} must be a JSON array of shard filenames")
    return manifest


def _read_shards(data_dir: Path, shard_names: list[str]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for shard_name in shard_names:
        part = _read_json(data_dir / shard_name)
        if not isinstance(part, list):
            raise CorpusLoadError(f"{shard_name} must be a JSON array of records")
        rows.extend(part)
    return rows


def load_problems(data_dir: str | Path) -> list[Problem]:
    """Read every problem shard listed in the problems manifest, in order."""
    root = Path(data_dir)
    shard_names = _read_manifest(root / PROBLEMS_MANIFEST)
    rows = _read_shards(root, shard_names)
    try:
        problems = [ProblemPayload.model_validate(row).to_record() for row in rows]
    except ValidationError as exc:
        raise CorpusLoadError(f"Invalid problem record: {exc}") from exc
    logger.info(
        "Loaded %d problems from %d parts", len(problems), len(shard_names)
    )
    return problems


def load_codes(data_dir: str | Path) -> list[Code]:
    """
    Read every code shard listed in the codes manifest, in order.

    A missing codes manifest is tolerated: code search is simply unavailable.
    """
    root = Path(data_dir)
    manifest_path = root / CODES_MANIFEST
    if not manifest_path.exists():
        logger.warning(
            "Could not load %s. Code search will be disabled.", CODES_MANIFEST
        )
        return []
    shard_names = _read_manifest(manifest_path)
    rows = _read_shards(root, shard_names)
    try:
        codes = [CodePayload.model_validate(row).to_record() for row in rows]
    except ValidationError as exc:
        raise CorpusLoadError(f"Invalid code record: {exc}") from exc
    logger.info("Loaded %d code snippets from %d parts", len(codes), len(shard_names))
    return codes


def load_corpus(data_dir: str | Path) -> Corpus:
    """Load problems and codes from *data_dir* into a :class:`Corpus`."""
    root = Path(data_dir)
    if not root.is_dir():
        raise CorpusLoadError(f"Data directory not found: {root}")
    problems = load_problems(root)
    codes = load_codes(root)
    try:
        return Corpus(problems, codes)
    except ValueError as exc:
        raise CorpusLoadError(str(exc)) from exc
