from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from problem_search.corpus import Code, Corpus, Problem


class FakeEncoder:
    """Stands in for a SentenceTransformer; records calls and returns a fixed vector."""

    def __init__(self, vector: list[float] | None = None) -> None:
        self.vector = vector if vector is not None else [1.0, 0.0]
        self.calls: list[dict[str, Any]] = []

    def encode(self, sentences: list[str], **kwargs: Any) -> list[list[float]]:
        self.calls.append({"sentences": sentences, **kwargs})
        return [list(self.vector) for _ in sentences]


def make_problem(
    problem_id: str,
    *,
    text: list[float] | None = None,
    code_filename: str | None = None,
    tags: tuple[str, ...] = (),
    title: str | None = None,
) -> Problem:
    embeddings = {"text_embedding": tuple(text)} if text is not None else {}
    return Problem(
        problem_id=problem_id,
        title=title if title is not None else f"Problem {problem_id}",
        url=f"https://example.com/{problem_id}",
        tags=tags,
        shortest_code_filename=code_filename,
        embeddings=embeddings,
    )


def make_code(filename: str, embedding: list[float] | None) -> Code:
    return Code(filename=filename, embedding=tuple(embedding) if embedding is not None else None)


@pytest.fixture()
def sample_corpus() -> Corpus:
    """Three problems with text embeddings, two of them linked to codes."""
    problems = [
        make_problem("p1", text=[1.0, 0.0], code_filename="p1.py", tags=("math",)),
        make_problem("p2", text=[0.0, 1.0], code_filename="p2.py", tags=("graph",)),
        make_problem("p3", text=[0.9, 0.1], tags=("math", "dp")),
    ]
    codes = [
        make_code("p1.py", [1.0, 0.0, 0.0]),
        make_code("p2.py", [0.8, 0.2, 0.0]),
    ]
    return Corpus(problems, codes)


def write_data_dir(
    root: Path,
    problem_shards: list[list[dict[str, Any]]],
    code_shards: list[list[dict[str, Any]]] | None = None,
) -> Path:
    """Write manifests and shards in the layout the loader reads."""
    root.mkdir(parents=True, exist_ok=True)
    problem_names = []
    for index, shard in enumerate(problem_shards):
        name = f"problems_part_{index}.json"
        (root / name).write_text(json.dumps(shard))
        problem_names.append(name)
    (root / "problems_data_manifest.json").write_text(json.dumps(problem_names))

    if code_shards is not None:
        code_names = []
        for index, shard in enumerate(code_shards):
            name = f"codes_part_{index}.json"
            (root / name).write_text(json.dumps(shard))
            code_names.append(name)
        (root / "codes_data_manifest.json").write_text(json.dumps(code_names))
    return root


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return write_data_dir(
        tmp_path / "data",
        [
            [
                {
                    "problem_id": "abc001_a",
                    "title": "Sum",
                    "url": "https://example.com/abc001_a",
                    "tags": ["math"],
                    "shortest_code_filename": "abc001_a.py",
                    "text_embedding": [1.0, 0.0],
                    "title_embedding": [0.5, 0.5],
                },
                {
                    "problem_id": "abc002_a",
                    "title": "Grid",
                    "url": "https://example.com/abc002_a",
                    "tags": ["dp"],
                    "shortest_code_filename": "abc002_a.py",
                    "text_embedding": [0.9, 0.1],
                },
            ],
            [
                {
                    "problem_id": "abc003_a",
                    "title": "Paths",
                    "url": "https://example.com/abc003_a",
                    "tags": ["graph"],
                    "text_embedding": [0.0, 1.0],
                },
            ],
        ],
        [
            [
                {"filename": "abc001_a.py", "embedding": [1.0, 0.0, 0.0]},
                {"filename": "abc002_a.py", "embedding": [0.9, 0.1, 0.0]},
            ]
        ],
    )
