"""
Pydantic schemas for raw corpus records as they appear in data shards.
"""

from numbers import Real
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .corpus.records import Code, Problem


def _is_vector(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(isinstance(item, Real) and not isinstance(item, bool) for item in value)
    )


class ProblemPayload(BaseModel):
    """A problem object; unknown numeric-list keys are embedding fields"""

    model_config = ConfigDict(extra="allow")

    problem_id: str = Field(description="Stable problem identifier")
    title: str = Field(default="", description="Display title")
    url: str = Field(default="", description="Link to the problem statement")
    tags: list[str] = Field(default_factory=list, description="Topic labels")
    shortest_code_filename: str | None = Field(
        default=None, description="Filename of the shortest accepted solution"
    )

    def embedding_fields(self) -> dict[str, tuple[float, ...]]:
        extras = self.model_extra or {}
        return {
            name: tuple(float(item) for item in value)
            for name, value in extras.items()
            if _is_vector(value)
        }

    def to_record(self) -> Problem:
        return Problem(
            problem_id=self.problem_id,
            title=self.title,
            url=self.url,
            tags=tuple(self.tags),
            shortest_code_filename=self.shortest_code_filename or None,
            embeddings=self.embedding_fields(),
        )


class CodePayload(BaseModel):
    """A solution code object"""

    model_config = ConfigDict(extra="ignore")

    filename: str = Field(description="Unique code filename")
    embedding: list[float] | None = Field(default=None, description="Code embedding")

    def to_record(self) -> Code:
        return Code(
            filename=self.filename,
            embedding=tuple(self.embedding) if self.embedding is not None else None,
        )
