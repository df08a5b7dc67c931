"""Tests for the search facade."""

import pytest

from problem_search.corpus import Corpus
from problem_search.embeddings import EmbeddingProvider
from problem_search.search import (
    EmbeddingUnavailableError,
    InvalidQueryError,
    MissingVectorError,
    SearchEngine,
    UnknownProblemError,
)

from conftest import FakeEncoder, make_code, make_problem


def test_field_mode_uses_problem_ranker(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    results = engine.search([1.0, 0.0], "text_embedding")

    assert [r.problem.problem_id for r in results] == ["p3"]


def test_code_mode_uses_code_resolver(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    results = engine.search([1.0, 0.0, 0.0], "code_embedding")

    assert [r.problem.problem_id for r in results] == ["p2"]


def test_absent_query_vector_is_not_an_empty_result(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    with pytest.raises(MissingVectorError) as excinfo:
        engine.search(None, "text_embedding")

    assert excinfo.value.reason == MissingVectorError.REASON_NO_QUERY_VECTOR


def test_no_match_returns_empty_list(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)
    assert engine.search([-1.0, -1.0], "text_embedding") == []


def test_search_similar_with_absent_field_raises_missing_vector(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    with pytest.raises(MissingVectorError) as excinfo:
        engine.search_similar("p1", "title_embedding")

    assert excinfo.value.problem_id == "p1"
    assert excinfo.value.mode == "title_embedding"
    assert excinfo.value.reason == MissingVectorError.REASON_FIELD_ABSENT


def test_search_similar_without_linked_code_raises_missing_vector(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    with pytest.raises(MissingVectorError, match="no linked code") as excinfo:
        engine.search_similar("p3", "code_embedding")

    assert excinfo.value.reason == MissingVectorError.REASON_NO_LINKED_CODE


def test_search_similar_with_unloaded_code_raises_missing_vector() -> None:
    corpus = Corpus([make_problem("p1", code_filename="gone.py")], [make_code("other.py", [1.0])])
    engine = SearchEngine(corpus)

    with pytest.raises(MissingVectorError, match="not in the corpus") as excinfo:
        engine.search_similar("p1", "code_embedding")

    assert excinfo.value.reason == MissingVectorError.REASON_CODE_NOT_LOADED
    assert "gone.py" in str(excinfo.value)


def test_search_similar_with_code_lacking_embedding_raises_missing_vector() -> None:
    corpus = Corpus([make_problem("p1", code_filename="bare.py")], [make_code("bare.py", None)])
    engine = SearchEngine(corpus)

    with pytest.raises(MissingVectorError, match="has no embedding") as excinfo:
        engine.search_similar("p1", "code_embedding")

    assert excinfo.value.reason == MissingVectorError.REASON_CODE_WITHOUT_EMBEDDING


def test_search_similar_uses_selected_problem_vector(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    by_text = engine.search_similar("p1", "text_embedding")
    by_code = engine.search_similar("p1", "code_embedding")

    assert [r.problem.problem_id for r in by_text] == ["p3"]
    assert [r.problem.problem_id for r in by_code] == ["p2"]


def test_search_similar_unknown_problem(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    with pytest.raises(UnknownProblemError):
        engine.search_similar("nope", "text_embedding")


def test_tag_filter_applies_after_ranking() -> None:
    corpus = Corpus(
        [
            make_problem("a", text=[0.9, 0.1], tags=("dp",)),
            make_problem("b", text=[0.8, 0.2], tags=("dp", "graph")),
            make_problem("c", text=[0.7, 0.3], tags=("graph",)),
        ]
    )
    engine = SearchEngine(corpus)

    assert [r.problem.problem_id for r in engine.search([1.0, 0.0], "text_embedding", tags=["graph"])] == ["b", "c"]
    assert [r.problem.problem_id for r in engine.search([1.0, 0.0], "text_embedding", tags=["dp", "graph"])] == ["b"]
    assert len(engine.search([1.0, 0.0], "text_embedding", tags=[])) == 3


def test_search_text_embeds_and_ranks(sample_corpus: Corpus) -> None:
    encoder = FakeEncoder([1.0, 0.0])
    engine = SearchEngine(sample_corpus, EmbeddingProvider(model=encoder))

    results = engine.search_text("find the sum of two integers", "text_embedding")

    assert [r.problem.problem_id for r in results] == ["p3"]
    assert encoder.calls[0]["sentences"] == ["find the sum of two integers"]


def test_search_text_rejects_short_text(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus, EmbeddingProvider(model=FakeEncoder()))

    with pytest.raises(InvalidQueryError):
        engine.search_text("   short   ", "text_embedding")


def test_search_text_rejects_code_modes(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus, EmbeddingProvider(model=FakeEncoder()))

    with pytest.raises(InvalidQueryError):
        engine.search_text("a long enough description", "code_embedding")


def test_search_text_requires_provider(sample_corpus: Corpus) -> None:
    engine = SearchEngine(sample_corpus)

    with pytest.raises(EmbeddingUnavailableError):
        engine.search_text("a long enough description", "text_embedding")


def test_search_text_reports_model_load_failure(sample_corpus: Corpus) -> None:
    class _BrokenEncoder:
        def encode(self, sentences, **kwargs):
            raise OSError("weights not found")

    engine = SearchEngine(sample_corpus, EmbeddingProvider(model=_BrokenEncoder()))

    with pytest.raises(EmbeddingUnavailableError, match="weights not found"):
        engine.search_text("a long enough description", "text_embedding")
