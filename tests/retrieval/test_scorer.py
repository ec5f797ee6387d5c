"""Tests for the lexical scorer."""

from hajj_companion.domain.scoring_weights import ScoringWeights
from hajj_companion.knowledge.store import KnowledgeStore
from hajj_companion.retrieval.scorer import score


def _tawaf(store: KnowledgeStore):
    return store.get("6c2f6c37-2cce-4241-8d5e-8e9ac88ff6a0")


def test_keyword_in_question_scores_two(default_store) -> None:
    """A single matching keyword contributes the keyword weight."""
    assert score("What is tawaf?", _tawaf(default_store)) == 2


def test_keyword_counts_once_per_term(default_store) -> None:
    """Repeating a keyword does not add more points."""
    assert score("tawaf tawaf TAWAF", _tawaf(default_store)) == 2


def test_matching_is_case_insensitive(item_factory) -> None:
    """Query, title and keywords are compared in lowercase."""
    item = item_factory("a", title="Zamzam Water", keywords=["Zamzam"])

    assert score("WHERE IS ZAMZAM WATER", item) == 4


def test_title_contained_in_query_adds_bonus(default_store) -> None:
    """Containing the whole title adds the title bonus on top of keywords."""
    arafat = default_store.get("0a6675fb-4210-47ac-b333-7fab4fe8feea")

    assert score("arafat", arafat) == 2
    assert score("tell me about the day of arafat", arafat) == 4


def test_content_contained_in_query_adds_bonus(item_factory) -> None:
    """Containing the whole content adds the content bonus."""
    item = item_factory("a", title="Miqat", content="Boundary points.", keywords=[])

    assert score("I read: boundary points. what now?", item) == 1


def test_empty_keywords_still_match_on_title(item_factory) -> None:
    """Items without keywords can score through the title."""
    item = item_factory("a", title="Zamzam Water", keywords=[])

    assert score("what is zamzam water", item) == 2


def test_empty_query_scores_zero(default_store) -> None:
    """An empty query matches nothing."""
    for item in default_store:
        assert score("", item) == 0


def test_unrelated_query_scores_zero(default_store) -> None:
    """Queries without shared terms score zero."""
    for item in default_store:
        assert score("xyzzy_unrelated_term", item) == 0


def test_custom_weights(item_factory) -> None:
    """Weights change the points for each kind of match."""
    item = item_factory("a", title="Zamzam", content="Zamzam", keywords=["zamzam"])
    weights = ScoringWeights(keyword=5, title=1, content=0)

    assert score("zamzam", item, weights) == 6


def test_score_is_deterministic(default_store) -> None:
    """Scoring the same inputs twice gives the same result."""
    item = _tawaf(default_store)

    assert score("tawaf around the kaaba", item) == score(
        "tawaf around the kaaba", item
    )
