from typing import List, Sequence

from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.domain.scored_item import ScoredItem
from hajj_companion.domain.scoring_weights import (
    DEFAULT_SCORING_WEIGHTS,
    ScoringWeights,
)
from hajj_companion.retrieval.scorer import score

DEFAULT_LIMIT = 3


def rank_scored(
    query: str,
    items: Sequence[KnowledgeItem],
    limit: int = DEFAULT_LIMIT,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> List[ScoredItem]:
    """
    Scores every item and returns the best matches with their scores.

    Items scoring zero are dropped. Equal scores keep their input order.

    Args:
        query: Free-text user query.
        items: Candidate items in corpus order.
        limit: Maximum number of results.
        weights: Points awarded per kind of match.

    Returns:
        At most ``limit`` scored items, highest score first.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    scored = [ScoredItem(item=item, score=score(query, item, weights)) for item in items]
    matches = [entry for entry in scored if entry.score > 0]
    # sorted() is stable, which gives the input-order tie-break.
    matches = sorted(matches, key=lambda entry: entry.score, reverse=True)
    return matches[:limit]


def rank(
    query: str,
    items: Sequence[KnowledgeItem],
    limit: int = DEFAULT_LIMIT,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> List[KnowledgeItem]:
    """Returns the top ``limit`` items for ``query``; see ``rank_scored``."""

    return [entry.item for entry in rank_scored(query, items, limit, weights)]
