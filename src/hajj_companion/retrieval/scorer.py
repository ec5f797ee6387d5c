"""Keyword-overlap relevance scoring."""

from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.domain.scoring_weights import (
    DEFAULT_SCORING_WEIGHTS,
    ScoringWeights,
)


def _contains(haystack: str, needle: str) -> bool:
    # Empty needles never match, so an empty query scores zero everywhere.
    return bool(needle) and needle in haystack


def score(
    query: str,
    item: KnowledgeItem,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> int:
    """
    Scores how relevant ``item`` is to ``query``.

    Matching is case-insensitive substring containment of item text inside the
    query. Each keyword counts once however often it appears; the title and
    content only count when the query contains them whole.

    Args:
        query: Free-text user query.
        item: Knowledge item to score.
        weights: Points awarded per kind of match.

    Returns:
        A non-negative integer score.
    """
    normalized_query = query.lower()

    keyword_hits = sum(
        1 for keyword in item.keywords if _contains(normalized_query, keyword.lower())
    )
    total = keyword_hits * weights.keyword
    if _contains(normalized_query, item.title.lower()):
        total += weights.title
    if _contains(normalized_query, item.content.lower()):
        total += weights.content
    return max(0, total)
