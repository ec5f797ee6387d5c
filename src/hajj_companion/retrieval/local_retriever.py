from typing import List

from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.domain.scored_item import ScoredItem
from hajj_companion.domain.scoring_weights import (
    DEFAULT_SCORING_WEIGHTS,
    ScoringWeights,
)
from hajj_companion.knowledge.store import KnowledgeStore
from hajj_companion.retrieval.context_retriever import ContextRetriever
from hajj_companion.retrieval.ranker import DEFAULT_LIMIT, rank_scored


class LocalRetriever(ContextRetriever):
    """
    Ranks an in-memory knowledge store with the lexical scorer.

    Results are ordered by relevance. The store is read-only, so one instance
    can serve concurrent requests.

    Args:
        store: Corpus to search.
        limit: Maximum number of items returned per query.
        weights: Points awarded by the scorer.
    """

    name = "local"

    def __init__(
        self,
        store: KnowledgeStore,
        limit: int = DEFAULT_LIMIT,
        weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
    ) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self.store = store
        self.limit = limit
        self.weights = weights

    def retrieve_scored(self, query: str) -> List[ScoredItem]:
        """Returns the ranked items together with their scores."""

        return rank_scored(query, self.store.items, self.limit, self.weights)

    def retrieve(self, query: str) -> List[KnowledgeItem]:
        return [entry.item for entry in self.retrieve_scored(query)]
