from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.domain.messages import ChatMessage, last_user_message
from hajj_companion.domain.scored_item import ScoredItem
from hajj_companion.domain.scoring_weights import (
    DEFAULT_SCORING_WEIGHTS,
    ScoringWeights,
)

__all__ = [
    "ChatMessage",
    "DEFAULT_SCORING_WEIGHTS",
    "KnowledgeItem",
    "ScoredItem",
    "ScoringWeights",
    "last_user_message",
]
