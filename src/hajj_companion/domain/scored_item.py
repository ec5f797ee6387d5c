from dataclasses import dataclass

from hajj_companion.domain.knowledge_item import KnowledgeItem


@dataclass(frozen=True)
class ScoredItem:
    """A knowledge item paired with its relevance score for one query."""

    item: KnowledgeItem
    score: int
