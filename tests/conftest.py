from typing import Callable, Sequence

import pytest

from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.knowledge.store import KnowledgeStore


def make_item(
    item_id: str,
    title: str = "Untitled",
    content: str = "Body text.",
    keywords: Sequence[str] = (),
    category: str = "rituals",
) -> KnowledgeItem:
    """Builds a knowledge item with sensible defaults."""
    return KnowledgeItem(
        id=item_id,
        title=title,
        content=content,
        category=category,
        keywords=tuple(keywords),
        created_at="2025-11-19 13:43:52+00",
    )


@pytest.fixture
def item_factory() -> Callable[..., KnowledgeItem]:
    return make_item


@pytest.fixture
def default_store() -> KnowledgeStore:
    return KnowledgeStore.default()
