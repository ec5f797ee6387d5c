from typing import Sequence

from hajj_companion.domain.knowledge_item import KnowledgeItem

NO_KNOWLEDGE_FOUND = "No relevant knowledge found in the local Hajj database."
BLOCK_SEPARATOR = "\n\n"


def render_block(item: KnowledgeItem) -> str:
    """Renders one item as a markdown heading followed by its body."""

    return f"### {item.title}\n{item.content}"


def assemble(items: Sequence[KnowledgeItem]) -> str:
    """
    Renders retrieved items into a prompt-ready context string.

    Args:
        items: Ranked items, best first.

    Returns:
        The rendered blocks separated by blank lines, or ``NO_KNOWLEDGE_FOUND``
        when there is nothing to render.
    """
    if not items:
        return NO_KNOWLEDGE_FOUND
    return BLOCK_SEPARATOR.join(render_block(item) for item in items)
