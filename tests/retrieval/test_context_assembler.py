"""Tests for context assembly and the local retrieval pipeline."""

from hajj_companion.knowledge.store import KnowledgeStore
from hajj_companion.retrieval.context_assembler import NO_KNOWLEDGE_FOUND, assemble
from hajj_companion.retrieval.local_retriever import LocalRetriever


def test_assemble_renders_headings_and_blank_lines(item_factory) -> None:
    """Blocks are headed by titles and separated by a blank line."""
    items = [
        item_factory("a", title="First", content="One."),
        item_factory("b", title="Second", content="Two."),
    ]

    assert assemble(items) == "### First\nOne.\n\n### Second\nTwo."


def test_assemble_empty_returns_sentinel() -> None:
    """No items yields the no-knowledge sentinel."""
    assert assemble([]) == NO_KNOWLEDGE_FOUND


def test_retrieve_context_for_keyword_question(default_store) -> None:
    """A tawaf question returns the tawaf block headed by its title."""
    retriever = LocalRetriever(default_store)

    context = retriever.retrieve_context("What is tawaf?")

    assert context.startswith("### Tawaf Ritual\n")
    assert "circumambulating the Kaaba" in context


def test_retrieve_context_without_match_returns_sentinel(default_store) -> None:
    """Unrelated queries return the sentinel rather than an empty string."""
    retriever = LocalRetriever(default_store)

    assert retriever.retrieve_context("xyzzy_unrelated_term") == NO_KNOWLEDGE_FOUND


def test_retrieve_context_empty_query_returns_sentinel(default_store) -> None:
    """An empty query never matches."""
    retriever = LocalRetriever(default_store)

    assert retriever.retrieve_context("") == NO_KNOWLEDGE_FOUND


def test_local_retriever_uses_injected_store(item_factory) -> None:
    """Synthetic corpora can replace the bundled one."""
    store = KnowledgeStore([item_factory("z", title="Zamzam", keywords=["zamzam"])])
    retriever = LocalRetriever(store, limit=1)

    assert [item.id for item in retriever.retrieve("zamzam water")] == ["z"]
    assert retriever.retrieve_scored("zamzam")[0].score == 4


def test_local_retriever_limits_results(default_store) -> None:
    """The configured limit caps the number of items."""
    retriever = LocalRetriever(default_store, limit=1)

    items = retriever.retrieve("ihram rules, prohibited acts and preparation")

    assert len(items) == 1
    assert items[0].title == "Prohibited Acts in Ihram"
