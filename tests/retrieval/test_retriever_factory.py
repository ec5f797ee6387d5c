"""Tests for retriever selection by configuration."""

import json
from pathlib import Path
from typing import List

import httpx

from hajj_companion.config import Config
from hajj_companion.domain.scoring_weights import ScoringWeights
from hajj_companion.retrieval.datastore_retriever import DatastoreRetriever
from hajj_companion.retrieval.factory import build_retriever
from hajj_companion.retrieval.local_retriever import LocalRetriever


def test_local_backend_uses_bundled_corpus() -> None:
    """The default backend ranks the bundled corpus."""
    config = Config(retrieval_limit=2, scoring_weights=ScoringWeights(keyword=3))

    retriever = build_retriever(config)

    assert isinstance(retriever, LocalRetriever)
    assert retriever.limit == 2
    assert retriever.weights.keyword == 3
    assert len(retriever.store) == 5


def test_local_backend_loads_knowledge_file(tmp_path: Path) -> None:
    """A configured corpus file replaces the bundled corpus."""
    corpus = tmp_path / "kb.json"
    corpus.write_text(
        json.dumps([{"id": "x", "title": "Zamzam", "content": "Water."}]),
        encoding="utf-8",
    )
    config = Config(knowledge_path=corpus)

    retriever = build_retriever(config)

    assert [item.id for item in retriever.store] == ["x"]


def test_datastore_backend_is_selected() -> None:
    """The datastore backend wraps the configured Supabase project."""
    config = Config(
        retrieval_backend="datastore",
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-key",
        datastore_row_limit=4,
    )

    retriever = build_retriever(config)
    try:
        assert isinstance(retriever, DatastoreRetriever)
        assert retriever.row_limit == 4
        assert retriever.datastore.table == "hajj_knowledge"
    finally:
        retriever.close()


def test_datastore_backend_caps_query_tokens() -> None:
    """Long questions send only the configured number of tokens."""
    captured: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=[])

    config = Config(
        retrieval_backend="datastore",
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-key",
    )
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    retriever = build_retriever(config, http_client=http_client)
    query = " ".join(f"word{index:03d}" for index in range(400))

    assert retriever.retrieve(query) == []

    or_filter = captured[0].url.params["or"]
    assert config.datastore_max_tokens == 5
    assert or_filter.count("keywords.cs.") == 5
    assert "word004" in or_filter
    assert "word005" not in or_filter
