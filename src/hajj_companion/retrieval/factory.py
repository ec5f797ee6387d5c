from typing import Optional

import httpx

from hajj_companion.config import Config
from hajj_companion.infra.knowledge_datastore import KnowledgeDatastore
from hajj_companion.knowledge.store import KnowledgeStore
from hajj_companion.retrieval.context_retriever import ContextRetriever
from hajj_companion.retrieval.datastore_retriever import DatastoreRetriever
from hajj_companion.retrieval.local_retriever import LocalRetriever


def build_retriever(
    config: Config,
    store: Optional[KnowledgeStore] = None,
    http_client: Optional[httpx.Client] = None,
) -> ContextRetriever:
    """
    Builds the retriever selected by ``config.retrieval_backend``.

    Args:
        config: Application configuration.
        store: Optional corpus override for the local backend.
        http_client: Optional httpx client for the datastore backend.

    Returns:
        A ready-to-use context retriever.
    """
    if config.retrieval_backend == "datastore":
        datastore = KnowledgeDatastore(
            base_url=config.supabase_url or "",
            api_key=config.get_supabase_service_role_key() or "",
            table=config.knowledge_table,
            timeout=config.datastore_timeout_seconds,
            client=http_client,
        )
        return DatastoreRetriever(
            datastore,
            row_limit=config.datastore_row_limit,
            max_tokens=config.datastore_max_tokens,
        )

    corpus = store if store is not None else KnowledgeStore.load(
        config.get_knowledge_path()
    )
    return LocalRetriever(
        corpus, limit=config.retrieval_limit, weights=config.scoring_weights
    )
