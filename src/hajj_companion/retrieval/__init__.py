from hajj_companion.retrieval.context_assembler import NO_KNOWLEDGE_FOUND, assemble
from hajj_companion.retrieval.context_retriever import ContextRetriever
from hajj_companion.retrieval.datastore_retriever import (
    DatastoreRetriever,
    tokenize_query,
)
from hajj_companion.retrieval.factory import build_retriever
from hajj_companion.retrieval.local_retriever import LocalRetriever
from hajj_companion.retrieval.ranker import rank, rank_scored
from hajj_companion.retrieval.scorer import score

__all__ = [
    "ContextRetriever",
    "DatastoreRetriever",
    "LocalRetriever",
    "NO_KNOWLEDGE_FOUND",
    "assemble",
    "build_retriever",
    "rank",
    "rank_scored",
    "score",
    "tokenize_query",
]
