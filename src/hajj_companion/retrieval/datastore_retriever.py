import string
from typing import List, Optional

from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.infra.knowledge_datastore import KnowledgeDatastore
from hajj_companion.retrieval.context_retriever import ContextRetriever

MIN_TOKEN_LENGTH = 4
DEFAULT_ROW_LIMIT = 5


def tokenize_query(query: str, min_length: int = MIN_TOKEN_LENGTH) -> List[str]:
    """
    Splits a query into lowercase search tokens.

    Words are split on whitespace and trimmed of surrounding punctuation;
    words shorter than ``min_length`` and repeats are dropped.

    Args:
        query: Free-text user query.
        min_length: Minimum token length to keep.

    Returns:
        Unique tokens in query order.
    """
    tokens: List[str] = []
    for word in query.lower().split():
        token = word.strip(string.punctuation)
        if len(token) >= min_length and token not in tokens:
            tokens.append(token)
    return tokens


class DatastoreRetriever(ContextRetriever):
    """
    Filters knowledge rows in the external datastore.

    This variant does not score results: any row matching a token may be
    returned, in storage order, up to the row limit. Expect different ordering
    than ``LocalRetriever`` for the same query.

    Args:
        datastore: Datastore client.
        row_limit: Maximum rows requested per query.
        max_tokens: Optional cap on the tokens sent per query.
    """

    name = "datastore"

    def __init__(
        self,
        datastore: KnowledgeDatastore,
        row_limit: int = DEFAULT_ROW_LIMIT,
        max_tokens: Optional[int] = None,
    ) -> None:
        self.datastore = datastore
        self.row_limit = row_limit
        self.max_tokens = max_tokens

    def retrieve(self, query: str) -> List[KnowledgeItem]:
        tokens = tokenize_query(query)
        if self.max_tokens is not None:
            tokens = tokens[: self.max_tokens]
        if not tokens:
            return []
        return self.datastore.search(tokens, self.row_limit)

    def close(self) -> None:
        self.datastore.close()
