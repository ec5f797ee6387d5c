"""Interface shared by the local and datastore-backed retrievers."""

import logging
from abc import ABC, abstractmethod
from typing import List

from hajj_companion.domain.error_sanitizer import build_exception_details
from hajj_companion.domain.exceptions import RetrievalError
from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.retrieval.context_assembler import assemble

logger = logging.getLogger(__name__)


class ContextRetriever(ABC):
    """Maps a free-text query to knowledge items and a prompt-ready context."""

    name: str = "retriever"

    @abstractmethod
    def retrieve(self, query: str) -> List[KnowledgeItem]:
        """Return the items relevant to a query.

        Args:
            query: Free-text user query.
        Returns:
            Matching items, possibly empty.
        Raises:
            RetrievalError: If the backing source cannot be queried.
        """

    def retrieve_context(self, query: str) -> str:
        """Return the context string for a query.

        Retrieval failures are logged and rendered like a query with no
        matches, so callers always receive a usable string.

        Args:
            query: Free-text user query.
        Returns:
            Rendered knowledge blocks or the no-match sentinel.
        """

        try:
            items = self.retrieve(query)
        except RetrievalError as exc:
            logger.warning(
                "Knowledge retrieval failed, continuing without context",
                extra={
                    "retriever": self.name,
                    "error_details": build_exception_details(exc),
                },
            )
            items = []
        return assemble(items)

    def close(self) -> None:
        """Release any resources held by the retriever."""
