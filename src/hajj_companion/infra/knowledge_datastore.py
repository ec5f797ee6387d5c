"""Supabase (PostgREST) access to the hajj_knowledge table."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import TypeAdapter, ValidationError

from hajj_companion.domain.error_sanitizer import build_exception_details
from hajj_companion.domain.exceptions import DatastoreError
from hajj_companion.domain.knowledge_item import KnowledgeItem

logger = logging.getLogger(__name__)

_ROWS_ADAPTER = TypeAdapter(List[KnowledgeItem])
_RESERVED_CHARACTERS = set(',.:()"\\{}')


def quote_filter_value(value: str) -> str:
    """
    Quotes a PostgREST filter value when it contains reserved characters.

    Args:
        value: Raw filter value.

    Returns:
        The value, double-quoted and escaped when required.
    """
    if not any(char in _RESERVED_CHARACTERS for char in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_or_filter(tokens: Sequence[str]) -> str:
    """
    Builds a PostgREST ``or`` filter matching any token.

    A row matches a token when its title or content contains it
    case-insensitively, or when its keyword array contains it.

    Args:
        tokens: Lowercase search tokens.

    Returns:
        The parenthesized filter expression.
    """
    clauses: List[str] = []
    for token in tokens:
        pattern = quote_filter_value(f"*{token}*")
        clauses.append(f"title.ilike.{pattern}")
        clauses.append(f"content.ilike.{pattern}")
        clauses.append(f"keywords.cs.{{{quote_filter_value(token)}}}")
    return f"({','.join(clauses)})"


class KnowledgeDatastore:
    """
    Queries knowledge rows from a Supabase project over its REST interface.

    Rows are returned in storage order; the datastore applies no relevance
    ranking.

    Args:
        base_url: Supabase project URL.
        api_key: Service role key sent as ``apikey`` and bearer token.
        table: Table holding knowledge rows.
        timeout: Request timeout in seconds.
        client: Optional preconfigured httpx client.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "hajj_knowledge",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self.table = table

    def search(self, tokens: Sequence[str], limit: int) -> List[KnowledgeItem]:
        """
        Fetches rows matching any of ``tokens``.

        Args:
            tokens: Lowercase search tokens; must not be empty.
            limit: Maximum number of rows.

        Returns:
            Matching knowledge items in storage order.

        Raises:
            DatastoreError: If the request fails or returns malformed rows.
        """
        if not tokens:
            raise ValueError("At least one search token is required.")

        params: Dict[str, Any] = {
            "select": "*",
            "or": build_or_filter(tokens),
            "limit": str(limit),
        }
        logger.info(
            "Datastore search start",
            extra={"table": self.table, "tokens": list(tokens), "limit": limit},
        )
        try:
            response = self._client.get(
                self._endpoint, params=params, headers=self._headers
            )
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPError as exc:
            logger.error(
                "Datastore search failed",
                extra={
                    "table": self.table,
                    "error_details": build_exception_details(exc),
                },
            )
            raise DatastoreError("Failed to search knowledge base") from exc
        except ValueError as exc:
            logger.error("Datastore returned invalid JSON", extra={"table": self.table})
            raise DatastoreError("Datastore returned invalid JSON") from exc

        try:
            items = _ROWS_ADAPTER.validate_python(rows)
        except ValidationError as exc:
            logger.error(
                "Datastore returned malformed rows", extra={"table": self.table}
            )
            raise DatastoreError("Datastore returned malformed rows") from exc

        logger.info(
            "Datastore search complete",
            extra={"table": self.table, "result_count": len(items)},
        )
        return items

    def close(self) -> None:
        """Closes the underlying HTTP client when this instance created it."""

        if self._owns_client:
            self._client.close()
