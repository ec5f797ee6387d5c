"""Forward-only view over a streaming chat completion response."""

import json
import logging
from typing import Any, Iterator, Optional

import httpx

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"
DONE_MARKER = "[DONE]"


def extract_delta(data: str) -> Optional[str]:
    """
    Extracts the text delta from one event-stream data payload.

    Args:
        data: JSON payload following ``data:``.

    Returns:
        The delta content, or None when the event carries no text.
    """
    try:
        event: Any = json.loads(data)
    except json.JSONDecodeError:
        logger.warning("Skipping malformed gateway event", extra={"event": data[:80]})
        return None
    try:
        content = event["choices"][0]["delta"].get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
    return content if isinstance(content, str) else None


class GatewayStream:
    """
    Lazy sequence of chunks from an open gateway response.

    Each iterator consumes the response once. The upstream connection is closed
    when iteration finishes, when the iterator is closed early (for example on
    client disconnect), or when ``close`` is called.

    Args:
        response: An open, successful streaming httpx response.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def iter_bytes(self) -> Iterator[bytes]:
        """Yields the raw event-stream bytes for passthrough."""

        try:
            for chunk in self._response.iter_bytes():
                yield chunk
        finally:
            self.close()

    def iter_text(self) -> Iterator[str]:
        """Yields assistant text deltas until the stream ends."""

        try:
            for line in self._response.iter_lines():
                line = line.strip()
                if not line.startswith(DATA_PREFIX):
                    continue
                data = line[len(DATA_PREFIX) :].strip()
                if data == DONE_MARKER:
                    break
                delta = extract_delta(data)
                if delta:
                    yield delta
        finally:
            self.close()

    def close(self) -> None:
        """Closes the upstream response; safe to call more than once."""

        if self._closed:
            return
        self._closed = True
        self._response.close()
        logger.debug("Gateway stream closed")

    def __enter__(self) -> "GatewayStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
