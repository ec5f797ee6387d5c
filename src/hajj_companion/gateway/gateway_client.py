from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from hajj_companion.config import Config
from hajj_companion.domain.error_sanitizer import sanitize_text
from hajj_companion.domain.exceptions import GatewayConfigError, GatewayError
from hajj_companion.domain.messages import ChatMessage
from hajj_companion.gateway.gateway_error_mapper import error_type_for_status
from hajj_companion.gateway.gateway_request import GatewayRequest
from hajj_companion.gateway.gateway_stream import GatewayStream

logger = logging.getLogger(__name__)


class ModelGatewayClient:
    """Chat completion client for an OpenAI-compatible model gateway.

    Requests are attempted once; failures are raised as GatewayError
    subclasses keyed by upstream status.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str],
        model: str,
        temperature: Optional[float] = None,
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the gateway client.

        Args:
            url: Chat completions endpoint.
            api_key: Bearer token for the gateway.
            model: Model identifier sent with each request.
            temperature: Optional sampling temperature.
            timeout: Request timeout in seconds.
            client: Optional preconfigured httpx client.
        """

        self._url = url
        self._api_key = api_key
        self.model = model
        self.temperature = temperature
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_config(
        cls, config: Config, client: Optional[httpx.Client] = None
    ) -> "ModelGatewayClient":
        """Build a client from application configuration."""

        return cls(
            url=config.gateway_url,
            api_key=config.get_gateway_api_key(),
            model=config.model_name,
            temperature=config.temperature,
            timeout=config.gateway_timeout_seconds,
            client=client,
        )

    def stream(self, messages: Sequence[ChatMessage]) -> GatewayStream:
        """Open a streaming completion.

        The upstream status is checked before returning, so failures surface
        before any chunk is consumed.

        Args:
            messages: Full message list including the system prompt.

        Returns:
            An open GatewayStream; the caller must consume or close it.
        """

        request = self._build_request(messages, stream=True)
        response = self._send(request, stream=True)
        logger.info("Gateway stream opened", extra={"model": self.model})
        return GatewayStream(response)

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        """Request a non-streaming completion.

        Args:
            messages: Full message list including the system prompt.

        Returns:
            The assistant message text, or an empty string.
        """

        request = self._build_request(messages, stream=False)
        response = self._send(request, stream=False)
        try:
            payload = response.json()
        except ValueError as exc:
            raise GatewayError("Gateway returned invalid JSON") from exc
        return _extract_message_content(payload)

    def close(self) -> None:
        """Close the underlying HTTP client when this instance created it."""

        if self._owns_client:
            self._client.close()

    def _build_request(
        self, messages: Sequence[ChatMessage], stream: bool
    ) -> httpx.Request:
        if not self._api_key:
            logger.error("Gateway API key is not configured")
            raise GatewayConfigError("Gateway API key is not configured")

        body = GatewayRequest(
            messages=list(messages),
            model=self.model,
            stream=stream,
            temperature=self.temperature,
        )
        logger.info(
            "Gateway request start",
            extra={
                "model": self.model,
                "stream": stream,
                "message_count": len(body.messages),
            },
        )
        return self._client.build_request(
            "POST",
            self._url,
            json=body.to_payload(),
            headers={"Authorization": f"Bearer {self._api_key}"},
        )

    def _send(self, request: httpx.Request, stream: bool) -> httpx.Response:
        try:
            response = self._client.send(request, stream=stream)
        except httpx.RequestError as exc:
            logger.error(
                "Gateway request failed",
                extra={"model": self.model, "error_class": type(exc).__name__},
            )
            raise GatewayError("AI gateway is unreachable") from exc

        if response.is_success:
            return response

        try:
            body = response.read().decode("utf-8", errors="replace")
        finally:
            response.close()
        status_code = response.status_code
        logger.error(
            "Gateway returned an error status",
            extra={
                "model": self.model,
                "status_code": status_code,
                "body": sanitize_text(body),
            },
        )
        raise error_type_for_status(status_code)(
            f"Gateway returned HTTP {status_code}"
        )


def _extract_message_content(payload: Dict[str, Any]) -> str:
    """Return ``choices[0].message.content`` from a completion payload."""

    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""
