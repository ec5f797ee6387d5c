"""Tests for the model gateway client and stream."""

import json
from typing import List

import httpx
import pytest

from hajj_companion.domain.exceptions import (
    GatewayConfigError,
    GatewayError,
    QuotaExceededError,
    RateLimitError,
)
from hajj_companion.domain.messages import ChatMessage
from hajj_companion.gateway.gateway_client import ModelGatewayClient
from hajj_companion.gateway.gateway_stream import extract_delta

SSE_BODY = (
    b'data: {"choices":[{"delta":{"role":"assistant"}}]}\n\n'
    b'data: {"choices":[{"delta":{"content":"Tawaf is "}}]}\n\n'
    b": keep-alive\n\n"
    b'data: {"choices":[{"delta":{"content":"seven circuits."}}]}\n\n'
    b"data: [DONE]\n\n"
)

MESSAGES = [
    ChatMessage(role="system", content="sys"),
    ChatMessage(role="user", content="What is tawaf?"),
]


def _client(handler, api_key: str = "test-key") -> ModelGatewayClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return ModelGatewayClient(
        url="https://gateway.test/v1/chat/completions",
        api_key=api_key,
        model="test-model",
        temperature=0.2,
        client=http_client,
    )


def _sse_handler(captured: List[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(
            200, content=SSE_BODY, headers={"content-type": "text/event-stream"}
        )

    return handler


def test_stream_sends_openai_payload() -> None:
    """The request carries model, messages, stream flag and bearer token."""
    captured: List[httpx.Request] = []
    client = _client(_sse_handler(captured))

    with client.stream(MESSAGES):
        pass

    request = captured[0]
    body = json.loads(request.content)
    assert request.headers["authorization"] == "Bearer test-key"
    assert body["model"] == "test-model"
    assert body["stream"] is True
    assert body["temperature"] == 0.2
    assert body["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "What is tawaf?"},
    ]


def test_stream_iter_text_yields_deltas_and_closes() -> None:
    """Text deltas are yielded in order and the stream closes at the end."""
    client = _client(_sse_handler([]))

    stream = client.stream(MESSAGES)
    chunks = list(stream.iter_text())

    assert chunks == ["Tawaf is ", "seven circuits."]
    assert stream.closed is True


def test_stream_iter_bytes_passes_raw_events() -> None:
    """Raw passthrough yields the upstream bytes unchanged."""
    client = _client(_sse_handler([]))

    stream = client.stream(MESSAGES)

    assert b"".join(stream.iter_bytes()) == SSE_BODY
    assert stream.closed is True


def test_stream_closes_when_abandoned_early() -> None:
    """Closing the iterator early releases the upstream response."""
    client = _client(_sse_handler([]))

    stream = client.stream(MESSAGES)
    iterator = stream.iter_text()
    assert next(iterator) == "Tawaf is "
    iterator.close()

    assert stream.closed is True


@pytest.mark.parametrize(
    ("status_code", "error_type"),
    [
        (429, RateLimitError),
        (402, QuotaExceededError),
        (401, GatewayError),
        (403, GatewayError),
        (500, GatewayError),
        (503, GatewayError),
    ],
)
def test_stream_maps_error_status(status_code: int, error_type: type) -> None:
    """Non-2xx statuses raise the matching GatewayError subclass."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text="upstream failure")

    client = _client(handler)

    with pytest.raises(error_type) as exc_info:
        client.stream(MESSAGES)

    assert type(exc_info.value) is error_type


def test_missing_api_key_raises_config_error() -> None:
    """Requests are refused before sending when no key is configured."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("gateway should not be called")

    client = _client(handler, api_key="")

    with pytest.raises(GatewayConfigError):
        client.stream(MESSAGES)


def test_connection_error_raises_gateway_error() -> None:
    """Transport failures surface as GatewayError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    client = _client(handler)

    with pytest.raises(GatewayError):
        client.complete(MESSAGES)


def test_complete_returns_message_content() -> None:
    """Non-streaming completions return the assistant text."""
    captured: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(
            200, json={"choices": [{"message": {"content": "Seven circuits."}}]}
        )

    client = _client(handler)

    assert client.complete(MESSAGES) == "Seven circuits."
    assert json.loads(captured[0].content)["stream"] is False


def test_complete_without_choices_returns_empty() -> None:
    """Missing content yields an empty answer."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    assert _client(handler).complete(MESSAGES) == ""


def test_extract_delta_ignores_malformed_events() -> None:
    """Bad JSON or missing deltas produce no text."""
    assert extract_delta("{not json") is None
    assert extract_delta('{"choices": []}') is None
    assert extract_delta('{"choices":[{"delta":{"content":"hi"}}]}') == "hi"
