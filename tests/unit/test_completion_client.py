"""Unit tests for the text-completion HTTP client"""

import json
import httpx
import pytest
from tuition_risk.domain.exceptions import CompletionServiceError, PredictionFailedError
from tuition_risk.domain.prediction import RiskPredictor
from tuition_risk.infrastructure.clients.completion import CompletionClient


def _client(handler) -> CompletionClient:
    return CompletionClient(
        base_url="http://completion.test/",
        api_key="test-key-0123456789",
        model="test-model",
        timeout=2.0,
        transport=httpx.MockTransport(handler),
    )


async def test_complete_request_shape():
    """Request carries model, prompt, system instruction and sampling settings"""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json={"content": [{"type": "text", "text": "{}"}]})

    await _client(handler).complete("Evaluate Ana", system="JSON only", max_tokens=256, temperature=0.5)

    request = captured["request"]
    body = json.loads(request.content)
    assert request.method == "POST"
    assert request.url.path == "/v1/messages"
    assert request.headers["x-api-key"] == "test-key-0123456789"
    assert "anthropic-version" in request.headers
    assert body["model"] == "test-model"
    assert body["max_tokens"] == 256
    assert body["temperature"] == 0.5
    assert body["system"] == "JSON only"
    assert body["messages"] == [{"role": "user", "content": "Evaluate Ana"}]


async def test_complete_joins_text_blocks():
    """Text blocks are concatenated; other block types are skipped"""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "content": [
                    {"type": "text", "text": '{"risk_level": '},
                    {"type": "tool_use", "id": "x"},
                    {"type": "text", "text": '"low", "justification": "ok"}'},
                ]
            },
        )

    text = await _client(handler).complete("p", system="s", max_tokens=10, temperature=0.0)
    assert text == '{"risk_level": "low", "justification": "ok"}'


async def test_complete_http_error():
    """Non-2xx responses are service failures"""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "overloaded"})

    with pytest.raises(CompletionServiceError, match="500"):
        await _client(handler).complete("p", system="s", max_tokens=10, temperature=0.0)


async def test_complete_connection_error():
    """Unreachable service is a service failure"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CompletionServiceError, match="unreachable"):
        await _client(handler).complete("p", system="s", max_tokens=10, temperature=0.0)


async def test_complete_timeout():
    """Timeouts are service failures"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(CompletionServiceError, match="timeout"):
        await _client(handler).complete("p", system="s", max_tokens=10, temperature=0.0)


async def test_complete_without_text():
    """A successful status without text content is still a failure"""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"content": []})

    with pytest.raises(CompletionServiceError):
        await _client(handler).complete("p", system="s", max_tokens=10, temperature=0.0)


async def test_predictor_surfaces_network_failure(sample_profile):
    """Predictor over a failing service raises instead of guessing"""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(PredictionFailedError):
        await RiskPredictor(_client(handler)).predict(sample_profile)
