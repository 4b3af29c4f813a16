import json

import anyio
import httpx
import pytest

from modelhub.client.fallback import BothRoutesFailedError, FallbackController

PAYLOAD = {
    "messages": [{"role": "user", "content": "hi"}],
    "model": "Llama-3.1-8b-instant",
}


class _Recorder:
    """MockTransport handler that answers per path and records every request."""

    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.url.path, json.loads(request.content)))
        result = self.responses[request.url.path]
        if isinstance(result, Exception):
            raise result
        return result


def _fetch(handler, payload=PAYLOAD):
    async def _run():
        async with httpx.AsyncClient(
            base_url="http://gateway.test", transport=httpx.MockTransport(handler)
        ) as http:
            return await FallbackController(http).fetch_reply(payload)

    return anyio.run(_run)


def test_primary_success_makes_one_request():
    handler = _Recorder({"/api/chat": httpx.Response(200, json={"response": "hello"})})

    assert _fetch(handler) == "hello"
    assert [path for path, _ in handler.requests] == ["/api/chat"]


def test_primary_http_error_retries_backup_with_identical_payload():
    handler = _Recorder(
        {
            "/api/chat": httpx.Response(500, json={"error": "Model x is currently unreachable."}),
            "/api/chat/v2": httpx.Response(200, json={"response": "from backup"}),
        }
    )

    assert _fetch(handler) == "from backup"
    assert [path for path, _ in handler.requests] == ["/api/chat", "/api/chat/v2"]
    assert handler.requests[0][1] == handler.requests[1][1] == PAYLOAD


def test_primary_network_error_retries_backup():
    handler = _Recorder(
        {
            "/api/chat": httpx.ConnectError("connection refused"),
            "/api/chat/v2": httpx.Response(200, json={"response": "ok"}),
        }
    )

    assert _fetch(handler) == "ok"
    assert len(handler.requests) == 2


def test_primary_body_without_response_counts_as_failure():
    handler = _Recorder(
        {
            "/api/chat": httpx.Response(200, json={"unexpected": True}),
            "/api/chat/v2": httpx.Response(200, json={"response": "ok"}),
        }
    )

    assert _fetch(handler) == "ok"


def test_both_routes_failing_raises_without_third_attempt():
    handler = _Recorder(
        {
            "/api/chat": httpx.Response(500, json={"error": "down"}),
            "/api/chat/v2": httpx.Response(404, json={"detail": "Not Found"}),
        }
    )

    with pytest.raises(BothRoutesFailedError) as exc_info:
        _fetch(handler)

    assert [path for path, _ in handler.requests] == ["/api/chat", "/api/chat/v2"]
    assert exc_info.value.primary.route == "/api/chat"
    assert exc_info.value.backup.route == "/api/chat/v2"


def test_primary_stream_error_retries_backup():
    handler = _Recorder(
        {
            "/api/chat": httpx.StreamConsumed(),
            "/api/chat/v2": httpx.Response(200, json={"response": "ok"}),
        }
    )

    assert _fetch(handler) == "ok"
    assert [path for path, _ in handler.requests] == ["/api/chat", "/api/chat/v2"]


def test_invalid_url_counts_as_route_failure():
    handler = _Recorder(
        {
            "/api/chat": httpx.InvalidURL("Invalid non-printable ASCII character in URL"),
            "/api/chat/v2": httpx.InvalidURL("Invalid non-printable ASCII character in URL"),
        }
    )

    with pytest.raises(BothRoutesFailedError):
        _fetch(handler)

    assert len(handler.requests) == 2
