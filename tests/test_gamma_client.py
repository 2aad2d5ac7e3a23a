"""
Tests for the Gamma HTTP adapter.

HTTP is served by httpx.MockTransport, so nothing leaves the process.
"""

import json

import httpx
import pytest

from core.config import Settings
from core.errors import MalformedResponseError, TransportError
from core.gamma_client import GammaClient, build_query, build_url, normalize_response
from core.models import (
    BinaryResult,
    EmptyResult,
    Failure,
    GammaRequest,
    JsonResult,
    ResponseKind,
)

SETTINGS = Settings(base_url="https://api.test", api_key="sk-test")


def _client(handler, calls=None):
    def recording(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return handler(request)

    return GammaClient(SETTINGS, transport=httpx.MockTransport(recording))


# --- request building ---

def test_method_inferred_from_body():
    assert GammaRequest(path="/x", body={"a": 1}).http_method == "POST"
    assert GammaRequest(path="/x").http_method == "GET"
    assert GammaRequest(path="/x", method="delete", body={"a": 1}).http_method == "DELETE"


def test_build_query_omits_none_and_stringifies():
    params = {"status": None, "limit": 20, "page": 2, "expand": True, "flag": False, "q": "ready"}
    assert build_query(params) == {"limit": "20", "page": "2", "expand": "true", "flag": "false", "q": "ready"}


def test_build_url_resolves_absolute_path_against_base():
    assert str(build_url("https://api.test", "/v0.2/generations")) == "https://api.test/v0.2/generations"
    assert str(build_url("https://api.test/ignored/", "/v0.2/generations")) == "https://api.test/v0.2/generations"


@pytest.mark.anyio
async def test_get_sends_key_and_json_accept():
    calls = []
    client = _client(lambda request: httpx.Response(200, json={"id": "gen_1"}), calls)

    outcome = await client.execute(GammaRequest(path="/v0.2/generations/gen_1", params={"expand": None}))

    assert outcome == JsonResult(payload={"id": "gen_1"})
    assert len(calls) == 1
    sent = calls[0]
    assert sent.method == "GET"
    assert str(sent.url) == "https://api.test/v0.2/generations/gen_1"
    assert sent.headers["X-API-KEY"] == "sk-test"
    assert sent.headers["Accept"] == "application/json"
    assert "Content-Type" not in sent.headers


@pytest.mark.anyio
async def test_body_is_sent_as_json_post():
    calls = []
    client = _client(lambda request: httpx.Response(201, json={"generationId": "gen_9"}), calls)

    outcome = await client.execute(GammaRequest(path="/v0.2/generations", body={"inputText": "Hello"}))

    assert outcome == JsonResult(payload={"generationId": "gen_9"})
    sent = calls[0]
    assert sent.method == "POST"
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.content) == {"inputText": "Hello"}


@pytest.mark.anyio
async def test_binary_request_accepts_anything_and_returns_bytes():
    payload = bytes(range(256))
    calls = []
    client = _client(
        lambda request: httpx.Response(200, content=payload, headers={"Content-Type": "application/pdf"}),
        calls,
    )

    outcome = await client.execute(
        GammaRequest(path="/v0.2/generations/g/assets/a", response_kind=ResponseKind.BINARY)
    )

    assert outcome == BinaryResult(content=payload)
    assert calls[0].headers["Accept"] == "*/*"


@pytest.mark.anyio
async def test_connection_error_becomes_transport_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        await _client(refuse).execute(GammaRequest(path="/v0.2/generations"))


# --- response normalization ---

@pytest.mark.parametrize("kind", [ResponseKind.JSON, ResponseKind.BINARY])
def test_no_content_is_empty_for_any_kind(kind):
    assert normalize_response(httpx.Response(204), kind) == EmptyResult()


def test_error_with_json_body_keeps_detail():
    response = httpx.Response(404, json={"message": "Generation not found"})

    outcome = normalize_response(response, ResponseKind.JSON)

    assert outcome == Failure(status_code=404, reason="Not Found", detail={"message": "Generation not found"})


def test_error_with_unparseable_body_has_no_detail():
    response = httpx.Response(502, content=b"<html>Bad gateway</html>")

    outcome = normalize_response(response, ResponseKind.BINARY)

    assert outcome == Failure(status_code=502, reason="Bad Gateway", detail=None)


def test_success_with_invalid_json_raises():
    response = httpx.Response(200, content=b"not json")

    with pytest.raises(MalformedResponseError):
        normalize_response(response, ResponseKind.JSON)
