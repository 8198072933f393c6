"""Tests for QueryStringMiddleware — binds the query string per request."""

import httpx
import pytest

from reqparams.config import ParamsConfig
from reqparams.context import get_query_string
from reqparams.errors import NoRequestContext, ParameterError
from reqparams.middleware import QueryStringMiddleware
from reqparams.registry import ParameterDefinition, ParameterRegistry
from reqparams.store import RequestParameters

REGISTRY = ParameterRegistry(
    [
        ParameterDefinition("page"),
        ParameterDefinition("tag", allows_multiple_values=True, max_size=10),
    ],
    page="page",
)


async def _respond(send, status: int, body: str) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": [(b"content-type", b"text/plain; charset=utf-8")],
        }
    )
    await send({"type": "http.response.body", "body": body.encode()})


async def _echo_app(scope, receive, send) -> None:
    """Load parameters from the bound request and echo the canonical query."""
    try:
        params = RequestParameters(REGISTRY, config=ParamsConfig(encode_url=True)).load()
    except ParameterError as exc:
        await _respond(send, 400, str(exc))
        return
    await _respond(send, 200, params.to_url())


def _client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.anyio
async def test_load_reads_request_query() -> None:
    async with _client(QueryStringMiddleware(_echo_app)) as client:
        response = await client.get("/?tag=b&page=gene&tag=a&other=1")
    assert response.status_code == 200
    assert response.text == "page=gene&tag=b&tag=a"


@pytest.mark.anyio
async def test_empty_query() -> None:
    async with _client(QueryStringMiddleware(_echo_app)) as client:
        response = await client.get("/")
    assert response.status_code == 200
    assert response.text == ""


@pytest.mark.anyio
async def test_encoded_values() -> None:
    async with _client(QueryStringMiddleware(_echo_app)) as client:
        response = await client.get("/", params={"page": "a&b c"})
    assert response.text == "page=a%26b%20c"


@pytest.mark.anyio
async def test_validation_error_reaches_app() -> None:
    async with _client(QueryStringMiddleware(_echo_app)) as client:
        response = await client.get("/?tag=bbbbbbbbbbb")
    assert response.status_code == 400
    assert response.text.startswith("tag:")


@pytest.mark.anyio
async def test_unbound_after_request() -> None:
    async with _client(QueryStringMiddleware(_echo_app)) as client:
        await client.get("/?page=gene")
    with pytest.raises(NoRequestContext):
        get_query_string()


@pytest.mark.anyio
async def test_without_middleware_load_fails() -> None:
    with pytest.raises(NoRequestContext):
        async with _client(_echo_app) as client:
            await client.get("/?page=gene")


@pytest.mark.anyio
async def test_lifespan_passes_through() -> None:
    seen: list[str] = []

    async def app(scope, receive, send) -> None:
        seen.append(scope["type"])
        with pytest.raises(NoRequestContext):
            get_query_string()

    await QueryStringMiddleware(app)({"type": "lifespan"}, None, None)
    assert seen == ["lifespan"]
