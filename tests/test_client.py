import json

import httpx
import pytest

from gh_repo_list.core.client import GitHubRepoAPIClient
from gh_repo_list.core.errors import (
    BadStatusError,
    DecodingError,
    NetworkError,
    TransportError,
)
from gh_repo_list.core.mocks import MOCK_REPOS

API_URL = "https://api.example.test/orgs/demo/repos"


def make_client(handler, **kwargs) -> GitHubRepoAPIClient:
    return GitHubRepoAPIClient(
        api_url=API_URL, transport=httpx.MockTransport(handler), **kwargs
    )


async def test_get_repos_returns_repos_in_order(repo_payload):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=repo_payload)

    repos = await make_client(handler).get_repos()

    assert repos == MOCK_REPOS
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == API_URL
    assert seen[0].headers["Accept"] == "application/vnd.github+json"


async def test_cached_response_is_used_without_network(repo_payload):
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json=repo_payload)

    client = make_client(handler)
    first = await client.get_repos()
    second = await client.get_repos()

    assert first == second == MOCK_REPOS
    assert calls == 1

    client.clear_cache()
    await client.get_repos()
    assert calls == 2


async def test_cache_disabled_always_hits_network(repo_payload):
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json=repo_payload)

    client = make_client(handler, use_cache=False)
    await client.get_repos()
    await client.get_repos()
    assert calls == 2


@pytest.mark.parametrize("status", [201, 304, 403, 404, 500])
async def test_non_200_status_is_bad_status(status, repo_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=repo_payload)

    with pytest.raises(BadStatusError) as exc_info:
        await make_client(handler).get_repos()

    assert exc_info.value.status_code == status
    assert isinstance(exc_info.value, NetworkError)


async def test_failed_response_is_not_cached(repo_payload):
    responses = [httpx.Response(500, text="boom"), httpx.Response(200, json=repo_payload)]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    client = make_client(handler)
    with pytest.raises(BadStatusError):
        await client.get_repos()
    assert await client.get_repos() == MOCK_REPOS


async def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        await make_client(handler).get_repos()

    assert isinstance(exc_info.value, NetworkError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


async def test_invalid_json_is_decoding_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>not json</html>")

    with pytest.raises(DecodingError):
        await make_client(handler).get_repos()


async def test_schema_mismatch_is_decoding_error():
    body = [{"id": 1, "name": "a", "full_name": "o/a"}]
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, content=json.dumps(body).encode())

    client = make_client(handler)
    with pytest.raises(DecodingError):
        await client.get_repos()
    # 解码失败的响应不会进入缓存
    with pytest.raises(DecodingError):
        await client.get_repos()
    assert calls == 2
