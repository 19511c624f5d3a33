"""Tests for the HTTP record store client."""

import json

import httpx
import pytest

from taskflow.config import Settings
from taskflow.errors import RemoteError
from taskflow.services.gateway import RecordStoreClient

SETTINGS = Settings(store_url="https://store.test/api", project_id="proj-1", public_key="pk-1")


def make_client(handler):
    return RecordStoreClient(SETTINGS, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_posts_query_with_credentials():
    """Test that fetch sends the params to the query endpoint."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "data": [{"Id": 1, "title": "A"}]})

    client = make_client(handler)
    params = {"fields": ["Id", "title"], "where": []}
    response = await client.fetch("task", params)
    await client.close()

    assert response["data"] == [{"Id": 1, "title": "A"}]
    assert seen["method"] == "POST"
    assert seen["url"] == "https://store.test/api/collections/task/records/query"
    assert seen["headers"]["X-Project-Id"] == "proj-1"
    assert seen["headers"]["X-Api-Key"] == "pk-1"
    assert seen["body"] == params


@pytest.mark.asyncio
async def test_get_by_id_uses_record_url():
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/api/collections/task/records/42"
        return httpx.Response(200, json={"success": True, "data": {"Id": 42}})

    client = make_client(handler)
    response = await client.get_by_id("task", 42)
    await client.close()

    assert response["data"] == {"Id": 42}


@pytest.mark.asyncio
async def test_create_and_update_verbs():
    methods = []

    def handler(request):
        methods.append(request.method)
        body = json.loads(request.content)
        return httpx.Response(200, json={
            "success": True,
            "results": [{"success": True, "data": {**body["records"][0], "Id": 9}}],
        })

    client = make_client(handler)
    created = await client.create("task", {"records": [{"title": "A"}]})
    updated = await client.update("task", {"records": [{"Id": 9, "title": "B"}]})
    await client.close()

    assert methods == ["POST", "PUT"]
    assert created["results"][0]["data"]["Id"] == 9
    assert updated["results"][0]["data"]["title"] == "B"


@pytest.mark.asyncio
async def test_delete_sends_body_and_reports_success_flag():
    """Test that a refused delete is reported, not raised."""
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": False, "message": "not found"})

    client = make_client(handler)
    response = await client.delete("task", {"RecordIds": [5]})
    await client.close()

    assert seen == {"method": "DELETE", "body": {"RecordIds": [5]}}
    assert response["success"] is False


@pytest.mark.asyncio
async def test_http_error_status_raises_remote_error():
    client = make_client(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(RemoteError) as exc_info:
        await client.fetch("task", {})
    await client.close()

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_transport_failure_raises_remote_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(RemoteError):
        await client.fetch("task", {})
    await client.close()


@pytest.mark.asyncio
async def test_unsuccessful_envelope_raises_remote_error():
    client = make_client(lambda request: httpx.Response(200, json={"success": False, "message": "bad query"}))

    with pytest.raises(RemoteError, match="bad query"):
        await client.fetch("task", {})
    await client.close()


@pytest.mark.asyncio
async def test_rejected_record_in_results_raises_remote_error():
    client = make_client(lambda request: httpx.Response(200, json={
        "success": True,
        "results": [{"success": False, "message": "title is required"}],
    }))

    with pytest.raises(RemoteError, match="title is required"):
        await client.create("task", {"records": [{}]})
    await client.close()


@pytest.mark.asyncio
async def test_non_json_body_raises_remote_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(RemoteError):
        await client.fetch("task", {})
    await client.close()


@pytest.mark.asyncio
async def test_client_is_reused_until_closed():
    client = make_client(lambda request: httpx.Response(200, json={"success": True, "data": []}))

    first = await client._get_client()
    assert await client._get_client() is first

    await client.close()
    assert first.is_closed
    assert await client._get_client() is not first
    await client.close()
