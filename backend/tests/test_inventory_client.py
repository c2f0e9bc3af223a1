"""Unit tests for the inventory API client (httpx mock transport, no network)."""

import json

import httpx
import pytest

from toollink.core.exceptions import (
    UpstreamAuthError,
    UpstreamConnectionError,
    UpstreamNotFoundError,
    UpstreamResponseError,
)
from toollink.schemas.inventory import InventoryFilters
from toollink.services.inventory_client import InventoryApiClient

BASE_URL = "http://inventory.test/api"


def _client(handler, token="token-123") -> InventoryApiClient:
    return InventoryApiClient(token=token, base_url=BASE_URL, transport=httpx.MockTransport(handler))


# ── Requests ──────────────────────────────────────

@pytest.mark.asyncio
async def test_list_items_sends_bearer_token_and_filters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"success": True, "items": [], "pagination": {"total": 0}})

    async with _client(handler) as client:
        payload = await client.list_items(
            InventoryFilters(category="Cement", search="tokyo", low_stock=True, page=2)
        )

    assert payload["pagination"] == {"total": 0}
    assert seen["auth"] == "Bearer token-123"
    assert seen["url"].path == "/api/inventory"
    assert seen["url"].params["category"] == "Cement"
    assert seen["url"].params["lowStock"] == "true"
    assert seen["url"].params["page"] == "2"
    assert "inStock" not in seen["url"].params


@pytest.mark.asyncio
async def test_category_all_is_not_sent():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "category" not in request.url.params
        return httpx.Response(200, json={"success": True, "items": []})

    async with _client(handler) as client:
        await client.list_items(InventoryFilters(category="all"))


@pytest.mark.asyncio
async def test_no_token_sends_no_authorization_header():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"success": True, "data": {"totalItems": 1}})

    async with _client(handler, token=None) as client:
        payload = await client.get_stats()

    assert payload["data"]["totalItems"] == 1


@pytest.mark.asyncio
async def test_create_item_posts_json_and_returns_data():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        body = json.loads(request.content)
        return httpx.Response(201, json={"success": True, "data": {"_id": "new-1", **body}})

    async with _client(handler) as client:
        created = await client.create_item({"name": "Safety Helmet", "quantity": 4})

    assert created["_id"] == "new-1"
    assert created["name"] == "Safety Helmet"


@pytest.mark.asyncio
async def test_item_id_is_escaped_in_path():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.raw_path == b"/api/inventory/a%2Fb"
        return httpx.Response(200, json={"success": True, "item": {"_id": "a/b"}})

    async with _client(handler) as client:
        item = await client.get_item("a/b")

    assert item["_id"] == "a/b"


@pytest.mark.asyncio
async def test_update_quantity_body():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PUT"
        assert request.url.path == "/api/inventory/abc/quantity"
        assert json.loads(request.content) == {
            "quantity": 5, "adjustment_type": "add", "reason": "Manual adjustment",
        }
        return httpx.Response(200, json={"success": True, "item": {"_id": "abc", "quantity": 25}})

    async with _client(handler) as client:
        item = await client.update_quantity("abc", 5, "add")

    assert item["quantity"] == 25


@pytest.mark.asyncio
async def test_low_stock_returns_list_even_when_missing():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True})

    async with _client(handler) as client:
        assert await client.get_low_stock() == []


# ── Failures ──────────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_auth_failures_raise_auth_error(status_code):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"success": False, "message": "Token expired"})

    async with _client(handler) as client:
        with pytest.raises(UpstreamAuthError) as exc_info:
            await client.get_stats()

    assert exc_info.value.message == "Token expired"
    assert exc_info.value.status_code == status_code


@pytest.mark.asyncio
async def test_not_found_raises_not_found_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="Not Found")

    async with _client(handler) as client:
        with pytest.raises(UpstreamNotFoundError) as exc_info:
            await client.get_item("missing")

    assert exc_info.value.message == "Inventory item not found"


@pytest.mark.asyncio
async def test_server_error_uses_body_error_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"success": False, "error": "Database unavailable"})

    async with _client(handler) as client:
        with pytest.raises(UpstreamResponseError, match="Database unavailable"):
            await client.list_items()


@pytest.mark.asyncio
async def test_success_false_envelope_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "message": "SKU already exists"})

    async with _client(handler) as client:
        with pytest.raises(UpstreamResponseError, match="SKU already exists"):
            await client.create_item({"name": "x"})


@pytest.mark.asyncio
async def test_non_json_body_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy error</html>")

    async with _client(handler) as client:
        with pytest.raises(UpstreamResponseError):
            await client.get_stats()


@pytest.mark.asyncio
async def test_connection_failure_raises_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(UpstreamConnectionError, match="Cannot reach inventory API"):
            await client.list_items()
