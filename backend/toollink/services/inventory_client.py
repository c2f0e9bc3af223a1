"""Async client for the ToolLink inventory REST API.

Returns the raw JSON envelopes; mapping into display models happens in
``InventoryService``. No retries: a failed call raises and the caller decides
whether to re-trigger it.
"""

import logging
from typing import Any, Literal
from urllib.parse import quote

import httpx

from toollink.core.config import settings
from toollink.core.exceptions import (
    UpstreamAuthError,
    UpstreamConnectionError,
    UpstreamNotFoundError,
    UpstreamResponseError,
)
from toollink.schemas.inventory import InventoryFilters

logger = logging.getLogger(__name__)

AdjustmentType = Literal["set", "add", "subtract"]


def _item_path(item_id: str, suffix: str = "") -> str:
    return f"/inventory/{quote(str(item_id), safe='')}{suffix}"


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or fallback)
    return fallback


def _error_from_response(response: httpx.Response):
    status_code = response.status_code
    if status_code in (401, 403):
        message = _error_message(response, "Not authorised to access inventory")
        return UpstreamAuthError(message, status_code)
    if status_code == 404:
        return UpstreamNotFoundError(_error_message(response, "Inventory item not found"), status_code)
    message = _error_message(response, f"Inventory API error ({status_code})")
    return UpstreamResponseError(message, status_code)


class InventoryApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` bound to one bearer token."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.INVENTORY_API_URL,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> "InventoryApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, path, params=params, json=json)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("Inventory API %s %s -> %s", method, path, exc.response.status_code)
            raise _error_from_response(exc.response) from exc
        except httpx.RequestError as exc:
            logger.error("Inventory API connection error on %s %s: %s", method, path, exc)
            raise UpstreamConnectionError("Cannot reach inventory API") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamResponseError("Inventory API returned a non-JSON body", resp.status_code) from exc

        if not isinstance(payload, dict):
            raise UpstreamResponseError("Inventory API returned an unexpected body", resp.status_code)
        if not payload.get("success"):
            message = payload.get("error") or payload.get("message") or "Inventory API reported a failure"
            raise UpstreamResponseError(str(message), resp.status_code)
        return payload

    async def list_items(self, filters: InventoryFilters | None = None) -> dict[str, Any]:
        params = filters.to_query_params() if filters else None
        return await self._request("GET", "/inventory", params=params)

    async def get_item(self, item_id: str) -> dict[str, Any]:
        payload = await self._request("GET", _item_path(item_id))
        return payload.get("item") or payload.get("data") or {}

    async def create_item(self, body: dict[str, Any]) -> dict[str, Any]:
        payload = await self._request("POST", "/inventory", json=body)
        return payload.get("data") or payload.get("item") or {}

    async def update_item(self, item_id: str, body: dict[str, Any]) -> dict[str, Any]:
        payload = await self._request("PUT", _item_path(item_id), json=body)
        return payload.get("item") or payload.get("data") or {}

    async def delete_item(self, item_id: str) -> None:
        await self._request("DELETE", _item_path(item_id))

    async def get_stats(self) -> dict[str, Any]:
        return await self._request("GET", "/inventory/stats")

    async def get_low_stock(self) -> list[Any]:
        payload = await self._request("GET", "/inventory/low-stock")
        items = payload.get("items")
        return items if isinstance(items, list) else []

    async def update_quantity(
        self,
        item_id: str,
        quantity: int,
        adjustment_type: AdjustmentType = "set",
        reason: str | None = None,
    ) -> dict[str, Any]:
        body = {
            "quantity": quantity,
            "adjustment_type": adjustment_type,
            "reason": reason or "Manual adjustment",
        }
        payload = await self._request("PUT", _item_path(item_id, "/quantity"), json=body)
        return payload.get("item") or payload.get("data") or {}
