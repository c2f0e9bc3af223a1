"""Unit tests for InventoryService (client mocked)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from toollink.core.exceptions import (
    UpstreamAuthError,
    UpstreamConnectionError,
    UpstreamNotFoundError,
    UpstreamResponseError,
)
from toollink.schemas.inventory import InventoryDraft, InventoryStats, QuantityAdjustment, SupplierInfo
from toollink.services.inventory import InventoryService
from toollink.services.results import ErrorKind


def _service(**methods) -> tuple[InventoryService, MagicMock]:
    client = MagicMock()
    for name, mock in methods.items():
        setattr(client, name, mock)
    return InventoryService(client), client


# ── Reads ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_list_items_maps_every_record():
    service, _ = _service(list_items=AsyncMock(return_value={
        "success": True,
        "items": [
            {"_id": "1", "name": "Cement 50kg", "current_stock": 4, "min_stock_level": 10},
            "garbage",
        ],
        "pagination": {"page": 1, "total": 2},
    }))

    result = await service.list_items()

    assert result.ok is True
    items = result.data["items"]
    assert [item.id for item in items] == ["1", ""]
    assert items[0].low_stock_alert is True
    assert result.data["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_list_items_network_failure():
    service, _ = _service(list_items=AsyncMock(side_effect=UpstreamConnectionError("Cannot reach inventory API")))

    result = await service.list_items()

    assert result.ok is False
    assert result.error_kind is ErrorKind.NETWORK
    assert result.message == "Failed to fetch inventory items: Cannot reach inventory API"
    assert result.data == {"items": [], "pagination": None}


@pytest.mark.asyncio
async def test_get_item_not_found():
    service, _ = _service(get_item=AsyncMock(side_effect=UpstreamNotFoundError("Inventory item not found", 404)))
    result = await service.get_item("nope")
    assert result.error_kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_stats_failure_keeps_zeroed_data():
    service, _ = _service(get_stats=AsyncMock(side_effect=UpstreamResponseError("boom", 500)))

    result = await service.get_stats()

    assert result.ok is False
    assert result.error_kind is ErrorKind.UPSTREAM
    assert result.data == InventoryStats()


@pytest.mark.asyncio
async def test_low_stock_auth_failure():
    service, _ = _service(get_low_stock=AsyncMock(side_effect=UpstreamAuthError("Token expired", 401)))

    result = await service.get_low_stock_items()

    assert result.error_kind is ErrorKind.AUTHENTICATION
    assert result.data == []


# ── Writes ────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_item_sends_backend_payload():
    service, client = _service(create_item=AsyncMock(return_value={
        "_id": "new-1", "name": "Safety Helmet", "quantity": 12, "threshold": 5, "warehouse": "WM",
    }))
    draft = InventoryDraft(
        name="Safety Helmet", category="Safety Gear", quantity=12, unit="pieces", threshold=5,
        supplier_info=SupplierInfo(name="Arpico"),
    )

    result = await service.create_item(draft)

    payload = client.create_item.await_args.args[0]
    assert payload["current_stock"] == 12
    assert payload["min_stock_level"] == 5
    assert payload["max_stock_level"] == 1000
    assert payload["sku"].startswith("SAF-")
    assert payload["supplier_info"]["name"] == "Arpico"
    assert result.ok is True
    assert result.data.id == "new-1"


@pytest.mark.asyncio
async def test_update_item_failure_message():
    service, _ = _service(update_item=AsyncMock(side_effect=UpstreamResponseError("Validation failed", 400)))

    result = await service.update_item("a1", InventoryDraft(name="x"))

    assert result.ok is False
    assert result.message == "Failed to update inventory item: Validation failed"


@pytest.mark.asyncio
async def test_delete_requires_confirmation():
    service, client = _service(delete_item=AsyncMock(return_value=None))

    refused = await service.delete_item("a1")
    assert refused.error_kind is ErrorKind.VALIDATION
    assert "confirm" in refused.field_errors
    client.delete_item.assert_not_called()

    done = await service.delete_item("a1", confirmed=True)
    assert done.ok is True
    client.delete_item.assert_awaited_once_with("a1")


@pytest.mark.asyncio
async def test_update_quantity_forwards_adjustment():
    service, client = _service(update_quantity=AsyncMock(return_value={"_id": "a1", "quantity": 8}))

    result = await service.update_quantity(
        "a1", QuantityAdjustment(quantity=3, adjustment_type="subtract", reason="Damaged")
    )

    client.update_quantity.assert_awaited_once_with("a1", 3, "subtract", "Damaged")
    assert result.data.quantity == 8
