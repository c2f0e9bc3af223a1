"""Unit tests for inventory list filtering and view refresh."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from toollink.catalog.warehouses import Warehouse
from toollink.schemas.inventory import InventoryItem, InventoryStats
from toollink.services.list_view import InventoryListView, filter_items
from toollink.services.results import ErrorKind, OperationResult


ITEMS = [
    InventoryItem(id="sand-01", name="River Sand", category="River Sand", quantity=80,
                  threshold=20, warehouse=Warehouse.W1),
    InventoryItem(id="rod-10", name="Lanwa Steel Rod 10mm", category="10mm Steel Rods",
                  quantity=15, threshold=15, warehouse=Warehouse.W3),
    InventoryItem(id="drill-01", name="Makita Drill", category="Power Drills",
                  quantity=3, threshold=5, warehouse=Warehouse.WM),
]


def _service(items=None, stats=None):
    service = MagicMock()
    service.list_items = AsyncMock(
        return_value=OperationResult.success({
            "items": [item.model_copy() for item in (items or ITEMS)],
            "pagination": {"page": 1},
        })
    )
    service.get_stats = AsyncMock(
        return_value=OperationResult.success(stats or InventoryStats(total=3, low_stock=2))
    )
    return service


# ── filter_items ──────────────────────────────────

def test_filter_search_is_case_insensitive_over_name_id_and_category():
    assert [i.id for i in filter_items(ITEMS, search="STEEL")] == ["rod-10"]
    assert [i.id for i in filter_items(ITEMS, search="drill-0")] == ["drill-01"]
    assert [i.id for i in filter_items(ITEMS, search="power")] == ["drill-01"]


def test_filter_all_means_no_filter():
    assert filter_items(ITEMS, category="all", warehouse="all") == ITEMS


def test_filter_category_and_warehouse_are_exact():
    assert [i.id for i in filter_items(ITEMS, category="River Sand")] == ["sand-01"]
    assert filter_items(ITEMS, category="river sand") == []
    assert [i.id for i in filter_items(ITEMS, warehouse=Warehouse.W3)] == ["rod-10"]


# ── InventoryListView ─────────────────────────────

@pytest.mark.asyncio
async def test_refresh_loads_items_and_stats():
    view = InventoryListView(_service())

    assert await view.refresh() is True

    assert view.loaded is True
    assert len(view.items) == 3
    assert view.stats.total == 3
    assert view.pagination == {"page": 1}
    assert view.error is None


@pytest.mark.asyncio
async def test_low_stock_boundary_is_inclusive():
    view = InventoryListView(_service())
    await view.refresh()

    low = [item.id for item in view.low_stock_items()]

    assert low == ["rod-10", "drill-01"]


@pytest.mark.asyncio
async def test_low_stock_follows_quantity_changes():
    view = InventoryListView(_service())
    await view.refresh()
    view.items[0].quantity = 20
    assert "sand-01" in [item.id for item in view.low_stock_items()]


@pytest.mark.asyncio
async def test_item_failure_clears_list_and_keeps_stats():
    service = _service()
    service.list_items.return_value = OperationResult.failure(
        ErrorKind.NETWORK, "Failed to fetch inventory items: Cannot reach inventory API",
        data={"items": [], "pagination": None},
    )
    view = InventoryListView(service)

    await view.refresh()

    assert view.items == []
    assert view.error.error_kind is ErrorKind.NETWORK
    assert view.stats.total == 3


@pytest.mark.asyncio
async def test_stats_failure_degrades_to_zeroed_stats():
    service = _service()
    service.get_stats.return_value = OperationResult.failure(
        ErrorKind.UPSTREAM, "Failed to fetch inventory statistics: boom", data=InventoryStats()
    )
    view = InventoryListView(service)

    await view.refresh()

    assert len(view.items) == 3
    assert view.error is None
    assert view.stats == InventoryStats()
    assert view.stats_error is not None


@pytest.mark.asyncio
async def test_stale_response_is_discarded():
    release_first = asyncio.Event()
    old_items = [ITEMS[0]]
    new_items = [ITEMS[1], ITEMS[2]]
    calls = []

    async def list_items(filters=None):
        calls.append(filters)
        if len(calls) == 1:
            await release_first.wait()
            return OperationResult.success({"items": old_items, "pagination": None})
        return OperationResult.success({"items": new_items, "pagination": None})

    service = _service()
    service.list_items = list_items
    view = InventoryListView(service)

    first = asyncio.create_task(view.refresh())
    await asyncio.sleep(0)
    assert await view.refresh() is True
    release_first.set()

    assert await first is False
    assert view.items == new_items


@pytest.mark.asyncio
async def test_ensure_loaded_fetches_once():
    service = _service()
    view = InventoryListView(service)

    await view.ensure_loaded()
    await view.ensure_loaded()

    assert service.list_items.await_count == 1


@pytest.mark.asyncio
async def test_categories_are_distinct_and_sorted():
    view = InventoryListView(_service(items=ITEMS + [ITEMS[0]]))
    await view.refresh()
    assert view.categories() == ["10mm Steel Rods", "Power Drills", "River Sand"]
