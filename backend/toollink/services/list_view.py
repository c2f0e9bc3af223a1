"""Inventory list/stats view state.

Each ``refresh`` is tagged with a generation number; a response that arrives
after a newer refresh was issued is dropped, so a slow request can never
overwrite fresher data.
"""

import asyncio
import itertools
import logging

from toollink.catalog.warehouses import Warehouse
from toollink.schemas.inventory import InventoryFilters, InventoryItem, InventoryStats
from toollink.services.inventory import InventoryService
from toollink.services.results import OperationResult

logger = logging.getLogger(__name__)

ALL = Warehouse.ALL.value


def filter_items(
    items: list[InventoryItem],
    search: str = "",
    category: str = ALL,
    warehouse: str = ALL,
) -> list[InventoryItem]:
    """Case-insensitive substring search over name/id/category plus exact filters."""
    needle = (search or "").strip().lower()
    category = category or ALL
    warehouse = warehouse.value if isinstance(warehouse, Warehouse) else (warehouse or ALL)
    visible = []
    for item in items:
        if needle and not (
            needle in item.name.lower()
            or needle in item.id.lower()
            or needle in item.category.lower()
        ):
            continue
        if category != ALL and item.category != category:
            continue
        if warehouse != ALL and item.warehouse.value != warehouse:
            continue
        visible.append(item)
    return visible


class InventoryListView:
    def __init__(self, service: InventoryService):
        self.service = service
        self.items: list[InventoryItem] = []
        self.stats = InventoryStats()
        self.pagination: dict | None = None
        self.error: OperationResult | None = None
        self.stats_error: OperationResult | None = None
        self.loaded = False
        self._generation = itertools.count(1)
        self._latest = 0

    async def refresh(self, filters: InventoryFilters | None = None) -> bool:
        """Re-fetch items and stats. Returns False if the response was stale."""
        generation = next(self._generation)
        self._latest = generation

        items_result, stats_result = await asyncio.gather(
            self.service.list_items(filters),
            self.service.get_stats(),
        )

        if generation != self._latest:
            logger.debug("Dropping stale inventory response %s (latest %s)", generation, self._latest)
            return False

        if items_result.ok:
            self.items = items_result.data["items"]
            self.pagination = items_result.data.get("pagination")
            self.error = None
        else:
            self.items = []
            self.pagination = None
            self.error = items_result

        # stats failures never block the list; zeroed stats are rendered instead
        self.stats = stats_result.data if stats_result.data is not None else InventoryStats()
        self.stats_error = None if stats_result.ok else stats_result
        self.loaded = True
        return True

    async def ensure_loaded(self, filters: InventoryFilters | None = None) -> None:
        """Load on first use (mount); later loads are explicit ``refresh`` calls."""
        if not self.loaded:
            await self.refresh(filters)

    def visible_items(
        self, search: str = "", category: str = ALL, warehouse: str = ALL
    ) -> list[InventoryItem]:
        return filter_items(self.items, search=search, category=category, warehouse=warehouse)

    def low_stock_items(self) -> list[InventoryItem]:
        return [item for item in self.items if item.quantity <= item.threshold]

    def categories(self) -> list[str]:
        return sorted({item.category for item in self.items if item.category})
