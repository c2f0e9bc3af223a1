"""Inventory operations as seen by the admin UI.

Wraps ``InventoryApiClient`` with the record mapper and turns every outcome
into an ``OperationResult``. Nothing here raises for upstream failures; they
are logged and returned.
"""

import logging
from typing import Any

from toollink.core.exceptions import (
    UpstreamAuthError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamNotFoundError,
)
from toollink.schemas.inventory import (
    InventoryFilters,
    InventoryItem,
    InventoryStats,
    QuantityAdjustment,
)
from toollink.services import mapper
from toollink.services.inventory_client import InventoryApiClient
from toollink.services.results import ErrorKind, OperationResult

logger = logging.getLogger(__name__)


def _kind_for(exc: UpstreamError) -> ErrorKind:
    if isinstance(exc, UpstreamAuthError):
        return ErrorKind.AUTHENTICATION
    if isinstance(exc, UpstreamNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, UpstreamConnectionError):
        return ErrorKind.NETWORK
    return ErrorKind.UPSTREAM


def _failed(action: str, exc: UpstreamError, data: Any = None) -> OperationResult:
    logger.error("Failed to %s: %s", action, exc.message)
    return OperationResult.failure(_kind_for(exc), f"Failed to {action}: {exc.message}", data=data)


class InventoryService:
    def __init__(self, client: InventoryApiClient):
        self.client = client

    async def list_items(self, filters: InventoryFilters | None = None) -> OperationResult:
        """Fetch items; ``data`` is ``{"items": [...], "pagination": ...}``."""
        try:
            payload = await self.client.list_items(filters)
        except UpstreamError as exc:
            return _failed("fetch inventory items", exc, data={"items": [], "pagination": None})

        raw_items = payload.get("items")
        items = [mapper.from_backend(raw) for raw in raw_items] if isinstance(raw_items, list) else []
        return OperationResult.success({"items": items, "pagination": payload.get("pagination")})

    async def get_item(self, item_id: str) -> OperationResult:
        try:
            raw = await self.client.get_item(item_id)
        except UpstreamError as exc:
            return _failed("fetch inventory item", exc)
        return OperationResult.success(mapper.from_backend(raw))

    async def create_item(self, item: Any) -> OperationResult:
        try:
            raw = await self.client.create_item(mapper.to_backend(item))
        except UpstreamError as exc:
            return _failed("create inventory item", exc)
        created = mapper.from_backend(raw)
        logger.info("Inventory item created: id=%s name=%s", created.id, created.name)
        return OperationResult.success(created, message="Inventory item created")

    async def update_item(self, item_id: str, item: Any) -> OperationResult:
        """Replace the whole record; the client never sends partial patches."""
        try:
            raw = await self.client.update_item(item_id, mapper.to_backend(item))
        except UpstreamError as exc:
            return _failed("update inventory item", exc)
        logger.info("Inventory item updated: id=%s", item_id)
        return OperationResult.success(mapper.from_backend(raw), message="Inventory item updated")

    async def delete_item(self, item_id: str, confirmed: bool = False) -> OperationResult:
        if not confirmed:
            return OperationResult.failure(
                ErrorKind.VALIDATION,
                "Deletion must be confirmed",
                field_errors={"confirm": "Confirm the deletion to continue"},
            )
        try:
            await self.client.delete_item(item_id)
        except UpstreamError as exc:
            return _failed("delete inventory item", exc)
        logger.info("Inventory item deleted: id=%s", item_id)
        return OperationResult.success(message="Inventory item deleted")

    async def get_stats(self) -> OperationResult:
        """Summary counters; on failure ``data`` still holds zeroed stats."""
        try:
            raw = await self.client.get_stats()
        except UpstreamError as exc:
            return _failed("fetch inventory statistics", exc, data=InventoryStats())
        return OperationResult.success(mapper.stats_from_backend(raw))

    async def get_low_stock_items(self) -> OperationResult:
        try:
            raw_items = await self.client.get_low_stock()
        except UpstreamError as exc:
            return _failed("fetch low stock items", exc, data=[])
        return OperationResult.success([mapper.from_backend(raw) for raw in raw_items])

    async def update_quantity(self, item_id: str, adjustment: QuantityAdjustment) -> OperationResult:
        try:
            raw = await self.client.update_quantity(
                item_id,
                adjustment.quantity,
                adjustment.adjustment_type,
                adjustment.reason,
            )
        except UpstreamError as exc:
            return _failed("update inventory quantity", exc)
        item: InventoryItem = mapper.from_backend(raw)
        return OperationResult.success(item, message="Inventory quantity updated")
