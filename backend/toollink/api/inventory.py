"""Inventory endpoints for the admin UI, with role and warehouse scoping."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from toollink.catalog.warehouses import Warehouse, find_warehouse
from toollink.core.deps import get_inventory_service, raise_for_result, require_role
from toollink.schemas.auth import INVENTORY_READERS, INVENTORY_WRITERS, CurrentUser
from toollink.schemas.inventory import (
    InventoryDraft,
    InventoryFilters,
    InventoryItem,
    InventoryListResponse,
    InventoryStatsResponse,
    LowStockResponse,
    QuantityAdjustment,
    ValidationResponse,
)
from toollink.services.form import InventoryFormController
from toollink.services.inventory import InventoryService
from toollink.services.list_view import InventoryListView, filter_items
from toollink.services.results import ErrorKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _view_warehouse(user: CurrentUser, requested: str | None) -> str:
    """Warehouse a list is restricted to; warehouse staff only ever see their own."""
    if user.is_warehouse_scoped:
        return user.warehouse.value
    if not requested:
        return Warehouse.ALL.value
    warehouse = find_warehouse(requested)
    if warehouse is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown warehouse '{requested}'",
        )
    return warehouse.value


def _ensure_in_scope(user: CurrentUser, warehouse: Warehouse) -> None:
    if user.is_warehouse_scoped and warehouse is not user.warehouse:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Item belongs to warehouse {warehouse.value}, not {user.warehouse.value}",
        )


def _open_form(user: CurrentUser, body: InventoryDraft, edit: bool) -> InventoryFormController:
    """Form loaded with the submitted draft; a draft without a warehouse goes to the user's."""
    form = InventoryFormController(user_warehouse=user.warehouse)
    if "warehouse" not in body.model_fields_set:
        body = body.model_copy(update={"warehouse": form.user_warehouse})
    form.load(body, edit=edit)
    _ensure_in_scope(user, form.draft.warehouse)
    return form


async def _load_item(service: InventoryService, user: CurrentUser, item_id: str) -> InventoryItem:
    result = await service.get_item(item_id)
    raise_for_result(result)
    _ensure_in_scope(user, result.data.warehouse)
    return result.data


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    search: str | None = None,
    category: str = "all",
    warehouse: str | None = None,
    in_stock: bool = False,
    low_stock: bool = False,
    page: int | None = Query(None, ge=1),
    limit: int | None = Query(None, ge=1, le=500),
    current_user: CurrentUser = Depends(require_role(*INVENTORY_READERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    """List items with search/category filters and per-row low-stock flags."""
    scope = _view_warehouse(current_user, warehouse)
    view = InventoryListView(service)
    await view.refresh(
        InventoryFilters(
            category=category,
            search=search,
            in_stock=in_stock,
            low_stock=low_stock,
            page=page,
            limit=limit,
        )
    )
    if view.error is not None:
        raise_for_result(view.error)

    items = view.visible_items(search=search or "", category=category, warehouse=scope)
    return InventoryListResponse(
        items=items,
        total=len(items),
        stats=view.stats,
        pagination=view.pagination,
        notice=view.stats_error.message if view.stats_error else None,
    )


@router.get("/stats", response_model=InventoryStatsResponse)
async def get_inventory_stats(
    current_user: CurrentUser = Depends(require_role(*INVENTORY_READERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Summary counters. Upstream failures other than auth return zeroed stats."""
    result = await service.get_stats()
    if result.error_kind is ErrorKind.AUTHENTICATION:
        raise_for_result(result)
    return InventoryStatsResponse(stats=result.data, notice=None if result.ok else result.message)


@router.get("/low-stock", response_model=LowStockResponse)
async def get_low_stock_items(
    current_user: CurrentUser = Depends(require_role(*INVENTORY_READERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    result = await service.get_low_stock_items()
    if result.error_kind is ErrorKind.AUTHENTICATION:
        raise_for_result(result)
    items = filter_items(result.data or [], warehouse=_view_warehouse(current_user, None))
    return LowStockResponse(
        items=items,
        count=len(items),
        notice=None if result.ok else result.message,
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_inventory_form(
    body: InventoryDraft,
    current_user: CurrentUser = Depends(require_role(*INVENTORY_WRITERS)),
):
    """Run the form rules without saving, so the UI can show every error at once."""
    form = _open_form(current_user, body, edit=bool(body.id))
    errors = form.validate()
    return ValidationResponse(valid=not errors, errors=errors)


@router.get("/{item_id}", response_model=InventoryItem)
async def get_inventory_item(
    item_id: str,
    current_user: CurrentUser = Depends(require_role(*INVENTORY_READERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    return await _load_item(service, current_user, item_id)


@router.post("", response_model=InventoryItem, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    body: InventoryDraft,
    current_user: CurrentUser = Depends(require_role(*INVENTORY_WRITERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Validate and create an item; the upstream API assigns the id."""
    form = _open_form(current_user, body, edit=False)
    result = await form.submit(service.create_item)
    raise_for_result(result)
    return result.data


@router.put("/{item_id}", response_model=InventoryItem)
async def update_inventory_item(
    item_id: str,
    body: InventoryDraft,
    current_user: CurrentUser = Depends(require_role(*INVENTORY_WRITERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Replace an item with the submitted record."""
    if current_user.is_warehouse_scoped:
        await _load_item(service, current_user, item_id)

    form = _open_form(current_user, body, edit=True)

    async def save(draft: InventoryDraft):
        return await service.update_item(item_id, draft)

    result = await form.submit(save)
    raise_for_result(result)
    return result.data


@router.put("/{item_id}/quantity", response_model=InventoryItem)
async def update_inventory_quantity(
    item_id: str,
    adjustment: QuantityAdjustment,
    current_user: CurrentUser = Depends(require_role(*INVENTORY_WRITERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Set, add to or subtract from an item's stock count."""
    if current_user.is_warehouse_scoped:
        await _load_item(service, current_user, item_id)

    result = await service.update_quantity(item_id, adjustment)
    raise_for_result(result)
    return result.data


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_item(
    item_id: str,
    confirm: bool = False,
    current_user: CurrentUser = Depends(require_role(*INVENTORY_WRITERS)),
    service: InventoryService = Depends(get_inventory_service),
):
    """Delete an item. Requires ``confirm=true``."""
    if confirm and current_user.is_warehouse_scoped:
        await _load_item(service, current_user, item_id)

    result = await service.delete_item(item_id, confirmed=confirm)
    raise_for_result(result)
    logger.info("Inventory item %s deleted by user %s", item_id, current_user.id)
