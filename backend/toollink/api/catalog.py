"""Warehouse/category catalog endpoints (static data, no upstream calls)."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from toollink.catalog import warehouses
from toollink.core.deps import get_current_user
from toollink.schemas.auth import CurrentUser

router = APIRouter(prefix="/catalog", tags=["catalog"])


class WarehouseOption(BaseModel):
    key: str
    name: str
    description: str


class WarehouseCategories(BaseModel):
    warehouse: str
    name: str
    categories: list[str]
    default_category: str


class QuickItemResponse(BaseModel):
    name: str
    category: str
    unit: str
    warehouse: str


@router.get("/warehouses", response_model=list[WarehouseOption])
async def list_warehouses(current_user: CurrentUser = Depends(get_current_user)):
    """Storage warehouses selectable in the inventory form."""
    return [WarehouseOption(**option) for option in warehouses.warehouse_options()]


@router.get("/warehouses/{warehouse_key}/categories", response_model=WarehouseCategories)
async def list_categories(
    warehouse_key: str,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Category vocabulary of one warehouse; ``all`` returns every category."""
    warehouse = warehouses.find_warehouse(warehouse_key)
    if warehouse is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown warehouse '{warehouse_key}'",
        )
    categories = list(warehouses.categories_for(warehouse))
    return WarehouseCategories(
        warehouse=warehouse.value,
        name=warehouses.display_name(warehouse),
        categories=categories,
        default_category=categories[0],
    )


@router.get("/quick-items", response_model=list[QuickItemResponse])
async def list_quick_items(
    warehouse: str | None = None,
    current_user: CurrentUser = Depends(get_current_user),
):
    return [
        QuickItemResponse(
            name=item.name, category=item.category, unit=item.unit, warehouse=item.warehouse.value
        )
        for item in warehouses.quick_items(warehouse)
    ]


@router.get("/units", response_model=list[str])
async def list_units(current_user: CurrentUser = Depends(get_current_user)):
    return list(warehouses.UNITS)
