"""Inventory schemas: display model, form draft and request/response shapes."""

import enum
from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from toollink.catalog.warehouses import DEFAULT_WAREHOUSE, Warehouse, find_warehouse


def _canonical_warehouse(value):
    # legacy keys and labels migrate to codes; anything unknown is left for enum validation
    return find_warehouse(value) or value


WarehouseField = Annotated[Warehouse, BeforeValidator(_canonical_warehouse)]


class ItemStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"


class DisplayModel(BaseModel):
    """Base for models exchanged with the admin UI (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SupplierInfo(DisplayModel):
    name: str = ""
    contact: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""


class InventoryItem(DisplayModel):
    """Inventory item as shown in tables and loaded into the edit form."""
    id: str = ""
    name: str = ""
    category: str = ""
    quantity: int = Field(0, ge=0)
    unit: str = "pieces"
    threshold: int = Field(0, ge=0)
    warehouse: WarehouseField = DEFAULT_WAREHOUSE
    location: str = ""
    supplier_info: SupplierInfo = Field(default_factory=SupplierInfo)
    status: ItemStatus = ItemStatus.ACTIVE
    last_updated: date | None = None
    description: str = ""
    sku: str = ""
    max_stock_level: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    created_by: str | None = None

    @computed_field(alias="lowStockAlert")
    @property
    def low_stock_alert(self) -> bool:
        return self.quantity <= self.threshold


class InventoryDraft(DisplayModel):
    """Editable form state. Unconstrained so every rule is reported by the form."""
    id: str | None = None
    name: str = ""
    category: str = ""
    quantity: int = 0
    unit: str = ""
    threshold: int = 10
    warehouse: WarehouseField = DEFAULT_WAREHOUSE
    supplier_info: SupplierInfo = Field(default_factory=SupplierInfo)
    status: ItemStatus = ItemStatus.ACTIVE
    description: str = ""
    sku: str = ""
    max_stock_level: int | None = None


class CategoryCount(DisplayModel):
    category: str
    count: int = 0


class InventoryStats(DisplayModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    low_stock: int = 0
    categories: int = 0
    category_distribution: list[CategoryCount] = Field(default_factory=list)


class InventoryFilters(BaseModel):
    """Query filters forwarded to ``GET /inventory``."""
    category: str | None = None
    search: str | None = None
    in_stock: bool = False
    low_stock: bool = False
    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1)

    def to_query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.category and self.category != Warehouse.ALL.value:
            params["category"] = self.category
        if self.search:
            params["search"] = self.search
        if self.in_stock:
            params["inStock"] = "true"
        if self.low_stock:
            params["lowStock"] = "true"
        if self.page:
            params["page"] = str(self.page)
        if self.limit:
            params["limit"] = str(self.limit)
        return params


class QuantityAdjustment(DisplayModel):
    quantity: int = Field(..., ge=0)
    adjustment_type: Literal["set", "add", "subtract"] = "set"
    reason: str = Field("Manual adjustment", max_length=500)


class InventoryListResponse(DisplayModel):
    items: list[InventoryItem]
    total: int
    stats: InventoryStats
    pagination: dict | None = None
    notice: str | None = None


class InventoryStatsResponse(DisplayModel):
    stats: InventoryStats
    notice: str | None = None


class LowStockResponse(DisplayModel):
    items: list[InventoryItem]
    count: int
    notice: str | None = None


class ValidationResponse(DisplayModel):
    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
