from toollink.schemas.auth import CurrentUser, Role
from toollink.schemas.inventory import (
    InventoryDraft, InventoryFilters, InventoryItem, InventoryStats, ItemStatus, SupplierInfo,
)

__all__ = [
    "CurrentUser", "Role",
    "InventoryDraft", "InventoryFilters", "InventoryItem", "InventoryStats", "ItemStatus", "SupplierInfo",
]
