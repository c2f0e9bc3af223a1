"""Mapping between the inventory API's loose item shape and the display model.

The API has accumulated two field-naming schemes (flat ``current_stock`` /
``min_stock_level`` and nested ``stock.currentQuantity`` /
``stock.minimumQuantity``), so every field is read through a fallback chain
and written back in both shapes.

None of the functions here raise: a malformed record degrades to defaults so a
single bad row never breaks a list.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

from toollink.catalog import warehouses
from toollink.schemas.inventory import (
    CategoryCount,
    InventoryItem,
    InventoryStats,
    ItemStatus,
    SupplierInfo,
)

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "pieces"
MIN_MAX_STOCK_LEVEL = 1000
_SUPPLIER_FIELDS = ("name", "contact", "phone", "email", "address")


def _nested(raw: Mapping, *path: str) -> Any:
    value: Any = raw
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _count(value: Any) -> int | None:
    """A usable non-negative whole count, or None if the value is unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if value.isdecimal():
            try:
                return int(value)
            except ValueError:
                # exceeds the interpreter's int string conversion limit
                return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number) or number < 0:
        return None
    return int(number)


def _first_count(*candidates: Any, default: int = 0) -> int:
    for candidate in candidates:
        count = _count(candidate)
        if count is not None:
            return count
    return default


def _text(value: Any) -> str:
    if value is None or isinstance(value, (Mapping, list)):
        return ""
    return str(value).strip()


def _first_text(*candidates: Any, default: str = "") -> str:
    for candidate in candidates:
        text = _text(candidate)
        if text:
            return text
    return default


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()
    return None


def _supplier_from(value: Any) -> SupplierInfo:
    if isinstance(value, str):
        return SupplierInfo(name=value.strip())
    if isinstance(value, Mapping):
        return SupplierInfo(**{field: _text(value.get(field)) for field in _SUPPLIER_FIELDS})
    return SupplierInfo()


def _status_from(raw: Mapping) -> ItemStatus:
    status = raw.get("status")
    if isinstance(status, str):
        try:
            return ItemStatus(status.strip().lower())
        except ValueError:
            pass
    is_active = raw.get("isActive", raw.get("is_active"))
    if isinstance(is_active, bool):
        return ItemStatus.ACTIVE if is_active else ItemStatus.INACTIVE
    return ItemStatus.ACTIVE


def _location_label(raw: Mapping, warehouse: warehouses.Warehouse) -> str:
    location = raw.get("location")
    if isinstance(location, Mapping):
        name = _text(location.get("warehouse"))
        zone = _text(location.get("zone"))
        if name:
            return f"{name} - {zone}" if zone else name
    elif _text(location):
        return _text(location)
    return warehouses.display_name(warehouse)


def from_backend(raw: Any) -> InventoryItem:
    """Translate an API item into an ``InventoryItem``, defaulting every field."""
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("Ignoring malformed inventory record of type %s", type(raw).__name__)
        raw = {}

    warehouse = warehouses.resolve_storage_warehouse(
        _first_text(
            raw.get("warehouse"),
            raw.get("warehouseCode"),
            _nested(raw, "location", "warehouse"),
            raw.get("location"),
            default=warehouses.DEFAULT_WAREHOUSE.value,
        )
    )
    created_at = _first_text(raw.get("createdAt"), raw.get("created_at")) or None
    updated_at = _first_text(raw.get("updatedAt"), raw.get("updated_at")) or None
    last_updated = (
        _parse_date(raw.get("updatedAt"))
        or _parse_date(raw.get("updated_at"))
        or _parse_date(raw.get("createdAt"))
        or _parse_date(raw.get("created_at"))
        or date.today()
    )
    max_stock = _first_count(
        raw.get("max_stock_level"), _nested(raw, "stock", "maximumQuantity"), default=-1
    )

    return InventoryItem(
        id=_first_text(raw.get("_id"), raw.get("id")),
        name=_text(raw.get("name")),
        category=_first_text(raw.get("category"), default=warehouses.default_category(warehouse)),
        quantity=_first_count(
            raw.get("quantity"), raw.get("current_stock"), _nested(raw, "stock", "currentQuantity")
        ),
        unit=_first_text(raw.get("unit"), _nested(raw, "stock", "unit"), default=DEFAULT_UNIT),
        threshold=_first_count(
            raw.get("threshold"), raw.get("min_stock_level"), _nested(raw, "stock", "minimumQuantity")
        ),
        warehouse=warehouse,
        location=_location_label(raw, warehouse),
        supplier_info=_supplier_from(
            raw.get("supplierInfo") or raw.get("supplier_info") or raw.get("supplier")
        ),
        status=_status_from(raw),
        last_updated=last_updated,
        description=_text(raw.get("description")),
        sku=_text(raw.get("sku")),
        max_stock_level=max_stock if max_stock >= 0 else None,
        created_at=created_at,
        updated_at=updated_at,
        created_by=_text(raw.get("created_by") or raw.get("createdBy")) or None,
    )


def generate_sku(category: str, now: datetime | None = None) -> str:
    """``<first 3 letters of category>-<last 6 digits of the ms timestamp>``."""
    prefix = (category or "").strip()[:3].upper() or "ITM"
    millis = int(now.timestamp() * 1000) if now else time.time_ns() // 1_000_000
    return f"{prefix}-{str(millis)[-6:]}"


def _get(display: Any, name: str, alias: str | None = None) -> Any:
    if isinstance(display, Mapping):
        if name in display:
            return display[name]
        return display.get(alias) if alias else None
    return getattr(display, name, None)


def to_backend(display: Any, now: datetime | None = None) -> dict[str, Any]:
    """Build the API write payload from a display item, form draft or dict.

    Fields the UI does not expose (sku, max stock level, nested stock block)
    are always populated so the API's own validation does not reject the write.
    """
    name = _text(_get(display, "name"))
    category = _text(_get(display, "category"))
    quantity = _first_count(_get(display, "quantity"))
    threshold = _first_count(_get(display, "threshold"))
    unit = _text(_get(display, "unit")) or DEFAULT_UNIT
    warehouse = warehouses.resolve_storage_warehouse(_get(display, "warehouse"))
    sku = _text(_get(display, "sku")) or generate_sku(category, now)
    max_stock = _count(_get(display, "max_stock_level", "maxStockLevel"))
    if max_stock is None:
        max_stock = max(quantity * 10, MIN_MAX_STOCK_LEVEL)

    supplier = _get(display, "supplier_info", "supplierInfo")
    if isinstance(supplier, SupplierInfo):
        supplier = supplier.model_dump()
    supplier_info = _supplier_from(supplier).model_dump()

    status = _get(display, "status")
    if isinstance(status, ItemStatus):
        status = status.value
    try:
        status = ItemStatus(status).value
    except (TypeError, ValueError):
        status = ItemStatus.ACTIVE.value

    return {
        "name": name,
        "category": category,
        "description": _text(_get(display, "description")),
        "sku": sku,
        "unit": unit,
        "quantity": quantity,
        "current_stock": quantity,
        "threshold": threshold,
        "min_stock_level": threshold,
        "max_stock_level": max_stock,
        "warehouse": warehouse.value,
        "location": {"warehouse": warehouse.value, "zone": ""},
        "stock": {
            "currentQuantity": quantity,
            "minimumQuantity": threshold,
            "maximumQuantity": max_stock,
            "unit": unit,
        },
        "supplier_info": supplier_info,
        "supplier": supplier_info,
        "status": status,
        "isActive": status == ItemStatus.ACTIVE.value,
    }


def stats_from_backend(raw: Any) -> InventoryStats:
    """Read ``GET /inventory/stats``; any missing counter is zero."""
    if not isinstance(raw, Mapping):
        return InventoryStats()
    data = raw.get("data") if isinstance(raw.get("data"), Mapping) else raw.get("stats")
    if not isinstance(data, Mapping):
        data = raw

    distribution = []
    entries = data.get("categoryDistribution")
    if isinstance(entries, list):
        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            category = _first_text(entry.get("_id"), entry.get("category"))
            if category:
                distribution.append(CategoryCount(category=category, count=_first_count(entry.get("count"))))

    categories = data.get("categories")
    if isinstance(categories, list):
        category_total = len(categories)
    else:
        category_total = _first_count(categories, default=len(distribution))

    return InventoryStats(
        total=_first_count(data.get("totalItems"), data.get("total")),
        active=_first_count(data.get("activeItems"), data.get("active")),
        inactive=_first_count(data.get("inactiveItems"), data.get("inactive")),
        low_stock=_first_count(data.get("lowStockItems"), data.get("low_stock")),
        categories=category_total,
        category_distribution=distribution,
    )
