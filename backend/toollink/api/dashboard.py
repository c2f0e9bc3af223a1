"""Role dashboard: what each role lands on after login."""

from fastapi import APIRouter, Depends

from toollink.catalog.warehouses import display_name
from toollink.core.deps import get_current_user, get_inventory_service, raise_for_result
from toollink.schemas.auth import INVENTORY_READERS, ROLE_LABELS, CurrentUser, Role
from toollink.schemas.inventory import DisplayModel, InventoryItem, InventoryStats
from toollink.services.inventory import InventoryService
from toollink.services.list_view import filter_items
from toollink.services.results import ErrorKind

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

ROLE_SECTIONS: dict[Role, tuple[str, ...]] = {
    Role.ADMIN: ("inventory", "orders", "deliveries", "users", "customer-approvals", "reports"),
    Role.WAREHOUSE: ("inventory", "orders", "deliveries"),
    Role.CASHIER: ("orders", "inventory"),
    Role.CUSTOMER: ("orders", "deliveries", "messages"),
    Role.DRIVER: ("deliveries",),
    Role.EDITOR: ("inventory", "reports"),
}

# Rows shown in the dashboard's low-stock panel
LOW_STOCK_PREVIEW = 5


class DashboardResponse(DisplayModel):
    role: Role
    role_label: str
    warehouse: str
    warehouse_name: str
    sections: list[str]
    stats: InventoryStats | None = None
    low_stock_items: list[InventoryItem] = []
    low_stock_count: int = 0
    notice: str | None = None


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: CurrentUser = Depends(get_current_user),
    service: InventoryService = Depends(get_inventory_service),
):
    """Role-specific landing data; inventory figures only for roles that can read them."""
    response = DashboardResponse(
        role=current_user.role,
        role_label=ROLE_LABELS[current_user.role],
        warehouse=current_user.warehouse.value,
        warehouse_name=display_name(current_user.warehouse),
        sections=list(ROLE_SECTIONS[current_user.role]),
    )
    if current_user.role not in INVENTORY_READERS:
        return response

    stats_result = await service.get_stats()
    low_stock_result = await service.get_low_stock_items()
    for result in (stats_result, low_stock_result):
        if result.error_kind is ErrorKind.AUTHENTICATION:
            raise_for_result(result)

    low_stock = filter_items(low_stock_result.data or [], warehouse=current_user.warehouse.value)
    response.stats = stats_result.data
    response.low_stock_items = low_stock[:LOW_STOCK_PREVIEW]
    response.low_stock_count = len(low_stock)
    failed = [result.message for result in (stats_result, low_stock_result) if not result.ok]
    response.notice = "; ".join(failed) or None
    return response
