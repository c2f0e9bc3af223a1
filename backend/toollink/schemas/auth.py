"""Current-user schema derived from the bearer token."""

import enum

from pydantic import BaseModel

from toollink.catalog.warehouses import Warehouse


class Role(str, enum.Enum):
    ADMIN = "admin"
    WAREHOUSE = "warehouse"
    CASHIER = "cashier"
    CUSTOMER = "customer"
    DRIVER = "driver"
    EDITOR = "editor"


ROLE_LABELS: dict[Role, str] = {
    Role.ADMIN: "Administrator",
    Role.WAREHOUSE: "Warehouse Manager",
    Role.CASHIER: "Cashier",
    Role.CUSTOMER: "Customer",
    Role.DRIVER: "Driver",
    Role.EDITOR: "Editor",
}

# Roles allowed to read inventory / to change it
INVENTORY_READERS = (Role.ADMIN, Role.WAREHOUSE, Role.CASHIER, Role.EDITOR)
INVENTORY_WRITERS = (Role.ADMIN, Role.WAREHOUSE)


class CurrentUser(BaseModel):
    id: str
    email: str = ""
    name: str = ""
    role: Role
    # ``all`` for users not bound to a single warehouse
    warehouse: Warehouse = Warehouse.ALL

    @property
    def is_warehouse_scoped(self) -> bool:
        return self.role is Role.WAREHOUSE and self.warehouse is not Warehouse.ALL
