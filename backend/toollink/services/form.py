"""Inventory form controller.

Holds the editable draft of one inventory item, keeps its category consistent
with the selected warehouse and validates it before handing it to a submit
callback. It performs no I/O of its own.

States::

    idle ──load/quick item──> editing ──submit──> validating ─┬─> validation_failed
      ^                                                       └─> submitting ─┬─> idle   (create)
      └───────────────────────────────────────────────────────────────────────┴─> closed (edit)
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel

from toollink.catalog import warehouses
from toollink.core.config import settings
from toollink.schemas.inventory import InventoryDraft, SupplierInfo
from toollink.services.results import ErrorKind, OperationResult

logger = logging.getLogger(__name__)

SubmitCallback = Callable[[InventoryDraft], Awaitable[Any]]

_ALIAS_TO_FIELD = {
    (info.alias or name): name for name, info in InventoryDraft.model_fields.items()
}


def error_key(field: str) -> str:
    """Errors are keyed by the field name the UI uses (``supplierInfo``)."""
    info = InventoryDraft.model_fields.get(field)
    return (info.alias or field) if info else field


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class FormState(str, enum.Enum):
    IDLE = "idle"
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    VALIDATION_FAILED = "validation_failed"
    CLOSED = "closed"


class InventoryFormController:
    def __init__(
        self,
        user_warehouse: Any = None,
        edit_item: BaseModel | Mapping | None = None,
    ):
        # an ``all`` admin still has to store new items somewhere
        self.user_warehouse = warehouses.resolve_storage_warehouse(
            user_warehouse or settings.DEFAULT_WAREHOUSE
        )
        self.draft = InventoryDraft()
        self.errors: dict[str, str] = {}
        self.is_edit = False
        self.state = FormState.IDLE
        self.reset()
        if edit_item is not None:
            self.load(edit_item)

    @property
    def categories(self) -> tuple[str, ...]:
        return warehouses.categories_for(self.draft.warehouse)

    def reset(self) -> None:
        """Blank form for the user's warehouse."""
        self.draft = InventoryDraft(
            warehouse=self.user_warehouse,
            category=warehouses.default_category(self.user_warehouse),
        )
        self.errors = {}
        self.is_edit = False
        self.state = FormState.IDLE

    def load(self, item: BaseModel | Mapping, edit: bool = True) -> None:
        """Populate the form from an existing item (or an incoming draft)."""
        data = item.model_dump() if isinstance(item, BaseModel) else dict(item)
        known = {
            _ALIAS_TO_FIELD.get(key, key): value
            for key, value in data.items()
            if _ALIAS_TO_FIELD.get(key, key) in InventoryDraft.model_fields
        }
        draft = InventoryDraft.model_validate(known)
        draft.warehouse = warehouses.resolve_storage_warehouse(draft.warehouse)
        self.draft = draft
        self.errors = {}
        self.is_edit = edit
        self.state = FormState.EDITING

    def select_quick_item(self, template: warehouses.QuickItem | Mapping) -> None:
        if isinstance(template, Mapping):
            template = warehouses.QuickItem(
                name=str(template.get("name", "")),
                category=str(template.get("category", "")),
                unit=str(template.get("unit", "")),
                warehouse=warehouses.resolve_storage_warehouse(template.get("warehouse")),
            )
        warehouse = warehouses.resolve_storage_warehouse(template.warehouse)
        self.draft.name = template.name
        self.draft.unit = template.unit
        self.draft.warehouse = warehouse
        self.draft.category = (
            template.category
            if warehouses.is_valid_category(warehouse, template.category)
            else warehouses.default_category(warehouse)
        )
        self.errors = {}
        self.state = FormState.EDITING

    def change_warehouse(self, warehouse_key: Any) -> None:
        warehouse = warehouses.resolve_storage_warehouse(warehouse_key)
        keep_category = self.is_edit and warehouses.is_valid_category(warehouse, self.draft.category)
        self.draft.warehouse = warehouse
        if not keep_category:
            self.draft.category = warehouses.default_category(warehouse)
        self.errors.pop("category", None)

    def update(self, **fields: Any) -> None:
        """Set draft fields by name or UI alias, clearing their errors."""
        for key, value in fields.items():
            name = _ALIAS_TO_FIELD.get(key, key)
            if name not in InventoryDraft.model_fields:
                raise ValueError(f"Unknown inventory form field: {key}")
            if name == "warehouse":
                self.change_warehouse(value)
                continue
            if name == "supplier_info":
                value = self._merge_supplier(value)
            setattr(self.draft, name, value)
            self.errors.pop(error_key(name), None)

    def _merge_supplier(self, value: Any) -> SupplierInfo:
        if isinstance(value, SupplierInfo):
            return value
        if isinstance(value, str):
            return self.draft.supplier_info.model_copy(update={"name": value})
        if isinstance(value, Mapping):
            update = {_supplier_field(key): str(val or "") for key, val in value.items()}
            return self.draft.supplier_info.model_copy(update=update)
        return SupplierInfo()

    def validate(self) -> dict[str, str]:
        """Check every rule and return all violations at once."""
        self.state = FormState.VALIDATING
        draft = self.draft
        errors: dict[str, str] = {}

        if not (draft.name or "").strip():
            errors["name"] = "Item name is required"

        category = (draft.category or "").strip()
        if not category:
            errors["category"] = "Category is required"
        elif not warehouses.is_valid_category(draft.warehouse, category):
            errors["category"] = (
                f"'{category}' is not a category of {warehouses.display_name(draft.warehouse)}"
            )

        if not _is_count(draft.quantity):
            errors["quantity"] = "Quantity must be 0 or greater"

        unit = (draft.unit or "").strip()
        if not unit:
            errors["unit"] = "Unit is required"
        elif unit.lower() not in warehouses.UNITS:
            errors["unit"] = f"Unknown unit '{unit}'"

        if not _is_count(draft.threshold):
            errors["threshold"] = "Threshold must be 0 or greater"

        if not (draft.supplier_info.name or "").strip():
            errors[error_key("supplier_info")] = "Supplier name is required"

        self.errors = errors
        self.state = FormState.VALIDATION_FAILED if errors else FormState.EDITING
        return dict(errors)

    async def submit(self, on_submit: SubmitCallback) -> OperationResult:
        """Validate, then hand a copy of the draft to ``on_submit``.

        ``on_submit`` may return an ``OperationResult``; any other return value
        counts as success. On success a create resets the form and an edit
        closes it; on failure the form keeps its data and returns to the state
        it was in before ``submit``.
        """
        if self.state is FormState.SUBMITTING:
            return OperationResult.failure(ErrorKind.BUSY, "A submission is already in progress")
        if self.state is FormState.CLOSED:
            return OperationResult.failure(ErrorKind.VALIDATION, "The form has been closed")

        prior_state = self.state
        errors = self.validate()
        if errors:
            logger.debug("Inventory form rejected: %s", sorted(errors))
            return OperationResult.failure(
                ErrorKind.VALIDATION, "Please correct the highlighted fields", field_errors=errors
            )

        self.state = FormState.SUBMITTING
        payload = self.draft.model_copy(deep=True)
        payload.unit = payload.unit.strip().lower()
        try:
            outcome = await on_submit(payload)
        except Exception:
            self.state = prior_state
            raise

        result = outcome if isinstance(outcome, OperationResult) else OperationResult.success(outcome)
        if not result.ok:
            self.state = prior_state
            self.errors.update(result.field_errors)
            return result

        if self.is_edit:
            self.state = FormState.CLOSED
        else:
            self.reset()
        return result


def _supplier_field(key: str) -> str:
    if key not in SupplierInfo.model_fields:
        raise ValueError(f"Unknown supplier field: {key}")
    return key
