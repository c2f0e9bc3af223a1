"""Dependency injection: bearer token, current user, role checks, inventory service."""

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from toollink.catalog.warehouses import Warehouse, key_from_display_name
from toollink.core.config import settings
from toollink.core.security import is_token_expired, read_token_claims
from toollink.schemas.auth import CurrentUser, Role
from toollink.services.inventory import InventoryService
from toollink.services.inventory_client import InventoryApiClient
from toollink.services.results import ErrorKind, OperationResult

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.INVENTORY_API_URL}/auth/login", auto_error=False
)

_STATUS_FOR_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UPSTREAM: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.NETWORK: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.BUSY: status.HTTP_409_CONFLICT,
}


async def get_current_user(token: str | None = Depends(oauth2_scheme)) -> CurrentUser:
    """Read the caller from the token claims. Raises 401 on missing/invalid/expired token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    try:
        claims = read_token_claims(token)
        if is_token_expired(claims):
            raise credentials_exception
        user_id = claims.get("sub") or claims.get("userId") or claims.get("id")
        if user_id is None:
            raise credentials_exception
        role = Role(str(claims["role"]).lower())
    except (JWTError, KeyError, ValueError):
        raise credentials_exception

    warehouse = Warehouse.ALL
    if role is Role.WAREHOUSE:
        warehouse = key_from_display_name(
            claims.get("warehouse") or claims.get("warehouseCode") or settings.DEFAULT_WAREHOUSE
        )

    return CurrentUser(
        id=str(user_id),
        email=str(claims.get("email", "")),
        name=str(claims.get("name", "")),
        role=role,
        warehouse=warehouse,
    )


def require_role(*allowed_roles: Role):
    """Dependency factory: checks the user has one of the allowed roles."""

    async def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        # admin passes every role check
        if user.role is not Role.ADMIN and user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{user.role.value}' not allowed. Required: "
                f"{', '.join(role.value for role in allowed_roles)}",
            )
        return user

    return checker


async def get_inventory_client(
    token: str | None = Depends(oauth2_scheme),
) -> AsyncIterator[InventoryApiClient]:
    """One upstream client per request, forwarding the caller's token."""
    async with InventoryApiClient(token=token) as client:
        yield client


async def get_inventory_service(
    client: InventoryApiClient = Depends(get_inventory_client),
) -> InventoryService:
    return InventoryService(client)


def raise_for_result(result: OperationResult) -> None:
    """Translate a failed service result into the matching HTTP error."""
    if result.ok:
        return
    status_code = _STATUS_FOR_KIND.get(result.error_kind, status.HTTP_502_BAD_GATEWAY)
    if result.field_errors:
        detail: str | dict = {"message": result.message, "errors": result.field_errors}
    else:
        detail = result.message
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    raise HTTPException(status_code=status_code, detail=detail, headers=headers)
