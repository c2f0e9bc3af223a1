"""Unit tests for auth: token claims + current-user and role dependencies."""

import time
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException
from jose import JWTError, jwt

from toollink.catalog.warehouses import Warehouse
from toollink.core.deps import get_current_user, require_role
from toollink.core.security import is_token_expired, read_token_claims
from toollink.schemas.auth import INVENTORY_READERS, INVENTORY_WRITERS, CurrentUser, Role


def _token(**claims) -> str:
    payload = {"sub": "user-1", "email": "nimal@toollink.lk", "role": "admin"}
    payload.update(claims)
    payload = {key: value for key, value in payload.items() if value is not None}
    return jwt.encode(payload, "upstream-secret", algorithm="HS256")


# ── Token claims ──────────────────────────────────

def test_read_token_claims_without_signing_key():
    claims = read_token_claims(_token(role="warehouse", warehouse="W2"))
    assert claims["role"] == "warehouse"
    assert claims["warehouse"] == "W2"


def test_read_token_claims_rejects_garbage():
    with pytest.raises(JWTError):
        read_token_claims("not-a-jwt")


def test_is_token_expired():
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    assert is_token_expired({"exp": now.timestamp() - 1}, now=now) is True
    assert is_token_expired({"exp": now.timestamp() + 60}, now=now) is False
    assert is_token_expired({}, now=now) is False
    assert is_token_expired({"exp": "soon"}, now=now) is True


# ── get_current_user ──────────────────────────────

@pytest.mark.asyncio
async def test_admin_user_sees_all_warehouses():
    user = await get_current_user(token=_token(warehouse="W1"))
    assert user.id == "user-1"
    assert user.role is Role.ADMIN
    assert user.warehouse is Warehouse.ALL
    assert user.is_warehouse_scoped is False


@pytest.mark.asyncio
async def test_warehouse_user_is_scoped_with_legacy_name():
    user = await get_current_user(token=_token(role="warehouse", warehouse="warehouse3"))
    assert user.warehouse is Warehouse.W3
    assert user.is_warehouse_scoped is True


@pytest.mark.asyncio
async def test_warehouse_user_without_claim_gets_default():
    user = await get_current_user(token=_token(role="Warehouse", sub=None, userId="u-9"))
    assert user.id == "u-9"
    assert user.warehouse is Warehouse.WM


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "token",
    [
        None,
        "",
        "garbage",
        _token(exp=int(time.time()) - 10),
        _token(role="superuser"),
        _token(role=None),
        _token(sub=None),
    ],
)
async def test_invalid_tokens_are_401(token):
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(token=token)
    assert exc_info.value.status_code == 401
    assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


# ── Role checks ───────────────────────────────────

@pytest.mark.asyncio
async def test_require_role_rejects_other_roles():
    checker = require_role(*INVENTORY_WRITERS)
    cashier = CurrentUser(id="c1", role=Role.CASHIER)
    with pytest.raises(HTTPException) as exc_info:
        await checker(user=cashier)
    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_admin_passes_every_role_check():
    checker = require_role(Role.DRIVER)
    admin = CurrentUser(id="a1", role=Role.ADMIN)
    assert await checker(user=admin) is admin


def test_role_matrix():
    assert set(INVENTORY_WRITERS) <= set(INVENTORY_READERS)
    assert Role.CUSTOMER not in INVENTORY_READERS
    assert Role.DRIVER not in INVENTORY_READERS
