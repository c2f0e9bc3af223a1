"""Bearer token inspection.

The inventory API owns signature verification; this service only reads the
claims it needs to scope views (role, warehouse) and rejects tokens that are
unreadable or already expired.
"""

from datetime import datetime, timezone

from jose import JWTError, jwt


def read_token_claims(token: str) -> dict:
    """Return the token payload without verifying it. Raises JWTError."""
    claims = jwt.get_unverified_claims(token)
    if not isinstance(claims, dict):
        raise JWTError("Token payload is not an object")
    return claims


def is_token_expired(claims: dict, now: datetime | None = None) -> bool:
    exp = claims.get("exp")
    if exp is None:
        return False
    try:
        expires_at = float(exp)
    except (TypeError, ValueError):
        return True
    current = (now or datetime.now(timezone.utc)).timestamp()
    return expires_at < current
