"""Issue and check signed access and refresh tokens."""

from datetime import timedelta
from typing import Optional

from fastapi import HTTPException, status
from jose import JWTError, jwt

from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def _encode(claims: dict, lifetime: timedelta) -> str:
    settings = get_settings()
    issued_at = utc_now()
    claims = {
        **claims,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + lifetime).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_access_token(
    subject: str,
    *,
    role: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    settings = get_settings()
    claims = {"sub": subject, "role": role, "type": ACCESS_TOKEN}
    if email:
        claims["email"] = email
    return _encode(
        claims, expires_delta or timedelta(minutes=settings.JWT_EXPIRES_MINUTES)
    )


def create_refresh_token(
    subject: str, *, expires_delta: Optional[timedelta] = None
) -> str:
    """Long-lived token that can only be exchanged for a new token pair."""
    settings = get_settings()
    return _encode(
        {"sub": subject, "type": REFRESH_TOKEN},
        expires_delta or timedelta(minutes=settings.JWT_REFRESH_EXPIRES_MINUTES),
    )


def decode_refresh_token(token: str) -> str:
    """Return the subject of a valid refresh token, else raise 401."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        payload = {}

    subject = payload.get("sub")
    if payload.get("type") != REFRESH_TOKEN or not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token"
        )
    return subject
