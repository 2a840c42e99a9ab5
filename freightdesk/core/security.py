"""JWT helpers and the authenticated-user dependencies."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from freightdesk.core.config import get_settings
from freightdesk.interfaces.http.deps.database import get_db_session
from freightdesk.modules.accounts import AccountService, User

security = HTTPBearer(auto_error=False)

ACCESS_PURPOSE = "access"
RESET_PURPOSE = "password_reset"


def _encode(subject: str, purpose: str, expires_delta: timedelta, **claims: object) -> str:
    settings = get_settings()
    payload = {
        "sub": subject,
        "purpose": purpose,
        "exp": datetime.now(timezone.utc) + expires_delta,
        **claims,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def _decode(token: str, purpose: str) -> str:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    subject = payload.get("sub")
    if not subject or payload.get("purpose") != purpose:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return subject


def create_access_token(user_id: str, user_type: str, expires_delta: Optional[timedelta] = None) -> str:
    expire_delta = expires_delta or timedelta(minutes=get_settings().access_token_expire_minutes)
    return _encode(user_id, ACCESS_PURPOSE, expire_delta, user_type=user_type)


def decode_access_token(token: str) -> str:
    """Return the user id carried by a valid access token."""
    return _decode(token, ACCESS_PURPOSE)


def create_reset_token(user_id: str) -> str:
    minutes = get_settings().security.reset_token_expire_minutes
    return _encode(user_id, RESET_PURPOSE, timedelta(minutes=minutes))


def decode_reset_token(token: str) -> str:
    try:
        return _decode(token, RESET_PURPOSE)
    except HTTPException as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired reset token") from exc


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    user_id = decode_access_token(credentials.credentials)
    user = await AccountService.with_session(db).get_by_id(user_id)
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return user


async def get_current_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


__all__ = [
    "create_access_token",
    "create_reset_token",
    "decode_access_token",
    "decode_reset_token",
    "get_current_admin",
    "get_current_user",
    "security",
]
