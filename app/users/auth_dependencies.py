# app/users/auth_dependencies.py
# Centralized Authentication Dependencies

import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_services.slot_locks import SlotLockRegistry
from app.users.auth_cache import AuthCache
from app.users.security import read_access_token
from app.users.user_models.schemas import AuthContext
from app.users.user_models.user_model import User

logger = logging.getLogger(__name__)

# Security schemes
security_scheme = HTTPBearer(auto_error=False)


def get_auth_cache(request: Request) -> AuthCache:
    return request.app.state.auth_cache


def get_slot_locks(request: Request) -> SlotLockRegistry:
    return request.app.state.slot_locks


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    cache: AuthCache = Depends(get_auth_cache),
    db: AsyncSession = Depends(get_db)
) -> AuthContext:
    """
    Resolve the caller's identity from the bearer token.

    Cached identities are reused until the cache TTL runs out; otherwise:
    1. JWT signature and expiry
    2. User exists
    3. User is active

    Raises 401 for missing/invalid credentials, 403 for inactive accounts.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token_string = credentials.credentials

    cached = cache.get(token_string)
    if cached is not None:
        return cached

    claims = read_access_token(token_string)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await db.get(User, claims["user_id"])
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    identity = AuthContext(user_id=user.id, role=user.role, email=user.email, name=user.name)
    cache.set(token_string, identity)
    logger.debug(f"Authenticated user {user.id} ({user.role})")
    return identity


def require_role(role: str):
    """Dependency factory: 403 unless the caller has ``role``."""

    async def dependency(current_user: AuthContext = Depends(get_current_user)) -> AuthContext:
        if current_user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not authorized as {role}"
            )
        return current_user

    return dependency


get_current_patient = require_role("patient")
get_current_doctor = require_role("doctor")
get_current_admin = require_role("admin")
