# app/users/auth_routers.py

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.users.auth_cache import AuthCache
from app.users.auth_dependencies import get_auth_cache, get_current_user, security_scheme
from app.users.auth_services import registering_user, login_user, logout_user
from app.users.user_models.schemas import (
    AuthContext,
    UserRegister,
    UserLogin,
    UserResponse,
    UserLoginResponse,
    UserLogoutResponse,
)

router = APIRouter()

# ============================================================
# ✅ REGISTER
# ============================================================
@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user_data: UserRegister, db: AsyncSession = Depends(get_db)) -> UserResponse:
    return await registering_user(user_data, db)


# ============================================================
# ✅ AUTHENTICATE USER (LOGIN)
# ============================================================
@router.post("/login", response_model=UserLoginResponse)
async def login(user_data: UserLogin, db: AsyncSession = Depends(get_db)) -> UserLoginResponse:
    access_token, user = await login_user(user_data, db)
    return UserLoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


# ============================================================
# ✅ LOGOUT USER
# ============================================================
@router.post("/logout", response_model=UserLogoutResponse)
async def logout(
    current_user: AuthContext = Depends(get_current_user),
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
    cache: AuthCache = Depends(get_auth_cache),
) -> UserLogoutResponse:
    logout_user(credentials.credentials, cache)
    return UserLogoutResponse(message="Successfully logged out")
