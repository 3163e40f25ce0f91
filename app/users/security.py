# app/users/security.py
"""
Credentials for the booking API.
Argon2 password hashes and the signed bearer token that carries
(user_id, email, role) between login and every later request.
"""
from datetime import timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.helpers.time import utcnow
from config.appconfig import settings

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# ============================================================
# ✅ Issue Access Token
# ============================================================
def issue_access_token(
    user_id: int, email: str, role: str, expires_in: Optional[timedelta] = None
) -> str:
    """Sign the identity claims ``get_current_user`` resolves on later requests."""
    lifetime = expires_in if expires_in is not None else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRY)
    claims = {
        "sub": email,
        "user_id": user_id,
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
        "exp": utcnow() + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# ============================================================
# ✅ Read Access Token
# ============================================================
def read_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a well-signed, unexpired access token; None for anything else."""
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if claims.get("type") != ACCESS_TOKEN_TYPE or claims.get("user_id") is None:
        return None
    return claims
