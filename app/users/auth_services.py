from fastapi import HTTPException, status
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

import logging

from app.system_models.doctor_model.doctor_schemas import DoctorCreate
from app.system_models.patient_model.patient_schemas import PatientCreate
from app.system_services.create_doctor import create_doctor
from app.system_services.create_patient import create_patient
from app.users.auth_cache import AuthCache
from app.users.user_models.schemas import UserLogin, UserRegister
from app.users.user_models.user_model import User
from app.users.security import get_password_hash, issue_access_token, verify_password

logger = logging.getLogger(__name__)


# ============================================================
# ✅ REGISTER A NEW USER
# ============================================================
async def registering_user(user_data: UserRegister, db: AsyncSession) -> User:
    """Create the user and its patient or doctor profile in one commit."""
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )

    new_user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        phone=user_data.phone,
        role=user_data.role,
    )
    db.add(new_user)
    await db.flush()

    if user_data.role == "doctor":
        # Doctors stay inactive until an admin approves them
        await create_doctor(db, DoctorCreate(
            user_id=new_user.id,
            specialization=user_data.specialization,
            experience=user_data.experience or 0,
            address=user_data.address or "",
            license_number=user_data.license_number,
        ))
    else:
        await create_patient(db, PatientCreate(
            user_id=new_user.id,
            address=user_data.address or "",
        ))

    await db.commit()
    await db.refresh(new_user)
    logger.info(f"Registered {new_user.role} user {new_user.id}")
    return new_user


# ============================================================
# ✅ AUTHENTICATE USER
# ============================================================
async def authenticate_user(
    email: str, password: str, db: AsyncSession
) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalars().first()

    if not user:
        return None

    if not verify_password(password, user.hashed_password):
        return None

    return user


# ============================================================
# ✅ LOGIN USER
# ============================================================
async def login_user(user_data: UserLogin, db: AsyncSession) -> tuple[str, User]:
    user = await authenticate_user(user_data.email, user_data.password, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )

    access_token = issue_access_token(user.id, user.email, user.role)
    return access_token, user


# ============================================================
# ✅ LOGOUT USER
# ============================================================
def logout_user(token: str, cache: AuthCache) -> None:
    cache.evict(token)
