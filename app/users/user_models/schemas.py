# app/users/user_models/schemas.py


from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

# Allowed values as constants
ROLES = Literal["patient", "doctor", "admin"]
SELF_SERVICE_ROLES = Literal["patient", "doctor"]


class AuthContext(BaseModel):
    """Identity resolved from a bearer token."""
    user_id: int
    role: ROLES
    email: str
    name: str


# ✅ Request schema for registration
class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    phone: Optional[str] = None
    role: SELF_SERVICE_ROLES = "patient"

    # Doctor profile, required when role == "doctor"
    specialization: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0)
    address: Optional[str] = None
    license_number: Optional[str] = None

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def require_doctor_profile(self):
        if self.role == "doctor" and not self.specialization:
            raise ValueError("specialization is required for doctor registration")
        return self


# ✅ Response schema for user info
class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: ROLES
    is_active: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ✅ User login request
class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class UserLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserLogoutResponse(BaseModel):
    message: str
