# app/system_models/doctor_model/doctor_schemas.py
from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class AvailabilityEntry(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD", examples=["2025-06-01"])
    slots: List[str] = Field(default_factory=list, description="12-hour times", examples=[["10:00 AM"]])


class AvailabilityUpdate(BaseModel):
    availability: List[AvailabilityEntry]


class DoctorCreate(BaseModel):
    user_id: int
    specialization: str
    experience: int = 0
    address: str = ""
    license_number: Optional[str] = None
    about: Optional[str] = None


class DoctorSummary(BaseModel):
    """Doctor identity shown on appointment records."""
    id: int
    name: str
    email: str
    specialization: str

    model_config = ConfigDict(from_attributes=True)


class DoctorResponse(DoctorSummary):
    experience: int
    address: str
    license_number: Optional[str] = None
    about: Optional[str] = None
    rating: float = 0
    is_active: bool
    available_slots: List[AvailabilityEntry]
    created_at: datetime
    updated_at: datetime


class DoctorVerification(BaseModel):
    action: Literal["approve", "reject"]
