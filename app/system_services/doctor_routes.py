# app/system_services/doctor_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database.connection import get_db
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.doctor_model.doctor_schemas import AvailabilityUpdate, DoctorResponse
from app.system_services.availability_store import replace_availability
from app.system_services.records import get_doctor, get_doctor_for_user
from app.system_services.slot_locks import SlotLockRegistry
from app.users.auth_dependencies import get_current_doctor, get_current_user, get_slot_locks
from app.users.user_models.schemas import AuthContext

router = APIRouter()


@router.get("/", response_model=List[DoctorResponse])
async def list_doctors_endpoint(
    specialization: Optional[str] = Query(None, description="Case-insensitive substring match"),
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(get_current_user),
):
    """Verified doctors, best rated first."""
    stmt = select(Doctor).options(selectinload(Doctor.user)).where(Doctor.is_active.is_(True))
    if specialization:
        stmt = stmt.where(Doctor.specialization.ilike(f"%{specialization}%"))
    result = await db.execute(stmt.order_by(Doctor.rating.desc(), Doctor.id))
    return result.scalars().all()


@router.get("/me", response_model=DoctorResponse)
async def my_profile_endpoint(
    db: AsyncSession = Depends(get_db),
    doctor: AuthContext = Depends(get_current_doctor),
):
    return await get_doctor_for_user(db, doctor.user_id)


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor_endpoint(
    doctor_id: int,
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(get_current_user),
):
    return await get_doctor(db, doctor_id)


@router.put("/update-availability", response_model=DoctorResponse)
async def update_availability_endpoint(
    update: AvailabilityUpdate,
    db: AsyncSession = Depends(get_db),
    locks: SlotLockRegistry = Depends(get_slot_locks),
    current_doctor: AuthContext = Depends(get_current_doctor),
):
    """Replace the calling doctor's availability."""
    doctor = await get_doctor_for_user(db, current_doctor.user_id)
    doctor = await replace_availability(db, locks, doctor.id, update.availability)
    return doctor
