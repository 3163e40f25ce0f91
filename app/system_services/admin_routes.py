# app/system_services/admin_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database.connection import get_db
from app.system_models.appointment_model.appointment_schemas import AppointmentResponse
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.doctor_model.doctor_schemas import (
    AvailabilityUpdate,
    DoctorResponse,
    DoctorVerification,
)
from app.system_services.availability_store import replace_availability
from app.system_services.list_appointments import list_all_appointments
from app.system_services.records import get_doctor
from app.system_services.slot_locks import SlotLockRegistry
from app.users.auth_dependencies import get_current_admin, get_slot_locks
from app.users.user_models.schemas import AuthContext

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/doctors", response_model=List[DoctorResponse])
async def all_doctors_endpoint(
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(get_current_admin),
):
    result = await db.execute(select(Doctor).options(selectinload(Doctor.user)).order_by(Doctor.id))
    return result.scalars().all()


@router.get("/pending-doctors", response_model=List[DoctorResponse])
async def pending_doctors_endpoint(
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(get_current_admin),
):
    result = await db.execute(
        select(Doctor)
        .options(selectinload(Doctor.user))
        .where(Doctor.is_active.is_(False))
        .order_by(Doctor.created_at)
    )
    return result.scalars().all()


@router.patch("/verify-doctor/{doctor_id}", response_model=DoctorResponse)
async def verify_doctor_endpoint(
    doctor_id: int,
    verification: DoctorVerification,
    db: AsyncSession = Depends(get_db),
    admin: AuthContext = Depends(get_current_admin),
):
    """Approve or reject a doctor account. Rejected doctors are deactivated, not deleted."""
    doctor = await get_doctor(db, doctor_id)
    doctor.is_active = verification.action == "approve"
    await db.commit()
    logger.info(f"Doctor {doctor_id} {verification.action}d by admin {admin.user_id}")
    return doctor


@router.patch("/doctors/{doctor_id}/availability", response_model=DoctorResponse)
async def admin_availability_endpoint(
    doctor_id: int,
    update: AvailabilityUpdate,
    db: AsyncSession = Depends(get_db),
    locks: SlotLockRegistry = Depends(get_slot_locks),
    _: AuthContext = Depends(get_current_admin),
):
    doctor = await replace_availability(db, locks, doctor_id, update.availability)
    return doctor


@router.get("/view-appointments", response_model=List[AppointmentResponse])
async def view_appointments_endpoint(
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(get_current_admin),
):
    return await list_all_appointments(db)
