# app/system_services/records.py
"""Record lookups shared by the booking engine and the reporting views."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient
from app.system_services.exceptions import NotFoundError
# Doctor.user and Patient.user resolve "User" by name when the options below are built
from app.users.user_models.user_model import User  # noqa: F401

# Populate counterpart identity for display
APPOINTMENT_LOAD_OPTIONS = (
    selectinload(Appointment.doctor).selectinload(Doctor.user),
    selectinload(Appointment.patient).selectinload(Patient.user),
)


async def get_patient_for_user(db: AsyncSession, user_id: int) -> Patient:
    result = await db.execute(select(Patient).where(Patient.user_id == user_id))
    patient = result.scalars().first()
    if not patient:
        raise NotFoundError("Patient not found")
    return patient


async def get_doctor_for_user(db: AsyncSession, user_id: int) -> Doctor:
    result = await db.execute(
        select(Doctor).options(selectinload(Doctor.user)).where(Doctor.user_id == user_id)
    )
    doctor = result.scalars().first()
    if not doctor:
        raise NotFoundError("Doctor not found")
    return doctor


async def get_doctor(db: AsyncSession, doctor_id: int, for_update: bool = False) -> Doctor:
    """
    Load a doctor by id.

    With ``for_update`` the row is locked on backends that support it and the
    identity-map copy is overwritten with the committed state.
    """
    stmt = select(Doctor).options(selectinload(Doctor.user)).where(Doctor.id == doctor_id)
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(stmt)
    doctor = result.scalars().first()
    if not doctor:
        raise NotFoundError("Doctor not found")
    return doctor


async def load_appointment(db: AsyncSession, appointment_id: int) -> Appointment:
    result = await db.execute(
        select(Appointment)
        .options(*APPOINTMENT_LOAD_OPTIONS)
        .where(Appointment.id == appointment_id)
        .execution_options(populate_existing=True)
    )
    appointment = result.scalars().first()
    if not appointment:
        raise NotFoundError("Appointment not found")
    return appointment
