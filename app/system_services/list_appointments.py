# app/system_services/list_appointments.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.system_models.appointment_model.appointment_model import Appointment
from app.system_services.records import (
    APPOINTMENT_LOAD_OPTIONS,
    get_doctor_for_user,
    get_patient_for_user,
)
from app.system_services.time_format import parse_date


async def _list(db: AsyncSession, *criteria, day: Optional[str] = None) -> List[Appointment]:
    stmt = select(Appointment).options(*APPOINTMENT_LOAD_OPTIONS).where(*criteria)
    if day:
        stmt = stmt.where(Appointment.date == parse_date(day))
    stmt = stmt.order_by(Appointment.date.desc(), Appointment.time.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_patient_appointments(
    db: AsyncSession, user_id: int, day: Optional[str] = None
) -> List[Appointment]:
    """Appointments of the patient behind ``user_id``, optionally for one day."""
    patient = await get_patient_for_user(db, user_id)
    return await _list(db, Appointment.patient_id == patient.id, day=day)


async def list_doctor_appointments(
    db: AsyncSession, user_id: int, day: Optional[str] = None
) -> List[Appointment]:
    doctor = await get_doctor_for_user(db, user_id)
    return await _list(db, Appointment.doctor_id == doctor.id, day=day)


async def list_all_appointments(db: AsyncSession) -> List[Appointment]:
    return await _list(db)
