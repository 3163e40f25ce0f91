# app/system_services/create_doctor.py
from sqlalchemy.ext.asyncio import AsyncSession

from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.doctor_model.doctor_schemas import DoctorCreate


async def create_doctor(db: AsyncSession, doctor: DoctorCreate):
    """Create an unverified doctor profile with no availability. The caller commits."""
    db_doctor = Doctor(**doctor.model_dump(), is_active=False, available_slots=[])
    db.add(db_doctor)
    await db.flush()
    return db_doctor
