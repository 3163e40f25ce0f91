# app/system_services/system_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_models.appointment_model.appointment_schemas import AppointmentBook, AppointmentResponse
from app.system_services.appointment_lifecycle import (
    cancel_by_doctor,
    cancel_by_patient,
    complete_appointment,
    confirm_appointment,
)
from app.system_services.book_appointment import book_appointment
from app.system_services.list_appointments import list_doctor_appointments, list_patient_appointments
from app.system_services.prescriptions import discard_prescription, save_prescription
from app.system_services.slot_locks import SlotLockRegistry
from app.users.auth_dependencies import get_current_doctor, get_current_patient, get_slot_locks
from app.users.user_models.schemas import AuthContext

router = APIRouter()


@router.post("/appointment/book", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment_endpoint(
    booking: AppointmentBook,
    db: AsyncSession = Depends(get_db),
    locks: SlotLockRegistry = Depends(get_slot_locks),
    patient: AuthContext = Depends(get_current_patient),
):
    """Book one of the doctor's published slots."""
    return await book_appointment(db, locks, patient.user_id, booking)


@router.put("/appointment/cancel/{appointment_id}", response_model=AppointmentResponse)
async def patient_cancel_endpoint(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    locks: SlotLockRegistry = Depends(get_slot_locks),
    patient: AuthContext = Depends(get_current_patient),
):
    """Cancel a pending or confirmed appointment and release its slot."""
    return await cancel_by_patient(db, locks, patient.user_id, appointment_id)


@router.patch("/appointment/confirm/{appointment_id}", response_model=AppointmentResponse)
async def confirm_endpoint(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    doctor: AuthContext = Depends(get_current_doctor),
):
    return await confirm_appointment(db, doctor.user_id, appointment_id)


@router.put("/appointment/doctor-cancel/{appointment_id}", response_model=AppointmentResponse)
async def doctor_cancel_endpoint(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    locks: SlotLockRegistry = Depends(get_slot_locks),
    doctor: AuthContext = Depends(get_current_doctor),
):
    return await cancel_by_doctor(db, locks, doctor.user_id, appointment_id)


@router.post("/appointments/{appointment_id}/complete", response_model=AppointmentResponse)
async def complete_endpoint(
    appointment_id: int,
    notes: Optional[str] = Form(None, description="Consultation notes"),
    prescription: Optional[UploadFile] = File(None, description="Prescription document (optional)"),
    db: AsyncSession = Depends(get_db),
    doctor: AuthContext = Depends(get_current_doctor),
):
    """Mark the consultation completed, optionally attaching notes and a prescription."""
    stored_path = save_prescription(prescription, appointment_id) if prescription else None
    try:
        return await complete_appointment(
            db, doctor.user_id, appointment_id, notes=notes, prescription=stored_path
        )
    except Exception:
        if stored_path:
            discard_prescription(stored_path)
        raise


@router.get("/appointment/my-appointments", response_model=List[AppointmentResponse])
async def my_appointments_endpoint(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; only appointments on this day"),
    db: AsyncSession = Depends(get_db),
    patient: AuthContext = Depends(get_current_patient),
):
    return await list_patient_appointments(db, patient.user_id, date)


@router.get("/appointment/doctor-appointments", response_model=List[AppointmentResponse])
async def doctor_appointments_endpoint(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; only appointments on this day"),
    db: AsyncSession = Depends(get_db),
    doctor: AuthContext = Depends(get_current_doctor),
):
    return await list_doctor_appointments(db, doctor.user_id, date)
