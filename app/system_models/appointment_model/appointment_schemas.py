# app/system_models/appointment_model/appointment_schemas.py
from typing import Optional, Literal
import datetime as dt
from pydantic import BaseModel, ConfigDict, Field

from app.system_models.doctor_model.doctor_schemas import DoctorSummary
from app.system_models.patient_model.patient_schemas import PatientSummary

APPOINTMENT_STATUS = Literal["pending", "confirmed", "completed", "cancelled"]


class AppointmentBook(BaseModel):
    doctor_id: int = Field(..., alias="doctorId")
    # Missing or malformed values are rejected by the booking service with a 400
    date: Optional[str] = Field(None, examples=["2025-06-01"])
    time: Optional[str] = Field(None, examples=["10:00"])

    model_config = ConfigDict(populate_by_name=True)


class AppointmentResponse(BaseModel):
    id: int
    date: dt.date
    time: str
    status: APPOINTMENT_STATUS
    prescription: Optional[str] = None
    notes: Optional[str] = None
    completed_at: Optional[dt.datetime] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    doctor: Optional[DoctorSummary] = None
    patient: Optional[PatientSummary] = None

    model_config = ConfigDict(from_attributes=True)
