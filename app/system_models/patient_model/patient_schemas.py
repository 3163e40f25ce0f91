# app/system_models/patient_model/patient_schemas.py
from typing import Optional
from pydantic import BaseModel, ConfigDict


class PatientCreate(BaseModel):
    user_id: int
    address: str = ""
    medical_details: str = ""


class PatientSummary(BaseModel):
    """Patient identity shown on appointment records."""
    id: int
    name: str
    email: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
