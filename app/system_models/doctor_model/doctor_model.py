# app/system_models/doctor_model/doctor_model.py
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.time import utcnow


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    specialization = Column(String, nullable=False)
    experience = Column(Integer, nullable=False, default=0)
    address = Column(String, nullable=False, default="")
    license_number = Column(String, nullable=True)
    about = Column(Text, nullable=True)
    rating = Column(Float, default=0)
    is_active = Column(Boolean, default=False)

    # [{"date": "2025-06-01", "slots": ["10:00 AM", "10:30 AM"]}, ...]
    available_slots = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="doctor")
    appointments = relationship("Appointment", back_populates="doctor")

    @property
    def name(self):
        return self.user.name if self.user else "Unknown Doctor"

    @property
    def email(self):
        return self.user.email if self.user else ""

    def __repr__(self):
        return f"<Doctor {self.id}: {self.specialization}>"
