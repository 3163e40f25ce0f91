# app/system_models/appointment_model/appointment_model.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.time import utcnow

ACTIVE_STATUSES = ("pending", "confirmed")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    time = Column(String, nullable=False)  # 24-hour "HH:MM"
    status = Column(String, nullable=False, default="pending")
    prescription = Column(String, nullable=True)  # stored file path
    notes = Column(Text, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'cancelled')",
            name="check_appointment_status",
        ),
    )

    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")

    def __repr__(self):
        return f"<Appointment {self.id}: doctor={self.doctor_id} {self.date} {self.time} [{self.status}]>"
