# app/system_services/book_appointment.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.time import today
from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.appointment_model.appointment_schemas import AppointmentBook
from app.system_services.availability_store import has_slot, remove_slot
from app.system_services.exceptions import PastDateError, SlotUnavailableError
from app.system_services.records import get_doctor, get_patient_for_user, load_appointment
from app.system_services.slot_locks import SlotLockRegistry
from app.system_services.time_format import parse_date, to_12_hour, validate_time_24h

logger = logging.getLogger(__name__)


async def book_appointment(
    db: AsyncSession,
    locks: SlotLockRegistry,
    user_id: int,
    request: AppointmentBook,
) -> Appointment:
    """
    Reserve a doctor's published slot for the patient behind ``user_id``.

    Checks run in order and the first failure wins:
    format, past date, patient, doctor, slot availability.
    The slot removal and the appointment insert commit together, under the
    doctor lock, so two requests for one slot cannot both succeed and two
    bookings on different dates cannot overwrite each other's slot removal.
    """
    logger.info(f"Booking request: doctor={request.doctor_id} date={request.date} time={request.time} user={user_id}")

    appointment_date = parse_date(request.date)
    validate_time_24h(request.time)

    if appointment_date < today():
        logger.warning(f"Rejected past date {request.date} for user {user_id}")
        raise PastDateError()

    patient = await get_patient_for_user(db, user_id)

    async with locks.hold(request.doctor_id):
        try:
            doctor = await get_doctor(db, request.doctor_id, for_update=True)
            time12h = to_12_hour(request.time)

            if not has_slot(doctor.available_slots, request.date, time12h):
                logger.info(f"Slot not available: doctor={doctor.id} {request.date} {time12h}")
                raise SlotUnavailableError()

            appointment = Appointment(
                patient_id=patient.id,
                doctor_id=doctor.id,
                date=appointment_date,
                time=request.time,
                status="pending",
            )
            db.add(appointment)
            await remove_slot(db, doctor.id, request.date, time12h)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    logger.info(f"Appointment {appointment.id} booked: doctor={doctor.id} {request.date} {time12h}")
    return await load_appointment(db, appointment.id)
