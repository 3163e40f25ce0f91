# app/system_services/appointment_lifecycle.py
"""
Appointment Lifecycle

    pending ──confirm──▶ confirmed
       │                    │
       ├──cancel────────────┼──▶ cancelled   (slot restored)
       └──complete──────────┴──▶ completed   (slot stays consumed)

completed and cancelled are terminal.

Every transition is a single conditional UPDATE filtered by id, owner and
current status. A miss is reported as "not found" whether the record is
absent, owned by someone else, or in the wrong state.
"""
import logging
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.helpers.time import utcnow
from app.system_models.appointment_model.appointment_model import ACTIVE_STATUSES, Appointment
from app.system_services.availability_store import restore_slot
from app.system_services.exceptions import InvalidTransitionError, NotFoundError
from app.system_services.records import get_doctor_for_user, get_patient_for_user, load_appointment
from app.system_services.slot_locks import SlotLockRegistry
from app.system_services.time_format import to_12_hour

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, frozenset] = {
    "pending": frozenset({"confirmed", "cancelled", "completed"}),
    "confirmed": frozenset({"cancelled", "completed"}),
    "completed": frozenset(),
    "cancelled": frozenset(),
}


def ensure_transition(current: str, target: str) -> None:
    if target not in ALLOWED_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(f"Cannot move appointment from {current} to {target}")


def source_statuses(target: str) -> tuple:
    """Statuses an appointment may be in to move to ``target``."""
    return tuple(
        status for status, targets in ALLOWED_TRANSITIONS.items() if target in targets
    )


async def _find_owned(
    db: AsyncSession,
    appointment_id: int,
    owner: ColumnElement,
    statuses: Sequence[str],
    verb: str,
) -> Appointment:
    result = await db.execute(
        select(Appointment).where(
            Appointment.id == appointment_id,
            owner,
            Appointment.status.in_(statuses),
        )
    )
    appointment = result.scalars().first()
    if not appointment:
        raise NotFoundError(f"Appointment not found or cannot be {verb}")
    return appointment


async def _apply_transition(
    db: AsyncSession,
    appointment_id: int,
    owner: ColumnElement,
    target: str,
    verb: str,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Conditional status UPDATE; zero rows means not found for this caller."""
    values = {"status": target, "updated_at": utcnow(), **(extra or {})}
    result = await db.execute(
        update(Appointment)
        .where(
            Appointment.id == appointment_id,
            owner,
            Appointment.status.in_(source_statuses(target)),
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise NotFoundError(f"Appointment not found or cannot be {verb}")


async def _cancel(
    db: AsyncSession,
    locks: SlotLockRegistry,
    appointment_id: int,
    owner: ColumnElement,
) -> Appointment:
    appointment = await _find_owned(db, appointment_id, owner, ACTIVE_STATUSES, "cancelled")
    doctor_id, day, time24h = appointment.doctor_id, appointment.date, appointment.time

    async with locks.hold(doctor_id):
        try:
            await _apply_transition(db, appointment_id, owner, "cancelled", "cancelled")
            await restore_slot(db, doctor_id, day.isoformat(), to_12_hour(time24h))
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    logger.info(f"Appointment {appointment_id} cancelled; slot {day} {time24h} released")
    return await load_appointment(db, appointment_id)


# ============================================================
# ✅ Patient Cancels
# ============================================================
async def cancel_by_patient(
    db: AsyncSession, locks: SlotLockRegistry, user_id: int, appointment_id: int
) -> Appointment:
    patient = await get_patient_for_user(db, user_id)
    return await _cancel(db, locks, appointment_id, Appointment.patient_id == patient.id)


# ============================================================
# ✅ Doctor Cancels
# ============================================================
async def cancel_by_doctor(
    db: AsyncSession, locks: SlotLockRegistry, user_id: int, appointment_id: int
) -> Appointment:
    doctor = await get_doctor_for_user(db, user_id)
    return await _cancel(db, locks, appointment_id, Appointment.doctor_id == doctor.id)


# ============================================================
# ✅ Doctor Confirms
# ============================================================
async def confirm_appointment(db: AsyncSession, user_id: int, appointment_id: int) -> Appointment:
    doctor = await get_doctor_for_user(db, user_id)
    try:
        await _apply_transition(
            db, appointment_id, Appointment.doctor_id == doctor.id, "confirmed", "confirmed"
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info(f"Appointment {appointment_id} confirmed by doctor {doctor.id}")
    return await load_appointment(db, appointment_id)


# ============================================================
# ✅ Doctor Completes
# ============================================================
async def complete_appointment(
    db: AsyncSession,
    user_id: int,
    appointment_id: int,
    notes: Optional[str] = None,
    prescription: Optional[str] = None,
) -> Appointment:
    """Close the consultation. ``prescription`` is the stored file path, if any."""
    doctor = await get_doctor_for_user(db, user_id)
    extra: Dict[str, Any] = {"completed_at": utcnow()}
    if notes is not None:
        extra["notes"] = notes
    if prescription is not None:
        extra["prescription"] = prescription

    try:
        await _apply_transition(
            db, appointment_id, Appointment.doctor_id == doctor.id, "completed", "completed", extra
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info(f"Appointment {appointment_id} completed by doctor {doctor.id}")
    return await load_appointment(db, appointment_id)
