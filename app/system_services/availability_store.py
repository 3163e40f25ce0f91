# app/system_services/availability_store.py
"""
Availability Store
A doctor's open slots: an ordered list of {"date", "slots"} buckets.

Invariants kept by every mutation here:
- a date appears at most once
- a time appears at most once inside its date
- booked times are absent

Mutations flush but never commit; the caller owns the transaction.
``replace_availability`` is the committed, doctor-locked entry point.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.doctor_model.doctor_schemas import AvailabilityEntry
from app.system_services.exceptions import InvalidFormatError
from app.system_services.records import get_doctor
from app.system_services.slot_locks import SlotLockRegistry
from app.system_services.time_format import parse_date, validate_time_12h

logger = logging.getLogger(__name__)

EntryLike = Union[AvailabilityEntry, Mapping[str, Any]]


def normalize_availability(entries: Iterable[EntryLike]) -> List[Dict[str, Any]]:
    """Validate entries and collapse duplicate times, keeping first-seen order."""
    normalized = []
    seen_dates = set()
    for entry in entries:
        if isinstance(entry, AvailabilityEntry):
            entry = entry.model_dump()
        day = entry.get("date")
        parse_date(day)
        if day in seen_dates:
            raise InvalidFormatError(f"Duplicate availability entry for {day}")
        seen_dates.add(day)

        slots = []
        for time12h in entry.get("slots") or []:
            validate_time_12h(time12h)
            if time12h not in slots:
                slots.append(time12h)
        normalized.append({"date": day, "slots": slots})
    return normalized


def has_slot(available_slots: List[Dict[str, Any]], day: str, time12h: str) -> bool:
    return any(
        entry["date"] == day and time12h in entry["slots"]
        for entry in available_slots or []
    )


# ============================================================
# ✅ Replace Availability
# ============================================================
async def set_availability(
    db: AsyncSession, doctor_id: int, entries: Iterable[EntryLike]
) -> Doctor:
    """
    Replace a doctor's full availability list.

    Existing appointments are not consulted: a time booked earlier that shows
    up again in ``entries`` becomes bookable a second time.
    """
    normalized = normalize_availability(entries)
    doctor = await get_doctor(db, doctor_id, for_update=True)
    doctor.available_slots = normalized
    await db.flush()
    logger.info(f"Availability replaced for doctor {doctor_id}: {len(normalized)} date(s)")
    return doctor


# ============================================================
# ✅ Remove Slot (booking)
# ============================================================
async def remove_slot(db: AsyncSession, doctor_id: int, day: str, time12h: str) -> bool:
    """Drop ``time12h`` from the ``day`` bucket. Missing bucket or time is a no-op."""
    doctor = await get_doctor(db, doctor_id, for_update=True)
    removed = False
    updated = []
    for entry in doctor.available_slots or []:
        slots = list(entry["slots"])
        if entry["date"] == day and time12h in slots:
            slots = [t for t in slots if t != time12h]
            removed = True
        updated.append({"date": entry["date"], "slots": slots})

    if removed:
        # Assign a fresh list so the JSON column is marked dirty
        doctor.available_slots = updated
        await db.flush()
        logger.debug(f"Removed slot {day} {time12h} from doctor {doctor_id}")
    return removed


# ============================================================
# ✅ Restore Slot (cancellation)
# ============================================================
async def restore_slot(db: AsyncSession, doctor_id: int, day: str, time12h: str) -> bool:
    """
    Put ``time12h`` back into the ``day`` bucket if it is not already there.

    A date the doctor has since removed from availability is not recreated.
    """
    doctor = await get_doctor(db, doctor_id, for_update=True)
    entries = doctor.available_slots or []
    if not any(entry["date"] == day for entry in entries):
        logger.warning(
            f"Doctor {doctor_id} has no availability entry for {day}; slot {time12h} not restored"
        )
        return False

    restored = False
    updated = []
    for entry in entries:
        slots = list(entry["slots"])
        if entry["date"] == day and time12h not in slots:
            slots.append(time12h)
            restored = True
        updated.append({"date": entry["date"], "slots": slots})

    if restored:
        doctor.available_slots = updated
        await db.flush()
        logger.debug(f"Restored slot {day} {time12h} to doctor {doctor_id}")
    return restored


# ============================================================
# ✅ Replace Availability (committed)
# ============================================================
async def replace_availability(
    db: AsyncSession, locks: SlotLockRegistry, doctor_id: int, entries: Iterable[EntryLike]
) -> Doctor:
    """Replace and commit under the doctor lock booking and cancellation take."""
    async with locks.hold(doctor_id):
        try:
            doctor = await set_availability(db, doctor_id, entries)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
    return doctor
