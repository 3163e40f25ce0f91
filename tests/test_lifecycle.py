import pytest

from app.system_models.appointment_model.appointment_schemas import AppointmentBook
from app.system_services.appointment_lifecycle import (
    ALLOWED_TRANSITIONS,
    cancel_by_doctor,
    cancel_by_patient,
    complete_appointment,
    confirm_appointment,
    ensure_transition,
    source_statuses,
)
from app.system_services.book_appointment import book_appointment
from app.system_services.exceptions import InvalidTransitionError, NotFoundError
from app.system_services.availability_store import replace_availability
from conftest import FUTURE_DAY, OTHER_FUTURE_DAY


@pytest.fixture
def booked(db_session, slot_locks, make_patient, make_doctor):
    """Book FUTURE_DAY 10:00 and return (patient user, doctor, appointment)."""

    async def _book():
        patient_user = await make_patient()
        doctor = await make_doctor()
        appointment = await book_appointment(
            db_session,
            slot_locks,
            patient_user.id,
            AppointmentBook(doctorId=doctor.id, date=FUTURE_DAY, time="10:00"),
        )
        return patient_user, doctor, appointment

    return _book


# ============================================================================
# STATE MACHINE
# ============================================================================


@pytest.mark.parametrize(
    "current, target",
    [
        ("pending", "confirmed"),
        ("pending", "cancelled"),
        ("pending", "completed"),
        ("confirmed", "cancelled"),
        ("confirmed", "completed"),
    ],
)
def test_legal_transitions(current, target):
    ensure_transition(current, target)


@pytest.mark.parametrize("terminal", ["completed", "cancelled"])
@pytest.mark.parametrize("target", ["pending", "confirmed", "completed", "cancelled"])
def test_terminal_states_have_no_exit(terminal, target):
    with pytest.raises(InvalidTransitionError):
        ensure_transition(terminal, target)


def test_confirmed_cannot_go_back_to_pending():
    with pytest.raises(InvalidTransitionError):
        ensure_transition("confirmed", "pending")


def test_source_statuses():
    assert set(source_statuses("cancelled")) == {"pending", "confirmed"}
    assert set(source_statuses("confirmed")) == {"pending"}
    assert source_statuses("pending") == ()
    assert set(ALLOWED_TRANSITIONS) == {"pending", "confirmed", "completed", "cancelled"}


# ============================================================================
# TRANSITIONS AGAINST THE DATABASE
# ============================================================================


async def test_doctor_confirms(db_session, booked):
    _, doctor, appointment = await booked()

    confirmed = await confirm_appointment(db_session, doctor.user_id, appointment.id)

    assert confirmed.status == "confirmed"
    await db_session.refresh(doctor)
    assert doctor.available_slots == [{"date": FUTURE_DAY, "slots": []}]


async def test_other_doctor_sees_not_found(db_session, booked, make_doctor):
    _, _, appointment = await booked()
    stranger = await make_doctor(email="other@example.com", name="Dr. Other")

    with pytest.raises(NotFoundError, match="cannot be confirmed"):
        await confirm_appointment(db_session, stranger.user_id, appointment.id)


async def test_confirm_twice_is_not_found(db_session, booked):
    _, doctor, appointment = await booked()
    await confirm_appointment(db_session, doctor.user_id, appointment.id)

    with pytest.raises(NotFoundError):
        await confirm_appointment(db_session, doctor.user_id, appointment.id)


async def test_patient_cancel_restores_slot_once(db_session, slot_locks, booked):
    patient_user, doctor, appointment = await booked()

    cancelled = await cancel_by_patient(db_session, slot_locks, patient_user.id, appointment.id)
    assert cancelled.status == "cancelled"

    with pytest.raises(NotFoundError, match="cannot be cancelled"):
        await cancel_by_patient(db_session, slot_locks, patient_user.id, appointment.id)

    await db_session.refresh(doctor)
    assert doctor.available_slots == [{"date": FUTURE_DAY, "slots": ["10:00 AM"]}]


async def test_patient_cancels_confirmed(db_session, slot_locks, booked):
    patient_user, doctor, appointment = await booked()
    await confirm_appointment(db_session, doctor.user_id, appointment.id)

    cancelled = await cancel_by_patient(db_session, slot_locks, patient_user.id, appointment.id)

    assert cancelled.status == "cancelled"
    await db_session.refresh(doctor)
    assert doctor.available_slots == [{"date": FUTURE_DAY, "slots": ["10:00 AM"]}]


async def test_other_patient_cannot_cancel(db_session, slot_locks, booked, make_patient):
    _, doctor, appointment = await booked()
    intruder = await make_patient(email="intruder@example.com", name="Ivy Intruder")

    with pytest.raises(NotFoundError):
        await cancel_by_patient(db_session, slot_locks, intruder.id, appointment.id)

    await db_session.refresh(doctor)
    assert doctor.available_slots == [{"date": FUTURE_DAY, "slots": []}]


async def test_doctor_cancel_restores_slot(db_session, slot_locks, booked):
    _, doctor, appointment = await booked()

    cancelled = await cancel_by_doctor(db_session, slot_locks, doctor.user_id, appointment.id)

    assert cancelled.status == "cancelled"
    await db_session.refresh(doctor)
    assert doctor.available_slots == [{"date": FUTURE_DAY, "slots": ["10:00 AM"]}]


async def test_complete_is_terminal_and_keeps_slot_consumed(db_session, slot_locks, booked):
    patient_user, doctor, appointment = await booked()
    # Failed transitions roll back and expire loaded objects; keep plain ids
    patient_user_id, doctor_user_id, appointment_id = patient_user.id, doctor.user_id, appointment.id

    completed = await complete_appointment(
        db_session, doctor.user_id, appointment.id, notes="Rest and fluids", prescription="/tmp/rx.pdf"
    )
    assert completed.status == "completed"
    assert completed.notes == "Rest and fluids"
    assert completed.prescription == "/tmp/rx.pdf"
    assert completed.completed_at is not None

    with pytest.raises(NotFoundError):
        await cancel_by_patient(db_session, slot_locks, patient_user_id, appointment_id)
    with pytest.raises(NotFoundError):
        await confirm_appointment(db_session, doctor_user_id, appointment_id)
    with pytest.raises(NotFoundError):
        await complete_appointment(db_session, doctor_user_id, appointment_id)

    await db_session.refresh(doctor)
    assert doctor.available_slots == [{"date": FUTURE_DAY, "slots": []}]


async def test_cancelled_cannot_be_completed(db_session, slot_locks, booked):
    patient_user, doctor, appointment = await booked()
    await cancel_by_patient(db_session, slot_locks, patient_user.id, appointment.id)

    with pytest.raises(NotFoundError, match="cannot be completed"):
        await complete_appointment(db_session, doctor.user_id, appointment.id)


async def test_cancel_after_availability_edit_leaves_new_list(db_session, slot_locks, booked):
    patient_user, doctor, appointment = await booked()
    await replace_availability(db_session, slot_locks, doctor.id, [{"date": OTHER_FUTURE_DAY, "slots": ["09:00 AM"]}])

    cancelled = await cancel_by_patient(db_session, slot_locks, patient_user.id, appointment.id)

    assert cancelled.status == "cancelled"
    await db_session.refresh(doctor)
    assert doctor.available_slots == [{"date": OTHER_FUTURE_DAY, "slots": ["09:00 AM"]}]
