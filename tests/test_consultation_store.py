"""
Tests for the in-memory consultation and appointment store.

Run: pytest tests/test_consultation_store.py -v
"""

import asyncio

import pytest

from clinic.core.errors import InvalidStatusTransitionError
from clinic.models import AppointmentStatus, ConsultationInput, DoctorSearchResult, UrgencyLevel
from conftest import make_output, run


@pytest.fixture
def report(consultation_input):
    return ConsultationInput.model_validate(consultation_input)


def _save(store, report, patient_id="U001", **output):
    return run(store.save_consultation(patient_id, report, make_output(**output), []))


def test_save_assigns_id_and_timestamp(store, report):
    suggested = [
        DoctorSearchResult(id="D003", name="Dr. D003", specialist="Spesialis Jantung",
                           is_verified=True, is_active=True)
    ]

    record = run(store.save_consultation("U001", report, make_output(), suggested))

    assert record.id == "CONS-000001"
    assert record.created_at is not None
    assert record.appointment is None
    assert run(store.get_consultation(record.id)).suggested_doctors[0].id == "D003"


def test_unknown_consultation_is_none(store):
    assert run(store.get_consultation("CONS-404")) is None


def test_patient_history_is_newest_first(store, report):
    first = _save(store, report)
    _save(store, report, patient_id="U002")
    second = _save(store, report)

    history = run(store.get_patient_history("U001"))

    assert [record.id for record in history] == [second.id, first.id]


def test_history_joins_appointment(store, report):
    record = _save(store, report)
    run(store.book_appointment(record.id, "D003"))

    (joined,) = run(store.get_patient_history("U001"))

    assert joined.appointment.doctor_id == "D003"
    assert joined.appointment.patient_id == "U001"
    assert joined.appointment.status == AppointmentStatus.PENDING


def test_booking_twice_keeps_one_appointment(store, report):
    record = _save(store, report)

    assert run(store.book_appointment(record.id, "D003")) is True
    first = run(store.get_consultation(record.id)).appointment
    assert run(store.book_appointment(record.id, "D005")) is True
    second = run(store.get_consultation(record.id)).appointment

    assert first.id == second.id == "APT-000001"
    assert second.doctor_id == "D003"


def test_concurrent_bookings_create_one_appointment(store, report):
    record = _save(store, report)

    async def book_many():
        return await asyncio.gather(*(store.book_appointment(record.id, "D003") for _ in range(5)))

    assert run(book_many()) == [True] * 5
    assert len(run(store.get_doctor_appointments("D003"))) == 1
    assert store._booking_locks == {}


def test_booking_unknown_consultation_fails(store):
    assert run(store.book_appointment("CONS-404", "D003")) is False
    assert run(store.get_doctor_appointments("D003")) == []


def test_status_transitions(store, report):
    record = _save(store, report)
    run(store.book_appointment(record.id, "D003"))
    appointment_id = run(store.get_consultation(record.id)).appointment.id

    assert run(store.update_appointment_status(appointment_id, AppointmentStatus.CONFIRMED)) is True
    assert run(store.update_appointment_status(appointment_id, AppointmentStatus.COMPLETED)) is True
    assert run(store.get_consultation(record.id)).appointment.status == AppointmentStatus.COMPLETED


def test_invalid_transition_is_rejected(store, report):
    record = _save(store, report)
    run(store.book_appointment(record.id, "D003"))
    appointment_id = run(store.get_consultation(record.id)).appointment.id
    run(store.update_appointment_status(appointment_id, AppointmentStatus.CANCELLED))

    with pytest.raises(InvalidStatusTransitionError):
        run(store.update_appointment_status(appointment_id, AppointmentStatus.CONFIRMED))


def test_unknown_appointment_update_fails(store):
    assert run(store.update_appointment_status("APT-404", AppointmentStatus.CONFIRMED)) is False


def test_doctor_appointments_join_patient_and_consultation(store, report):
    record = _save(
        store, report, urgency_level=UrgencyLevel.HIGH, possible_conditions=["Angina"]
    )
    run(store.book_appointment(record.id, "D003"))

    (view,) = run(store.get_doctor_appointments("D003"))

    assert view.patient.id == "U001"
    assert view.patient.name == "Budi Santoso"
    assert view.consultation.id == record.id
    assert view.consultation.urgency == UrgencyLevel.HIGH
    assert view.consultation.primary_condition == "Angina"
    assert view.consultation.symptoms == ["fever", "cough"]
    assert run(store.get_doctor_appointments("D005")) == []


def test_unknown_patient_is_placeholder(store, report):
    record = _save(store, report, patient_id="U999")
    run(store.book_appointment(record.id, "D003"))

    (view,) = run(store.get_doctor_appointments("D003"))

    assert view.patient.id == "UNKNOWN"
    assert view.patient.name == "Unknown Patient"


def test_returned_records_are_copies(store, report):
    record = _save(store, report)
    record.result.possible_conditions.append("mutated")

    stored = run(store.get_consultation(record.id))
    assert "mutated" not in stored.result.possible_conditions
