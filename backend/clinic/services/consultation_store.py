# backend/clinic/services/consultation_store.py

import asyncio
import logging
from typing import Dict, List, Optional

from clinic.core.errors import InvalidStatusTransitionError
from clinic.core.ids import IdProvider, UuidIdProvider, utc_now
from clinic.models.consultation import ConsultationInput, ConsultationOutput
from clinic.models.directory import DoctorSearchResult
from clinic.models.records import (
    Appointment,
    AppointmentStatus,
    ConsultationRecord,
    ConsultationSummary,
    DoctorAppointmentView,
    PatientSummary,
)
from clinic.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED},
    AppointmentStatus.COMPLETED: set(),
    AppointmentStatus.CANCELLED: set(),
}


class ConsultationStore:
    """Consultation records and the appointments booked from them."""

    async def save_consultation(
        self,
        patient_id: str,
        consultation_input: ConsultationInput,
        result: ConsultationOutput,
        suggested_doctors: List[DoctorSearchResult],
    ) -> ConsultationRecord:
        raise NotImplementedError

    async def get_consultation(self, consultation_id: str) -> Optional[ConsultationRecord]:
        raise NotImplementedError

    async def get_patient_history(self, patient_id: str) -> List[ConsultationRecord]:
        raise NotImplementedError

    async def book_appointment(self, consultation_id: str, doctor_id: str) -> bool:
        raise NotImplementedError

    async def update_appointment_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        raise NotImplementedError

    async def get_doctor_appointments(self, doctor_id: str) -> List[DoctorAppointmentView]:
        raise NotImplementedError


class InMemoryConsultationStore(ConsultationStore):
    def __init__(self, directory: UserDirectory, id_provider: Optional[IdProvider] = None):
        self.directory = directory
        self._ids = id_provider or UuidIdProvider()
        self._consultations: Dict[str, ConsultationRecord] = {}
        # consultation_id -> appointment; enforces one appointment per consultation
        self._appointments: Dict[str, Appointment] = {}
        self._booking_locks: Dict[str, asyncio.Lock] = {}

    def _joined(self, record: ConsultationRecord) -> ConsultationRecord:
        joined = record.model_copy(deep=True)
        appointment = self._appointments.get(record.id)
        joined.appointment = appointment.model_copy() if appointment else None
        return joined

    async def save_consultation(
        self,
        patient_id: str,
        consultation_input: ConsultationInput,
        result: ConsultationOutput,
        suggested_doctors: List[DoctorSearchResult],
    ) -> ConsultationRecord:
        record = ConsultationRecord(
            id=self._ids.new_id("CONS"),
            patient_id=patient_id,
            input=consultation_input.model_copy(deep=True),
            result=result.model_copy(deep=True),
            suggested_doctors=[doc.model_copy() for doc in suggested_doctors],
            created_at=utc_now(),
        )
        self._consultations[record.id] = record
        logger.info("Saved consultation %s for patient %s", record.id, patient_id)
        return record.model_copy(deep=True)

    async def get_consultation(self, consultation_id: str) -> Optional[ConsultationRecord]:
        record = self._consultations.get(consultation_id)
        return self._joined(record) if record else None

    async def get_patient_history(self, patient_id: str) -> List[ConsultationRecord]:
        records = [r for r in reversed(list(self._consultations.values())) if r.patient_id == patient_id]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return [self._joined(r) for r in records]

    async def book_appointment(self, consultation_id: str, doctor_id: str) -> bool:
        consultation = self._consultations.get(consultation_id)
        if consultation is None:
            logger.error("Consultation %s not found during booking", consultation_id)
            return False

        lock = self._booking_locks.setdefault(consultation_id, asyncio.Lock())
        try:
            async with lock:
                if consultation_id in self._appointments:
                    logger.info("Appointment already exists for consultation %s", consultation_id)
                    return True

                appointment = Appointment(
                    id=self._ids.new_id("APT"),
                    doctor_id=doctor_id,
                    patient_id=consultation.patient_id,
                    consultation_id=consultation_id,
                    status=AppointmentStatus.PENDING,
                    timestamp=utc_now(),
                )
                self._appointments[consultation_id] = appointment
        finally:
            # once booked, the appointment itself guards later calls
            self._booking_locks.pop(consultation_id, None)
        logger.info("Appointment %s created with doctor %s", appointment.id, doctor_id)
        return True

    async def update_appointment_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        for consultation_id, appointment in self._appointments.items():
            if appointment.id != appointment_id:
                continue
            if status not in ALLOWED_TRANSITIONS[appointment.status]:
                raise InvalidStatusTransitionError(
                    f"Cannot move appointment from {appointment.status.value} to {status.value}"
                )
            self._appointments[consultation_id] = appointment.model_copy(update={"status": status})
            return True
        return False

    async def get_doctor_appointments(self, doctor_id: str) -> List[DoctorAppointmentView]:
        users = {user.id: user for user in await self.directory.get_users()}
        views = []
        for appointment in reversed(list(self._appointments.values())):
            if appointment.doctor_id != doctor_id:
                continue
            patient = users.get(appointment.patient_id)
            consultation = self._consultations.get(appointment.consultation_id)
            views.append(
                DoctorAppointmentView(
                    appointment_id=appointment.id,
                    status=appointment.status,
                    timestamp=appointment.timestamp,
                    patient=PatientSummary(
                        id=patient.id, name=patient.name, email=patient.email, role=patient.role.value
                    )
                    if patient
                    else PatientSummary(id="UNKNOWN", name="Unknown Patient"),
                    consultation=_summarise(consultation) if consultation else None,
                )
            )
        views.sort(key=lambda v: v.timestamp, reverse=True)
        return views


def _summarise(record: ConsultationRecord) -> ConsultationSummary:
    result = record.result
    return ConsultationSummary(
        id=record.id,
        summary=result.analysis,
        urgency=result.urgency_level,
        symptoms=list(record.input.symptoms),
        primary_condition=result.possible_conditions[0] if result.possible_conditions else "Undiagnosed",
        age=record.input.age,
        gender=record.input.gender,
        duration=record.input.duration,
        notes=record.input.notes or "",
        possible_conditions=list(result.possible_conditions),
        recommended_actions=list(result.recommended_actions),
    )
