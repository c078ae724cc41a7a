# backend/clinic/services/medical_record_service.py

import json
import logging
from typing import Dict, List, Optional, Tuple

from clinic.core.ids import IdProvider, UuidIdProvider, utc_now
from clinic.models.records import (
    AppointmentStatus,
    ConsultationRecord,
    DoctorPatientSummary,
    MedicalRecordType,
    MedicalTimelineItem,
    TimelineStatus,
)
from clinic.services.consultation_store import ConsultationStore

logger = logging.getLogger(__name__)

SUMMARY_LIMIT = 120

APPOINTMENT_TO_TIMELINE = {
    AppointmentStatus.PENDING: TimelineStatus.PENDING,
    AppointmentStatus.CONFIRMED: TimelineStatus.ACTIVE,
    AppointmentStatus.COMPLETED: TimelineStatus.COMPLETED,
    AppointmentStatus.CANCELLED: TimelineStatus.CANCELLED,
}


def timeline_status(record: ConsultationRecord) -> TimelineStatus:
    if record.appointment is None:
        return TimelineStatus.PENDING
    return APPOINTMENT_TO_TIMELINE[record.appointment.status]


def consultation_to_timeline(record: ConsultationRecord) -> MedicalTimelineItem:
    result = record.result
    conditions = result.possible_conditions
    analysis = result.analysis or "No analysis available"
    specialist = result.recommended_specialist

    if len(analysis) > SUMMARY_LIMIT:
        analysis = analysis[:SUMMARY_LIMIT] + "..."

    details = {
        "analysis": result.analysis,
        "recommended_actions": result.recommended_actions,
        "possible_conditions": result.possible_conditions,
        "primary_action": result.primary_action.model_dump(mode="json"),
    }

    return MedicalTimelineItem(
        id=record.id,
        date=record.created_at,
        type=MedicalRecordType.CONSULTATION,
        title=conditions[0] if conditions else "General Consultation",
        provider=f"Referral: {specialist}" if specialist else "AI Health Assistant",
        summary=analysis,
        tags=[result.urgency_level.value] + conditions[:1],
        status=timeline_status(record),
        details=json.dumps(details),
    )


class MedicalRecordService:
    """Read side of the patient record: consultations plus issued prescriptions."""

    def __init__(self, store: ConsultationStore, id_provider: Optional[IdProvider] = None):
        self.store = store
        self._ids = id_provider or UuidIdProvider()
        self._prescriptions: List[Tuple[str, MedicalTimelineItem]] = []

    async def create_prescription(
        self, patient_id: str, doctor_name: str, summary: str, details: str
    ) -> MedicalTimelineItem:
        item = MedicalTimelineItem(
            id=self._ids.new_id("RX"),
            date=utc_now(),
            type=MedicalRecordType.PRESCRIPTION,
            title="New Prescription",
            provider=doctor_name,
            summary=summary,
            tags=["New", "Prescription"],
            status=TimelineStatus.ACTIVE,
            details=details,
        )
        self._prescriptions.append((patient_id, item))
        logger.info("Created prescription %s for %s", item.id, patient_id)
        return item.model_copy()

    async def get_patient_timeline(self, patient_id: str) -> List[MedicalTimelineItem]:
        history = await self.store.get_patient_history(patient_id)
        items = [
            item.model_copy() for owner, item in reversed(self._prescriptions) if owner == patient_id
        ]
        items += [consultation_to_timeline(record) for record in history]
        items.sort(key=lambda item: item.date, reverse=True)
        return items

    async def get_doctor_patients(self, doctor_id: str) -> List[DoctorPatientSummary]:
        patients: Dict[str, DoctorPatientSummary] = {}
        for view in await self.store.get_doctor_appointments(doctor_id):
            if view.patient.id in patients:
                continue
            patients[view.patient.id] = DoctorPatientSummary(
                id=view.patient.id,
                name=view.patient.name,
                email=view.patient.email,
                last_visit=view.timestamp,
                condition=view.consultation.primary_condition if view.consultation else "General",
            )
        return list(patients.values())
