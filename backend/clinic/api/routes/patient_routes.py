# backend/clinic/api/routes/patient_routes.py

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from clinic.api.dependencies import get_consultation_store, get_medical_records
from clinic.models.records import ConsultationRecord, MedicalTimelineItem
from clinic.services.consultation_store import ConsultationStore
from clinic.services.medical_record_service import MedicalRecordService

router = APIRouter(prefix="/patients", tags=["patients"])


class PrescriptionRequest(BaseModel):
    doctor_name: str
    summary: str
    details: str = ""


@router.get("/{patient_id}/consultations", response_model=List[ConsultationRecord])
async def patient_history(
    patient_id: str,
    store: ConsultationStore = Depends(get_consultation_store),
):
    return await store.get_patient_history(patient_id)


@router.get("/{patient_id}/timeline", response_model=List[MedicalTimelineItem])
async def patient_timeline(
    patient_id: str,
    records: MedicalRecordService = Depends(get_medical_records),
):
    return await records.get_patient_timeline(patient_id)


@router.post("/{patient_id}/prescriptions", response_model=MedicalTimelineItem, status_code=201)
async def create_prescription(
    patient_id: str,
    request: PrescriptionRequest,
    records: MedicalRecordService = Depends(get_medical_records),
):
    return await records.create_prescription(
        patient_id, request.doctor_name, request.summary, request.details
    )
