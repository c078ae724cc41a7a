# backend/clinic/api/routes/doctor_routes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from clinic.api.dependencies import (
    get_consultation_store,
    get_doctor_search_agent,
    get_medical_records,
)
from clinic.models.directory import DoctorSearchOutput
from clinic.models.records import AppointmentStatus, DoctorAppointmentView, DoctorPatientSummary
from clinic.services.consultation_store import ConsultationStore
from clinic.services.doctor_search_agent import DoctorSearchAgent
from clinic.services.medical_record_service import MedicalRecordService

router = APIRouter(tags=["doctors"])


class StatusUpdateRequest(BaseModel):
    status: AppointmentStatus


@router.get("/doctors/search", response_model=DoctorSearchOutput)
async def search_doctors(
    specialist: str = "",
    agent: DoctorSearchAgent = Depends(get_doctor_search_agent),
):
    return await agent.find_matching_doctors(specialist)


@router.get("/doctors/{doctor_id}/appointments", response_model=List[DoctorAppointmentView])
async def doctor_appointments(
    doctor_id: str,
    store: ConsultationStore = Depends(get_consultation_store),
):
    return await store.get_doctor_appointments(doctor_id)


@router.get("/doctors/{doctor_id}/patients", response_model=List[DoctorPatientSummary])
async def doctor_patients(
    doctor_id: str,
    records: MedicalRecordService = Depends(get_medical_records),
):
    return await records.get_doctor_patients(doctor_id)


@router.patch("/appointments/{appointment_id}/status")
async def update_appointment_status(
    appointment_id: str,
    request: StatusUpdateRequest,
    store: ConsultationStore = Depends(get_consultation_store),
):
    updated = await store.update_appointment_status(appointment_id, request.status)
    if not updated:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return {"appointment_id": appointment_id, "status": request.status.value}
