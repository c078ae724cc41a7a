# backend/clinic/models/records.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .consultation import ConsultationInput, ConsultationOutput, UrgencyLevel
from .directory import DoctorSearchOutput, DoctorSearchResult


class AppointmentStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Appointment(BaseModel):
    id: str
    doctor_id: str
    patient_id: str
    consultation_id: str
    status: AppointmentStatus = AppointmentStatus.PENDING
    timestamp: datetime


class ConsultationRecord(BaseModel):
    id: str
    patient_id: str
    input: ConsultationInput
    result: ConsultationOutput
    suggested_doctors: List[DoctorSearchResult] = []
    created_at: datetime
    appointment: Optional[Appointment] = None


class OrchestratorResult(BaseModel):
    consultation: ConsultationOutput
    doctor_recommendations: Optional[DoctorSearchOutput] = None
    session_id: str

    def to_response(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        if self.doctor_recommendations is None:
            data.pop("doctor_recommendations")
        return data


class LogStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class LogEntry(BaseModel):
    id: str
    timestamp: datetime
    agent_name: str
    user_id: str
    payload: Any = None
    response: Any = None
    status: LogStatus


class LogResult(BaseModel):
    logged: bool
    log_id: str


class PatientSummary(BaseModel):
    id: str
    name: str
    email: str = ""
    role: Optional[str] = None


class ConsultationSummary(BaseModel):
    id: str
    summary: str
    urgency: UrgencyLevel
    symptoms: List[str]
    primary_condition: str
    age: int
    gender: str
    duration: str
    notes: str
    possible_conditions: List[str]
    recommended_actions: List[str]


class DoctorAppointmentView(BaseModel):
    appointment_id: str
    status: AppointmentStatus
    timestamp: datetime
    patient: PatientSummary
    consultation: Optional[ConsultationSummary] = None


class DoctorPatientSummary(BaseModel):
    id: str
    name: str
    email: str
    last_visit: datetime
    condition: str
    status: str = "Patient"


class TimelineStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MedicalRecordType(str, Enum):
    CONSULTATION = "CONSULTATION"
    PRESCRIPTION = "PRESCRIPTION"
    LAB_RESULT = "LAB_RESULT"
    VACCINATION = "VACCINATION"


class MedicalTimelineItem(BaseModel):
    id: str
    date: datetime
    type: MedicalRecordType
    title: str
    provider: str
    summary: str
    tags: List[str] = []
    status: Optional[TimelineStatus] = None
    details: Optional[str] = None
