"""Pydantic models for the clinic backend."""

from .consultation import (
    FALLBACK_CONSULTATION,
    ActionCategory,
    ConsultationInput,
    ConsultationOutput,
    PrimaryAction,
    UrgencyLevel,
)
from .directory import (
    DoctorSearchOutput,
    DoctorSearchResult,
    RoleAccess,
    UiConfig,
    User,
    UserCreate,
    UserPublic,
    UserRole,
    UserStatus,
    UserUpdate,
)
from .records import (
    Appointment,
    AppointmentStatus,
    ConsultationRecord,
    ConsultationSummary,
    DoctorAppointmentView,
    DoctorPatientSummary,
    LogEntry,
    LogResult,
    LogStatus,
    MedicalRecordType,
    MedicalTimelineItem,
    OrchestratorResult,
    PatientSummary,
    TimelineStatus,
)
from .settings import SystemSettings, SystemSettingsUpdate

__all__ = [
    "FALLBACK_CONSULTATION",
    "ActionCategory",
    "Appointment",
    "AppointmentStatus",
    "ConsultationInput",
    "ConsultationOutput",
    "ConsultationRecord",
    "ConsultationSummary",
    "DoctorAppointmentView",
    "DoctorPatientSummary",
    "DoctorSearchOutput",
    "DoctorSearchResult",
    "LogEntry",
    "LogResult",
    "LogStatus",
    "MedicalRecordType",
    "MedicalTimelineItem",
    "OrchestratorResult",
    "PatientSummary",
    "PrimaryAction",
    "RoleAccess",
    "SystemSettings",
    "SystemSettingsUpdate",
    "TimelineStatus",
    "UiConfig",
    "UrgencyLevel",
    "User",
    "UserCreate",
    "UserPublic",
    "UserRole",
    "UserStatus",
    "UserUpdate",
]
