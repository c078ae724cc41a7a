"""Agents and stores behind the clinic HTTP API."""

from .consultation_agent import ConsultationAgent, build_azure_client
from .consultation_store import ConsultationStore, InMemoryConsultationStore
from .doctor_search_agent import DoctorSearchAgent, standard_keywords
from .logging_agent import AuditLogger
from .medical_record_service import MedicalRecordService
from .orchestrator import ConsultationOrchestrator, validate_consultation_input
from .role_agent import RoleDecisionAgent
from .settings_store import SettingsStore
from .user_directory import InMemoryUserDirectory, UserDirectory

__all__ = [
    "AuditLogger",
    "ConsultationAgent",
    "ConsultationOrchestrator",
    "ConsultationStore",
    "DoctorSearchAgent",
    "InMemoryConsultationStore",
    "InMemoryUserDirectory",
    "MedicalRecordService",
    "RoleDecisionAgent",
    "SettingsStore",
    "UserDirectory",
    "build_azure_client",
    "standard_keywords",
    "validate_consultation_input",
]
