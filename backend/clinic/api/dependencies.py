"""
Application state and FastAPI dependency getters.

One ``AppState`` holds every store and agent. Routes only see the getters,
so tests swap the whole container with
``app.dependency_overrides[get_state] = lambda: state``.
"""

from typing import Any, Optional

from fastapi import Depends

from clinic.core.config import Settings, settings
from clinic.core.ids import IdProvider, UuidIdProvider
from clinic.services.consultation_agent import ConsultationAgent, build_azure_client
from clinic.services.consultation_store import ConsultationStore, InMemoryConsultationStore
from clinic.services.doctor_search_agent import DoctorSearchAgent
from clinic.services.logging_agent import AuditLogger
from clinic.services.medical_record_service import MedicalRecordService
from clinic.services.orchestrator import ConsultationOrchestrator
from clinic.services.role_agent import RoleDecisionAgent
from clinic.services.settings_store import SettingsStore
from clinic.services.user_directory import InMemoryUserDirectory, UserDirectory


class AppState:
    def __init__(
        self,
        config: Settings = settings,
        directory: Optional[UserDirectory] = None,
        consultation_agent: Optional[ConsultationAgent] = None,
        ai_client: Any = None,
        id_provider: Optional[IdProvider] = None,
    ):
        ids = id_provider or UuidIdProvider()
        if directory is None:
            directory = (
                InMemoryUserDirectory.with_demo_users(id_provider=ids)
                if config.SEED_DEMO_USERS
                else InMemoryUserDirectory(id_provider=ids)
            )

        self.directory = directory
        self.settings_store = SettingsStore()
        self.audit_logger = AuditLogger(id_provider=ids)
        self.store: ConsultationStore = InMemoryConsultationStore(directory, id_provider=ids)
        self.records = MedicalRecordService(self.store, id_provider=ids)
        self.consultation_agent = consultation_agent or ConsultationAgent(ai_client, config=config)
        self.doctor_search_agent = DoctorSearchAgent(directory)
        self.role_agent = RoleDecisionAgent()
        self.orchestrator = ConsultationOrchestrator(
            self.consultation_agent,
            self.doctor_search_agent,
            self.audit_logger,
            self.store,
        )

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "AppState":
        return cls(config=config, ai_client=build_azure_client(config))


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState.from_settings()
    return _state


def get_orchestrator(state: AppState = Depends(get_state)) -> ConsultationOrchestrator:
    return state.orchestrator


def get_consultation_store(state: AppState = Depends(get_state)) -> ConsultationStore:
    return state.store


def get_doctor_search_agent(state: AppState = Depends(get_state)) -> DoctorSearchAgent:
    return state.doctor_search_agent


def get_audit_logger(state: AppState = Depends(get_state)) -> AuditLogger:
    return state.audit_logger


def get_settings_store(state: AppState = Depends(get_state)) -> SettingsStore:
    return state.settings_store


def get_user_directory(state: AppState = Depends(get_state)) -> UserDirectory:
    return state.directory


def get_role_agent(state: AppState = Depends(get_state)) -> RoleDecisionAgent:
    return state.role_agent


def get_medical_records(state: AppState = Depends(get_state)) -> MedicalRecordService:
    return state.records
