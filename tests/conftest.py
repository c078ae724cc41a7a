import asyncio
import json
from types import SimpleNamespace

import pytest

from clinic.core.ids import SequentialIdProvider
from clinic.models import (
    ActionCategory,
    ConsultationOutput,
    PrimaryAction,
    UrgencyLevel,
    User,
    UserRole,
    UserStatus,
)
from clinic.services import (
    AuditLogger,
    ConsultationOrchestrator,
    DoctorSearchAgent,
    InMemoryConsultationStore,
    InMemoryUserDirectory,
)


def run(coro):
    return asyncio.run(coro)


def make_output(**overrides) -> ConsultationOutput:
    data = {
        "analysis": "Likely a viral upper respiratory infection.",
        "possible_conditions": ["Common cold", "Influenza"],
        "recommended_actions": ["Rest", "Drink plenty of fluids"],
        "danger_signs": ["Difficulty breathing"],
        "doctor_referral_needed": False,
        "recommended_specialist": None,
        "urgency_level": UrgencyLevel.LOW,
        "primary_action": PrimaryAction(
            category=ActionCategory.SELF_CARE,
            reason="Mild symptoms",
            next_step="Rest at home",
        ),
    }
    data.update(overrides)
    return ConsultationOutput(**data)


def output_json(**overrides) -> str:
    return json.dumps(make_output(**overrides).model_dump(mode="json"))


class StubConsultationAgent:
    """Stands in for the AI client inside orchestrator tests."""

    def __init__(self, output=None, error=None):
        self.output = output or make_output()
        self.error = error
        self.calls = []

    async def assess(self, consultation_input):
        self.calls.append(consultation_input)
        if self.error:
            raise self.error
        return self.output


class FakeCompletions:
    def __init__(self, content=None, error=None, delay=0.0):
        self.content = content
        self.error = error
        self.delay = delay
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeAIClient:
    """Mimics ``client.chat.completions.create`` of the OpenAI SDK."""

    def __init__(self, content=None, error=None, delay=0.0):
        self.completions = FakeCompletions(content=content, error=error, delay=delay)
        self.chat = SimpleNamespace(completions=self.completions)


def doctor(user_id, specialization, status=UserStatus.ACTIVE, str_number="STR-1", **extra):
    return User(
        id=user_id,
        name=f"Dr. {user_id}",
        email=f"{user_id.lower()}@clinic.test",
        role=UserRole.DOCTOR,
        status=status,
        specialization=specialization,
        str_number=str_number,
        experience_years=extra.pop("experience_years", 5),
        clinic=extra.pop("clinic", "Test Clinic"),
        **extra,
    )


@pytest.fixture
def ids():
    return SequentialIdProvider()


@pytest.fixture
def patient():
    return User(
        id="U001",
        name="Budi Santoso",
        email="budi@email.com",
        role=UserRole.PATIENT,
        password="password",
    )


@pytest.fixture
def directory(ids, patient):
    return InMemoryUserDirectory(
        [
            doctor("D001", "Dokter Umum"),
            doctor("D002", "Dokter Anak", status=UserStatus.PENDING),
            doctor("D003", "Spesialis Jantung", experience_years=15),
            doctor("D004", "Spesialis Kulit", str_number=None),
            doctor("D005", "Spesialis Anak"),
            patient,
        ],
        id_provider=ids,
    )


@pytest.fixture
def audit_logger(ids):
    return AuditLogger(id_provider=ids)


@pytest.fixture
def store(directory, ids):
    return InMemoryConsultationStore(directory, id_provider=ids)


@pytest.fixture
def search_agent(directory):
    return DoctorSearchAgent(directory)


@pytest.fixture
def make_orchestrator(search_agent, audit_logger, store):
    def factory(agent):
        return ConsultationOrchestrator(agent, search_agent, audit_logger, store)

    return factory


@pytest.fixture
def consultation_input():
    return {
        "patientId": "U001",
        "age": 30,
        "gender": "Male",
        "symptoms": ["fever", "cough"],
        "duration": "2 days",
        "painLevel": 3,
        "history": [],
        "notes": "",
    }
