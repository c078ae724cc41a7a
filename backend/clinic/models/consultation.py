# backend/clinic/models/consultation.py

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class UrgencyLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ActionCategory(str, Enum):
    SELF_CARE = "SELF_CARE"
    OTC_MEDICATION = "OTC_MEDICATION"
    DOCTOR_CONSULT = "DOCTOR_CONSULT"
    EMERGENCY = "EMERGENCY"


class ConsultationInput(BaseModel):
    """Symptom report submitted by a patient.

    Age and pain level must arrive as real integers; "30" or True is a
    validation error. Range checks (pain level, non-empty symptoms) are
    applied by the orchestrator so a violation is reported against the field.
    """

    patient_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("patient_id", "patientId")
    )
    age: int = Field(strict=True)
    gender: str = ""
    symptoms: List[str]
    duration: str
    pain_level: int = Field(strict=True, validation_alias=AliasChoices("pain_level", "painLevel"))
    history: List[str] = []
    notes: Optional[str] = ""
    patient_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("patient_name", "patientName")
    )
    weight: Optional[float] = None


class PrimaryAction(BaseModel):
    category: ActionCategory
    reason: str
    next_step: str


class ConsultationOutput(BaseModel):
    analysis: str
    possible_conditions: List[str]
    recommended_actions: List[str]
    danger_signs: List[str]
    doctor_referral_needed: bool
    recommended_specialist: Optional[str]
    urgency_level: UrgencyLevel
    primary_action: PrimaryAction

    @field_validator("recommended_specialist", mode="before")
    @classmethod
    def _null_specialist(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("", "null", "none"):
            return None
        return value


FALLBACK_CONSULTATION = ConsultationOutput(
    analysis="AI agent cannot process the request at this time.",
    possible_conditions=["System Error"],
    recommended_actions=["Please consult a doctor manually."],
    danger_signs=[],
    doctor_referral_needed=True,
    recommended_specialist="General Practitioner",
    urgency_level=UrgencyLevel.MEDIUM,
    primary_action=PrimaryAction(
        category=ActionCategory.DOCTOR_CONSULT,
        reason="A system error occurred during AI analysis.",
        next_step="Visit the nearest clinic.",
    ),
)
