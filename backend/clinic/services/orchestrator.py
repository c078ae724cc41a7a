# backend/clinic/services/orchestrator.py

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from clinic.core.errors import ConsultationValidationError
from clinic.models.consultation import ConsultationInput
from clinic.models.directory import DoctorSearchOutput
from clinic.models.records import OrchestratorResult
from clinic.services.consultation_agent import ConsultationAgent
from clinic.services.consultation_store import ConsultationStore
from clinic.services.doctor_search_agent import DoctorSearchAgent
from clinic.services.logging_agent import AuditLogger

logger = logging.getLogger(__name__)

INPUT_ALIASES = {
    alias: name
    for name, field in ConsultationInput.model_fields.items()
    if field.validation_alias is not None
    for alias in field.validation_alias.choices
}

CONSULTATION_AGENT = "ConsultationAgent"
DOCTOR_SEARCH_AGENT = "DoctorSearchAgent"


def validate_consultation_input(
    raw: Union[ConsultationInput, Mapping[str, Any]]
) -> ConsultationInput:
    """Reject a malformed symptom report before anything is logged or called."""
    if isinstance(raw, ConsultationInput):
        data = raw.model_copy(deep=True)
    else:
        try:
            data = ConsultationInput.model_validate(raw)
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "input"
            field = INPUT_ALIASES.get(field, field)
            raise ConsultationValidationError(field, f"{field}: {error['msg']}") from e

    if data.age < 0:
        raise ConsultationValidationError("age", "Age must be a non-negative number.")
    if not data.symptoms or not any(s and s.strip() for s in data.symptoms):
        raise ConsultationValidationError("symptoms", "Symptoms must be a non-empty list.")
    if not data.duration or not data.duration.strip():
        raise ConsultationValidationError("duration", "Duration is required.")
    if not 1 <= data.pain_level <= 10:
        raise ConsultationValidationError("pain_level", "Pain level must be between 1-10.")

    if not data.notes:
        data.notes = ""
    return data


class ConsultationOrchestrator:
    """Runs one patient consultation: AI triage, doctor matching, audit, persistence."""

    def __init__(
        self,
        consultation_agent: ConsultationAgent,
        doctor_search_agent: DoctorSearchAgent,
        audit_logger: AuditLogger,
        store: ConsultationStore,
    ):
        self.consultation_agent = consultation_agent
        self.doctor_search_agent = doctor_search_agent
        self.audit_logger = audit_logger
        self.store = store

    async def run(
        self, user_id: str, consultation_input: Union[ConsultationInput, Mapping[str, Any]]
    ) -> OrchestratorResult:
        data = validate_consultation_input(consultation_input)
        logger.info("Starting consultation flow for user %s", user_id)

        await self.audit_logger.log_interaction(CONSULTATION_AGENT, user_id, data, None, True)

        try:
            consultation = await self.consultation_agent.assess(data)
        except Exception as e:
            await self.audit_logger.log_interaction(
                CONSULTATION_AGENT,
                user_id,
                {"error": str(e), "type": type(e).__name__},
                None,
                False,
            )
            raise

        await self.audit_logger.log_interaction(CONSULTATION_AGENT, user_id, None, consultation, True)

        doctor_recommendations: Optional[DoctorSearchOutput] = None
        specialist = consultation.recommended_specialist
        if consultation.doctor_referral_needed and specialist:
            logger.info("Referral needed (%s), searching doctors", specialist)
            doctor_recommendations = await self.doctor_search_agent.find_matching_doctors(specialist)
            await self.audit_logger.log_interaction(
                DOCTOR_SEARCH_AGENT,
                user_id,
                {"specialist": specialist},
                doctor_recommendations,
                True,
            )

        record = await self.store.save_consultation(
            user_id,
            data,
            consultation,
            doctor_recommendations.doctors if doctor_recommendations else [],
        )

        # The persisted record id is what a later booking call resolves.
        if doctor_recommendations is not None:
            return OrchestratorResult(
                consultation=consultation,
                doctor_recommendations=doctor_recommendations,
                session_id=record.id,
            )
        return OrchestratorResult(consultation=consultation, session_id=record.id)
