# backend/clinic/services/consultation_agent.py

import asyncio
import logging
import re
from typing import Any, Optional

from openai import AsyncAzureOpenAI, OpenAIError

from clinic.core.config import Settings, settings
from clinic.models.consultation import (
    FALLBACK_CONSULTATION,
    ConsultationInput,
    ConsultationOutput,
)

logger = logging.getLogger(__name__)

# Everything the backend can do wrong that must end in the fallback result.
# Pydantic's ValidationError and json errors are both ValueErrors.
AI_BACKEND_ERRORS = (OpenAIError, asyncio.TimeoutError, ValueError, LookupError, AttributeError)

SYSTEM_PROMPT = """
You are the Consultation Agent of a clinic's patient portal, acting as a professional AI medical assistant.

You receive a patient profile and their current complaint.
Analyse the symptoms and decide the single most appropriate 'primary_action':
1. EMERGENCY: life-threatening signs (chest pain radiating to the back, stroke signs, severe shortness of breath).
2. DOCTOR_CONSULT: needs a prescription, a physical examination or a diagnosis (infection, chronic problem).
3. OTC_MEDICATION: mild symptoms that can be treated with over-the-counter medicine (mild flu, common headache).
4. SELF_CARE: rest or hydration is enough (fatigue, mild viral illness).

Return ONLY a JSON object with these fields:
- analysis: detailed medical reasoning about the symptoms.
- possible_conditions: list of possible conditions (hypotheses).
- recommended_actions: list of steps the patient should take now.
- danger_signs: critical symptoms that mean the patient must seek emergency care.
- doctor_referral_needed: true or false.
- recommended_specialist: the specialist the patient should see, or null.
  Use plain specialty names such as "General Practitioner", "Cardiologist", "Pediatrician",
  "Dermatologist", "Neurologist", "Ophthalmologist". If unsure, use "General Practitioner".
- urgency_level: one of "LOW", "MEDIUM", "HIGH", "CRITICAL".
- primary_action: object with
    - category: one of "SELF_CARE", "OTC_MEDICATION", "DOCTOR_CONSULT", "EMERGENCY"
    - reason: short reason for choosing this category.
    - next_step: the single most important step to take right now.
"""

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _response_format() -> dict:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "consultation_output",
            "schema": ConsultationOutput.model_json_schema(),
        },
    }


def build_user_prompt(consultation_input: ConsultationInput) -> str:
    history = ", ".join(consultation_input.history) or "None"
    notes = consultation_input.notes or "None"
    return (
        "Patient profile:\n"
        f"- Age: {consultation_input.age}\n"
        f"- Gender: {consultation_input.gender or 'Not specified'}\n"
        f"- History: {history}\n"
        "\n"
        "Current complaint:\n"
        f"- Symptoms: {', '.join(consultation_input.symptoms)}\n"
        f"- Duration: {consultation_input.duration}\n"
        f"- Pain level: {consultation_input.pain_level}/10\n"
        f"- Additional notes: {notes}\n"
    )


def extract_json_object(text: str) -> str:
    """Cut the outermost ``{...}`` out of a possibly chatty model reply."""
    cleaned = _CODE_FENCE.sub("", text).strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object in model response")
    return cleaned[start:end + 1]


def parse_consultation_output(text: Optional[str]) -> ConsultationOutput:
    if not text or not text.strip():
        raise ValueError("Empty response from AI model")
    return ConsultationOutput.model_validate_json(extract_json_object(text))


def fallback_consultation() -> ConsultationOutput:
    return FALLBACK_CONSULTATION.model_copy(deep=True)


def build_azure_client(config: Settings = settings) -> Optional[AsyncAzureOpenAI]:
    if not config.ai_backend_configured:
        logger.warning("Azure OpenAI is not configured; consultations will use the fallback result")
        return None
    return AsyncAzureOpenAI(
        api_version=config.AZURE_API_VERSION,
        azure_endpoint=config.AZURE_FOUNDRY_ENDPOINT,
        api_key=config.AZURE_FOUNDRY_API_KEY,
    )


class ConsultationAgent:
    """Single structured call to the chat backend.

    ``assess`` never raises for backend problems: timeouts, transport errors,
    empty or malformed replies all produce the fallback result, which always
    recommends a doctor at MEDIUM urgency.
    """

    def __init__(self, client: Any = None, config: Settings = settings):
        self.client = client
        self.model = config.AZURE_CHAT_DEPLOYMENT
        self.temperature = config.AI_TEMPERATURE
        self.timeout = config.AI_TIMEOUT_SECONDS

    async def assess(self, consultation_input: ConsultationInput) -> ConsultationOutput:
        if self.client is None:
            return fallback_consultation()

        try:
            completion = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": build_user_prompt(consultation_input)},
                    ],
                    response_format=_response_format(),
                    temperature=self.temperature,
                ),
                timeout=self.timeout,
            )
            return parse_consultation_output(completion.choices[0].message.content)
        except AI_BACKEND_ERRORS as e:
            logger.error("[ConsultationAgent] falling back after backend error: %r", e)
            return fallback_consultation()
