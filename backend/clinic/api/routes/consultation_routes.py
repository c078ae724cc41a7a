# backend/clinic/api/routes/consultation_routes.py

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from clinic.api.dependencies import (
    get_consultation_store,
    get_orchestrator,
    get_settings_store,
)
from clinic.core.errors import ClinicError, FeatureDisabledError
from clinic.models.records import ConsultationRecord
from clinic.services.consultation_store import ConsultationStore
from clinic.services.orchestrator import ConsultationOrchestrator
from clinic.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/consultation", tags=["consultation"])

AI_FAILURE_MESSAGE = "AI analysis failed, please retry or consult a doctor manually."


class ConsultationRequest(BaseModel):
    user_id: str
    # checked by validate_consultation_input inside the orchestrator
    input: Dict[str, Any]


class BookingRequest(BaseModel):
    doctor_id: str


@router.post("")
async def run_consultation(
    request: ConsultationRequest,
    orchestrator: ConsultationOrchestrator = Depends(get_orchestrator),
    settings_store: SettingsStore = Depends(get_settings_store),
):
    """
    Main consultation endpoint: triages the symptom report with the AI agent,
    matches doctors when a referral is needed and stores the result.
    The returned session_id is the id to book an appointment against.
    """
    system_settings = await settings_store.get_settings()
    if not system_settings.enable_ai_consultation or system_settings.maintenance_mode:
        raise FeatureDisabledError("AI consultation is currently disabled")

    try:
        result = await orchestrator.run(request.user_id, request.input)
    except ClinicError:
        raise
    except Exception:
        logger.exception("Consultation flow failed for user %s", request.user_id)
        return JSONResponse({"error": AI_FAILURE_MESSAGE}, status_code=500)

    return JSONResponse(result.to_response(), headers={"X-Session-Id": result.session_id})


@router.get("/{consultation_id}", response_model=ConsultationRecord)
async def get_consultation(
    consultation_id: str,
    store: ConsultationStore = Depends(get_consultation_store),
):
    record = await store.get_consultation(consultation_id)
    if not record:
        raise HTTPException(status_code=404, detail="Consultation not found")
    return record


@router.post("/{consultation_id}/book")
async def book_appointment(
    consultation_id: str,
    request: BookingRequest,
    store: ConsultationStore = Depends(get_consultation_store),
):
    booked = await store.book_appointment(consultation_id, request.doctor_id)
    if not booked:
        raise HTTPException(status_code=404, detail="Consultation not found")
    record = await store.get_consultation(consultation_id)
    return {
        "booked": True,
        "consultation_id": consultation_id,
        "appointment": record.appointment.model_dump(mode="json") if record.appointment else None,
    }
