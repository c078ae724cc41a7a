import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clinic.api.routes.admin_routes import router as admin_routes
from clinic.api.routes.consultation_routes import router as consultation_routes
from clinic.api.routes.doctor_routes import router as doctor_routes
from clinic.api.routes.patient_routes import router as patient_routes
from clinic.api.routes.user_routes import router as user_routes
from clinic.core.config import settings
from clinic.core.errors import ClinicError, ConsultationValidationError
from clinic.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    logger.info(
        "Clinic API starting (AI backend %s)",
        "configured" if settings.ai_backend_configured else "not configured, fallback only",
    )
    yield
    logger.info("Clinic API stopping")


app = FastAPI(
    title="HealthTown Clinic API",
    description="Patient triage, doctor matching and appointment booking backed by AI agents",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Session-Id"],
)


@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    body = {"error": exc.error_code, "detail": str(exc)}
    if isinstance(exc, ConsultationValidationError):
        body["field"] = exc.field
        body["detail"] = exc.message
    return JSONResponse(body, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal server error", "detail": None}, status_code=500)


app.include_router(consultation_routes)
app.include_router(patient_routes)
app.include_router(doctor_routes)
app.include_router(admin_routes)
app.include_router(user_routes)


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok", "ai_backend_configured": settings.ai_backend_configured}
