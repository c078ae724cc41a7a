# backend/clinic/api/routes/admin_routes.py

from typing import List

from fastapi import APIRouter, Depends

from clinic.api.dependencies import get_audit_logger, get_settings_store, get_user_directory
from clinic.models.directory import UserCreate, UserPublic, UserUpdate
from clinic.models.records import LogEntry
from clinic.models.settings import SystemSettings, SystemSettingsUpdate
from clinic.services.logging_agent import AuditLogger
from clinic.services.settings_store import SettingsStore
from clinic.services.user_directory import UserDirectory

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/logs", response_model=List[LogEntry])
async def audit_logs(audit_logger: AuditLogger = Depends(get_audit_logger)):
    return await audit_logger.get_logs()


@router.get("/settings", response_model=SystemSettings)
async def read_settings(store: SettingsStore = Depends(get_settings_store)):
    return await store.get_settings()


@router.patch("/settings", response_model=SystemSettings)
async def update_settings(
    updates: SystemSettingsUpdate,
    store: SettingsStore = Depends(get_settings_store),
):
    return await store.update_settings(updates)


@router.get("/users", response_model=List[UserPublic])
async def list_users(directory: UserDirectory = Depends(get_user_directory)):
    return await directory.get_users()


@router.post("/users", response_model=UserPublic, status_code=201)
async def create_user(data: UserCreate, directory: UserDirectory = Depends(get_user_directory)):
    return await directory.create_user(data)


@router.patch("/users/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: str,
    updates: UserUpdate,
    directory: UserDirectory = Depends(get_user_directory),
):
    return await directory.update_user(user_id, updates)


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(user_id: str, directory: UserDirectory = Depends(get_user_directory)):
    await directory.delete_user(user_id)
