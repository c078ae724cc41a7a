# backend/clinic/models/settings.py

from typing import Optional

from pydantic import BaseModel


class SystemSettings(BaseModel):
    clinic_name: str = "HealthTown Clinic"
    support_email: str = "support@healthtown.com"
    maintenance_mode: bool = False
    enable_ai_consultation: bool = True
    enable_new_registrations: bool = True
    global_announcement: str = ""
    ai_model: str = "gpt-4o"


class SystemSettingsUpdate(BaseModel):
    clinic_name: Optional[str] = None
    support_email: Optional[str] = None
    maintenance_mode: Optional[bool] = None
    enable_ai_consultation: Optional[bool] = None
    enable_new_registrations: Optional[bool] = None
    global_announcement: Optional[str] = None
    ai_model: Optional[str] = None
