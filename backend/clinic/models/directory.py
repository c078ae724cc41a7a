# backend/clinic/models/directory.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class UserRole(str, Enum):
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"


class User(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    password: Optional[str] = None
    avatar: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None

    # Doctor fields
    clinic: Optional[str] = None
    str_number: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = None


class UserPublic(BaseModel):
    """User as shown on the admin pages, without credentials."""

    id: str
    name: str
    email: str
    role: UserRole
    status: UserStatus
    avatar: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    clinic: Optional[str] = None
    str_number: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = None


class UserCreate(BaseModel):
    name: str
    email: str
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    password: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    clinic: Optional[str] = None
    str_number: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    status: Optional[UserStatus] = None
    password: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    clinic: Optional[str] = None
    str_number: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = None


class DoctorSearchResult(BaseModel):
    id: str
    name: str
    specialist: str
    experience_years: int = 0
    is_verified: bool
    is_active: bool
    clinic: Optional[str] = None


class DoctorSearchOutput(BaseModel):
    doctors: List[DoctorSearchResult] = []


class UiConfig(BaseModel):
    show_dashboard: bool
    show_records: bool
    show_admin_panel: bool
    can_prescribe: bool


class RoleAccess(BaseModel):
    role: UserRole
    permissions: List[str]
    ui_config: UiConfig
