# backend/clinic/services/user_directory.py

import logging
import threading
from typing import Dict, List, Optional
from urllib.parse import quote

from clinic.core.errors import DuplicateEmailError, NotFoundError
from clinic.core.ids import IdProvider, UuidIdProvider
from clinic.models.directory import User, UserCreate, UserRole, UserStatus, UserUpdate

logger = logging.getLogger(__name__)

ROLE_PREFIX = {
    UserRole.PATIENT: "P",
    UserRole.DOCTOR: "D",
    UserRole.ADMIN: "A",
}

DEFAULT_PASSWORD = "password"


def _avatar_url(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote(name)}&background=random"


DEMO_USERS = [
    User(id="D001", name="Dr. Sarah Wijaya", email="sarah@healthtown.com",
         role=UserRole.DOCTOR, status=UserStatus.ACTIVE, clinic="Klinik Sehat HealthTown",
         specialization="Dokter Umum", str_number="STR-1234567890", experience_years=8,
         password="password123"),
    User(id="D002", name="Dr. Andi Pratama", email="andi@healthtown.com",
         role=UserRole.DOCTOR, status=UserStatus.PENDING, clinic="Puskesmas Kota",
         specialization="Dokter Anak", str_number="STR-0987654321", experience_years=5,
         password="password123"),
    User(id="D003", name="Dr. Bambang Hartono", email="bambang@healthtown.com",
         role=UserRole.DOCTOR, status=UserStatus.ACTIVE, clinic="RS Jantung Jakarta",
         specialization="Spesialis Jantung", str_number="STR-1122334455", experience_years=15,
         password="password123"),
    User(id="D004", name="Dr. Lina Sucipto", email="lina@healthtown.com",
         role=UserRole.DOCTOR, status=UserStatus.ACTIVE, clinic="Klinik Kulit Indah",
         specialization="Spesialis Kulit", str_number="STR-5566778899", experience_years=12,
         password="password123"),
    User(id="D005", name="Dr. Eka Putri", email="eka@healthtown.com",
         role=UserRole.DOCTOR, status=UserStatus.ACTIVE, clinic="Klinik Mata Sejahtera",
         specialization="Spesialis Mata", str_number="STR-3344556677", experience_years=7,
         password="password123"),
    User(id="D006", name="Dr. Fajar Nugraha", email="fajar@healthtown.com",
         role=UserRole.DOCTOR, status=UserStatus.ACTIVE, clinic="RS Bedah Sentosa",
         specialization="Bedah Umum", str_number="STR-9988776655", experience_years=10,
         password="password123"),
    User(id="A001", name="Admin Sistem", email="admin@healthtown.com",
         role=UserRole.ADMIN, status=UserStatus.ACTIVE, password="admin"),
    User(id="U001", name="Budi Santoso", email="budi@email.com",
         role=UserRole.PATIENT, status=UserStatus.ACTIVE, password="password"),
    User(id="U002", name="Siti Aminah", email="siti@email.com",
         role=UserRole.PATIENT, status=UserStatus.ACTIVE, password="password"),
    User(id="U003", name="Rudi Hermawan", email="rudi@email.com",
         role=UserRole.PATIENT, status=UserStatus.ACTIVE, password="password"),
]


class UserDirectory:
    """Account lookup and management used by the matcher and the admin pages."""

    async def get_users(self) -> List[User]:
        raise NotImplementedError

    async def get_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    async def create_user(self, data: UserCreate) -> User:
        raise NotImplementedError

    async def register_patient(self, name: str, email: str, password: Optional[str] = None) -> User:
        raise NotImplementedError

    async def update_user(self, user_id: str, updates: UserUpdate) -> User:
        raise NotImplementedError

    async def delete_user(self, user_id: str) -> None:
        raise NotImplementedError

    async def login(self, email: str, password: str, role: UserRole) -> Optional[User]:
        raise NotImplementedError


class InMemoryUserDirectory(UserDirectory):
    def __init__(self, users: Optional[List[User]] = None, id_provider: Optional[IdProvider] = None):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()
        self._ids = id_provider or UuidIdProvider()
        for user in users or []:
            self._users[user.id] = user.model_copy(deep=True)

    @classmethod
    def with_demo_users(cls, id_provider: Optional[IdProvider] = None) -> "InMemoryUserDirectory":
        return cls(DEMO_USERS, id_provider=id_provider)

    async def get_users(self) -> List[User]:
        with self._lock:
            return [user.model_copy(deep=True) for user in self._users.values()]

    async def get_user(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def create_user(self, data: UserCreate) -> User:
        user = User(
            id=self._ids.new_id(ROLE_PREFIX[data.role]),
            avatar=_avatar_url(data.name),
            **data.model_dump(),
        )
        with self._lock:
            self._users[user.id] = user
        logger.info("Created %s account %s", user.role.value, user.id)
        return user.model_copy(deep=True)

    async def register_patient(self, name: str, email: str, password: Optional[str] = None) -> User:
        with self._lock:
            if any(u.email.lower() == email.lower() for u in self._users.values()):
                raise DuplicateEmailError("Email already registered")
            user = User(
                id=self._ids.new_id(ROLE_PREFIX[UserRole.PATIENT]),
                name=name,
                email=email,
                password=password or DEFAULT_PASSWORD,
                role=UserRole.PATIENT,
                status=UserStatus.ACTIVE,
                avatar=_avatar_url(name),
                phone="",
            )
            self._users[user.id] = user
        return user.model_copy(deep=True)

    async def update_user(self, user_id: str, updates: UserUpdate) -> User:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                raise NotFoundError("User not found")
            updated = current.model_copy(update=updates.model_dump(exclude_unset=True))
            self._users[user_id] = updated
        return updated.model_copy(deep=True)

    async def delete_user(self, user_id: str) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    async def login(self, email: str, password: str, role: UserRole) -> Optional[User]:
        for user in await self.get_users():
            if user.email.lower() != email.lower() or user.role != role:
                continue
            if user.password == password or (not user.password and password == DEFAULT_PASSWORD):
                return user
        return None
